"""Failure taxonomy raised by host request handlers."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any
from typing import ClassVar

from exception_handler.schemas.error import IncorrectData
from exception_handler.schemas.error import Violation


class ErrorKind(str, Enum):
    """Category of failure that selects the HTTP status of the response."""

    ACCESS_DENIED = "access_denied"
    INVALID_ARGUMENT = "invalid_argument"
    ENTITY_NOT_FOUND = "entity_not_found"
    UNAUTHORIZED = "unauthorized"
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNIQUE_CONSTRAINT = "unique_constraint"
    JSON_PARSE_FAILURE = "json_parse_failure"
    UPSTREAM_RELAY = "upstream_relay"
    UNCLASSIFIED = "unclassified"


class FailureSignal(Exception):
    """Base class for typed failures rendered by the exception dispatcher."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)
        self.message = message


class AccessDeniedException(FailureSignal):
    """Caller is authenticated but not allowed to perform the operation."""

    kind = ErrorKind.ACCESS_DENIED


class InvalidArgumentException(FailureSignal, ValueError):
    """Request carried an argument the operation cannot accept."""

    kind = ErrorKind.INVALID_ARGUMENT


class EntityNotFoundException(FailureSignal):
    """Requested entity does not exist."""

    kind = ErrorKind.ENTITY_NOT_FOUND

    @classmethod
    def of(cls, entity: type | str, field: Any) -> EntityNotFoundException:
        """Build ``"<Entity> with <field> not found"``."""
        name = entity if isinstance(entity, str) else entity.__name__
        return cls(f"{name} with {field} not found")


class NoAuthorizationException(FailureSignal):
    """Request carries no usable authorization."""

    kind = ErrorKind.UNAUTHORIZED


class UniqueConstraintException(FailureSignal):
    """A value that must be unique is already taken."""

    kind = ErrorKind.UNIQUE_CONSTRAINT


class ParseJsonException(FailureSignal):
    """A JSON document could not be parsed."""

    kind = ErrorKind.JSON_PARSE_FAILURE


class ConstraintViolationException(FailureSignal):
    """One or more field constraints failed together."""

    kind = ErrorKind.CONSTRAINT_VIOLATION

    def __init__(self, violations: Sequence[Violation], message: str | None = None) -> None:
        self.violations: tuple[Violation, ...] = tuple(violations)
        if message is None:
            message = ", ".join(f"{item.field_name}: {item.error_message}" for item in self.violations)
        super().__init__(message)


class MicroserviceResponseException(FailureSignal):
    """Pre-rendered error received from a dependent service, relayed as is."""

    kind = ErrorKind.UPSTREAM_RELAY

    def __init__(self, incorrect_data: IncorrectData, status_code: int) -> None:
        super().__init__(incorrect_data.error_message)
        self.incorrect_data = incorrect_data
        self.status_code = status_code


class UserApiClientException(MicroserviceResponseException):
    """Remote error described by its exception name, message and status code."""

    def __init__(self, message: str | None, exception_name: str, error_code: int) -> None:
        self.exception_name = exception_name
        self.error_code = error_code
        super().__init__(
            IncorrectData.for_status(exception=exception_name, message=message, status_code=error_code),
            error_code,
        )

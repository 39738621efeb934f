"""Failure classification and the kind-to-status mapping table."""

from __future__ import annotations

from dataclasses import dataclass
import json
from types import MappingProxyType
from typing import Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from exception_handler.core.errors import ConstraintViolationException
from exception_handler.core.errors import ErrorKind
from exception_handler.core.errors import FailureSignal
from exception_handler.core.errors import MicroserviceResponseException
from exception_handler.schemas.error import IncorrectData
from exception_handler.schemas.error import status_text
from exception_handler.schemas.error import ValidationErrorsResponse
from exception_handler.schemas.error import Violation

STATUS_BY_KIND = MappingProxyType(
    {
        ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
        ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
        ErrorKind.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
        ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
        ErrorKind.CONSTRAINT_VIOLATION: status.HTTP_409_CONFLICT,
        ErrorKind.UNIQUE_CONSTRAINT: status.HTTP_406_NOT_ACCEPTABLE,
        ErrorKind.JSON_PARSE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorKind.UNCLASSIFIED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
)

# Foreign exception types, most specific first. JSONDecodeError and pydantic's
# ValidationError both subclass ValueError.
FOREIGN_KINDS: tuple[tuple[tuple[type[BaseException], ...], ErrorKind], ...] = (
    ((PydanticValidationError, RequestValidationError), ErrorKind.CONSTRAINT_VIOLATION),
    ((json.JSONDecodeError,), ErrorKind.JSON_PARSE_FAILURE),
    ((ValueError,), ErrorKind.INVALID_ARGUMENT),
)

HANDLED_EXCEPTION_TYPES: tuple[type[Exception], ...] = (
    FailureSignal,
    PydanticValidationError,
    RequestValidationError,
    ValueError,
)

_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


@dataclass(frozen=True)
class FailureResponse:
    """Status code and body produced for one handled failure."""

    status_code: int
    body: IncorrectData | ValidationErrorsResponse

    def to_json_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.body.model_dump(mode="json"))


def classify(exc: BaseException) -> ErrorKind:
    """Return the most specific kind that applies to ``exc``."""
    if isinstance(exc, MicroserviceResponseException):
        return ErrorKind.UPSTREAM_RELAY
    if isinstance(exc, FailureSignal):
        return exc.kind
    for exc_types, kind in FOREIGN_KINDS:
        if isinstance(exc, exc_types):
            return kind
    return ErrorKind.UNCLASSIFIED


def status_for(kind: ErrorKind) -> int:
    """Map a kind to its HTTP status; relays carry their own and fall back to 500 here."""
    return STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def build_failure_response(exc: BaseException, kind: ErrorKind | None = None) -> FailureResponse:
    """Construct the response for ``exc`` without any side effects."""
    if kind is None:
        kind = classify(exc)

    if kind is ErrorKind.UPSTREAM_RELAY and isinstance(exc, MicroserviceResponseException):
        return FailureResponse(status_code=exc.status_code, body=exc.incorrect_data)

    status_code = status_for(kind)
    if kind is ErrorKind.CONSTRAINT_VIOLATION:
        return FailureResponse(
            status_code=status_code,
            body=ValidationErrorsResponse(error_code=status_text(status_code), violations=violations_of(exc)),
        )

    return FailureResponse(
        status_code=status_code,
        body=IncorrectData.for_status(
            exception=type(exc).__name__,
            message=message_of(exc),
            status_code=status_code,
        ),
    )


def message_of(exc: BaseException) -> str | None:
    if isinstance(exc, FailureSignal):
        return exc.message
    text = str(exc)
    return text or None


def violations_of(exc: BaseException) -> tuple[Violation, ...]:
    """Collect violations in the order the validation engine reported them."""
    if isinstance(exc, ConstraintViolationException):
        return exc.violations
    if isinstance(exc, (PydanticValidationError, RequestValidationError)):
        return tuple(
            Violation(
                field_name=format_location(issue.get("loc", ())),
                error_message=str(issue.get("msg", "Invalid value")),
            )
            for issue in exc.errors()
        )
    return ()


def format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in _REQUEST_PARTS]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])

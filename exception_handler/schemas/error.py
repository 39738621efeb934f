"""Error response schemas rendered by the exception dispatcher."""

from __future__ import annotations

from http import HTTPStatus

from pydantic import BaseModel
from pydantic import ConfigDict


def status_text(status_code: int) -> str:
    """Render a status code as ``"<code> <REASON_NAME>"``, e.g. ``"404 NOT_FOUND"``."""
    try:
        return f"{status_code} {HTTPStatus(status_code).name}"
    except ValueError:
        return str(status_code)


class Violation(BaseModel):
    """Single field-level constraint failure."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    error_message: str


class IncorrectData(BaseModel):
    """Single-error response body."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    exception: str
    error_message: str | None = None
    error_code: str

    @classmethod
    def for_status(cls, *, exception: str, message: str | None, status_code: int) -> IncorrectData:
        return cls(exception=exception, error_message=message, error_code=status_text(status_code))


class ValidationErrorsResponse(BaseModel):
    """Multi-violation response body."""

    model_config = ConfigDict(frozen=True)

    error_code: str
    violations: tuple[Violation, ...] = ()

"""Translate failures raised in FastAPI request handlers into JSON error responses."""

from exception_handler.core.activation import configure_exception_handling
from exception_handler.core.config import HandlerSettings
from exception_handler.core.dispatch import ExceptionDispatcher
from exception_handler.core.errors import AccessDeniedException
from exception_handler.core.errors import ConstraintViolationException
from exception_handler.core.errors import EntityNotFoundException
from exception_handler.core.errors import ErrorKind
from exception_handler.core.errors import FailureSignal
from exception_handler.core.errors import InvalidArgumentException
from exception_handler.core.errors import MicroserviceResponseException
from exception_handler.core.errors import NoAuthorizationException
from exception_handler.core.errors import ParseJsonException
from exception_handler.core.errors import UniqueConstraintException
from exception_handler.core.errors import UserApiClientException
from exception_handler.schemas.error import IncorrectData
from exception_handler.schemas.error import ValidationErrorsResponse
from exception_handler.schemas.error import Violation

__all__ = [
    "AccessDeniedException",
    "ConstraintViolationException",
    "EntityNotFoundException",
    "ErrorKind",
    "ExceptionDispatcher",
    "FailureSignal",
    "HandlerSettings",
    "IncorrectData",
    "InvalidArgumentException",
    "MicroserviceResponseException",
    "NoAuthorizationException",
    "ParseJsonException",
    "UniqueConstraintException",
    "UserApiClientException",
    "ValidationErrorsResponse",
    "Violation",
    "configure_exception_handling",
]

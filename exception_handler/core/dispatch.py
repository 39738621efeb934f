"""Exception dispatcher bound to a FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from exception_handler.core.mapping import build_failure_response
from exception_handler.core.mapping import classify
from exception_handler.core.mapping import FailureResponse
from exception_handler.core.mapping import HANDLED_EXCEPTION_TYPES

logger = logging.getLogger(__name__)


class ExceptionDispatcher:
    """Route every failure raised while handling a request to exactly one response.

    Handlers are installed for each handled exception type and a catch-all HTTP
    middleware ends every other failure at the dispatcher. All of them call
    :meth:`resolve`, so the explicit classification in
    :func:`exception_handler.core.mapping.classify` picks the outcome, not the
    framework's handler lookup order.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def resolve(self, exc: BaseException) -> FailureResponse:
        """Map ``exc`` to its response and emit one log line."""
        kind = classify(exc)
        response = build_failure_response(exc, kind)
        self._logger.info(
            "Handled %s as %s: status=%s response=%s",
            type(exc).__name__,
            kind.value,
            response.status_code,
            response.body.model_dump(mode="json"),
        )
        return response

    async def handle(self, _: Request, exc: Exception) -> JSONResponse:
        """FastAPI exception handler entrypoint."""
        return self.resolve(exc).to_json_response()

    async def catch_unhandled(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """HTTP middleware rendering failures no exception handler claimed."""
        try:
            return await call_next(request)
        except Exception as exc:
            return self.resolve(exc).to_json_response()

    def register(self, app: FastAPI) -> None:
        """Attach the dispatcher to every exception type it renders."""
        for exc_type in HANDLED_EXCEPTION_TYPES:
            app.add_exception_handler(exc_type, self.handle)
        app.middleware("http")(self.catch_unhandled)

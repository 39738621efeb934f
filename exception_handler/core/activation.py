"""Opt-in registration of the exception dispatcher."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from exception_handler.core.config import get_handler_settings
from exception_handler.core.config import HandlerSettings
from exception_handler.core.dispatch import ExceptionDispatcher

DISPATCHER_STATE_ATTR = "exception_dispatcher"

logger = logging.getLogger(__name__)


def active_dispatcher(app: FastAPI) -> ExceptionDispatcher | None:
    """Return the dispatcher recorded on ``app``, if any."""
    return getattr(app.state, DISPATCHER_STATE_ATTR, None)


def configure_exception_handling(
    app: FastAPI,
    settings: HandlerSettings | None = None,
    *,
    dispatcher: ExceptionDispatcher | None = None,
    log: logging.Logger | None = None,
) -> ExceptionDispatcher | None:
    """Register the dispatcher on ``app`` when exception handling is enabled.

    Does nothing while disabled, leaving failures to the host's own handling.
    At most one dispatcher is active per app: one already recorded on
    ``app.state``, whether host-supplied or from an earlier call, is kept.
    """
    settings = settings or get_handler_settings()
    if not settings.enabled:
        return None

    existing = active_dispatcher(app)
    if existing is not None:
        return existing

    dispatcher = dispatcher or ExceptionDispatcher(log)
    log = log or logger
    log.info("Exception handling settings=%s", settings.safe_for_logging())
    dispatcher.register(app)
    setattr(app.state, DISPATCHER_STATE_ATTR, dispatcher)
    log.info("Exception dispatcher registered")
    return dispatcher

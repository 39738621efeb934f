"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

ENABLED_ENV_VAR = "EXCEPTION_HANDLING_ENABLED"
DEFAULT_ENABLED = False


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() == "true"


@dataclass(frozen=True)
class HandlerSettings:
    """Runtime settings for exception handling."""

    enabled: bool = DEFAULT_ENABLED

    def safe_for_logging(self) -> dict[str, bool]:
        """Return handler settings safe for logs."""
        return {"enabled": self.enabled}


@lru_cache(maxsize=1)
def get_handler_settings() -> HandlerSettings:
    """Load handler settings from the environment."""
    return HandlerSettings(enabled=_get_bool_env(ENABLED_ENV_VAR, DEFAULT_ENABLED))

"""Shared pytest fixtures for exception handler test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _reset_handler_settings_cache() -> Generator[None, None, None]:
    """Keep environment-driven settings from leaking between tests."""
    from exception_handler.core.config import get_handler_settings

    get_handler_settings.cache_clear()
    yield
    get_handler_settings.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide a test client for a host app with exception handling enabled."""
    from exception_handler.core.config import HandlerSettings
    from exception_handler.main import create_app

    with TestClient(create_app(HandlerSettings(enabled=True))) as test_client:
        yield test_client

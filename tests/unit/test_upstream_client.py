"""Unit tests for relaying dependent-service errors."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any

import pytest
import requests

from exception_handler.clients.upstream import decode_error_response
from exception_handler.clients.upstream import UpstreamServiceClient
from exception_handler.core.errors import MicroserviceResponseException
from exception_handler.core.errors import ParseJsonException
from exception_handler.core.errors import UserApiClientException
from exception_handler.schemas.error import IncorrectData


@dataclass
class _FakeResponse:
    status_code: int
    text: str = ""
    reason: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def content(self) -> bytes:
        return self.text.encode()

    def json(self) -> Any:
        return json.loads(self.text)


class _SessionStub:
    def __init__(self, request_fn: Callable[..., _FakeResponse]) -> None:
        self._request_fn = request_fn
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self._request_fn(method=method, url=url, **kwargs)


def _client(response: _FakeResponse) -> tuple[UpstreamServiceClient, _SessionStub]:
    session = _SessionStub(lambda **_: response)
    client = UpstreamServiceClient(
        base_url="https://users.example.com/api/",
        timeout_seconds=3.0,
        headers={"Authorization": "Bearer token"},
        session=session,  # type: ignore[arg-type]
    )
    return client, session


def test_get_returns_decoded_json_and_sends_headers() -> None:
    client, session = _client(_FakeResponse(200, '{"username": "alice"}'))

    assert client.get("/users/1", params={"expand": "roles"}) == {"username": "alice"}
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://users.example.com/api/users/1"
    assert call["params"] == {"expand": "roles"}
    assert call["timeout"] == 3.0
    assert call["headers"]["Authorization"] == "Bearer token"
    assert call["headers"]["Accept"] == "application/json"


def test_post_sends_json_payload() -> None:
    client, session = _client(_FakeResponse(201, '{"id": 5}'))

    assert client.post("users", payload={"username": "bob"}) == {"id": 5}
    assert session.calls[0]["json"] == {"username": "bob"}


def test_empty_success_body_returns_none() -> None:
    client, _ = _client(_FakeResponse(204))

    assert client.post("users/5/lock") is None


def test_incorrect_data_error_is_relayed_with_remote_status() -> None:
    body = {
        "exception": "EntityNotFoundException",
        "error_message": "User with id=7 not found",
        "error_code": "404 NOT_FOUND",
    }
    client, _ = _client(_FakeResponse(404, json.dumps(body), reason="Not Found"))

    with pytest.raises(MicroserviceResponseException) as excinfo:
        client.get("users/7")

    assert type(excinfo.value) is MicroserviceResponseException
    assert excinfo.value.status_code == 404
    assert excinfo.value.incorrect_data == IncorrectData(**body)


def test_unstructured_error_becomes_user_api_client_exception() -> None:
    client, _ = _client(_FakeResponse(502, "upstream proxy failure", reason="Bad Gateway"))

    with pytest.raises(UserApiClientException) as excinfo:
        client.get("users/7")

    assert excinfo.value.status_code == 502
    assert excinfo.value.incorrect_data == IncorrectData(
        exception="UpstreamServiceException",
        error_message="upstream proxy failure",
        error_code="502 BAD_GATEWAY",
    )


def test_invalid_success_json_raises_parse_json_exception() -> None:
    client, _ = _client(_FakeResponse(200, "<html>"))

    with pytest.raises(ParseJsonException):
        client.get("users/7")


@pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("refused")])
def test_transport_failures_become_service_unavailable(error: requests.RequestException) -> None:
    def request_fn(**_: Any) -> _FakeResponse:
        raise error

    client = UpstreamServiceClient(
        base_url="https://users.example.com",
        session=_SessionStub(request_fn),  # type: ignore[arg-type]
    )

    with pytest.raises(UserApiClientException) as excinfo:
        client.get("users/7")

    assert excinfo.value.status_code == 503
    assert excinfo.value.exception_name == type(error).__name__
    assert excinfo.value.incorrect_data.error_code == "503 SERVICE_UNAVAILABLE"


def test_decode_error_response_falls_back_to_reason_for_empty_body() -> None:
    exc = decode_error_response(401, "", reason="Unauthorized")

    assert isinstance(exc, UserApiClientException)
    assert exc.incorrect_data.error_message == "Unauthorized"
    assert exc.status_code == 401


def test_decode_error_response_falls_back_to_status_message() -> None:
    exc = decode_error_response(500, "  ")

    assert exc.incorrect_data.error_message == "Upstream request failed with status 500"


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"base_url": "/"}, "base_url is required"),
        ({"base_url": "https://users.example.com", "timeout_seconds": 0}, "timeout_seconds must be positive"),
    ],
)
def test_constructor_rejects_invalid_arguments(kwargs: dict[str, Any], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        UpstreamServiceClient(**kwargs)


def test_error_body_with_extra_fields_is_relayed_as_raw_text() -> None:
    body = json.dumps(
        {
            "exception": "EntityNotFoundException",
            "error_message": "User with id=7 not found",
            "error_code": "404 NOT_FOUND",
            "timestamp": "2026-10-17T10:00:00Z",
        }
    )

    exc = decode_error_response(404, body)

    assert isinstance(exc, UserApiClientException)
    assert exc.status_code == 404
    assert exc.incorrect_data.error_message == body

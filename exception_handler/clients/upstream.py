"""HTTP client for dependent microservices that relays their error responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import requests
from fastapi import status
from pydantic import ValidationError

from exception_handler.core.errors import MicroserviceResponseException
from exception_handler.core.errors import ParseJsonException
from exception_handler.core.errors import UserApiClientException
from exception_handler.schemas.error import IncorrectData


def decode_error_response(
    status_code: int,
    body: str,
    *,
    reason: str | None = None,
) -> MicroserviceResponseException:
    """Translate a remote error response into a relay failure.

    An ``IncorrectData`` document is relayed untouched. Any other body, including
    one with fields beyond ``IncorrectData``'s three, is wrapped verbatim in a
    :class:`UserApiClientException` carrying the remote status.
    """
    try:
        incorrect_data = IncorrectData.model_validate_json(body)
    except ValidationError:
        message = body.strip() or reason or f"Upstream request failed with status {status_code}"
        return UserApiClientException(message, "UpstreamServiceException", status_code)
    return MicroserviceResponseException(incorrect_data, status_code)


class UpstreamServiceClient:
    """Call a dependent service and raise relay failures for its error responses."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        normalized = base_url.rstrip("/")
        if not normalized:
            raise ValueError("base_url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._base_url = normalized
        self._timeout_seconds = timeout_seconds
        self._headers = {"Accept": "application/json", **(headers or {})}
        self._session = session or requests.Session()

    def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        return self._request("GET", path, params=params)

    def post(self, path: str, *, payload: Any = None) -> Any:
        """POST ``payload`` as JSON to ``path`` and return the decoded JSON body."""
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers,
                timeout=self._timeout_seconds,
                **kwargs,
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            raise UserApiClientException(
                f"Upstream service at {self._base_url} is unavailable",
                type(exc).__name__,
                status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from exc

        if response.status_code >= status.HTTP_400_BAD_REQUEST:
            raise decode_error_response(response.status_code, response.text, reason=response.reason)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ParseJsonException(f"Upstream response from {url} is not valid JSON") from exc

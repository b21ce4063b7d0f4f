from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from facility_console.application.errors import RequestFailure

_logger = logging.getLogger(__name__)


class ApiClient:
    """Blocking JSON client for the remote application services.

    Calls are issued from the Qt thread pool (see ``run_async``), so each
    request opens its own ``httpx.Client`` instead of sharing one across
    threads.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout_seconds: float = 10.0,
        verify: bool = True,
        client_factory: Callable[[], httpx.Client] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds
        self._verify = verify
        self._client_factory = client_factory

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        factory = self._client_factory or (
            lambda: httpx.Client(timeout=self._timeout_seconds, verify=self._verify)
        )
        try:
            with factory() as client:
                response = client.request(method, url, params=params, json=json, headers=self._headers())
        except httpx.TimeoutException as exc:
            _logger.warning("%s %s timed out", method, url)
            raise RequestFailure("The server did not respond in time", str(exc) or None) from exc
        except httpx.HTTPError as exc:
            _logger.warning("%s %s failed: %s", method, url, exc)
            raise RequestFailure("Could not reach the server", str(exc) or None) from exc

        if response.is_error:
            failure = _failure_from_response(response)
            _logger.warning(
                "%s %s returned %s: %s", method, url, response.status_code, failure.message
            )
            raise failure
        if not response.content:
            return None
        return _unwrap(response.json())

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)


def _unwrap(payload: Any) -> Any:
    # ABP wraps results as {"result": ..., "success": ..., "error": ...}
    if isinstance(payload, dict) and "result" in payload and "success" in payload:
        return payload["result"]
    return payload


def _failure_from_response(response: httpx.Response) -> RequestFailure:
    fallback = f"Request failed with status {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return RequestFailure(fallback, text[:500] or None, status_code=response.status_code)

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return RequestFailure(fallback, status_code=response.status_code)
    message = error.get("message") or fallback
    details = error.get("details") or None
    return RequestFailure(str(message), str(details) if details else None, status_code=response.status_code)

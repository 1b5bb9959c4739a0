"""Async HTTP client for the procurement API.

Every route answers with the same envelope; ``ApiClient`` unwraps
``data`` on success and raises ``ApiError`` carrying the server's message
otherwise, so callers can show that message directly.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code


class ApiClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        """Send a request and return the whole success envelope."""
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        response = await self._http.request(
            method, path, params=params, json=json, headers=self._headers()
        )
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success and isinstance(body, dict) and body.get("success", True):
            return body

        error = (body or {}).get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            message = error.get("message") or response.reason_phrase
            code = error.get("code")
        else:
            message = str(error) if error else response.reason_phrase
            code = None
        logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
        raise ApiError(response.status_code, message, code)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return (await self.request("GET", path, params=params)).get("data")

    async def post(self, path: str, json: Any = None) -> Any:
        return (await self.request("POST", path, json=json)).get("data")

    async def put(self, path: str, json: Any = None) -> Any:
        return (await self.request("PUT", path, json=json)).get("data")

    async def delete(self, path: str) -> Any:
        return (await self.request("DELETE", path)).get("data")

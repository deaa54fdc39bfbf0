import asyncio
import logging
from typing import Any

import httpx

from portal.config import settings

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error occurred"

# Upstream auth guard answers with these messages instead of a bare 401
_EXPIRED_TOKEN_MESSAGES = ("jwt expired", "jwt must be provided")


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _body_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, list):
        return str(message[0]) if message else None
    return str(message) if message else None


def error_message(exc: Exception) -> str:
    """Human readable message for a failed upstream call.

    Prefers the upstream ``message`` field (first entry when it is a list),
    then the HTTP status, then the exception text.
    """
    if isinstance(exc, ApiError):
        return exc.message
    if isinstance(exc, httpx.HTTPStatusError):
        return _body_message(exc.response) or f"HTTP {exc.response.status_code}"
    return str(exc) or DEFAULT_ERROR_MESSAGE


class ApiClient:
    """Authenticated access to the portal REST API.

    Wraps a shared ``httpx.AsyncClient``. An expired access token is refreshed
    once per request using the refresh-token cookie, then the request is
    retried.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        access_token: str | None = None,
        cookies: dict[str, str] | None = None,
    ):
        self._http = http
        self.access_token = access_token
        self._cookies = cookies or {}
        self._refresh_lock = asyncio.Lock()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self._cookies:
            headers["Cookie"] = "; ".join(f"{k}={v}" for k, v in self._cookies.items())
        return headers

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(error_message(exc)) from exc

    @staticmethod
    def _is_auth_failure(response: httpx.Response) -> bool:
        if response.status_code == 401:
            return True
        return response.is_error and _body_message(response) in _EXPIRED_TOKEN_MESSAGES

    async def refresh_access_token(self) -> str:
        response = await self._send("POST", settings.refresh_token_path)
        if response.is_error:
            raise ApiError("Session expired", status_code=401)
        try:
            token = response.json()["accessToken"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ApiError("Session expired", status_code=401) from exc
        self.access_token = token
        return token

    async def _refresh_once(self, rejected_token: str | None):
        # Concurrent requests rejected with the same token share one refresh
        async with self._refresh_lock:
            if self.access_token != rejected_token:
                return
            await self.refresh_access_token()

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        sent_token = self.access_token
        response = await self._send(method, path, **kwargs)
        if self._is_auth_failure(response):
            logger.info("Access token rejected for %s %s, refreshing", method, path)
            await self._refresh_once(sent_token)
            response = await self._send(method, path, **kwargs)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ApiError(error_message(exc), status_code=response.status_code) from exc
        return response

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self.request("GET", path, params=params)
        return response.json()

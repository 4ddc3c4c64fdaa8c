"""
Directory API HTTP client.

Purpose:
- Single point of outbound HTTP communication for the directory services
- Injects default headers (JSON content type, API key, basic auth)
- Bounds every call with the configured timeout
- Translates non-2xx responses and timeouts into ApiError

Important:
- One network call per invocation; no retries, no caching.
- Errors other than HTTP status and timeout (DNS, connection refused, ...)
  propagate unchanged so callers can tell them apart from ApiError.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Dict, Optional

import httpx

from railway_directory.utils.config_loader import ApiConfig

logger = logging.getLogger(__name__)

TIMEOUT_STATUS = 408


class ApiError(Exception):
    """Structured failure of a directory API call."""

    def __init__(self, message: str, status: int, response: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"


def basic_auth_header(username: str, password: str) -> str:
    if not username or not password:
        return ""
    credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"


class ApiClient:
    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self.timeout_seconds = self.config.timeout_seconds

        default_headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.config.api_key and self.config.api_key.strip():
            default_headers["X-API-Key"] = self.config.api_key
        auth = basic_auth_header(self.config.username, self.config.password)
        if auth:
            default_headers["Authorization"] = auth
        if headers:
            default_headers.update(headers)
        self.default_headers = default_headers

        # httpx's own timeout is per phase; the overall bound is enforced in request()
        self._client = httpx.AsyncClient(transport=transport, timeout=self.timeout_seconds)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_url(self, endpoint: str) -> str:
        if endpoint.startswith("http"):
            return endpoint
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return f"{self.base_url}{endpoint}"

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self.build_url(endpoint)
        merged_headers = dict(self.default_headers)
        if headers:
            merged_headers.update(headers)

        logger.debug("%s %s", method, url)
        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, json=body, headers=merged_headers, params=params),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"Request timed out after {self.config.timeout_ms} ms: {method} {url}")
            raise ApiError("Request timeout", TIMEOUT_STATUS)

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        is_json = "application/json" in content_type

        if not response.is_success:
            message = f"HTTP error! status: {response.status_code}"
            error_data = None
            if is_json:
                try:
                    error_data = response.json()
                    if isinstance(error_data, dict) and error_data.get("message"):
                        message = str(error_data["message"])
                except ValueError:
                    pass
            logger.warning(
                "Directory API returned %s for %s %s",
                response.status_code,
                response.request.method,
                response.request.url,
            )
            raise ApiError(message, response.status_code, error_data)

        if is_json:
            return response.json()
        return response.text

    async def get(self, endpoint: str, **kwargs) -> Any:
        return await self.request("GET", endpoint, **kwargs)

    async def post(self, endpoint: str, body: Any = None, **kwargs) -> Any:
        return await self.request("POST", endpoint, body=body, **kwargs)

    async def put(self, endpoint: str, body: Any = None, **kwargs) -> Any:
        return await self.request("PUT", endpoint, body=body, **kwargs)

    async def patch(self, endpoint: str, body: Any = None, **kwargs) -> Any:
        return await self.request("PATCH", endpoint, body=body, **kwargs)

    async def delete(self, endpoint: str, **kwargs) -> Any:
        return await self.request("DELETE", endpoint, **kwargs)

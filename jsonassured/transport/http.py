"""
HTTP source for JSON documents.

This module fetches documents with aiohttp and provides assert_response()
for starting an assertion chain directly from an aiohttp response.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from ..assertions import PathAssertions, assert_json
from ..errors import AssertionFailure, SourceError
from .base import BaseSource

if TYPE_CHECKING:
    from ..schema_parsing.models import AuthConfig

logger = logging.getLogger(__name__)

ACCEPT = "Accept"
JSON_CONTENT_TYPE = "application/json"


class HTTPSource(BaseSource):
    """
    Fetches a JSON document with an HTTP GET.

    Any response status outside 2xx is a SourceError; the body of such a
    response is kept (truncated) in the error data.
    """

    def __init__(
        self,
        url: str,
        auth_config: AuthConfig | None = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int = 30000,
    ):
        """
        Initialize HTTP source.

        Args:
            url: Document URL (e.g., "https://api.example.com/users/1")
            auth_config: Optional authentication configuration
            headers: Extra request headers
            timeout_ms: Total request timeout in milliseconds
        """
        self.url = url
        self.timeout_ms = timeout_ms
        self._auth_config = auth_config
        self._headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    def _build_headers(self) -> dict[str, str]:
        headers = {ACCEPT: JSON_CONTENT_TYPE}
        headers.update(self._headers)
        self._apply_auth_headers(headers)
        return headers

    def _apply_auth_headers(self, headers: dict[str, str]) -> None:
        """Apply authentication headers based on auth config."""
        if self._auth_config is None:
            return

        auth_type = self._auth_config.type.value

        if auth_type == "bearer":
            token = self._auth_config.token
            if token:
                headers["Authorization"] = f"Bearer {token}"
                logger.debug("Applied bearer auth header")

        elif auth_type == "api_key":
            key = self._auth_config.key
            header_name = self._auth_config.header or "X-API-Key"
            if key:
                headers[header_name] = key
                logger.debug(f"Applied API key auth header: {header_name}")

        elif auth_type == "basic":
            username = self._auth_config.username
            password = self._auth_config.password
            if username and password:
                credentials = base64.b64encode(
                    f"{username}:{password}".encode()
                ).decode("ascii")
                headers["Authorization"] = f"Basic {credentials}"
                logger.debug("Applied basic auth header")

    async def open(self) -> None:
        """Create the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession()

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def load(self) -> bytes:
        """
        GET the document.

        Opens a session for the duration of the call when used outside
        an ``async with`` block.
        """
        if self._session is None:
            async with self:
                return await self._get()
        return await self._get()

    async def _get(self) -> bytes:
        timeout = aiohttp.ClientTimeout(total=self.timeout_ms / 1000)
        logger.info(f"GET {self.url}")

        try:
            async with self._session.get(
                self.url,
                headers=self._build_headers(),
                timeout=timeout,
            ) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    raise SourceError(
                        f"HTTP {resp.status}: {resp.reason}",
                        data={"url": self.url, "body": body[:500].decode("utf-8", "replace")},
                    )
                return body

        except asyncio.TimeoutError as e:
            raise SourceError(
                f"Request timed out after {self.timeout_ms}ms",
                data={"url": self.url},
            ) from e
        except aiohttp.ClientConnectorError as e:
            raise SourceError(f"Connection failed: {e}", data={"url": self.url}) from e
        except aiohttp.ClientError as e:
            raise SourceError(f"HTTP error: {e}", data={"url": self.url}) from e

    def describe(self) -> str:
        return self.url


async def assert_response(response: Any) -> PathAssertions:
    """
    Start an assertion chain over an HTTP response body.

    Args:
        response: An aiohttp.ClientResponse, or any object with an async
            read() returning the body bytes

    Returns:
        PathAssertions over the body

    Raises:
        AssertionFailure: If the body is empty

    Example:
        async with session.get(url) as resp:
            (await assert_response(resp)).is_equal("$.status", "ok")
    """
    body = await response.read()
    if not body:
        raise AssertionFailure("Response body is empty")
    return assert_json(body)

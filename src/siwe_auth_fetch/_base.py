"""Base HTTP client for SIWE authenticated-fetch operations.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx  # type: ignore[import-untyped]

from ._version import __version__
from .exceptions import (
    NetworkError,
    TimeoutError as AuthTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"siwe-auth-fetch-python/{__version__}"


class BaseClient:
    """Base HTTP client shared by the nonce, exchange and resource calls."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize base HTTP client.

        Args:
            timeout: Request timeout in seconds for an owned transport
            user_agent: User-Agent header sent by an owned transport
            http_client: Optional caller-owned client; it is never closed here

        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = http_client is None

        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=timeout,
                headers={"User-Agent": user_agent},
            )
        self._client = http_client

    async def __aenter__(self) -> BaseClient:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if it is owned by this instance."""
        if self._owns_client:
            await self._client.aclose()

    def build_request(
        self,
        method: str,
        url: str | httpx.URL,
        **kwargs: Any,
    ) -> httpx.Request:
        """Build a request without sending it.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute target URL
            **kwargs: Standard httpx request options (headers, json, content, ...)

        Returns:
            The unsent request.

        """
        return self._client.build_request(method, url, **kwargs)

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a single request, translating transport failures.

        No retry is attempted; a failure is terminal for the calling step.

        Returns:
            The HTTP response with its body read.

        Raises:
            AuthTimeoutError: For timeout errors
            NetworkError: For network-related errors
            TransportError: For any other transport failure

        """
        logger.debug("%s %s", request.method, request.url)
        try:
            return await self._client.send(request)
        except httpx.TimeoutException as e:
            raise AuthTimeoutError("Request timeout", {"url": str(request.url)}) from e
        except httpx.NetworkError as e:
            raise NetworkError("Network error", {"url": str(request.url)}) from e
        except httpx.TransportError as e:
            raise TransportError("Request failed", {"url": str(request.url)}) from e

    async def request(
        self,
        method: str,
        url: str | httpx.URL,
        **kwargs: Any,
    ) -> httpx.Response:
        """Build and send a single request.

        Returns:
            The HTTP response with its body read.

        """
        return await self.send(self.build_request(method, url, **kwargs))

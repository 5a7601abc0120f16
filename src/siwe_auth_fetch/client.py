"""SIWE authenticated-fetch client with an in-memory token cache.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from typing import Any, Self

import httpx  # type: ignore[import-untyped]

from ._base import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, BaseClient
from ._orchestrator import AuthOptions, AuthOrchestrator, TokenCallback
from .models import DEFAULT_CHAIN_ID
from .signers import Signer, SignFunction


class SiweAuthClient:
    """Authenticated-fetch client bound to one address and signer.

    The most recently obtained token is cached and attached to later requests.
    Concurrent requests through one client are not coordinated and may each
    run their own challenge round trip.
    """

    def __init__(
        self,
        address: str,
        signer: Signer | SignFunction,
        *,
        token: str | None = None,
        on_token: TokenCallback | None = None,
        chain_id: int = DEFAULT_CHAIN_ID,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            address: Ethereum address used in SIWE messages
            signer: Signer or signing function for SIWE messages
            token: Optional previously obtained access token
            on_token: Optional callback receiving ``(token, scope)`` for new tokens
            chain_id: Chain id used only when the challenge chain_id is 0; a
                challenge without chain_id means chain 1
            timeout: Request timeout in seconds
            user_agent: User-Agent header for an owned transport
            http_client: Optional caller-owned httpx client

        """
        self.address = address
        self.signer = signer
        self.chain_id = chain_id
        self._on_token = on_token
        self._access_token = token

        self._client = BaseClient(
            timeout=timeout,
            user_agent=user_agent,
            http_client=http_client,
        )
        self._orchestrator = AuthOrchestrator(self._client)

    async def __aenter__(self) -> Self:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def close(self) -> None:
        """Close the client and clean up resources."""
        await self._client.close()

    def set_access_token(self, token: str) -> None:
        """Set the access token for authenticated requests."""
        self._access_token = token

    def clear_access_token(self) -> None:
        """Clear the access token."""
        self._access_token = None

    def get_access_token(self) -> str | None:
        """Get the current access token.

        Returns:
            Current access token or None if not set.

        """
        return self._access_token

    def _store_token(self, token: str, scope: str) -> None:
        self._access_token = token
        if self._on_token is not None:
            self._on_token(token, scope)

    async def request(
        self,
        method: str,
        url: str | httpx.URL,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue a request, authorizing through SIWE when challenged.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute URL of the protected resource
            **kwargs: Standard httpx request options

        Returns:
            The final response.

        """
        auth = AuthOptions(
            address=self.address,
            signer=self.signer,
            token=self._access_token,
            on_token=self._store_token,
            chain_id=self.chain_id,
        )
        return await self._orchestrator.fetch(method, url, auth=auth, **kwargs)

    async def get(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send a GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send a POST request."""
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send a PUT request."""
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send a PATCH request."""
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send a DELETE request."""
        return await self.request("DELETE", url, **kwargs)


async def auth_fetch(
    method: str,
    url: str | httpx.URL,
    *,
    address: str,
    signer: Signer | SignFunction,
    token: str | None = None,
    on_token: TokenCallback | None = None,
    chain_id: int = DEFAULT_CHAIN_ID,
    timeout: float = DEFAULT_TIMEOUT,
    http_client: httpx.AsyncClient | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Issue one authenticated request without keeping a client around.

    Returns:
        The final response, body already read.

    """
    async with SiweAuthClient(
        address,
        signer,
        token=token,
        on_token=on_token,
        chain_id=chain_id,
        timeout=timeout,
        http_client=http_client,
    ) as client:
        return await client.request(method, url, **kwargs)

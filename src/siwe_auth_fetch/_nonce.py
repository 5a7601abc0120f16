"""Nonce service for SIWE authenticated fetch.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ._base import BaseClient
from .exceptions import MalformedResponseError, create_upstream_error
from .models import NonceResponse

logger = logging.getLogger(__name__)


def nonce_uri_from_token_uri(token_uri: str) -> str:
    """Derive the nonce endpoint from the token endpoint.

    Only the first ``/token`` is replaced. A URI without it is returned unchanged.
    """
    return token_uri.replace("/token", "/nonce", 1)


class NonceService:
    """Service for fetching anti-replay nonces from the authorization server."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize nonce service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def fetch_nonce(self, token_uri: str) -> str:
        """Fetch a fresh nonce for the given token endpoint.

        Args:
            token_uri: Absolute URL of the token-exchange endpoint

        Returns:
            The nonce string.

        Raises:
            UpstreamError: If the nonce endpoint answers with a non-success status
            MalformedResponseError: If the body is not JSON or lacks ``nonce``

        """
        nonce_uri = nonce_uri_from_token_uri(token_uri)
        logger.debug("Fetching nonce from %s", nonce_uri)
        response = await self._client.request("GET", nonce_uri)

        if not response.is_success:
            raise create_upstream_error(response)

        try:
            return NonceResponse.model_validate_json(response.content).nonce
        except ValidationError as e:
            raise MalformedResponseError(
                "Nonce response is missing a nonce",
                {"body": response.text},
                response.status_code,
            ) from e

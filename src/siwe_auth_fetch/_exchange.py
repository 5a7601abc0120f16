"""Token exchange service for SIWE authenticated fetch.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ._base import BaseClient
from .exceptions import MalformedResponseError, create_upstream_error
from .models import TokenExchangeRequest, TokenResponse

logger = logging.getLogger(__name__)


class TokenExchangeService:
    """Service for exchanging a signed SIWE message for a bearer token."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize token exchange service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def exchange(
        self,
        token_uri: str,
        message: str,
        signature: str,
        scope: str,
    ) -> TokenResponse:
        """Exchange a signed SIWE message for an access token.

        Args:
            token_uri: Absolute URL of the token-exchange endpoint
            message: The exact SIWE message that was signed
            signature: Hex-encoded signature over the message
            scope: Space-separated scopes, as received in the challenge

        Returns:
            The parsed token response.

        Raises:
            ExchangeError: If the token endpoint answers with a non-success status
            MalformedResponseError: If the body is not JSON or lacks ``access_token``

        """
        body = TokenExchangeRequest(message=message, signature=signature, scope=scope)
        response = await self._client.request(
            "POST",
            token_uri,
            json=body.model_dump(),
            headers={"Content-Type": "application/json"},
        )

        if not response.is_success:
            raise create_upstream_error(response, exchange=True)

        try:
            token = TokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(
                "Token response is missing an access token",
                {"body": response.text},
                response.status_code,
            ) from e

        logger.debug(
            "Token exchange succeeded (type=%s, expires_in=%s)",
            token.token_type,
            token.expires_in,
        )
        return token

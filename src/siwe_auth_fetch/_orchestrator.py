"""Challenge-driven authenticated fetch orchestration.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Any, NamedTuple
from urllib.parse import urljoin

import httpx  # type: ignore[import-untyped]

from ._base import BaseClient
from ._challenge import parse_challenge
from ._exchange import TokenExchangeService
from ._nonce import NonceService
from ._siwe import build_siwe_message
from .exceptions import SiweAuthError, SignerDeclinedError, UnsupportedSchemeError
from .models import DEFAULT_CHAIN_ID, EIP4361_SCHEME, Challenge, TokenResponse
from .signers import Signer, SignFunction, as_signer

logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401

TokenCallback = Callable[[str, str], None]


class FlowState(enum.Enum):
    """States of a single authenticated-fetch invocation."""

    INITIAL = "initial"
    FIRST_ATTEMPTED = "first_attempted"
    CHALLENGE_DETECTED = "challenge_detected"
    NONCE_FETCHED = "nonce_fetched"
    MESSAGE_BUILT = "message_built"
    SIGNED = "signed"
    EXCHANGED = "exchanged"
    RETRIED = "retried"
    DONE = "done"
    FAILED = "failed"


class AuthOptions(NamedTuple):
    """Identity and token inputs for one authenticated fetch."""

    address: str
    signer: Signer | SignFunction
    token: str | None = None
    on_token: TokenCallback | None = None
    chain_id: int = DEFAULT_CHAIN_ID


def bearer(token: str) -> str:
    """Format an Authorization header value."""
    return f"Bearer {token}"


class AuthOrchestrator:
    """Issue a request and transparently satisfy a SIWE OAuth challenge.

    The orchestrator is stateless between invocations. Token persistence is
    the caller's concern: the current token comes in through ``AuthOptions``
    and new tokens leave through ``AuthOptions.on_token``.
    """

    def __init__(self, client: BaseClient) -> None:
        """Initialize the orchestrator.

        Args:
            client: The base HTTP client used for every outbound call

        """
        self._client = client
        self.nonces = NonceService(client)
        self.tokens = TokenExchangeService(client)

    async def fetch(
        self,
        method: str,
        url: str | httpx.URL,
        *,
        auth: AuthOptions,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue a request, answering a 401 SIWE challenge at most once.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute URL of the protected resource
            auth: Identity, signer and token inputs
            **kwargs: Standard httpx request options (headers, json, content, ...)

        Returns:
            The first response when it needs no authorization step, otherwise
            the response to the single retry. Non-success retries are returned,
            not raised.

        Raises:
            TypeError: If ``content`` is a one-shot stream that cannot be replayed
            TransportError: If any HTTP call cannot complete
            ChallengeParseError: If the challenge carries a malformed chain_id
            UnsupportedSchemeError: If the challenge asks for another scheme
            UpstreamError: If the nonce or token endpoint rejects the call
            MalformedResponseError: If a nonce or token body cannot be used
            SignerDeclinedError: If the signer fails

        """
        content = kwargs.get("content")
        if content is not None and not isinstance(content, (str, bytes)):
            msg = "Streaming request content cannot be replayed; pass str or bytes"
            raise TypeError(msg)

        state = FlowState.INITIAL
        try:
            request = self._build(method, url, auth.token, kwargs)
            response = await self._client.send(request)
            state = self._advance(state, FlowState.FIRST_ATTEMPTED)

            if response.status_code != HTTP_UNAUTHORIZED:
                self._advance(state, FlowState.DONE)
                return response

            header = response.headers.get("WWW-Authenticate")
            challenge = parse_challenge(header) if header else None
            if challenge is None:
                logger.debug("401 without a usable challenge from %s", request.url)
                self._advance(state, FlowState.DONE)
                return response
            state = self._advance(state, FlowState.CHALLENGE_DETECTED)

            token = await self._authorize(request, challenge, auth)
            state = FlowState.EXCHANGED

            if auth.on_token is not None:
                auth.on_token(token.access_token, token.scope or challenge.scope)

            retry = self._build(method, url, token.access_token, kwargs)
            response = await self._client.send(retry)
            state = self._advance(state, FlowState.RETRIED)
            if not response.is_success:
                logger.debug(
                    "Retry of %s returned %s", retry.url, response.status_code
                )
            self._advance(state, FlowState.DONE)
            return response
        except Exception:
            self._advance(state, FlowState.FAILED)
            raise

    async def _authorize(
        self,
        request: httpx.Request,
        challenge: Challenge,
        auth: AuthOptions,
    ) -> TokenResponse:
        """Run nonce, message, signature and exchange steps in order."""
        if challenge.signing_scheme != EIP4361_SCHEME:
            logger.warning(
                "Unsupported signing scheme %r from %s",
                challenge.signing_scheme,
                request.url,
            )
            raise UnsupportedSchemeError(challenge.signing_scheme)

        request_uri = str(request.url)
        token_uri = urljoin(request_uri, challenge.token_uri)

        nonce = await self.nonces.fetch_nonce(token_uri)
        state = self._advance(FlowState.CHALLENGE_DETECTED, FlowState.NONCE_FETCHED)

        message = build_siwe_message(
            auth.address,
            nonce,
            challenge.scopes,
            request_uri,
            challenge.chain_id or auth.chain_id,
        )
        state = self._advance(state, FlowState.MESSAGE_BUILT)

        signature = await self._sign(auth.signer, message)
        state = self._advance(state, FlowState.SIGNED)

        token = await self.tokens.exchange(
            token_uri, message, signature, challenge.scope
        )
        self._advance(state, FlowState.EXCHANGED)
        logger.info("Obtained access token for scope %r", token.scope or challenge.scope)
        return token

    @staticmethod
    async def _sign(signer: Signer | SignFunction, message: str) -> str:
        try:
            return await as_signer(signer).sign(message)
        except SiweAuthError:
            raise
        except Exception as e:
            raise SignerDeclinedError(str(e) or "Signer declined") from e

    def _build(
        self,
        method: str,
        url: str | httpx.URL,
        token: str | None,
        kwargs: dict[str, Any],
    ) -> httpx.Request:
        request = self._client.build_request(method, url, **kwargs)
        if token:
            request.headers["Authorization"] = bearer(token)
        return request

    @staticmethod
    def _advance(current: FlowState, new: FlowState) -> FlowState:
        logger.debug("%s -> %s", current.value, new.value)
        return new

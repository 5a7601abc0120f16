"""EIP-4361 message construction for SIWE authenticated fetch.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

import httpx  # type: ignore[import-untyped]
from eth_utils import is_hex_address, to_checksum_address
from pydantic import ValidationError
from siwe import SiweMessage

from .exceptions import MessageBuildError

SIWE_STATEMENT = "Authorize access to your private data."
SIWE_VERSION = "1"
SCOPE_URN_PREFIX = "urn:oauth:scope:"


def scope_resources(scopes: Sequence[str]) -> list[str]:
    """Map scopes, in order, to ``urn:oauth:scope:<scope>`` resource URNs."""
    return [f"{SCOPE_URN_PREFIX}{scope}" for scope in scopes]


def format_issued_at(moment: datetime) -> str:
    """Render a timestamp as RFC 3339 UTC with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def request_domain(request_uri: str) -> str:
    """Return the authority (host and non-default port) of a request URI."""
    return httpx.URL(request_uri).netloc.decode("ascii")


def build_siwe_message(
    address: str,
    nonce: str,
    scopes: Sequence[str],
    request_uri: str,
    chain_id: int,
    *,
    issued_at: datetime | None = None,
) -> str:
    """Build the canonical EIP-4361 message to be signed.

    The domain is the host of ``request_uri``, the URI is ``request_uri`` itself
    and every scope becomes a resource URN. ``Issued At`` is captured now unless
    ``issued_at`` is given.

    Args:
        address: Ethereum address of the signer
        nonce: Nonce obtained from the authorization server
        scopes: Scope tokens in challenge order
        request_uri: URL of the protected resource being requested
        chain_id: EIP-155 chain id
        issued_at: Optional fixed timestamp

    Returns:
        The message text.

    Raises:
        MessageBuildError: If any field is rejected by the SIWE message model.

    """
    if is_hex_address(address):
        address = to_checksum_address(address)

    timestamp = format_issued_at(issued_at or datetime.now(timezone.utc))

    try:
        message = SiweMessage(
            domain=request_domain(request_uri),
            address=address,
            statement=SIWE_STATEMENT,
            uri=request_uri,
            version=SIWE_VERSION,
            chain_id=chain_id,
            nonce=nonce,
            issued_at=timestamp,
            resources=scope_resources(scopes),
        )
    except ValidationError as e:
        raise MessageBuildError("Invalid SIWE message fields", e.errors()) from e

    return message.prepare_message()

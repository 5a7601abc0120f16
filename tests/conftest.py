"""Test configuration and common utilities.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import respx
from siwe_auth_fetch import SiweAuthClient

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

TEST_SIGNATURE = "0x" + "ab" * 65


class RecordingSigner:
    """Signer double that records messages and returns a fixed signature."""

    def __init__(self, signature: str = TEST_SIGNATURE) -> None:
        self.signature = signature
        self.messages: list[str] = []

    async def sign(self, message: str) -> str:
        self.messages.append(message)
        return self.signature


@pytest.fixture
def resource_url() -> str:
    """Return URL of a protected resource.

    Returns:
        str: The resource URL for testing.

    """
    return "https://api.example.test/user/0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed/messages"


@pytest.fixture
def token_uri() -> str:
    """Return token endpoint URL.

    Returns:
        str: The token endpoint for testing.

    """
    return "https://auth.example.test/oauth/token"


@pytest.fixture
def nonce_uri() -> str:
    """Return nonce endpoint URL derived from the token endpoint.

    Returns:
        str: The nonce endpoint for testing.

    """
    return "https://auth.example.test/oauth/nonce"


@pytest.fixture
def address() -> str:
    """Return a checksummed Ethereum address.

    Returns:
        str: The signing address for testing.

    """
    return "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


@pytest.fixture
def signer() -> RecordingSigner:
    """Return a recording signer.

    Returns:
        RecordingSigner: Signer double with a fixed signature.

    """
    return RecordingSigner()


@pytest.fixture
def challenge_header(token_uri: str) -> str:
    """Sample WWW-Authenticate challenge.

    Returns:
        str: Challenge header value.

    """
    return f'Bearer, realm="messages", scope="a b", token_uri="{token_uri}"'


@pytest.fixture
def sample_token_response() -> dict[str, Any]:
    """Sample token endpoint response.

    Returns:
        dict[str, Any]: Token response data.

    """
    return {
        "access_token": "T1",
        "token_type": "Bearer",
        "expires_in": 3600,
        "scope": "a b",
    }


@pytest.fixture
def mock_responses() -> Generator[Any, None, None]:
    """Mock HTTP responses.

    Yields:
        The mock router for HTTP requests.

    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
async def client(
    address: str,
    signer: RecordingSigner,
) -> AsyncGenerator[SiweAuthClient, None]:
    """Create test client.

    Yields:
        SiweAuthClient: Client bound to the test address and signer.

    """
    async with SiweAuthClient(address, signer, timeout=5.0) as client:
        yield client

"""Tests for the stateful client and the one-shot fetch.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from siwe_auth_fetch import SiweAuthClient, auth_fetch


def mock_challenge_flow(
    mock_responses: Any,
    resource_url: str,
    nonce_uri: str,
    token_uri: str,
    challenge_header: str,
    token_response: dict[str, Any],
) -> Any:
    """Serve a challenge unless the request carries Bearer T1.

    Returns:
        The resource route.

    """

    def resource(request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") == "Bearer T1":
            return httpx.Response(200, json={"messages": ["hello"]})
        return httpx.Response(401, headers={"WWW-Authenticate": challenge_header})

    route = mock_responses.get(resource_url).mock(side_effect=resource)
    mock_responses.get(nonce_uri).mock(
        return_value=httpx.Response(200, json={"nonce": "nonce0001"})
    )
    mock_responses.post(token_uri).mock(
        return_value=httpx.Response(200, json=token_response)
    )
    return route


def test_token_management(address: str, signer: Any) -> None:
    """The cached token can be set, read and cleared."""
    client = SiweAuthClient(address, signer, token="initial")
    assert client.get_access_token() == "initial"

    client.set_access_token("replaced")
    assert client.get_access_token() == "replaced"

    client.clear_access_token()
    assert client.get_access_token() is None


async def test_cached_token_skips_second_challenge(
    mock_responses: Any,
    client: SiweAuthClient,
    resource_url: str,
    nonce_uri: str,
    token_uri: str,
    challenge_header: str,
    sample_token_response: dict[str, Any],
) -> None:
    """A second call reuses the cached token with no challenge round trip."""
    route = mock_challenge_flow(
        mock_responses,
        resource_url,
        nonce_uri,
        token_uri,
        challenge_header,
        sample_token_response,
    )

    first = await client.get(resource_url)
    assert first.status_code == 200
    assert route.call_count == 2
    assert client.get_access_token() == "T1"

    second = await client.get(resource_url)
    assert second.status_code == 200
    assert route.call_count == 3
    assert len(client.signer.messages) == 1


async def test_cache_updated_before_caller_callback(
    mock_responses: Any,
    address: str,
    signer: Any,
    resource_url: str,
    nonce_uri: str,
    token_uri: str,
    challenge_header: str,
    sample_token_response: dict[str, Any],
) -> None:
    """The caller callback sees the cache already holding the new token."""
    mock_challenge_flow(
        mock_responses,
        resource_url,
        nonce_uri,
        token_uri,
        challenge_header,
        sample_token_response,
    )
    seen: list[Any] = []

    async with SiweAuthClient(
        address,
        signer,
        on_token=lambda token, scope: seen.append(
            (token, scope, client.get_access_token())
        ),
    ) as client:
        await client.get(resource_url)

    assert seen == [("T1", "a b", "T1")]


async def test_caller_owned_http_client_stays_open(
    mock_responses: Any, address: str, signer: Any, resource_url: str
) -> None:
    """A supplied httpx client is not closed by the wrapper."""
    mock_responses.get(resource_url).mock(return_value=httpx.Response(200))

    async with httpx.AsyncClient() as http_client:
        async with SiweAuthClient(address, signer, http_client=http_client) as client:
            await client.get(resource_url)

        assert not http_client.is_closed


@pytest.mark.parametrize("method", ["post", "put", "patch", "delete"])
async def test_method_helpers(
    mock_responses: Any, client: SiweAuthClient, resource_url: str, method: str
) -> None:
    """Method helpers issue the matching HTTP method."""
    route = mock_responses.route(method=method.upper(), url=resource_url).mock(
        return_value=httpx.Response(204)
    )

    response = await getattr(client, method)(resource_url)

    assert response.status_code == 204
    assert route.called


async def test_auth_fetch_one_shot(
    mock_responses: Any,
    address: str,
    signer: Any,
    resource_url: str,
    nonce_uri: str,
    token_uri: str,
    challenge_header: str,
    sample_token_response: dict[str, Any],
) -> None:
    """The one-shot function completes the flow and returns a readable response."""
    mock_challenge_flow(
        mock_responses,
        resource_url,
        nonce_uri,
        token_uri,
        challenge_header,
        sample_token_response,
    )
    tokens: list[tuple[str, str]] = []

    response = await auth_fetch(
        "GET",
        resource_url,
        address=address,
        signer=signer,
        on_token=lambda token, scope: tokens.append((token, scope)),
    )

    assert response.status_code == 200
    assert response.json() == {"messages": ["hello"]}
    assert tokens == [("T1", "a b")]


async def test_auth_fetch_with_token_skips_signing(
    mock_responses: Any,
    address: str,
    signer: Any,
    resource_url: str,
    nonce_uri: str,
    token_uri: str,
    challenge_header: str,
    sample_token_response: dict[str, Any],
) -> None:
    """A still-valid token passed in is accepted without signing."""
    route = mock_challenge_flow(
        mock_responses,
        resource_url,
        nonce_uri,
        token_uri,
        challenge_header,
        sample_token_response,
    )

    response = await auth_fetch(
        "GET", resource_url, address=address, signer=signer, token="T1"
    )

    assert response.status_code == 200
    assert route.call_count == 1
    assert signer.messages == []

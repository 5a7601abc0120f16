"""
Exception classes for the SIWE authenticated-fetch client.
"""

from __future__ import annotations

from typing import Any

import httpx

__all__ = [
    "SiweAuthError",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "ChallengeParseError",
    "UnsupportedSchemeError",
    "UpstreamError",
    "ExchangeError",
    "MalformedResponseError",
    "SignerDeclinedError",
    "MessageBuildError",
    "create_upstream_error",
]


class SiweAuthError(Exception):
    """Base exception for SIWE authenticated-fetch errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code


class TransportError(SiweAuthError):
    """Raised when an HTTP call could not complete."""

    def __init__(
        self,
        message: str = "Transport error",
        details: Any | None = None,
        code: str = "TRANSPORT_ERROR",
    ) -> None:
        super().__init__(message, code, details)


class NetworkError(TransportError):
    """Raised when a network error occurs."""

    def __init__(
        self, message: str = "Network error", details: Any | None = None
    ) -> None:
        super().__init__(message, details, "NETWORK_ERROR")


class TimeoutError(TransportError):  # noqa: A001
    """Raised when a request times out."""

    def __init__(
        self, message: str = "Request timeout", details: Any | None = None
    ) -> None:
        super().__init__(message, details, "TIMEOUT_ERROR")


class ChallengeParseError(SiweAuthError):
    """Raised when a WWW-Authenticate challenge carries a malformed value."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message, "CHALLENGE_PARSE_ERROR", details)


class UnsupportedSchemeError(SiweAuthError):
    """Raised when a challenge asks for a signing scheme other than EIP-4361."""

    def __init__(self, scheme: str) -> None:
        super().__init__(
            f"Unsupported signing scheme: {scheme}",
            "UNSUPPORTED_SCHEME",
            {"signing_scheme": scheme},
        )
        self.scheme = scheme


class UpstreamError(SiweAuthError):
    """Raised when the authorization server answers with a non-success status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Any | None = None,
        code: str = "UPSTREAM_ERROR",
    ) -> None:
        super().__init__(message, code, details, status_code)


class ExchangeError(UpstreamError):
    """Raised when the token endpoint rejects a signed message."""

    def __init__(
        self, status_code: int, message: str, details: Any | None = None
    ) -> None:
        super().__init__(status_code, message, details, "EXCHANGE_ERROR")


class MalformedResponseError(SiweAuthError):
    """Raised when a nonce or token response body cannot be understood."""

    def __init__(
        self,
        message: str = "Malformed response",
        details: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, "MALFORMED_RESPONSE", details, status_code)


class SignerDeclinedError(SiweAuthError):
    """Raised when the signer fails, typically because the user rejected it."""

    def __init__(
        self, message: str = "Signer declined", details: Any | None = None
    ) -> None:
        super().__init__(message, "SIGNER_DECLINED", details)


class MessageBuildError(SiweAuthError):
    """Raised when the SIWE message fields are rejected."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message, "MESSAGE_BUILD_ERROR", details)


def create_upstream_error(
    response: httpx.Response,
    *,
    exchange: bool = False,
) -> UpstreamError:
    """Create an upstream error from a non-success authorization server response."""
    status_code = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None

    server_message = body.get("error") if isinstance(body, dict) else None

    if exchange:
        message = (
            str(server_message)
            if server_message
            else f"Token exchange failed: {status_code}"
        )
        return ExchangeError(status_code, message, body)

    message = (
        f"Failed to fetch nonce: {status_code} ({server_message})"
        if server_message
        else f"Failed to fetch nonce: {status_code}"
    )
    return UpstreamError(status_code, message, body)

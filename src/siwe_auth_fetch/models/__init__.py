"""Models package for SIWE authenticated fetch.

This module provides access to all model classes used by the client.
"""

from .challenge_models import DEFAULT_CHAIN_ID, EIP4361_SCHEME, Challenge
from .token_models import (
    ETH_SIGNATURE_GRANT,
    NonceResponse,
    TokenExchangeRequest,
    TokenResponse,
)

__all__ = [
    # Challenge
    "Challenge",
    "DEFAULT_CHAIN_ID",
    "EIP4361_SCHEME",
    # Nonce and token exchange
    "ETH_SIGNATURE_GRANT",
    "NonceResponse",
    "TokenExchangeRequest",
    "TokenResponse",
]

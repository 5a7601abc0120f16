"""
SIWE authenticated fetch

Python client library for resources protected by Sign-In-With-Ethereum
(EIP-4361) OAuth challenges. A request that is answered with a 401 challenge
is authorized by signing a SIWE message, exchanging it for a bearer token,
and retrying once.
"""

from ._challenge import parse_challenge
from ._exchange import TokenExchangeService
from ._nonce import NonceService, nonce_uri_from_token_uri
from ._orchestrator import AuthOptions, AuthOrchestrator, FlowState
from ._siwe import build_siwe_message
from ._version import __version__
from .client import SiweAuthClient, auth_fetch
from .exceptions import *
from .models import *
from .signers import CallableSigner, EthAccountSigner, Signer

__all__ = [
    "__version__",
    "SiweAuthClient",
    "auth_fetch",
    "AuthOrchestrator",
    "AuthOptions",
    "FlowState",
    # Components
    "parse_challenge",
    "NonceService",
    "nonce_uri_from_token_uri",
    "build_siwe_message",
    "TokenExchangeService",
    # Signers
    "Signer",
    "CallableSigner",
    "EthAccountSigner",
    # Exceptions
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
    # Models
    "Challenge",
    "NonceResponse",
    "TokenExchangeRequest",
    "TokenResponse",
]

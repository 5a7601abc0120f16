"""WWW-Authenticate challenge parsing for SIWE authenticated fetch.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import re

from .exceptions import ChallengeParseError
from .models import DEFAULT_CHAIN_ID, EIP4361_SCHEME, Challenge

# Matches key="value" pairs; JavaScript-style ASCII word characters for keys
_PARAM_RE = re.compile(r'(\w+)="([^"]+)"', re.ASCII)
_DECIMAL_RE = re.compile(r"[0-9]+")

REQUIRED_PARAMS = ("realm", "scope", "token_uri")


def parse_challenge_params(header: str) -> dict[str, str]:
    """Collect every key="value" pair of a header, later keys overwriting earlier ones.

    Args:
        header: Raw WWW-Authenticate header value

    Returns:
        Mapping of parameter name to its last value.

    """
    params: dict[str, str] = {}
    for key, value in _PARAM_RE.findall(header):
        params[key] = value
    return params


def parse_challenge(header: str) -> Challenge | None:
    """Parse a WWW-Authenticate header into a structured challenge.

    Format: ``Bearer, realm="...", scope="...", token_uri="..."``
    optionally followed by ``chain_id="..."`` and ``signing_scheme="..."``.

    Args:
        header: Raw WWW-Authenticate header value

    Returns:
        The parsed challenge, or None when realm, scope or token_uri is missing.

    Raises:
        ChallengeParseError: If chain_id is present but not a base-10 integer.

    """
    params = parse_challenge_params(header)

    if not all(params.get(name) for name in REQUIRED_PARAMS):
        return None

    chain_id = DEFAULT_CHAIN_ID
    raw_chain_id = params.get("chain_id")
    if raw_chain_id is not None:
        if not _DECIMAL_RE.fullmatch(raw_chain_id):
            msg = f"Invalid chain_id in challenge: {raw_chain_id!r}"
            raise ChallengeParseError(msg, {"chain_id": raw_chain_id})
        chain_id = int(raw_chain_id, 10)

    return Challenge(
        realm=params["realm"],
        scope=params["scope"],
        token_uri=params["token_uri"],
        chain_id=chain_id,
        signing_scheme=params.get("signing_scheme") or EIP4361_SCHEME,
    )

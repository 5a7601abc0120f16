"""Example usage of the SIWE authenticated-fetch client."""
# Copyright (c) 2025 AuthFramework Team. All rights reserved.

import asyncio
import logging
import os

from siwe_auth_fetch import (
    EthAccountSigner,
    SiweAuthClient,
    SiweAuthError,
    SignerDeclinedError,
    UnsupportedSchemeError,
    auth_fetch,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:3000")
# Throwaway development key; wallets normally sign behind a user prompt
PRIVATE_KEY = os.environ.get(
    "SIWE_PRIVATE_KEY",
    "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318",
)


def save_token(token: str, scope: str) -> None:
    """Persist a newly obtained token (here: just log its scope)."""
    logger.info("New token granted for scope %r", scope)


async def main() -> None:
    """Execute main example function."""
    signer = EthAccountSigner(PRIVATE_KEY)
    messages_url = f"{API_BASE_URL}/author/{signer.address}/messages"

    # Example 1: Client with an in-memory token cache
    logger.info("=== Cached Client Example ===")

    try:
        async with SiweAuthClient(
            signer.address, signer, on_token=save_token
        ) as client:
            response = await client.get(messages_url)
            logger.info("First request: %s", response.status_code)

            # The cached token is attached; no second signature is needed
            response = await client.get(messages_url)
            logger.info("Second request: %s", response.status_code)
            if response.is_success:
                data = response.json()
                logger.info(
                    "Author %s has %s messages",
                    data.get("author"),
                    len(data.get("messages", [])),
                )

    except UnsupportedSchemeError as e:
        logger.exception("Server asked for %s signatures", e.scheme)
    except SignerDeclinedError:
        logger.exception("Signature was declined")
    except SiweAuthError as e:
        logger.exception("API error: %s (Status: %s)", e.message, e.status_code)

    # Example 2: One-shot request
    logger.info("=== One-shot Example ===")

    try:
        response = await auth_fetch(
            "GET",
            messages_url,
            address=signer.address,
            signer=signer,
        )
        logger.info("One-shot request: %s", response.status_code)
    except SiweAuthError:
        logger.exception("One-shot request failed")


if __name__ == "__main__":
    asyncio.run(main())

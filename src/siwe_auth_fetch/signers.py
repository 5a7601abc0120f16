"""Signer capabilities for SIWE authenticated fetch.

A signer turns the SIWE message text into a hex-encoded signature. Wallet
prompts may take arbitrarily long, so signing is always awaited.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from eth_account import Account
from eth_account.messages import encode_defunct

SignFunction = Callable[[str], "str | Awaitable[str]"]


@runtime_checkable
class Signer(Protocol):
    """Anything able to sign a plain-text message."""

    async def sign(self, message: str) -> str:
        """Sign ``message`` and return a 0x-prefixed hex signature."""
        ...


class CallableSigner:
    """Adapt a plain or coroutine function to the Signer protocol."""

    def __init__(self, func: SignFunction) -> None:
        self._func = func

    async def sign(self, message: str) -> str:
        result = self._func(message)
        if inspect.isawaitable(result):
            result = await result
        return result


class EthAccountSigner:
    """Sign messages with a local private key (EIP-191 personal_sign)."""

    def __init__(self, private_key: str | bytes) -> None:
        """Initialize the signer.

        Args:
            private_key: Hex or raw private key of the signing account

        """
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return self._account.address

    async def sign(self, message: str) -> str:
        signed = self._account.sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()


def as_signer(signer: Signer | SignFunction) -> Signer:
    """Return ``signer`` unchanged if its ``sign`` is a coroutine, else wrap it.

    Objects with a blocking ``sign`` method and bare functions are both adapted
    through ``CallableSigner``, which awaits only awaitable results.
    """
    sign = getattr(signer, "sign", None)
    if sign is None:
        return CallableSigner(signer)
    if inspect.iscoroutinefunction(sign):
        return signer
    return CallableSigner(sign)

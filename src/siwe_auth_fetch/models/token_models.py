"""Nonce and token exchange models for SIWE authenticated fetch."""

from pydantic import BaseModel, Field

ETH_SIGNATURE_GRANT = "eth_signature"


class NonceResponse(BaseModel):
    """Nonce endpoint response model."""

    nonce: str


class TokenExchangeRequest(BaseModel):
    """Token exchange request model."""

    grant_type: str = ETH_SIGNATURE_GRANT
    message: str
    signature: str
    scope: str


class TokenResponse(BaseModel):
    """Token response model."""

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    expires_in: int | None = None
    scope: str | None = None

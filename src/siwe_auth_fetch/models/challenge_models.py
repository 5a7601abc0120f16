"""Challenge models for SIWE authenticated fetch."""

from pydantic import BaseModel

DEFAULT_CHAIN_ID = 1
EIP4361_SCHEME = "eip4361"


class Challenge(BaseModel):
    """Parsed WWW-Authenticate challenge from a 401 response."""

    realm: str
    scope: str
    token_uri: str
    chain_id: int = DEFAULT_CHAIN_ID
    signing_scheme: str = EIP4361_SCHEME

    @property
    def scopes(self) -> list[str]:
        """Scope tokens in header order, split on single spaces."""
        return self.scope.split(" ")

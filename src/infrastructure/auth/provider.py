"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """The creator identified by a bearer token. Owns profile drafts."""

    id: UUID
    email: str | None = None
    display_name: str | None = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> TokenUser | None:
        """Return the token's user, or None when the token is invalid or expired."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a signed token for ``user``."""
        ...

"""Profile draft repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.draft import ProfileDraft


class IDraftRepository(Protocol):
    """Repository interface for ProfileDraft entities."""

    async def get(self, id: UUID) -> ProfileDraft | None:
        """Get a draft by ID."""
        ...

    async def list_for_owner(self, owner_id: UUID) -> list[ProfileDraft]:
        """Get all drafts of an owner, most recently updated first."""
        ...

    async def create(self, draft: ProfileDraft) -> ProfileDraft:
        """Create a new draft."""
        ...

    async def update(self, draft: ProfileDraft) -> ProfileDraft:
        """Persist a revised draft."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a draft and return success status."""
        ...

"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.draft_repository import IDraftRepository
from domain.repositories.profile_cache_repository import IProfileCacheRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    drafts: IDraftRepository
    profile_cache: IProfileCacheRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...

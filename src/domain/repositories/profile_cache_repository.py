"""Profile cache repository protocol."""

from typing import Protocol

from domain.entities.cached_profile import CachedProfile


class IProfileCacheRepository(Protocol):
    """Key/value store of last-known-good creator profiles.

    Implementations raise ``StorageError`` when the backing store fails.
    """

    async def get(self, key: str) -> CachedProfile | None:
        ...

    async def put(self, entry: CachedProfile) -> None:
        """Insert or replace the entry stored under ``entry.key``."""
        ...

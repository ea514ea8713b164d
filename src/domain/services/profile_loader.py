"""Creator profile loading with freshness window, request dedup and cache fallback."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Protocol

import structlog

from core.exceptions import CreatorNotFoundError, StorageError, UpstreamUnavailableError
from domain.entities.cached_profile import CachedProfile
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

CACHE_KEY_PREFIX = "creator_profile_"


def cache_key(creator_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}{creator_id}"


class ProfileSource(StrEnum):
    NETWORK = "network"
    CACHE = "cache"


@dataclass(frozen=True)
class LoadedProfile:
    creator_id: str
    profile: Profile
    source: ProfileSource
    fetched_at: datetime


class ICreatorApi(Protocol):
    """Remote creator backend."""

    async def fetch_profile(self, creator_id: str) -> Profile:
        """Fetch the published profile.

        Raises ``CreatorNotFoundError`` for non-2xx answers and
        ``UpstreamUnavailableError`` for transport or decoding failures.
        """
        ...


class ProfileLoader:
    """Load published profiles, falling back to the last persisted copy."""

    def __init__(
        self,
        api: ICreatorApi,
        uow_factory: Callable[[], IUnitOfWork],
        fresh_seconds: float = 300.0,
        max_retries: int = 1,
        homepage_url: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api = api
        self._uow_factory = uow_factory
        self._fresh_seconds = fresh_seconds
        self._max_retries = max_retries
        self._homepage_url = homepage_url
        self._clock = clock
        self._fresh: dict[str, tuple[float, LoadedProfile]] = {}
        self._in_flight: dict[str, asyncio.Task[LoadedProfile]] = {}

    async def peek_cached(self, creator_id: str) -> CachedProfile | None:
        """Read the persisted copy without touching the network."""
        try:
            async with self._uow_factory() as uow:
                return await uow.profile_cache.get(cache_key(creator_id))
        except StorageError as exc:
            logger.warning("profile_cache_read_failed", creator_id=creator_id, **exc.details)
            return None

    async def load(self, creator_id: str) -> LoadedProfile:
        fresh = self._fresh.get(creator_id)
        if fresh is not None and self._clock() - fresh[0] < self._fresh_seconds:
            return fresh[1]

        task = self._in_flight.get(creator_id)
        if task is None:
            task = asyncio.create_task(self._load_uncached(creator_id))
            self._in_flight[creator_id] = task
            task.add_done_callback(lambda _: self._in_flight.pop(creator_id, None))
        # A cancelled caller must not cancel the load shared with other callers.
        return await asyncio.shield(task)

    def invalidate(self, creator_id: str) -> None:
        self._fresh.pop(creator_id, None)

    @property
    def fresh_count(self) -> int:
        return len(self._fresh)

    def _remember(self, loaded: LoadedProfile) -> None:
        now = self._clock()
        expired = [
            creator_id
            for creator_id, (at, _) in self._fresh.items()
            if now - at >= self._fresh_seconds
        ]
        for creator_id in expired:
            del self._fresh[creator_id]
        self._fresh[loaded.creator_id] = (now, loaded)

    async def _load_uncached(self, creator_id: str) -> LoadedProfile:
        try:
            profile = await self._fetch_with_retry(creator_id)
        except (CreatorNotFoundError, UpstreamUnavailableError) as exc:
            logger.warning(
                "profile_fetch_failed",
                creator_id=creator_id,
                error_code=exc.error_code,
            )
            cached = await self.peek_cached(creator_id)
            if cached is None:
                raise CreatorNotFoundError(creator_id, self._homepage_url) from exc
            logger.info("profile_served_from_cache", creator_id=creator_id)
            return LoadedProfile(
                creator_id=creator_id,
                profile=cached.profile,
                source=ProfileSource.CACHE,
                fetched_at=cached.stored_at,
            )

        loaded = LoadedProfile(
            creator_id=creator_id,
            profile=profile,
            source=ProfileSource.NETWORK,
            fetched_at=datetime.utcnow(),
        )
        self._remember(loaded)
        await self._store(loaded)
        return loaded

    async def _fetch_with_retry(self, creator_id: str) -> Profile:
        attempt = 0
        while True:
            try:
                return await self._api.fetch_profile(creator_id)
            except (CreatorNotFoundError, UpstreamUnavailableError):
                if attempt >= self._max_retries:
                    raise
                attempt += 1
                logger.debug("profile_fetch_retry", creator_id=creator_id, attempt=attempt)

    async def _store(self, loaded: LoadedProfile) -> None:
        entry = CachedProfile(
            key=cache_key(loaded.creator_id),
            profile=loaded.profile,
            stored_at=loaded.fetched_at,
        )
        try:
            async with self._uow_factory() as uow:
                await uow.profile_cache.put(entry)
                await uow.commit()
        except StorageError as exc:
            logger.warning(
                "profile_cache_write_failed", creator_id=loaded.creator_id, **exc.details
            )

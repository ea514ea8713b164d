"""Unit tests for ProfileLoader."""

import asyncio
from datetime import datetime

import pytest

from core.exceptions import CreatorNotFoundError, StorageError, UpstreamUnavailableError
from domain.entities.cached_profile import CachedProfile
from domain.entities.profile import Profile
from domain.services.profile_loader import ProfileLoader, ProfileSource, cache_key
from tests.unit.conftest import FakeUnitOfWork

CREATOR_ID = "creator-123"


class FakeCreatorApi:
    """Scripted creator backend: each call pops the next outcome."""

    def __init__(self, *outcomes: Profile | Exception, delay: float = 0.0) -> None:
        self.outcomes = list(outcomes)
        self.delay = delay
        self.calls = 0

    async def fetch_profile(self, creator_id: str) -> Profile:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def profile() -> Profile:
    return Profile(username="ninja", display_name="Ninja")


@pytest.fixture
def cached_profile() -> CachedProfile:
    return CachedProfile(
        key=cache_key(CREATOR_ID),
        profile=Profile(username="ninja", display_name="Cached Ninja"),
        stored_at=datetime(2026, 1, 1, 12, 0, 0),
    )


def _loader(api: FakeCreatorApi, uow: FakeUnitOfWork, **kwargs: object) -> ProfileLoader:
    return ProfileLoader(api, lambda: uow, homepage_url="https://example.com", **kwargs)


class TestLoad:
    """Tests for ProfileLoader.load."""

    @pytest.mark.asyncio
    async def test_success_is_persisted_under_cache_key(
        self, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        loader = _loader(FakeCreatorApi(profile), uow)

        loaded = await loader.load(CREATOR_ID)

        assert loaded.source is ProfileSource.NETWORK
        assert loaded.profile == profile
        uow.profile_cache.put.assert_awaited_once()
        stored = uow.profile_cache.put.call_args.args[0]
        assert stored.key == "creator_profile_creator-123"
        assert stored.profile == profile
        assert uow.committed

    @pytest.mark.asyncio
    async def test_fresh_result_is_reused(self, uow: FakeUnitOfWork, profile: Profile) -> None:
        clock = FakeClock()
        api = FakeCreatorApi(profile)
        loader = _loader(api, uow, fresh_seconds=300, clock=clock)

        await loader.load(CREATOR_ID)
        clock.now = 299
        await loader.load(CREATOR_ID)

        assert api.calls == 1

    @pytest.mark.asyncio
    async def test_stale_result_is_refetched(self, uow: FakeUnitOfWork, profile: Profile) -> None:
        clock = FakeClock()
        api = FakeCreatorApi(profile)
        loader = _loader(api, uow, fresh_seconds=300, clock=clock)

        await loader.load(CREATOR_ID)
        clock.now = 301
        await loader.load(CREATOR_ID)

        assert api.calls == 2

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(self, uow: FakeUnitOfWork, profile: Profile) -> None:
        api = FakeCreatorApi(profile)
        loader = _loader(api, uow)

        await loader.load(CREATOR_ID)
        loader.invalidate(CREATOR_ID)
        await loader.load(CREATOR_ID)

        assert api.calls == 2

    @pytest.mark.asyncio
    async def test_stale_entries_are_dropped_on_next_load(
        self, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        clock = FakeClock()
        loader = _loader(FakeCreatorApi(profile), uow, fresh_seconds=300, clock=clock)

        for creator_id in ("a", "b", "c"):
            await loader.load(creator_id)
            clock.now += 301

        assert loader.fresh_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_loads_share_one_request(
        self, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        api = FakeCreatorApi(profile, delay=0.01)
        loader = _loader(api, uow)

        results = await asyncio.gather(*(loader.load(CREATOR_ID) for _ in range(5)))

        assert api.calls == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio
    async def test_retries_once_before_falling_back(
        self, uow: FakeUnitOfWork, cached_profile: CachedProfile
    ) -> None:
        api = FakeCreatorApi(UpstreamUnavailableError("creator_api", "timeout"))
        uow.profile_cache.get.return_value = cached_profile
        loader = _loader(api, uow, max_retries=1)

        loaded = await loader.load(CREATOR_ID)

        assert api.calls == 2
        assert loaded.source is ProfileSource.CACHE
        assert loaded.profile.display_name == "Cached Ninja"
        assert loaded.fetched_at == cached_profile.stored_at

    @pytest.mark.asyncio
    async def test_retry_recovers(self, uow: FakeUnitOfWork, profile: Profile) -> None:
        api = FakeCreatorApi(UpstreamUnavailableError("creator_api", "reset"), profile)
        loader = _loader(api, uow)

        loaded = await loader.load(CREATOR_ID)

        assert api.calls == 2
        assert loaded.source is ProfileSource.NETWORK

    @pytest.mark.asyncio
    async def test_not_found_falls_back_to_cache(
        self, uow: FakeUnitOfWork, cached_profile: CachedProfile
    ) -> None:
        api = FakeCreatorApi(CreatorNotFoundError(CREATOR_ID))
        uow.profile_cache.get.return_value = cached_profile

        loaded = await _loader(api, uow).load(CREATOR_ID)

        assert loaded.source is ProfileSource.CACHE
        uow.profile_cache.get.assert_awaited_with("creator_profile_creator-123")

    @pytest.mark.asyncio
    async def test_not_found_without_cache_raises(self, uow: FakeUnitOfWork) -> None:
        api = FakeCreatorApi(CreatorNotFoundError(CREATOR_ID))
        uow.profile_cache.get.return_value = None

        with pytest.raises(CreatorNotFoundError) as exc_info:
            await _loader(api, uow).load(CREATOR_ID)

        assert exc_info.value.details == {
            "creator_id": CREATOR_ID,
            "homepage_url": "https://example.com",
        }

    @pytest.mark.asyncio
    async def test_unreadable_cache_is_a_miss(self, uow: FakeUnitOfWork) -> None:
        api = FakeCreatorApi(UpstreamUnavailableError("creator_api", "down"))
        uow.profile_cache.get.side_effect = StorageError("profile_cache.get", "locked")

        with pytest.raises(CreatorNotFoundError):
            await _loader(api, uow).load(CREATOR_ID)

    @pytest.mark.asyncio
    async def test_failed_cache_write_still_returns_profile(
        self, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        uow.profile_cache.put.side_effect = StorageError("profile_cache.put", "disk full")

        loaded = await _loader(FakeCreatorApi(profile), uow).load(CREATOR_ID)

        assert loaded.profile == profile
        assert loaded.source is ProfileSource.NETWORK

    @pytest.mark.asyncio
    async def test_cache_fallback_is_not_treated_as_fresh(
        self, uow: FakeUnitOfWork, cached_profile: CachedProfile, profile: Profile
    ) -> None:
        api = FakeCreatorApi(
            UpstreamUnavailableError("creator_api", "down"),
            UpstreamUnavailableError("creator_api", "down"),
            profile,
        )
        uow.profile_cache.get.return_value = cached_profile
        loader = _loader(api, uow)

        first = await loader.load(CREATOR_ID)
        second = await loader.load(CREATOR_ID)

        assert first.source is ProfileSource.CACHE
        assert second.source is ProfileSource.NETWORK


class TestPeekCached:
    @pytest.mark.asyncio
    async def test_returns_persisted_copy(
        self, uow: FakeUnitOfWork, cached_profile: CachedProfile
    ) -> None:
        uow.profile_cache.get.return_value = cached_profile
        api = FakeCreatorApi(Profile())

        assert await _loader(api, uow).peek_cached(CREATOR_ID) is cached_profile
        assert api.calls == 0

    @pytest.mark.asyncio
    async def test_storage_error_returns_none(self, uow: FakeUnitOfWork) -> None:
        uow.profile_cache.get.side_effect = StorageError("profile_cache.get", "locked")
        assert await _loader(FakeCreatorApi(Profile()), uow).peek_cached(CREATOR_ID) is None

"""Twitch live-status overlay.

Two sources exist and a deployment uses exactly one of them:

* ``BackendLiveStatusSource`` reads the ``tw_status`` flag the creator
  backend attaches to each Twitch link. No polling.
* ``PolledLiveStatusSource`` keeps one ``LiveStatusSubscription`` per
  profile, polling a real provider on a fixed interval.

Neither source invents a status: unknown means not live.
"""

import asyncio
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Protocol

import structlog

from core.exceptions import LiveStatusUnavailableError
from domain.entities.profile import Platform, Profile
from domain.services.platform_resolver import detect_platform, extract_twitch_username

logger = structlog.get_logger()

_EMPTY_STATUS: Mapping[str, bool] = MappingProxyType({})


class ILiveStatusProvider(Protocol):
    """Upstream that knows which channels are broadcasting."""

    async def fetch_live_status(self, usernames: Sequence[str]) -> dict[str, bool]:
        """Return a live flag for every requested (lowercased) username."""
        ...


class ILiveStatusSource(Protocol):
    """Per-deployment strategy used by the public page."""

    async def status_for(self, key: str, profile: Profile) -> Mapping[str, bool]:
        ...


def twitch_usernames(profile: Profile) -> list[str]:
    """Distinct lowercased Twitch channels among enabled links, sorted."""
    usernames: set[str] = set()
    for link in profile.links:
        if not link.enabled or detect_platform(link.url) != Platform.TWITCH:
            continue
        username = extract_twitch_username(link.url)
        if username:
            usernames.add(username.lower())
    return sorted(usernames)


def backend_live_status(profile: Profile) -> dict[str, bool]:
    """Live mapping built from backend-supplied ``tw_status`` flags."""
    status: dict[str, bool] = {}
    for link in profile.links:
        if detect_platform(link.url) != Platform.TWITCH:
            continue
        username = extract_twitch_username(link.url)
        if username:
            key = username.lower()
            status[key] = status.get(key, False) or link.tw_status is True
    return status


def _normalize(usernames: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({username.lower() for username in usernames if username}))


class LiveStatusSubscription:
    """Cancellable poll of one username set.

    Each completed poll replaces the whole mapping. Changing the username
    set cancels the running timer and polls again immediately; results
    from a superseded cycle are discarded by generation.
    """

    def __init__(
        self,
        provider: ILiveStatusProvider,
        usernames: Iterable[str],
        interval_seconds: float,
    ) -> None:
        self._provider = provider
        self._interval = interval_seconds
        self._usernames = _normalize(usernames)
        self._status: Mapping[str, bool] = _EMPTY_STATUS
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._ready = asyncio.Event()

    @property
    def usernames(self) -> tuple[str, ...]:
        return self._usernames

    @property
    def status(self) -> Mapping[str, bool]:
        return self._status

    @property
    def is_loading(self) -> bool:
        return not self._ready.is_set()

    @property
    def generation(self) -> int:
        return self._generation

    def start(self) -> None:
        self._restart()

    def update(self, usernames: Iterable[str]) -> None:
        normalized = _normalize(usernames)
        if normalized == self._usernames:
            return
        self._usernames = normalized
        self._restart()

    async def wait_ready(self, timeout: float | None = None) -> Mapping[str, bool]:
        """Wait for the current cycle's first result, then return the snapshot."""
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
        except asyncio.TimeoutError:
            logger.debug("live_status_wait_timed_out", usernames=list(self._usernames))
        return self._status

    async def close(self) -> None:
        self._generation += 1
        await self._cancel_task()

    def _restart(self) -> None:
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._status = _EMPTY_STATUS
        self._ready.clear()
        if not self._usernames:
            self._ready.set()
            return
        self._task = asyncio.create_task(self._run(self._generation))

    async def _cancel_task(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, generation: int) -> None:
        while generation == self._generation:
            await self._poll(generation)
            await asyncio.sleep(self._interval)

    async def _poll(self, generation: int) -> None:
        usernames = self._usernames
        result: dict[str, bool] | None = None
        try:
            result = await self._provider.fetch_live_status(usernames)
        except LiveStatusUnavailableError as exc:
            logger.warning(
                "live_status_unavailable",
                reason=exc.details.get("reason") if exc.details else None,
            )
        except Exception:
            logger.exception("live_status_poll_failed", usernames=list(usernames))

        if generation != self._generation:
            logger.debug("live_status_result_discarded", generation=generation)
            return
        if result is not None:
            self._status = MappingProxyType(
                {username: result.get(username, False) is True for username in usernames}
            )
        self._ready.set()


class LiveStatusMonitor:
    """Owns one subscription per key (profile id).

    A subscription nobody has asked for within ``idle_seconds`` is closed,
    either on the next request for any key or by a background sweep.
    """

    def __init__(
        self,
        provider: ILiveStatusProvider,
        interval_seconds: float = 60.0,
        first_result_timeout: float | None = 2.0,
        idle_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._interval = interval_seconds
        self._first_result_timeout = first_result_timeout
        self._idle_seconds = idle_seconds if idle_seconds is not None else interval_seconds * 5
        self._clock = clock
        self._subscriptions: dict[str, LiveStatusSubscription] = {}
        self._last_seen: dict[str, float] = {}
        self._sweeper: asyncio.Task[None] | None = None

    @property
    def watched_keys(self) -> list[str]:
        return list(self._subscriptions)

    def watch(self, key: str, usernames: Iterable[str]) -> LiveStatusSubscription:
        self._last_seen[key] = self._clock()
        subscription = self._subscriptions.get(key)
        if subscription is None:
            subscription = LiveStatusSubscription(self._provider, usernames, self._interval)
            subscription.start()
            self._subscriptions[key] = subscription
            self._ensure_sweeper()
        else:
            subscription.update(usernames)
        return subscription

    async def status_for(self, key: str, usernames: Iterable[str]) -> Mapping[str, bool]:
        subscription = self.watch(key, usernames)
        await self.evict_idle()
        return await subscription.wait_ready(self._first_result_timeout)

    async def unwatch(self, key: str) -> None:
        self._last_seen.pop(key, None)
        subscription = self._subscriptions.pop(key, None)
        if subscription is not None:
            await subscription.close()

    async def evict_idle(self) -> list[str]:
        """Close every subscription idle for at least ``idle_seconds``."""
        now = self._clock()
        idle = [
            key for key, seen in self._last_seen.items() if now - seen >= self._idle_seconds
        ]
        for key in idle:
            await self.unwatch(key)
        if idle:
            logger.debug("live_status_subscriptions_evicted", keys=idle)
        return idle

    async def close(self) -> None:
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None:
            sweeper.cancel()
            try:
                await sweeper
            except asyncio.CancelledError:
                pass
        subscriptions = list(self._subscriptions.values())
        self._subscriptions.clear()
        self._last_seen.clear()
        for subscription in subscriptions:
            await subscription.close()

    def _ensure_sweeper(self) -> None:
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep())

    async def _sweep(self) -> None:
        while self._subscriptions:
            await asyncio.sleep(self._idle_seconds)
            await self.evict_idle()


class BackendLiveStatusSource:
    """Consumes ``tw_status`` as delivered by the creator backend."""

    async def status_for(self, key: str, profile: Profile) -> Mapping[str, bool]:
        return backend_live_status(profile)


class PolledLiveStatusSource:
    """Reads the monitor's snapshot for the profile's Twitch channels."""

    def __init__(self, monitor: LiveStatusMonitor) -> None:
        self._monitor = monitor

    async def status_for(self, key: str, profile: Profile) -> Mapping[str, bool]:
        return await self._monitor.status_for(key, twitch_usernames(profile))

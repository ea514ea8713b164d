"""Fill in missing titles and thumbnails of featured videos via oEmbed."""

import asyncio
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol

import structlog

from core.exceptions import OEmbedLookupError
from domain.entities.profile import Video
from domain.services.platform_resolver import (
    extract_video_id_from_thumbnail,
    extract_youtube_video_id,
    youtube_thumbnail_url,
    youtube_watch_url,
)

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class OEmbedResult:
    title: str
    thumbnail_url: str


class IOEmbedProvider(Protocol):
    """oEmbed endpoint able to describe a video URL."""

    async def lookup(self, url: str) -> OEmbedResult:
        """Describe ``url``; raise ``OEmbedLookupError`` on any failure."""
        ...


class VideoEnricher:
    """Enrich videos lacking a title or thumbnail.

    A video with both fields set is returned as is. Lookup failures never
    propagate: the present fields are kept and the missing ones stay blank.
    Changed results are memoized by ``(url, title, thumbnail)`` for
    ``cache_ttl_seconds``; expired entries are dropped on the next write.
    """

    def __init__(
        self,
        provider: IOEmbedProvider,
        cache_ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._clock = clock
        self._memo: dict[tuple[str, str, str], tuple[float, Video]] = {}

    async def enrich_all(self, videos: Sequence[Video] | None) -> list[Video] | None:
        if videos is None:
            return None
        return list(await asyncio.gather(*(self.enrich(video) for video in videos)))

    async def enrich(self, video: Video) -> Video:
        if not video.url or (video.title and video.thumbnail):
            return video

        key = (video.url, video.title, video.thumbnail)
        cached = self._memo.get(key)
        if cached is not None and self._clock() - cached[0] < self._cache_ttl:
            return replace(cached[1], id=video.id, type=video.type)

        video_id = extract_youtube_video_id(video.url)
        if video_id:
            enriched = await self._enrich_direct(video, video_id)
        else:
            enriched = await self._enrich_resolved(video)

        if enriched != video:
            self._remember(key, enriched)
        return enriched

    @property
    def memo_size(self) -> int:
        return len(self._memo)

    def _remember(self, key: tuple[str, str, str], video: Video) -> None:
        now = self._clock()
        expired = [k for k, (at, _) in self._memo.items() if now - at >= self._cache_ttl]
        for stale in expired:
            del self._memo[stale]
        self._memo[key] = (now, video)

    async def _enrich_direct(self, video: Video, video_id: str) -> Video:
        title = video.title
        if not title:
            try:
                result = await self._provider.lookup(youtube_watch_url(video_id))
                title = result.title
            except OEmbedLookupError as exc:
                logger.info("video_title_lookup_failed", url=video.url, reason=str(exc))
        return replace(
            video,
            title=title,
            thumbnail=video.thumbnail or youtube_thumbnail_url(video_id),
        )

    async def _enrich_resolved(self, video: Video) -> Video:
        # Short links and redirects only resolve through the provider.
        try:
            result = await self._provider.lookup(video.url)
        except OEmbedLookupError as exc:
            logger.info("video_lookup_failed", url=video.url, reason=str(exc))
            return video

        video_id = extract_video_id_from_thumbnail(result.thumbnail_url)
        if not video_id:
            return video
        return replace(
            video,
            title=video.title or result.title,
            thumbnail=video.thumbnail or youtube_thumbnail_url(video_id),
        )

"""Public profile page assembly."""

from dataclasses import dataclass, replace

import structlog

from core.exceptions import CreatorNotFoundError
from domain.entities.cached_profile import CachedProfile
from domain.entities.profile import Profile
from domain.services.live_status import ILiveStatusSource
from domain.services.page_metadata import HeadSnapshot, PageHead, PageMetadata
from domain.services.profile_loader import ProfileLoader, ProfileSource
from domain.services.renderer import ProfileView, render_profile
from domain.services.share_service import SharePayload, build_share_payload
from domain.services.video_enrichment import VideoEnricher

logger = structlog.get_logger()


@dataclass(frozen=True)
class PublicProfilePage:
    creator_id: str
    profile: Profile
    view: ProfileView
    head: HeadSnapshot
    share: SharePayload
    source: ProfileSource


class PublicProfileService:
    """Loads, enriches and renders a creator's public page."""

    def __init__(
        self,
        loader: ProfileLoader,
        enricher: VideoEnricher,
        live_source: ILiveStatusSource,
        site_name: str,
        default_image: str,
        homepage_url: str | None = None,
    ) -> None:
        self._loader = loader
        self._enricher = enricher
        self._live_source = live_source
        self._site_name = site_name
        self._default_image = default_image
        self._homepage_url = homepage_url

    async def get_page(self, creator_id: str, page_url: str) -> PublicProfilePage:
        loaded = await self._loader.load(creator_id)
        profile = replace(
            loaded.profile,
            featured_videos=await self._enricher.enrich_all(loaded.profile.featured_videos),
        )
        live_status = await self._live_source.status_for(creator_id, profile)

        head = PageHead(default_title=self._site_name)
        with PageMetadata(head, self._site_name, self._default_image) as metadata:
            metadata.apply(profile, page_url)
            snapshot = head.snapshot()

        logger.info(
            "profile_page_rendered",
            creator_id=creator_id,
            source=loaded.source,
            links=len(profile.links),
        )
        return PublicProfilePage(
            creator_id=creator_id,
            profile=profile,
            view=render_profile(profile, live_status),
            head=snapshot,
            share=build_share_payload(profile, page_url, self._site_name),
            source=loaded.source,
        )

    async def get_cached(self, creator_id: str) -> CachedProfile:
        """Last persisted copy, without contacting the creator backend."""
        cached = await self._loader.peek_cached(creator_id)
        if cached is None:
            raise CreatorNotFoundError(creator_id, self._homepage_url)
        return cached

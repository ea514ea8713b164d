"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.draft_service import DraftService
from domain.services.live_status import (
    BackendLiveStatusSource,
    ILiveStatusSource,
    LiveStatusMonitor,
    PolledLiveStatusSource,
)
from domain.services.profile_loader import ProfileLoader
from domain.services.public_profile_service import PublicProfileService
from domain.services.video_enrichment import VideoEnricher
from infrastructure.creator_api.client import CreatorApiClient
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.oembed.client import OEmbedClient
from infrastructure.twitch.client import TwitchLiveStatusClient


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_draft_service() -> DraftService:
    """Get Draft service instance."""
    return DraftService(get_uow_factory())


@lru_cache
def get_creator_api() -> CreatorApiClient:
    """Get creator backend client."""
    return CreatorApiClient(
        settings.creator_api_base_url,
        timeout=settings.http_timeout_seconds,
    )


@lru_cache
def get_profile_loader() -> ProfileLoader:
    """Get the shared profile loader (holds the freshness window and in-flight loads)."""
    return ProfileLoader(
        get_creator_api(),
        get_uow_factory(),
        fresh_seconds=settings.profile_fresh_seconds,
        max_retries=settings.profile_fetch_retries,
        homepage_url=settings.homepage_url,
    )


@lru_cache
def get_video_enricher() -> VideoEnricher:
    """Get video enricher backed by the oEmbed endpoint."""
    return VideoEnricher(
        OEmbedClient(settings.oembed_endpoint, timeout=settings.http_timeout_seconds),
        cache_ttl_seconds=settings.profile_fresh_seconds,
    )


@lru_cache
def get_live_status_monitor() -> LiveStatusMonitor:
    """Get the Twitch polling monitor."""
    return LiveStatusMonitor(
        TwitchLiveStatusClient(
            settings.twitch_client_id,
            settings.twitch_client_secret,
            timeout=settings.http_timeout_seconds,
        ),
        interval_seconds=settings.live_poll_interval_seconds,
        first_result_timeout=settings.live_first_result_timeout_seconds,
        idle_seconds=settings.live_idle_seconds,
    )


@lru_cache
def get_live_status_source() -> ILiveStatusSource:
    """Get the live-status source configured for this deployment."""
    if settings.live_status_source == "twitch":
        return PolledLiveStatusSource(get_live_status_monitor())
    return BackendLiveStatusSource()


@lru_cache
def get_public_profile_service() -> PublicProfileService:
    """Get public profile service instance."""
    return PublicProfileService(
        get_profile_loader(),
        get_video_enricher(),
        get_live_status_source(),
        site_name=settings.site_name,
        default_image=settings.default_og_image,
        homepage_url=settings.homepage_url,
    )

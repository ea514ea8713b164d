"""Public creator profile API routes."""

from fastapi import APIRouter, Depends, Path, Request

from api.v1.dependencies import get_public_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.creator import (
    CachedProfileDetailResponse,
    CachedProfileResponse,
    CreatorPageDetailResponse,
    CreatorPageResponse,
)
from core.config import settings
from core.rate_limit import PUBLIC_READ_LIMIT, limiter
from domain.services.public_profile_service import PublicProfileService

router = APIRouter(prefix="/creators", tags=["creators"])

CreatorId = Path(..., min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_-]+$")


@router.get(
    "/{creator_id}",
    response_model=CreatorPageDetailResponse,
    summary="Get a creator's public page",
    responses={
        200: {"description": "Page rendered from the backend or the cached copy"},
        404: {"model": ErrorResponse, "description": "Creator unknown and nothing cached"},
    },
)
@limiter.limit(PUBLIC_READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_creator_page(
    request: Request,
    creator_id: str = CreatorId,
    service: PublicProfileService = Depends(get_public_profile_service),
) -> CreatorPageDetailResponse:
    """
    Fetch the published profile and return its fully derived view.

    When the creator backend fails, the last persisted copy is served with
    `source="cache"`.
    """
    page = await service.get_page(creator_id, settings.public_profile_url(creator_id))
    return CreatorPageDetailResponse(data=CreatorPageResponse.from_page(page))


@router.get(
    "/{creator_id}/cached",
    response_model=CachedProfileDetailResponse,
    summary="Get the cached copy of a creator profile",
    responses={
        200: {"description": "Cached profile found"},
        404: {"model": ErrorResponse, "description": "No cached copy"},
    },
)
@limiter.limit(PUBLIC_READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_cached_creator_profile(
    request: Request,
    creator_id: str = CreatorId,
    service: PublicProfileService = Depends(get_public_profile_service),
) -> CachedProfileDetailResponse:
    """Instant read of the last persisted profile, without contacting the backend."""
    cached = await service.get_cached(creator_id)
    return CachedProfileDetailResponse(
        data=CachedProfileResponse.from_entity(creator_id, cached)
    )

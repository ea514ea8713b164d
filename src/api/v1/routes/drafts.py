"""Profile editor API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentCreator
from api.v1.dependencies import get_draft_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.creator import ProfileViewResponse
from api.v1.schemas.draft import (
    DraftDetailResponse,
    DraftListResponse,
    DraftPreviewResponse,
    DraftResponse,
    DraftSummary,
    LinkUpdate,
    OrderUpdate,
    ProfileInfoUpdate,
    ThemePresetSelect,
    ThemeUpdate,
    VideoUpdate,
)
from core.rate_limit import EDITOR_READ_LIMIT, EDITOR_WRITE_LIMIT, limiter
from domain.entities.draft import ProfileDraft
from domain.services.draft_service import DraftService
from domain.services.renderer import render_profile

router = APIRouter(prefix="/drafts", tags=["drafts"])

_NOT_FOUND: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Draft not found"}
}


def _detail(draft: ProfileDraft) -> DraftDetailResponse:
    return DraftDetailResponse(data=DraftResponse.from_entity(draft))


@router.post(
    "",
    response_model=DraftDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a draft",
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_draft(
    request: Request,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Create a draft holding the default profile and theme."""
    return _detail(await service.create(creator.id))


@router.get(
    "",
    response_model=DraftListResponse,
    summary="List drafts",
)
@limiter.limit(EDITOR_READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_drafts(
    request: Request,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftListResponse:
    """Get the authenticated creator's drafts, most recently edited first."""
    drafts = await service.list_for_owner(creator.id)
    return DraftListResponse(data=[DraftSummary.from_entity(draft) for draft in drafts])


@router.get(
    "/{draft_id}",
    response_model=DraftDetailResponse,
    summary="Get a draft",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_draft(
    request: Request,
    draft_id: UUID,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    return _detail(await service.get(draft_id, creator.id))


@router.patch(
    "/{draft_id}",
    response_model=DraftDetailResponse,
    summary="Edit profile info",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_draft_info(
    request: Request,
    draft_id: UUID,
    body: ProfileInfoUpdate,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Edit username, display name, bio or avatar.

    The username is lowercased with everything outside `[a-z0-9_]` removed;
    the bio is truncated to 150 characters.
    """
    draft = await service.update_info(
        draft_id,
        creator.id,
        username=body.username,
        display_name=body.display_name,
        bio=body.bio,
        avatar=body.avatar,
    )
    return _detail(draft)


@router.delete(
    "/{draft_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a draft",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_draft(
    request: Request,
    draft_id: UUID,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> None:
    await service.delete(draft_id, creator.id)
    return None


@router.get(
    "/{draft_id}/preview",
    response_model=DraftPreviewResponse,
    summary="Preview a draft",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_READ_LIMIT)  # type: ignore[untyped-decorator]
async def preview_draft(
    request: Request,
    draft_id: UUID,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftPreviewResponse:
    """Render the draft with the same renderer as the public page."""
    draft = await service.get(draft_id, creator.id)
    return DraftPreviewResponse(
        data=ProfileViewResponse.model_validate(render_profile(draft.profile))
    )


# Theme


@router.put(
    "/{draft_id}/theme/preset",
    response_model=DraftDetailResponse,
    summary="Switch to a preset theme",
    responses={404: {"model": ErrorResponse, "description": "Draft or theme not found"}},
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def select_theme_preset(
    request: Request,
    draft_id: UUID,
    body: ThemePresetSelect,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    return _detail(await service.select_preset_theme(draft_id, creator.id, body.theme_id))


@router.patch(
    "/{draft_id}/theme",
    response_model=DraftDetailResponse,
    summary="Customize the theme",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def customize_theme(
    request: Request,
    draft_id: UUID,
    body: ThemeUpdate,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Edit theme fields. Any edit turns the theme into the "Custom" theme."""
    return _detail(await service.customize_theme(draft_id, creator.id, **body.to_changes()))


# Links


@router.post(
    "/{draft_id}/links",
    response_model=DraftDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a link",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_link(
    request: Request,
    draft_id: UUID,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Append a blank, enabled link."""
    return _detail(await service.add_link(draft_id, creator.id))


@router.put(
    "/{draft_id}/links/order",
    response_model=DraftDetailResponse,
    summary="Reorder links",
    responses={
        **_NOT_FOUND,
        422: {"model": ErrorResponse, "description": "Not a permutation of the links"},
    },
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reorder_links(
    request: Request,
    draft_id: UUID,
    body: OrderUpdate,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    return _detail(await service.reorder_links(draft_id, creator.id, body.ids))


@router.patch(
    "/{draft_id}/links/{link_id}",
    response_model=DraftDetailResponse,
    summary="Edit a link",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_link(
    request: Request,
    draft_id: UUID,
    link_id: str,
    body: LinkUpdate,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Edit link fields. An unknown link id leaves the links unchanged."""
    return _detail(
        await service.update_link(draft_id, creator.id, link_id, **body.to_changes())
    )


@router.delete(
    "/{draft_id}/links/{link_id}",
    response_model=DraftDetailResponse,
    summary="Remove a link",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_link(
    request: Request,
    draft_id: UUID,
    link_id: str,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    return _detail(await service.remove_link(draft_id, creator.id, link_id))


# Videos


@router.post(
    "/{draft_id}/videos",
    response_model=DraftDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a featured video",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_video(
    request: Request,
    draft_id: UUID,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Append a blank YouTube video shown as a small row."""
    return _detail(await service.add_video(draft_id, creator.id))


@router.put(
    "/{draft_id}/videos/order",
    response_model=DraftDetailResponse,
    summary="Reorder featured videos",
    responses={
        **_NOT_FOUND,
        422: {"model": ErrorResponse, "description": "Not a permutation of the videos"},
    },
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reorder_videos(
    request: Request,
    draft_id: UUID,
    body: OrderUpdate,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    return _detail(await service.reorder_videos(draft_id, creator.id, body.ids))


@router.patch(
    "/{draft_id}/videos/{video_id}",
    response_model=DraftDetailResponse,
    summary="Edit a featured video",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_video(
    request: Request,
    draft_id: UUID,
    video_id: str,
    body: VideoUpdate,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    """Edit video fields. A new url re-derives the platform and default thumbnail."""
    return _detail(
        await service.update_video(draft_id, creator.id, video_id, **body.to_changes())
    )


@router.delete(
    "/{draft_id}/videos/{video_id}",
    response_model=DraftDetailResponse,
    summary="Remove a featured video",
    responses=_NOT_FOUND,
)
@limiter.limit(EDITOR_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_video(
    request: Request,
    draft_id: UUID,
    video_id: str,
    creator: CurrentCreator,
    service: DraftService = Depends(get_draft_service),
) -> DraftDetailResponse:
    return _detail(await service.remove_video(draft_id, creator.id, video_id))

"""Preset theme catalogue route."""

from fastapi import APIRouter, Request

from api.dependencies.auth import CurrentCreator
from api.v1.schemas.draft import ThemeListResponse, ThemeResponse
from core.rate_limit import EDITOR_READ_LIMIT, limiter
from domain.entities.theme import PRESET_THEMES

router = APIRouter(prefix="/themes", tags=["themes"])


@router.get(
    "",
    response_model=ThemeListResponse,
    summary="List preset themes",
)
@limiter.limit(EDITOR_READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_themes(request: Request, creator: CurrentCreator) -> ThemeListResponse:
    """Get the preset themes a draft can switch to."""
    return ThemeListResponse(
        data=[ThemeResponse.model_validate(theme) for theme in PRESET_THEMES]
    )

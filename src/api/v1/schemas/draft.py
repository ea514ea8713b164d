"""Pydantic schemas for the profile editor API."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.creator import ProfileViewResponse
from domain.entities.draft import ProfileDraft
from domain.entities.profile import (
    Badge,
    CustomBadge,
    Platform,
    PresetBadge,
    PresetBadgeKind,
    VideoType,
)
from domain.entities.theme import ButtonStyle
from infrastructure.creator_api.documents import CUSTOM_BADGE_LABEL, ProfileDocument

BadgeLabel = Literal["NEW", "HOT", "SALE", "CUSTOM"]
VideoPlatform = Literal["youtube", "twitch", "tiktok"]


class ProfileInfoUpdate(BaseModel):
    """Header fields. The username is sanitized and the bio truncated server-side."""

    username: str | None = Field(None, max_length=100)
    display_name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=1000)
    avatar: str | None = Field(None, max_length=2048)


class ThemePresetSelect(BaseModel):
    """Schema for switching a draft to a preset theme."""

    theme_id: str = Field(..., min_length=1, max_length=50)


class ThemeUpdate(BaseModel):
    """Hand edits to the theme. Any edit forks the theme into the custom slot."""

    background_color: str | None = Field(None, min_length=1, max_length=100)
    background_gradient: str | None = Field(None, max_length=500)
    background_image: str | None = Field(None, max_length=2048)
    card_color: str | None = Field(None, min_length=1, max_length=100)
    card_text_color: str | None = Field(None, min_length=1, max_length=100)
    text_color: str | None = Field(None, min_length=1, max_length=100)
    button_style: ButtonStyle | None = None
    font_family: str | None = Field(None, min_length=1, max_length=200)
    custom_font_url: str | None = Field(None, max_length=2048)

    def to_changes(self) -> dict[str, Any]:
        """Explicitly sent fields; ``null`` clears only the optional ones."""
        clearable = {"background_gradient", "background_image", "custom_font_url"}
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name in clearable
        }


class CustomBadgeInput(BaseModel):
    text: str = Field("CUSTOM", min_length=1, max_length=20)
    background_color: str = Field("#8b5cf6", max_length=100)
    text_color: str = Field("#ffffff", max_length=100)


class LinkUpdate(BaseModel):
    """Schema for updating a link (all fields optional)."""

    title: str | None = Field(None, max_length=255)
    url: str | None = Field(None, max_length=2048)
    thumbnail: str | None = Field(None, max_length=2048)
    enabled: bool | None = None
    is_featured: bool | None = None
    badge: BadgeLabel | None = None
    custom_badge: CustomBadgeInput | None = None

    def to_changes(self) -> dict[str, Any]:
        sent = self.model_fields_set
        changes: dict[str, Any] = {
            name: getattr(self, name)
            for name in ("title", "url", "enabled", "is_featured")
            if name in sent and getattr(self, name) is not None
        }
        if "thumbnail" in sent:
            changes["thumbnail"] = self.thumbnail or None
        if "badge" in sent:
            changes["badge"] = self._badge()
        return changes

    def _badge(self) -> Badge:
        if self.badge is None:
            return None
        if self.badge == CUSTOM_BADGE_LABEL:
            if self.custom_badge is None:
                return CustomBadge()
            return CustomBadge(
                text=self.custom_badge.text,
                background_color=self.custom_badge.background_color,
                text_color=self.custom_badge.text_color,
            )
        return PresetBadge(PresetBadgeKind(self.badge))


class VideoUpdate(BaseModel):
    """Schema for updating a featured video (all fields optional)."""

    url: str | None = Field(None, max_length=2048)
    title: str | None = Field(None, max_length=255)
    thumbnail: str | None = Field(None, max_length=2048)
    platform: VideoPlatform | None = None
    type: VideoType | None = None

    def to_changes(self) -> dict[str, Any]:
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        if "platform" in changes:
            changes["platform"] = Platform(changes["platform"])
        return changes


class OrderUpdate(BaseModel):
    """The complete new order, as entry ids."""

    ids: list[str] = Field(..., max_length=500)


class DraftResponse(BaseModel):
    """Schema for a draft with its full profile document."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "owner_id": "223e4567-e89b-12d3-a456-426614174000",
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:05:00",
                "profile": {
                    "username": "ninja",
                    "displayName": "Ninja",
                    "bio": "Streaming every day",
                    "avatar": "",
                    "theme": {"id": "neon-nights", "name": "Neon Nights"},
                    "links": [],
                },
            }
        }
    )

    id: UUID
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    profile: ProfileDocument

    @classmethod
    def from_entity(cls, draft: ProfileDraft) -> "DraftResponse":
        return cls(
            id=draft.id,
            owner_id=draft.owner_id,
            created_at=draft.created_at,
            updated_at=draft.updated_at,
            profile=ProfileDocument.from_entity(draft.profile),
        )


class DraftSummary(BaseModel):
    """Minimal draft representation for listings."""

    id: UUID
    username: str
    display_name: str
    updated_at: datetime

    @classmethod
    def from_entity(cls, draft: ProfileDraft) -> "DraftSummary":
        return cls(
            id=draft.id,
            username=draft.profile.username,
            display_name=draft.profile.display_name,
            updated_at=draft.updated_at,
        )


class DraftListResponse(BaseModel):
    """Schema for list of drafts."""

    data: list[DraftSummary]


class DraftDetailResponse(BaseModel):
    """Schema for single draft."""

    data: DraftResponse


class ThemeResponse(BaseModel):
    """Schema for a preset theme."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    background_color: str
    background_gradient: str | None = None
    background_image: str | None = None
    card_color: str
    card_text_color: str
    text_color: str
    button_style: ButtonStyle
    font_family: str
    custom_font_url: str | None = None
    is_custom: bool


class ThemeListResponse(BaseModel):
    """Schema for the preset theme catalogue."""

    data: list[ThemeResponse]


class DraftPreviewResponse(BaseModel):
    """The draft rendered exactly as the public page would render it."""

    data: ProfileViewResponse

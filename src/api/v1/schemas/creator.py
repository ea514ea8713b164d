"""Pydantic schemas for the public creator API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from domain.entities.cached_profile import CachedProfile
from domain.entities.profile import Platform, VideoType
from domain.services.profile_loader import ProfileSource
from domain.services.public_profile_service import PublicProfilePage
from infrastructure.creator_api.documents import ProfileDocument


class _ViewModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class BadgeStyleResponse(_ViewModel):
    text: str
    background_color: str
    text_color: str


class ThemeStyleResponse(_ViewModel):
    """Concrete style values derived from the profile theme."""

    background: str
    background_color: str
    text_color: str
    font_stack: str
    card_background: str
    card_text_color: str
    border_radius: str
    video_radius: str


class HeaderResponse(_ViewModel):
    handle: str
    username: str
    display_name: str | None = None
    bio: str
    avatar: str | None = None
    avatar_initial: str


class LinkViewResponse(_ViewModel):
    id: str
    title: str
    url: str
    thumbnail: str | None = None
    platform: Platform | None = None
    badge: BadgeStyleResponse | None = None
    is_featured: bool
    is_live: bool


class VideoViewResponse(_ViewModel):
    id: str
    url: str
    title: str
    thumbnail: str
    platform: Platform
    variant: VideoType
    embed_url: str | None = None
    border_radius: str


class ProfileViewResponse(_ViewModel):
    """Everything needed to draw a profile page."""

    header: HeaderResponse
    style: ThemeStyleResponse
    videos: list[VideoViewResponse]
    links: list[LinkViewResponse]


class MetaTagResponse(_ViewModel):
    attribute: str
    key: str
    content: str


class StylesheetResponse(_ViewModel):
    id: str
    href: str


class HeadResponse(_ViewModel):
    """Document head of the page: title, meta tags and stylesheet links."""

    title: str
    meta: list[MetaTagResponse]
    stylesheets: list[StylesheetResponse]


class SharePayloadResponse(_ViewModel):
    title: str
    text: str
    url: str


class CreatorPageResponse(BaseModel):
    """Schema for a rendered public profile page."""

    creator_id: str
    source: ProfileSource
    profile: ProfileDocument
    view: ProfileViewResponse
    head: HeadResponse
    share: SharePayloadResponse

    @classmethod
    def from_page(cls, page: PublicProfilePage) -> "CreatorPageResponse":
        return cls(
            creator_id=page.creator_id,
            source=page.source,
            profile=ProfileDocument.from_entity(page.profile),
            view=ProfileViewResponse.model_validate(page.view),
            head=HeadResponse.model_validate(page.head),
            share=SharePayloadResponse.model_validate(page.share),
        )


class CreatorPageDetailResponse(BaseModel):
    data: CreatorPageResponse


class CachedProfileResponse(BaseModel):
    """Schema for the last persisted copy of a creator profile."""

    creator_id: str
    stored_at: datetime
    profile: ProfileDocument

    @classmethod
    def from_entity(cls, creator_id: str, cached: CachedProfile) -> "CachedProfileResponse":
        return cls(
            creator_id=creator_id,
            stored_at=cached.stored_at,
            profile=ProfileDocument.from_entity(cached.profile),
        )


class CachedProfileDetailResponse(BaseModel):
    data: CachedProfileResponse

"""JSON documents for profiles: the camelCase wire shape and its domain mapping.

The same document is used for creator backend responses, the persisted
profile cache and stored drafts. Legacy payloads carrying a single
``featuredVideo`` are migrated to ``featuredVideos`` on read.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from domain.entities.profile import (
    Badge,
    CustomBadge,
    Link,
    Platform,
    PresetBadge,
    PresetBadgeKind,
    Profile,
    VIDEO_PLATFORMS,
    Video,
    VideoType,
    new_entry_id,
)
from domain.entities.theme import ButtonStyle, Theme, default_theme

CUSTOM_BADGE_LABEL = "CUSTOM"
DEFAULT_FONT_FAMILY = "system-ui"

_PRESET_BADGES = {kind.value for kind in PresetBadgeKind}
_BUTTON_STYLES = {style.value for style in ButtonStyle}
_VIDEO_PLATFORMS = {platform.value for platform in VIDEO_PLATFORMS}
_VIDEO_TYPES = {video_type.value for video_type in VideoType}


def _blank_if_none(v: Any) -> Any:
    return "" if v is None else v


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json(self) -> dict[str, Any]:
        """JSON-compatible dict in wire (camelCase) form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CustomBadgeDocument(_Document):
    text: str = "CUSTOM"
    background_color: str = "#8b5cf6"
    text_color: str = "#ffffff"


class LinkDocument(_Document):
    id: str = Field(default_factory=new_entry_id)
    title: str = ""
    url: str = ""
    thumbnail: str | None = None
    enabled: bool = True
    is_featured: bool = False
    badge: str | None = None
    custom_badge: CustomBadgeDocument | None = None
    tw_status: bool | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if v is None or v == "":
            return new_entry_id()
        return str(v)

    @field_validator("title", "url", mode="before")
    @classmethod
    def _coerce_blank(cls, v: Any) -> Any:
        return _blank_if_none(v)

    @field_validator("enabled", mode="before")
    @classmethod
    def _coerce_enabled(cls, v: Any) -> Any:
        return True if v is None else v

    @field_validator("is_featured", mode="before")
    @classmethod
    def _coerce_featured(cls, v: Any) -> Any:
        return False if v is None else v

    def to_entity(self) -> Link:
        return Link(
            id=self.id,
            title=self.title,
            url=self.url,
            thumbnail=self.thumbnail or None,
            enabled=self.enabled,
            is_featured=self.is_featured,
            badge=self._badge(),
            tw_status=self.tw_status,
        )

    def _badge(self) -> Badge:
        if self.badge in _PRESET_BADGES:
            return PresetBadge(PresetBadgeKind(self.badge))
        if self.badge == CUSTOM_BADGE_LABEL:
            if self.custom_badge is None:
                return CustomBadge()
            return CustomBadge(
                text=self.custom_badge.text,
                background_color=self.custom_badge.background_color,
                text_color=self.custom_badge.text_color,
            )
        return None

    @classmethod
    def from_entity(cls, link: Link) -> "LinkDocument":
        badge: str | None = None
        custom_badge: CustomBadgeDocument | None = None
        if isinstance(link.badge, PresetBadge):
            badge = link.badge.kind.value
        elif isinstance(link.badge, CustomBadge):
            badge = CUSTOM_BADGE_LABEL
            custom_badge = CustomBadgeDocument(
                text=link.badge.text,
                background_color=link.badge.background_color,
                text_color=link.badge.text_color,
            )
        return cls(
            id=link.id,
            title=link.title,
            url=link.url,
            thumbnail=link.thumbnail,
            enabled=link.enabled,
            is_featured=link.is_featured,
            badge=badge,
            custom_badge=custom_badge,
            tw_status=link.tw_status,
        )


class ThemeDocument(_Document):
    id: str = ""
    name: str = ""
    background_color: str = ""
    background_gradient: str | None = None
    background_image: str | None = None
    card_color: str = ""
    card_text_color: str = ""
    text_color: str = ""
    button_style: ButtonStyle = ButtonStyle.ROUNDED
    font_family: str = DEFAULT_FONT_FAMILY
    custom_font_url: str | None = None
    is_custom: bool = False

    @field_validator(
        "id", "name", "background_color", "card_color", "card_text_color", "text_color",
        mode="before",
    )
    @classmethod
    def _coerce_blank(cls, v: Any) -> Any:
        return _blank_if_none(v)

    @field_validator("button_style", mode="before")
    @classmethod
    def _coerce_button_style(cls, v: Any) -> Any:
        if v not in _BUTTON_STYLES:
            return ButtonStyle.ROUNDED
        return v

    @field_validator("font_family", mode="before")
    @classmethod
    def _coerce_font_family(cls, v: Any) -> Any:
        return v or DEFAULT_FONT_FAMILY

    @field_validator("is_custom", mode="before")
    @classmethod
    def _coerce_is_custom(cls, v: Any) -> Any:
        return bool(v)

    def to_entity(self) -> Theme:
        return Theme(
            id=self.id,
            name=self.name,
            background_color=self.background_color,
            card_color=self.card_color,
            card_text_color=self.card_text_color,
            text_color=self.text_color,
            button_style=self.button_style,
            font_family=self.font_family,
            background_gradient=self.background_gradient or None,
            background_image=self.background_image or None,
            custom_font_url=self.custom_font_url or None,
            is_custom=self.is_custom,
        )

    @classmethod
    def from_entity(cls, theme: Theme) -> "ThemeDocument":
        return cls(
            id=theme.id,
            name=theme.name,
            background_color=theme.background_color,
            background_gradient=theme.background_gradient,
            background_image=theme.background_image,
            card_color=theme.card_color,
            card_text_color=theme.card_text_color,
            text_color=theme.text_color,
            button_style=theme.button_style,
            font_family=theme.font_family,
            custom_font_url=theme.custom_font_url,
            is_custom=theme.is_custom,
        )


class VideoDocument(_Document):
    id: str = Field(default_factory=new_entry_id)
    url: str = ""
    title: str = ""
    thumbnail: str = ""
    platform: Platform = Platform.YOUTUBE
    type: VideoType = VideoType.SMALL_ROW

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if v is None or v == "":
            return new_entry_id()
        return str(v)

    @field_validator("url", "title", "thumbnail", mode="before")
    @classmethod
    def _coerce_blank(cls, v: Any) -> Any:
        return _blank_if_none(v)

    @field_validator("platform", mode="before")
    @classmethod
    def _coerce_platform(cls, v: Any) -> Any:
        if v not in _VIDEO_PLATFORMS:
            return Platform.YOUTUBE
        return v

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> Any:
        if v not in _VIDEO_TYPES:
            return VideoType.SMALL_ROW
        return v

    def to_entity(self) -> Video:
        return Video(
            id=self.id,
            url=self.url,
            title=self.title,
            thumbnail=self.thumbnail,
            platform=self.platform,
            type=self.type,
        )

    @classmethod
    def from_entity(cls, video: Video) -> "VideoDocument":
        return cls(
            id=video.id,
            url=video.url,
            title=video.title,
            thumbnail=video.thumbnail,
            platform=video.platform,
            type=video.type,
        )


class ProfileDocument(_Document):
    """Canonical profile document."""

    username: str = ""
    display_name: str = ""
    bio: str = ""
    avatar: str = ""
    theme: ThemeDocument = Field(
        default_factory=lambda: ThemeDocument.from_entity(default_theme())
    )
    links: list[LinkDocument] = Field(default_factory=list)
    featured_videos: list[VideoDocument] | None = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_featured_video(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "featuredVideo" not in data:
            return data
        data = dict(data)
        legacy = data.pop("featuredVideo")
        if "featuredVideos" in data or "featured_videos" in data:
            return data
        if isinstance(legacy, dict) and legacy.get("url"):
            data["featuredVideos"] = [{**legacy, "id": None}]
        return data

    @field_validator("username", "display_name", "bio", "avatar", mode="before")
    @classmethod
    def _coerce_blank(cls, v: Any) -> Any:
        return _blank_if_none(v)

    @field_validator("links", mode="before")
    @classmethod
    def _coerce_links(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("featured_videos", mode="after")
    @classmethod
    def _collapse_empty_videos(
        cls, v: list[VideoDocument] | None
    ) -> list[VideoDocument] | None:
        return v or None

    def to_entity(self) -> Profile:
        return Profile(
            username=self.username,
            display_name=self.display_name,
            bio=self.bio,
            avatar=self.avatar,
            theme=self.theme.to_entity(),
            links=[link.to_entity() for link in self.links],
            featured_videos=(
                [video.to_entity() for video in self.featured_videos]
                if self.featured_videos
                else None
            ),
        )

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileDocument":
        return cls(
            username=profile.username,
            display_name=profile.display_name,
            bio=profile.bio,
            avatar=profile.avatar,
            theme=ThemeDocument.from_entity(profile.theme),
            links=[LinkDocument.from_entity(link) for link in profile.links],
            featured_videos=(
                [VideoDocument.from_entity(video) for video in profile.featured_videos]
                if profile.featured_videos
                else None
            ),
        )


def profile_from_json(data: Any) -> Profile:
    """Decode a wire or stored document into a ``Profile``."""
    return ProfileDocument.model_validate(data).to_entity()


def profile_to_json(profile: Profile) -> dict[str, Any]:
    return ProfileDocument.from_entity(profile).to_json()

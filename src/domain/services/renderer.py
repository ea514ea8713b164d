"""Presentational composition of a profile into a styled view."""

from collections.abc import Mapping
from dataclasses import dataclass

from domain.entities.profile import Link, Platform, Profile, Video, VideoType
from domain.services.badge_resolver import BadgeStyle, resolve_badge
from domain.services.platform_resolver import (
    detect_platform,
    extract_twitch_username,
    extract_youtube_video_id,
    youtube_embed_url,
    youtube_thumbnail_url,
)
from domain.services.theme_resolver import ThemeStyle, resolve_theme

DEFAULT_VIDEO_TITLE = "Video"


@dataclass(frozen=True, slots=True)
class HeaderView:
    handle: str
    username: str
    display_name: str | None
    bio: str
    avatar: str | None
    avatar_initial: str


@dataclass(frozen=True, slots=True)
class LinkView:
    id: str
    title: str
    url: str
    thumbnail: str | None
    platform: Platform | None
    badge: BadgeStyle | None
    is_featured: bool
    is_live: bool


@dataclass(frozen=True, slots=True)
class VideoView:
    id: str
    url: str
    title: str
    thumbnail: str
    platform: Platform
    variant: VideoType
    embed_url: str | None
    border_radius: str


@dataclass(frozen=True, slots=True)
class ProfileView:
    header: HeaderView
    style: ThemeStyle
    videos: tuple[VideoView, ...]
    links: tuple[LinkView, ...]


def render_profile(
    profile: Profile, live_status: Mapping[str, bool] | None = None
) -> ProfileView:
    """Derive the full view of a profile.

    ``live_status`` maps lowercased Twitch usernames to their live flag.
    Disabled links are left out.
    """
    style = resolve_theme(profile.theme)
    status = live_status or {}
    return ProfileView(
        header=_render_header(profile),
        style=style,
        videos=tuple(_render_video(video, style) for video in profile.featured_videos or ()),
        links=tuple(
            _render_link(link, status) for link in profile.links if link.enabled
        ),
    )


def _render_header(profile: Profile) -> HeaderView:
    show_display_name = bool(profile.display_name) and profile.display_name != profile.username
    return HeaderView(
        handle=f"@{profile.username}",
        username=profile.username,
        display_name=profile.display_name if show_display_name else None,
        bio=profile.bio,
        avatar=profile.avatar or None,
        avatar_initial=profile.display_name[:1].upper(),
    )


def _render_link(link: Link, live_status: Mapping[str, bool]) -> LinkView:
    platform = detect_platform(link.url)
    return LinkView(
        id=link.id,
        title=link.title,
        url=link.url,
        thumbnail=link.thumbnail or None,
        platform=platform,
        badge=resolve_badge(link),
        is_featured=link.is_featured,
        is_live=_is_live(link, platform, live_status),
    )


def _is_live(link: Link, platform: Platform | None, live_status: Mapping[str, bool]) -> bool:
    if platform != Platform.TWITCH:
        return False
    username = extract_twitch_username(link.url)
    if not username:
        return False
    return live_status.get(username.lower(), False) is True


def _render_video(video: Video, style: ThemeStyle) -> VideoView:
    video_id = extract_youtube_video_id(video.url)
    variant = video.type
    # The embedded player needs a YouTube id; anything else falls back to a row.
    if variant == VideoType.EMBED and not video_id:
        variant = VideoType.SMALL_ROW

    thumbnail = video.thumbnail
    if not thumbnail and video_id:
        thumbnail = youtube_thumbnail_url(video_id)

    return VideoView(
        id=video.id,
        url=video.url,
        title=video.title or DEFAULT_VIDEO_TITLE,
        thumbnail=thumbnail,
        platform=video.platform,
        variant=variant,
        embed_url=youtube_embed_url(video_id) if variant == VideoType.EMBED and video_id else None,
        border_radius=(
            style.video_radius
            if variant in (VideoType.LARGE_COVER, VideoType.EMBED)
            else style.border_radius
        ),
    )

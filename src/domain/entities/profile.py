"""Profile domain entities."""

import re
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from uuid import uuid4

from domain.entities.theme import Theme, default_theme

BIO_MAX_LENGTH = 150

_USERNAME_DISALLOWED = re.compile(r"[^a-z0-9_]")


def new_entry_id() -> str:
    """Opaque identifier for a freshly added link or video."""
    return str(uuid4())


class Platform(StrEnum):
    """External services recognised from a URL's shape."""

    YOUTUBE = "youtube"
    TWITCH = "twitch"
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    TWITTER = "twitter"
    DISCORD = "discord"
    SPOTIFY = "spotify"
    SOUNDCLOUD = "soundcloud"
    GITHUB = "github"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    SNAPCHAT = "snapchat"
    PINTEREST = "pinterest"
    REDDIT = "reddit"
    TELEGRAM = "telegram"
    WHATSAPP = "whatsapp"
    PATREON = "patreon"
    KOFI = "kofi"
    ONLYFANS = "onlyfans"
    THREADS = "threads"
    BLUESKY = "bluesky"


VIDEO_PLATFORMS = frozenset({Platform.YOUTUBE, Platform.TWITCH, Platform.TIKTOK})


class PresetBadgeKind(StrEnum):
    """Badges with fixed colors."""

    NEW = "NEW"
    HOT = "HOT"
    SALE = "SALE"


@dataclass(frozen=True, slots=True)
class PresetBadge:
    """One of the fixed-color badges."""

    kind: PresetBadgeKind


@dataclass(frozen=True, slots=True)
class CustomBadge:
    """Creator-defined badge. Defaults are used when none was configured."""

    text: str = "CUSTOM"
    background_color: str = "#8b5cf6"
    text_color: str = "#ffffff"


Badge = PresetBadge | CustomBadge | None


class VideoType(IntEnum):
    """Presentation variant of a featured video."""

    SMALL_ROW = 1
    LARGE_COVER = 2
    EMBED = 3


@dataclass(frozen=True)
class Link:
    """One call-to-action entry of a profile.

    Disabled links stay in the profile but are hidden from the public page.
    """

    id: str = field(default_factory=new_entry_id)
    title: str = ""
    url: str = ""
    thumbnail: str | None = None
    enabled: bool = True
    is_featured: bool = False
    badge: Badge = None
    tw_status: bool | None = None


@dataclass(frozen=True)
class Video:
    """Featured media entry."""

    id: str = field(default_factory=new_entry_id)
    url: str = ""
    title: str = ""
    thumbnail: str = ""
    platform: Platform = Platform.YOUTUBE
    type: VideoType = VideoType.SMALL_ROW


@dataclass(frozen=True)
class Profile:
    """A creator's complete bio-page configuration.

    ``links`` order is display order. ``featured_videos`` is ``None`` when
    the creator has no videos, never an empty list.
    """

    username: str = ""
    display_name: str = ""
    bio: str = ""
    avatar: str = ""
    theme: Theme = field(default_factory=default_theme)
    links: list[Link] = field(default_factory=list)
    featured_videos: list[Video] | None = None


def sanitize_username(value: str) -> str:
    """Lowercase a handle and strip everything outside ``[a-z0-9_]``."""
    return _USERNAME_DISALLOWED.sub("", value.lower())


def clamp_bio(value: str) -> str:
    """Truncate a bio to the maximum length."""
    return value[:BIO_MAX_LENGTH]

"""URL-based platform detection and video id extraction."""

import re

from domain.entities.profile import Platform

# Order is the tie-break when a URL could match more than one pattern.
# Short hosts match only at a host boundary.
PLATFORM_PATTERNS: tuple[tuple[Platform, re.Pattern[str]], ...] = (
    (Platform.YOUTUBE, re.compile(r"youtube\.com|youtu\.be", re.IGNORECASE)),
    (Platform.TWITCH, re.compile(r"twitch\.tv", re.IGNORECASE)),
    (Platform.INSTAGRAM, re.compile(r"instagram\.com", re.IGNORECASE)),
    (Platform.TIKTOK, re.compile(r"tiktok\.com", re.IGNORECASE)),
    (Platform.TWITTER, re.compile(r"twitter\.com|(?:^|[/.@])x\.com", re.IGNORECASE)),
    (Platform.DISCORD, re.compile(r"discord\.gg|discord\.com", re.IGNORECASE)),
    (Platform.SPOTIFY, re.compile(r"spotify\.com", re.IGNORECASE)),
    (Platform.SOUNDCLOUD, re.compile(r"soundcloud\.com", re.IGNORECASE)),
    (Platform.GITHUB, re.compile(r"github\.com", re.IGNORECASE)),
    (Platform.LINKEDIN, re.compile(r"linkedin\.com", re.IGNORECASE)),
    (Platform.FACEBOOK, re.compile(r"facebook\.com", re.IGNORECASE)),
    (Platform.SNAPCHAT, re.compile(r"snapchat\.com", re.IGNORECASE)),
    (Platform.PINTEREST, re.compile(r"pinterest\.com", re.IGNORECASE)),
    (Platform.REDDIT, re.compile(r"reddit\.com", re.IGNORECASE)),
    (Platform.TELEGRAM, re.compile(r"(?:^|[/.@])t\.me|telegram\.me", re.IGNORECASE)),
    (Platform.WHATSAPP, re.compile(r"(?:^|[/.@])wa\.me|whatsapp\.com", re.IGNORECASE)),
    (Platform.PATREON, re.compile(r"patreon\.com", re.IGNORECASE)),
    (Platform.KOFI, re.compile(r"ko-fi\.com", re.IGNORECASE)),
    (Platform.ONLYFANS, re.compile(r"onlyfans\.com", re.IGNORECASE)),
    (Platform.THREADS, re.compile(r"threads\.net", re.IGNORECASE)),
    (Platform.BLUESKY, re.compile(r"bsky\.app", re.IGNORECASE)),
)

_TWITCH_USERNAME = re.compile(r"twitch\.tv/([a-zA-Z0-9_]+)", re.IGNORECASE)
_YOUTUBE_VIDEO_ID = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]{11})")
_THUMBNAIL_VIDEO_ID = re.compile(r"/vi/([a-zA-Z0-9_-]{11})/")


def detect_platform(url: str | None) -> Platform | None:
    """Return the first platform whose pattern matches ``url``.

    Unrecognised, empty or non-string input yields ``None``.
    """
    if not isinstance(url, str) or not url:
        return None
    for platform, pattern in PLATFORM_PATTERNS:
        if pattern.search(url):
            return platform
    return None


def detect_video_platform(url: str) -> Platform | None:
    """Restricted detector used by the video editor (youtube, twitch, tiktok)."""
    if "youtube.com" in url or "youtu.be" in url:
        return Platform.YOUTUBE
    if "twitch.tv" in url:
        return Platform.TWITCH
    if "tiktok.com" in url:
        return Platform.TIKTOK
    return None


def extract_twitch_username(url: str | None) -> str | None:
    """Channel name following ``twitch.tv/``."""
    if not isinstance(url, str):
        return None
    match = _TWITCH_USERNAME.search(url)
    return match.group(1) if match else None


def extract_youtube_video_id(url: str | None) -> str | None:
    """11-character id from ``watch?v=`` or ``youtu.be/`` URLs only."""
    if not isinstance(url, str):
        return None
    match = _YOUTUBE_VIDEO_ID.search(url)
    return match.group(1) if match else None


def extract_video_id_from_thumbnail(thumbnail_url: str | None) -> str | None:
    """Video id embedded in an ``/vi/<id>/`` thumbnail URL."""
    if not isinstance(thumbnail_url, str):
        return None
    match = _THUMBNAIL_VIDEO_ID.search(thumbnail_url)
    return match.group(1) if match else None


def youtube_thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


def youtube_embed_url(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}"


def youtube_watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def default_video_thumbnail(url: str, platform: Platform) -> str:
    """Thumbnail derivable from the URL alone (YouTube only)."""
    if platform == Platform.YOUTUBE:
        video_id = extract_youtube_video_id(url)
        return youtube_thumbnail_url(video_id) if video_id else ""
    return ""

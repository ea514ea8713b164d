"""Order-preserving edit operations over link and video lists.

Every operation returns a new list and leaves its input untouched.
"""

from collections.abc import Sequence
from dataclasses import replace
from typing import Any, TypeVar

from domain.entities.profile import Link, Video
from domain.services.platform_resolver import default_video_thumbnail, detect_video_platform

Entry = TypeVar("Entry", Link, Video)


def add_link(links: Sequence[Link]) -> list[Link]:
    """Append a blank, enabled link with a fresh id."""
    return [*links, Link()]


def update_link(links: Sequence[Link], link_id: str, **changes: Any) -> list[Link]:
    """Replace fields on the matching link. Unknown ids are a no-op."""
    return [replace(link, **changes) if link.id == link_id else link for link in links]


def remove_link(links: Sequence[Link], link_id: str) -> list[Link]:
    return [link for link in links if link.id != link_id]


def add_video(videos: Sequence[Video] | None) -> list[Video]:
    """Append a blank YouTube small-row video with a fresh id."""
    return [*(videos or ()), Video()]


def update_video(
    videos: Sequence[Video] | None, video_id: str, **changes: Any
) -> list[Video] | None:
    """Replace fields on the matching video.

    A new url re-derives platform and default thumbnail when the url
    belongs to a known video platform.
    """
    if videos is None:
        return None
    updated: list[Video] = []
    for video in videos:
        if video.id != video_id:
            updated.append(video)
            continue
        revised = replace(video, **changes)
        url = changes.get("url")
        if url is not None:
            platform = detect_video_platform(url)
            if platform:
                revised = replace(
                    revised,
                    platform=platform,
                    thumbnail=default_video_thumbnail(url, platform),
                )
        updated.append(revised)
    return updated


def remove_video(videos: Sequence[Video] | None, video_id: str) -> list[Video] | None:
    """Drop the matching video; an emptied list collapses to ``None``."""
    remaining = [video for video in videos or () if video.id != video_id]
    return remaining or None


def reorder(entries: Sequence[Entry], new_order: Sequence[Entry]) -> list[Entry]:
    """Adopt ``new_order`` verbatim.

    The caller supplies a permutation of ``entries``; completeness is not
    checked here.
    """
    return list(new_order)


def order_by_ids(entries: Sequence[Entry], ids: Sequence[str]) -> list[Entry]:
    """Build the permutation named by ``ids``, skipping ids that don't exist."""
    by_id = {entry.id: entry for entry in entries}
    return [by_id[entry_id] for entry_id in ids if entry_id in by_id]

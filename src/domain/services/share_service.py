"""Share action for a public profile page.

The server builds the ``SharePayload`` returned with every public page.
``share_profile`` is the client-side half: API consumers that hold native
share and clipboard capabilities (an app shell, a bot) inject them and
call it with that payload. No HTTP route calls it.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

import structlog

from domain.entities.profile import Profile

logger = structlog.get_logger()

COPIED_MESSAGE = "Link copied to clipboard!"
FAILED_MESSAGE = "Unable to share"


class ShareCancelledError(Exception):
    """The user dismissed the native share sheet."""


class ShareOutcome(StrEnum):
    SHARED = "shared"
    COPIED = "copied"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SharePayload:
    title: str
    text: str
    url: str


NativeShare = Callable[[SharePayload], Awaitable[None]]
CopyToClipboard = Callable[[str], Awaitable[None]]
Notify = Callable[[str, str], None]


def build_share_payload(profile: Profile, page_url: str, site_name: str) -> SharePayload:
    return SharePayload(
        title=f"{profile.display_name} | {site_name}",
        text=profile.bio,
        url=page_url,
    )


async def share_profile(
    payload: SharePayload,
    *,
    native_share: NativeShare | None,
    copy_to_clipboard: CopyToClipboard,
    notify: Notify,
) -> ShareOutcome:
    """Share through the platform capability, else copy the URL.

    ``notify`` receives ``(level, message)`` with level ``success`` or
    ``error``. A cancelled share sheet is not an error and notifies nothing.
    """
    try:
        if native_share is not None:
            await native_share(payload)
            return ShareOutcome.SHARED
        await copy_to_clipboard(payload.url)
        notify("success", COPIED_MESSAGE)
        return ShareOutcome.COPIED
    except ShareCancelledError:
        return ShareOutcome.CANCELLED
    except Exception as exc:
        logger.warning("share_failed", url=payload.url, error=str(exc))
        notify("error", FAILED_MESSAGE)
        return ShareOutcome.FAILED

"""Page head metadata as an owned resource.

The document head (title, meta tags, stylesheet links) is shared by every
view rendered into it. Only the top-level view writes it, through a
``PageMetadata`` resource that removes its own prior insertions before
writing and restores the defaults on release.
"""

from dataclasses import dataclass
from types import TracebackType

from domain.entities.profile import Profile

CUSTOM_FONT_LINK_ID = "custom-profile-font"


@dataclass(frozen=True, slots=True)
class MetaTag:
    attribute: str
    key: str
    content: str


@dataclass(frozen=True, slots=True)
class StylesheetLink:
    id: str
    href: str


@dataclass(frozen=True, slots=True)
class HeadSnapshot:
    """Immutable copy of the head state at one point in time."""

    title: str
    meta: tuple[MetaTag, ...]
    stylesheets: tuple[StylesheetLink, ...]


class PageHead:
    """Document head singletons, keyed the way a browser head is."""

    def __init__(self, default_title: str) -> None:
        self.default_title = default_title
        self.title = default_title
        self._meta: dict[tuple[str, str], str] = {}
        self._stylesheets: dict[str, str] = {}

    def set_meta(self, attribute: str, key: str, content: str) -> None:
        self._meta[(attribute, key)] = content

    def get_meta(self, attribute: str, key: str) -> str | None:
        return self._meta.get((attribute, key))

    def remove_meta(self, attribute: str, key: str) -> None:
        self._meta.pop((attribute, key), None)

    def insert_stylesheet(self, element_id: str, href: str) -> None:
        # A fixed id identifies the element; an existing one is replaced.
        self._stylesheets.pop(element_id, None)
        self._stylesheets[element_id] = href

    def remove_stylesheet(self, element_id: str) -> None:
        self._stylesheets.pop(element_id, None)

    def stylesheet(self, element_id: str) -> str | None:
        return self._stylesheets.get(element_id)

    def snapshot(self) -> HeadSnapshot:
        return HeadSnapshot(
            title=self.title,
            meta=tuple(
                MetaTag(attribute=attribute, key=key, content=content)
                for (attribute, key), content in self._meta.items()
            ),
            stylesheets=tuple(
                StylesheetLink(id=element_id, href=href)
                for element_id, href in self._stylesheets.items()
            ),
        )


class PageMetadata:
    """Acquire/apply/release ownership of a ``PageHead`` for one profile view."""

    def __init__(
        self,
        head: PageHead,
        site_name: str,
        default_image: str,
    ) -> None:
        self._head = head
        self._site_name = site_name
        self._default_image = default_image
        self._owned_meta: set[tuple[str, str]] = set()
        self._font_href: str | None = None
        self._acquired = False

    @property
    def head(self) -> PageHead:
        return self._head

    def acquire(self) -> "PageMetadata":
        self._remove_own_insertions()
        self._acquired = True
        return self

    def apply(self, profile: Profile, page_url: str) -> None:
        """Write title, description, Open Graph and Twitter tags and the font link."""
        if not self._acquired:
            raise RuntimeError("PageMetadata must be acquired before apply()")

        title = f"{profile.display_name} (@{profile.username}) | {self._site_name}"
        description = profile.bio or f"Discover the links of {profile.display_name}"
        image = profile.avatar or self._default_image

        self._head.title = title
        for attribute, key, content in (
            ("property", "og:title", title),
            ("property", "og:description", description),
            ("property", "og:url", page_url),
            ("property", "og:image", image),
            ("property", "og:type", "profile"),
            ("name", "twitter:title", title),
            ("name", "twitter:description", description),
            ("name", "twitter:image", image),
            ("name", "twitter:card", "summary_large_image"),
            ("name", "description", description),
        ):
            self._head.set_meta(attribute, key, content)
            self._owned_meta.add((attribute, key))

        self._apply_font(profile.theme.custom_font_url)

    def release(self) -> None:
        self._remove_own_insertions()
        self._head.title = self._head.default_title
        self._acquired = False

    def _apply_font(self, font_url: str | None) -> None:
        if font_url == self._font_href:
            return
        if self._font_href is not None:
            self._head.remove_stylesheet(CUSTOM_FONT_LINK_ID)
            self._font_href = None
        if font_url:
            self._head.insert_stylesheet(CUSTOM_FONT_LINK_ID, font_url)
            self._font_href = font_url

    def _remove_own_insertions(self) -> None:
        for attribute, key in self._owned_meta:
            self._head.remove_meta(attribute, key)
        self._owned_meta.clear()
        if self._font_href is not None:
            self._head.remove_stylesheet(CUSTOM_FONT_LINK_ID)
            self._font_href = None

    def __enter__(self) -> "PageMetadata":
        return self.acquire()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()

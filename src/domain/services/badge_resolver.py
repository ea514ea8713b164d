"""Badge resolution for link cards."""

from dataclasses import dataclass

from domain.entities.profile import CustomBadge, Link, PresetBadge, PresetBadgeKind


@dataclass(frozen=True, slots=True)
class BadgeStyle:
    """Display text and colors of a badge overlay."""

    text: str
    background_color: str
    text_color: str


PRESET_BADGE_COLORS: dict[PresetBadgeKind, tuple[str, str]] = {
    PresetBadgeKind.NEW: ("#22c55e", "#ffffff"),
    PresetBadgeKind.HOT: ("#f97316", "#ffffff"),
    PresetBadgeKind.SALE: ("#ef4444", "#ffffff"),
}


def resolve_badge(link: Link) -> BadgeStyle | None:
    """Map a link's badge to its display style, or ``None`` for no badge."""
    badge = link.badge
    if isinstance(badge, CustomBadge):
        return BadgeStyle(
            text=badge.text,
            background_color=badge.background_color,
            text_color=badge.text_color,
        )
    if isinstance(badge, PresetBadge):
        background, text_color = PRESET_BADGE_COLORS[badge.kind]
        return BadgeStyle(
            text=badge.kind.value,
            background_color=background,
            text_color=text_color,
        )
    return None

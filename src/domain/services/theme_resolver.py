"""Theme resolution: derive concrete style values from a Theme."""

from dataclasses import dataclass, fields, replace
from typing import Any

from core.exceptions import ThemeNotFoundError
from domain.entities.theme import (
    CUSTOM_THEME_ID,
    CUSTOM_THEME_NAME,
    ButtonStyle,
    Theme,
    get_preset,
)

GENERIC_FONT_FAMILIES = frozenset(
    {
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-sans-serif",
        "ui-serif",
        "ui-monospace",
        "ui-rounded",
        "emoji",
        "math",
        "fangsong",
    }
)

FALLBACK_FONT_CHAIN = "system-ui, sans-serif"

EDITABLE_THEME_FIELDS = frozenset(
    f.name for f in fields(Theme) if f.name not in {"id", "name", "is_custom"}
)


@dataclass(frozen=True, slots=True)
class ThemeStyle:
    """Concrete style values derived from a theme."""

    background: str
    background_color: str
    text_color: str
    font_stack: str
    card_background: str
    card_text_color: str
    border_radius: str
    video_radius: str


def button_radius(style: ButtonStyle | str) -> str:
    if style == ButtonStyle.PILL:
        return "9999px"
    if style == ButtonStyle.SQUARE:
        return "4px"
    return "12px"


def video_radius(style: ButtonStyle | str) -> str:
    """Radius for cover and embed videos, which never use the full pill."""
    if style == ButtonStyle.PILL:
        return "16px"
    if style == ButtonStyle.SQUARE:
        return "4px"
    return "12px"


def container_background(theme: Theme) -> str:
    """Image beats gradient, gradient beats plain color."""
    if theme.background_image:
        return f"url({theme.background_image})"
    if theme.background_gradient:
        return theme.background_gradient
    return theme.background_color


def font_stack(font_family: str | None) -> str:
    """Build a CSS font stack ending in the universal fallback chain.

    Only the first family of a comma list is kept. Generic keywords are
    never quoted; names containing whitespace are.
    """
    if not font_family:
        return FALLBACK_FONT_CHAIN
    clean = font_family.replace('"', "").replace("'", "").split(",")[0].strip()
    if not clean:
        return FALLBACK_FONT_CHAIN
    if clean.lower() in GENERIC_FONT_FAMILIES:
        base = clean
    elif any(ch.isspace() for ch in clean):
        base = f'"{clean}"'
    else:
        base = clean
    return f"{base}, {FALLBACK_FONT_CHAIN}"


def resolve_theme(theme: Theme) -> ThemeStyle:
    stack = font_stack(theme.font_family)
    return ThemeStyle(
        background=container_background(theme),
        background_color=theme.background_color,
        text_color=theme.text_color,
        font_stack=stack,
        card_background=theme.card_color,
        card_text_color=theme.card_text_color,
        border_radius=button_radius(theme.button_style),
        video_radius=video_radius(theme.button_style),
    )


def select_preset(theme_id: str) -> Theme:
    """Return a preset with ``is_custom`` reset."""
    preset = get_preset(theme_id)
    if preset is None:
        raise ThemeNotFoundError(theme_id)
    return replace(preset, is_custom=False)


def customize_theme(theme: Theme, **changes: Any) -> Theme:
    """Apply hand edits, forking the theme into the custom slot.

    An empty edit leaves the theme untouched.
    """
    unknown = set(changes) - EDITABLE_THEME_FIELDS
    if unknown:
        raise ValueError(f"Not editable theme fields: {', '.join(sorted(unknown))}")
    if not changes:
        return theme
    if "button_style" in changes:
        changes["button_style"] = ButtonStyle(changes["button_style"])
    return replace(
        theme,
        **changes,
        id=CUSTOM_THEME_ID,
        name=CUSTOM_THEME_NAME,
        is_custom=True,
    )


def as_published_theme(theme: Theme) -> Theme:
    """Published themes are always rendered as custom themes."""
    return replace(theme, id=CUSTOM_THEME_ID, name=CUSTOM_THEME_NAME, is_custom=True)

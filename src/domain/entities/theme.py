"""Theme domain entity and preset catalogue."""

from dataclasses import dataclass
from enum import StrEnum


class ButtonStyle(StrEnum):
    """Corner style applied to link cards."""

    ROUNDED = "rounded"
    PILL = "pill"
    SQUARE = "square"


CUSTOM_THEME_ID = "custom"
CUSTOM_THEME_NAME = "Custom"


@dataclass(frozen=True)
class Theme:
    """Visual presentation descriptor for a profile page.

    Background priority when rendering is image, then gradient, then color.
    """

    id: str
    name: str
    background_color: str
    card_color: str
    card_text_color: str
    text_color: str
    button_style: ButtonStyle = ButtonStyle.ROUNDED
    font_family: str = "system-ui"
    background_gradient: str | None = None
    background_image: str | None = None
    custom_font_url: str | None = None
    is_custom: bool = False


PRESET_THEMES: tuple[Theme, ...] = (
    Theme(
        id="minimal-light",
        name="Minimal Light",
        background_color="#f5f5f5",
        card_color="#ffffff",
        card_text_color="#1a1a1a",
        text_color="#1a1a1a",
    ),
    Theme(
        id="minimal-dark",
        name="Minimal Dark",
        background_color="#0a0a0a",
        card_color="#1a1a1a",
        card_text_color="#ffffff",
        text_color="#ffffff",
    ),
    Theme(
        id="ocean-breeze",
        name="Ocean Breeze",
        background_color="#0f172a",
        background_gradient="linear-gradient(135deg, #0f172a 0%, #1e3a5f 50%, #0f766e 100%)",
        card_color="rgba(255,255,255,0.1)",
        card_text_color="#ffffff",
        text_color="#ffffff",
        button_style=ButtonStyle.PILL,
    ),
    Theme(
        id="sunset-glow",
        name="Sunset Glow",
        background_color="#1a0a1e",
        background_gradient="linear-gradient(180deg, #1a0a1e 0%, #4a1942 50%, #ff6b35 100%)",
        card_color="rgba(255,255,255,0.15)",
        card_text_color="#ffffff",
        text_color="#ffffff",
        font_family="Outfit",
    ),
    Theme(
        id="neon-nights",
        name="Neon Nights",
        background_color="#0d0d0d",
        background_gradient="linear-gradient(135deg, #0d0d0d 0%, #1a0a2e 50%, #2d1b4e 100%)",
        card_color="rgba(138,43,226,0.2)",
        card_text_color="#e0b0ff",
        text_color="#ffffff",
        button_style=ButtonStyle.PILL,
        font_family="Outfit",
    ),
    Theme(
        id="forest-calm",
        name="Forest Calm",
        background_color="#0f1f0f",
        background_gradient="linear-gradient(180deg, #0f1f0f 0%, #1a3a1a 50%, #2d5a2d 100%)",
        card_color="rgba(255,255,255,0.1)",
        card_text_color="#b8e6b8",
        text_color="#e0f0e0",
    ),
    Theme(
        id="pastel-dream",
        name="Pastel Dream",
        background_color="#fdf2f8",
        background_gradient="linear-gradient(135deg, #fdf2f8 0%, #fce7f3 50%, #f5d0fe 100%)",
        card_color="rgba(255,255,255,0.9)",
        card_text_color="#831843",
        text_color="#831843",
        button_style=ButtonStyle.PILL,
        font_family="Outfit",
    ),
    Theme(
        id="cyber-punk",
        name="Cyber Punk",
        background_color="#0a0a0a",
        background_gradient=(
            "linear-gradient(135deg, #0a0a0a 0%, #1a0a2e 30%, #0a1a2e 70%, #0a0a0a 100%)"
        ),
        card_color="rgba(0,255,255,0.1)",
        card_text_color="#00ffff",
        text_color="#ff00ff",
        button_style=ButtonStyle.SQUARE,
        font_family="monospace",
    ),
)

DEFAULT_THEME_ID = "neon-nights"


def get_preset(theme_id: str) -> Theme | None:
    """Look up a preset theme by id."""
    for theme in PRESET_THEMES:
        if theme.id == theme_id:
            return theme
    return None


def default_theme() -> Theme:
    """Theme given to freshly created profiles."""
    theme = get_preset(DEFAULT_THEME_ID)
    assert theme is not None
    return theme

"""Light and dark palettes used by the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .blocks import Color


class Theme(Enum):
    """User-selectable theme."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


def resolve_dark_mode(theme: Theme) -> bool:
    """Return True if ``theme`` renders with the dark palette.

    There is no portable way to ask the desktop for its preference from a
    terminal, so SYSTEM falls back to dark.
    """
    return theme is not Theme.LIGHT


BODY_SIZE = 14.0
CODE_LABEL_SIZE = 12.0

# Heading font sizes, index 0 is level 1
HEADING_SIZES: tuple[float, ...] = (28.0, 24.0, 20.0, 18.0, 16.0, 14.0)

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


@dataclass(frozen=True)
class Palette:
    """Colors the renderer picks per theme."""

    heading_colors: tuple[Color, ...]
    code_panel_fill: Color
    code_panel_stroke: Color
    inline_code_background: Color


LIGHT_PALETTE = Palette(
    heading_colors=(
        (51, 51, 51),
        (68, 68, 68),
        (85, 85, 85),
        (102, 102, 102),
        (119, 119, 119),
        (136, 136, 136),
    ),
    code_panel_fill=(248, 248, 248),
    code_panel_stroke=(200, 200, 200),
    inline_code_background=(240, 240, 240),
)

DARK_PALETTE = Palette(
    heading_colors=(
        (255, 255, 255),
        (230, 230, 230),
        (210, 210, 210),
        (190, 190, 190),
        (190, 190, 190),
        (190, 190, 190),
    ),
    code_panel_fill=(30, 30, 30),
    code_panel_stroke=(200, 200, 200),
    inline_code_background=(45, 45, 45),
)


def palette_for(dark_mode: bool) -> Palette:
    """Return the palette for the given mode."""
    return DARK_PALETTE if dark_mode else LIGHT_PALETTE


def clamp_heading_level(level: int) -> int:
    """Map a heading level into 1..6; anything out of range becomes 6."""
    if MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
        return level
    return MAX_HEADING_LEVEL


def heading_style(level: int, dark_mode: bool) -> tuple[float, Color]:
    """Return (font size, color) for a heading level."""
    index = clamp_heading_level(level) - 1
    return HEADING_SIZES[index], palette_for(dark_mode).heading_colors[index]

"""Visual block commands emitted by the renderer.

Visual blocks are toolkit-independent drawing instructions. A sink appends
each one to a vertical layout in emission order and maps sizes and colors
onto its own fonts and pixels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# RGB triple, 0..255 per channel
Color = tuple[int, int, int]


class FontWeight(Enum):
    """Font weight of a styled text run."""

    NORMAL = "normal"
    BOLD = "bold"


def _color_to_list(color: Color | None) -> list[int] | None:
    return list(color) if color is not None else None


@dataclass(frozen=True)
class StyledText:
    """A run of text with its resolved style.

    ``color`` is None when the sink's default text color applies.
    ``monospace`` and ``background`` are only set for inline code.
    """

    content: str
    size: float = 14.0
    weight: FontWeight = FontWeight.NORMAL
    color: Color | None = None
    italic: bool = False
    strikethrough: bool = False
    monospace: bool = False
    background: Color | None = None

    @property
    def bold(self) -> bool:
        """True when the run is rendered bold."""
        return self.weight is FontWeight.BOLD

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "type": "styled_text",
            "content": self.content,
            "size": self.size,
            "weight": self.weight.value,
            "color": _color_to_list(self.color),
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "monospace": self.monospace,
            "background": _color_to_list(self.background),
        }


@dataclass(frozen=True)
class Spacer:
    """Vertical gap of ``height`` points."""

    height: float

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "spacer", "height": self.height}


@dataclass(frozen=True)
class Separator:
    """Horizontal rule spanning the layout width."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "separator"}


@dataclass(frozen=True)
class CodeLanguageLabel:
    """Small monospace label naming a code block's language."""

    text: str
    size: float = 12.0

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "code_language_label", "text": self.text, "size": self.size}


@dataclass(frozen=True)
class CodePanel:
    """Framed monospace panel holding a code block's content.

    Fill and stroke are theme decoration and are left out of equality.
    """

    content: str
    fill: Color | None = field(default=None, compare=False)
    stroke: Color | None = field(default=None, compare=False)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "type": "code_panel",
            "content": self.content,
            "fill": _color_to_list(self.fill),
            "stroke": _color_to_list(self.stroke),
        }


@dataclass(frozen=True)
class ListBullet:
    """Bullet glyph followed by an item's text, indented by nesting depth."""

    indent_level: int
    content: str

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "type": "list_bullet",
            "indent_level": self.indent_level,
            "content": self.content,
        }


@dataclass(frozen=True)
class BlockQuoteMarker:
    """Marker bar for quoted content."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "block_quote_marker"}


# Union type for all visual blocks
VisualBlock = Union[
    StyledText,
    Spacer,
    Separator,
    CodeLanguageLabel,
    CodePanel,
    ListBullet,
    BlockQuoteMarker,
]

"""Plain-text formatting for visual blocks."""

from __future__ import annotations

from mdview.blocks import (
    BlockQuoteMarker,
    CodeLanguageLabel,
    CodePanel,
    ListBullet,
    Separator,
    Spacer,
    StyledText,
    VisualBlock,
)
from mdview.theme import BODY_SIZE

DEFAULT_WIDTH = 80
BULLET = "•"
INDENT = "  "


def _format_styled_text(block: StyledText, width: int) -> str:
    """Format a text run, marking styles the way markdown would."""
    if block.monospace:
        return f"`{block.content}`"
    # Headings are bigger than body text and print bare
    if block.size > BODY_SIZE:
        return block.content
    text = block.content
    if block.strikethrough:
        text = f"~~{text}~~"
    if block.italic:
        text = f"_{text}_"
    if block.bold:
        text = f"**{text}**"
    return text


def _format_separator(block: Separator, width: int) -> str:
    return "─" * width


def _format_code_language_label(block: CodeLanguageLabel, width: int) -> str:
    return block.text


def _format_code_panel(block: CodePanel, width: int) -> str:
    """Frame the code in a box; long lines are left to overflow."""
    lines = block.content.rstrip("\n").split("\n")
    inner = max(width - 4, 1)
    result = ["┌" + "─" * (inner + 2) + "┐"]
    for line in lines:
        result.append(f"│ {line.ljust(inner)} │")
    result.append("└" + "─" * (inner + 2) + "┘")
    return "\n".join(result)


def _format_list_bullet(block: ListBullet, width: int) -> str:
    """Format a bullet row; continuation lines align with the text."""
    indent = INDENT * block.indent_level
    lines = block.content.split("\n")
    result = [f"{indent}{BULLET} {lines[0]}"]
    for line in lines[1:]:
        result.append(f"{indent}  {line}")
    return "\n".join(result)


def _format_block_quote_marker(block: BlockQuoteMarker, width: int) -> str:
    return "│"


_FORMATTERS = {
    StyledText: _format_styled_text,
    Separator: _format_separator,
    CodeLanguageLabel: _format_code_language_label,
    CodePanel: _format_code_panel,
    ListBullet: _format_list_bullet,
    BlockQuoteMarker: _format_block_quote_marker,
}


def format_block(block: VisualBlock, width: int = DEFAULT_WIDTH) -> str | None:
    """Format a single visual block as text.

    Returns None for spacers, which only separate other blocks.
    """
    if isinstance(block, Spacer):
        return None
    formatter = _FORMATTERS.get(type(block))
    if formatter is not None:
        return formatter(block, width)
    return ""


def format_blocks(blocks: list[VisualBlock], width: int = DEFAULT_WIDTH) -> str:
    """Format all blocks into one text document.

    Any run of spacers between two blocks becomes a single blank line.
    Leading and trailing spacers are dropped.
    """
    parts: list[str] = []
    pending_gap = False

    for block in blocks:
        formatted = format_block(block, width)
        if formatted is None:
            pending_gap = True
            continue
        if pending_gap and parts:
            parts.append("")  # blank line
        pending_gap = False
        parts.append(formatted)

    return "\n".join(parts)

"""Tests for plain-text formatting of visual blocks."""

from __future__ import annotations

from mdview.blocks import (
    BlockQuoteMarker,
    CodeLanguageLabel,
    CodePanel,
    FontWeight,
    ListBullet,
    Separator,
    Spacer,
    StyledText,
)
from mdview.formatter import format_block, format_blocks


class TestFormatBlock:
    """Tests for format_block."""

    def test_spacer_formats_to_none(self) -> None:
        assert format_block(Spacer(8.0)) is None

    def test_separator_spans_width(self) -> None:
        assert format_block(Separator(), width=5) == "─────"

    def test_plain_text(self) -> None:
        assert format_block(StyledText(content="hi")) == "hi"

    def test_styled_text_markers(self) -> None:
        block = StyledText(
            content="x",
            weight=FontWeight.BOLD,
            italic=True,
            strikethrough=True,
        )
        assert format_block(block) == "**_~~x~~_**"

    def test_heading_prints_bare(self) -> None:
        block = StyledText(content="Title", size=28.0, weight=FontWeight.BOLD)
        assert format_block(block) == "Title"

    def test_inline_code(self) -> None:
        assert format_block(StyledText(content="a()", monospace=True)) == "`a()`"

    def test_code_language_label(self) -> None:
        assert format_block(CodeLanguageLabel("```rust")) == "```rust"

    def test_code_panel_is_framed(self) -> None:
        result = format_block(CodePanel("a\nbb\n"), width=10)
        assert result == "\n".join(
            [
                "┌────────┐",
                "│ a      │",
                "│ bb     │",
                "└────────┘",
            ]
        )

    def test_list_bullet_indent(self) -> None:
        assert format_block(ListBullet(0, "top")) == "• top"
        assert format_block(ListBullet(2, "deep")) == "    • deep"

    def test_list_bullet_continuation(self) -> None:
        assert format_block(ListBullet(1, "a\nb")) == "  • a\n    b"

    def test_block_quote_marker(self) -> None:
        assert format_block(BlockQuoteMarker()) == "│"


class TestFormatBlocks:
    """Tests for format_blocks."""

    def test_empty(self) -> None:
        assert format_blocks([]) == ""

    def test_spacer_runs_collapse(self) -> None:
        blocks = [
            Spacer(20.0),
            StyledText(content="a"),
            Spacer(8.0),
            Spacer(10.0),
            StyledText(content="b"),
            Spacer(8.0),
        ]
        assert format_blocks(blocks) == "a\n\nb"

    def test_adjacent_blocks_share_no_gap(self) -> None:
        blocks = [StyledText(content="a"), StyledText(content="b", monospace=True)]
        assert format_blocks(blocks) == "a\n`b`"

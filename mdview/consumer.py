"""Render sinks: collect visual blocks or log them as JSONL."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import TextIO

from .blocks import VisualBlock
from .events import Event
from .formatter import DEFAULT_WIDTH, format_blocks
from .renderer import render_events


class BlockListSink:
    """Collects visual blocks in emission order.

    Implements the RenderSink protocol from protocol.py. A sink belongs to
    one rendering pass; call clear() before reusing it for a fresh pass.
    """

    def __init__(self) -> None:
        self.blocks: list[VisualBlock] = []

    def on_block(self, block: VisualBlock) -> None:
        """Append a block to the list."""
        self.blocks.append(block)

    def clear(self) -> None:
        """Drop all collected blocks."""
        self.blocks.clear()

    def to_text(self, width: int = DEFAULT_WIDTH) -> str:
        """Format all collected blocks as plain text."""
        return format_blocks(self.blocks, width)


class BlockLogSink:
    """Writes each visual block to ``stream`` as one JSON line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.count = 0

    def on_block(self, block: VisualBlock) -> None:
        """Serialize and write a block."""
        self._stream.write(json.dumps(block.to_dict(), ensure_ascii=False))
        self._stream.write("\n")
        self.count += 1


def render_to_blocks(events: Iterable[Event], *, dark_mode: bool = False) -> list[VisualBlock]:
    """Render an event stream and return its visual blocks.

    Args:
        events: Event sequence, consumed once.
        dark_mode: Select the dark palette.

    Returns:
        Visual blocks in emission order.
    """
    sink = BlockListSink()
    render_events(events, sink, dark_mode=dark_mode)
    return sink.blocks


def render_document(text: str, *, dark_mode: bool = False) -> list[VisualBlock]:
    """Parse markdown ``text`` and render it to visual blocks."""
    from .parser import iter_events

    return render_to_blocks(iter_events(text), dark_mode=dark_mode)


def render_markdown_text(
    text: str,
    *,
    dark_mode: bool = False,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Convenience function: markdown in, formatted plain text out."""
    return format_blocks(render_document(text, dark_mode=dark_mode), width)

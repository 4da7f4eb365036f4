"""Markdown parsing and event log reading.

Turns markdown text into the event stream the renderer consumes, using
markdown-it-py configured with:
- CommonMark base
- GFM tables and strikethrough

Event streams can also be stored as JSONL (one event dict per line) and
replayed without the markdown parser.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .events import (
    BlockKind,
    BlockQuote,
    CodeBlock,
    Emphasis,
    EndBlock,
    Event,
    HardBreak,
    Heading,
    InlineCode,
    List,
    ListItem,
    Other,
    Paragraph,
    SoftBreak,
    StartBlock,
    Strikethrough,
    Strong,
    Text,
    event_from_dict,
)

logger = logging.getLogger(__name__)


def create_parser() -> MarkdownIt:
    """Create configured markdown-it parser."""
    md = MarkdownIt("commonmark")
    md.enable("table")
    md.enable("strikethrough")
    return md


# Singleton parser instance
_parser: MarkdownIt | None = None


def get_parser() -> MarkdownIt:
    """Get or create the singleton parser instance."""
    global _parser
    if _parser is None:
        _parser = create_parser()
    return _parser


# ---------------------------------------------------------------------------
# Token → BlockKind mapping
# ---------------------------------------------------------------------------

_SIMPLE_KINDS: dict[str, BlockKind] = {
    "paragraph": Paragraph(),
    # Table rows pass through as one plain run each
    "tr": Paragraph(),
    "bullet_list": List(),
    "list_item": ListItem(),
    "blockquote": BlockQuote(),
    "em": Emphasis(),
    "strong": Strong(),
    "s": Strikethrough(),
}

# Tokens with no visual and no text of their own
_SKIPPED_TOKENS = frozenset({"hr", "html_block", "html_inline"})

# Joins the cells of a table row
CELL_SEPARATOR = " | "


def _kind_for(token: Token, base: str) -> BlockKind:
    """Return the BlockKind of an ``*_open`` / ``*_close`` token."""
    if base == "heading":
        return Heading(level=int(token.tag[1:]))
    if base == "ordered_list":
        return List(start=int(token.attrs.get("start", 1)))
    kind = _SIMPLE_KINDS.get(base)
    if kind is not None:
        return kind
    return Other(name=base)


def _token_events(token: Token) -> Iterator[Event]:
    """Yield the events for one markdown-it token (block or inline)."""
    token_type = token.type

    if token_type in _SKIPPED_TOKENS:
        return

    # Tight list items wrap their text in hidden paragraphs
    if token.hidden and token_type in ("paragraph_open", "paragraph_close"):
        return

    if token_type.endswith("_open"):
        yield StartBlock(_kind_for(token, token_type[: -len("_open")]))
    elif token_type.endswith("_close"):
        yield EndBlock(_kind_for(token, token_type[: -len("_close")]))
    elif token_type == "inline":
        for child in token.children or []:
            yield from _token_events(child)
    elif token_type == "text":
        if token.content:
            yield Text(token.content)
    elif token_type == "code_inline":
        yield InlineCode(token.content)
    elif token_type == "softbreak":
        yield SoftBreak()
    elif token_type == "hardbreak":
        yield HardBreak()
    elif token_type in ("fence", "code_block"):
        yield from _code_events(token)
    elif token_type == "image":
        # The alt text is the only content that reaches the screen
        yield StartBlock(Other(name="image"))
        for child in token.children or []:
            yield from _token_events(child)
        yield EndBlock(Other(name="image"))
    else:
        logger.debug("token_ignored", extra={"token_type": token_type})


def _code_events(token: Token) -> Iterator[Event]:
    language = token.info.strip() if token.type == "fence" else ""
    kind = CodeBlock(language=language or None)
    yield StartBlock(kind)
    if token.content:
        yield Text(token.content)
    yield EndBlock(kind)


def iter_events(text: str) -> Iterator[Event]:
    """Parse markdown text and yield its events in document order.

    Each table row becomes a paragraph whose cells are joined by
    CELL_SEPARATOR, so tables pass through as plain text.

    Args:
        text: Markdown source.

    Yields:
        Well-nested Event values.
    """
    cell_index = 0
    for token in get_parser().parse(text):
        if token.type == "tr_open":
            cell_index = 0
        elif token.type in ("th_open", "td_open"):
            if cell_index:
                yield Text(CELL_SEPARATOR)
            cell_index += 1
        yield from _token_events(token)


def read_document(path: str | Path) -> str:
    """Read a markdown document as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# JSONL event log
# ---------------------------------------------------------------------------


def read_event_log(path: str | Path) -> Iterator[Event]:
    """Read a JSONL event log lazily.

    Skips empty lines, lines that fail JSON parsing and lines that are not
    event objects (logs a warning for each).
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        for line_num, raw_line in enumerate(f, start=1):
            stripped = raw_line.strip()
            if not stripped:
                continue
            try:
                obj = json.loads(stripped)
            except json.JSONDecodeError as exc:
                logger.warning("Line %d: failed to parse JSON: %s", line_num, exc)
                continue
            if not isinstance(obj, dict):
                logger.warning("Line %d: expected dict, got %s", line_num, type(obj).__name__)
                continue
            try:
                yield event_from_dict(obj)
            except KeyError as exc:
                logger.warning("Line %d: not an event: missing or unknown %s", line_num, exc)
            except ValueError as exc:
                logger.warning("Line %d: not an event: %s", line_num, exc)


def write_event_log(events: Iterable[Event], stream: TextIO) -> int:
    """Write events to ``stream`` as JSONL. Returns the number written."""
    count = 0
    for event in events:
        stream.write(json.dumps(event.to_dict(), ensure_ascii=False))
        stream.write("\n")
        count += 1
    return count

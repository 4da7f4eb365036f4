"""Streaming renderer: converts markdown events to visual blocks.

A single pass consumes the event sequence once, left to right, with no
lookahead. Inline text is accumulated until its enclosing block closes and is
then flushed as one styled run. All mutable state lives in a RenderState that
is created fresh for every pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .blocks import (
    CodeLanguageLabel,
    CodePanel,
    FontWeight,
    ListBullet,
    Separator,
    Spacer,
    StyledText,
    VisualBlock,
)
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
    Paragraph,
    SoftBreak,
    StartBlock,
    Strikethrough,
    Strong,
    Text,
)
from .protocol import RenderSink
from .theme import BODY_SIZE, CODE_LABEL_SIZE, clamp_heading_level, heading_style, palette_for

logger = logging.getLogger(__name__)

HEADING_SPACE_BEFORE = 20.0
HEADING_SPACE_AFTER = 10.0
HEADING_RULE_SPACE = 5.0
PARAGRAPH_SPACE = 8.0
CODE_BLOCK_SPACE = 10.0
LIST_SPACE = 8.0
BLOCK_QUOTE_SPACE = 8.0


class MalformedEventStreamError(ValueError):
    """The event stream broke the start/end nesting contract."""


@dataclass
class RenderState:
    """Mutable state of one rendering pass.

    ``open_blocks`` mirrors the nesting of the input and is only consulted to
    detect contract violations. Style flags are plain booleans: opening a
    style that is already active changes nothing.
    """

    dark_mode: bool = False
    text_accumulator: str = ""
    code_accumulator: str = ""
    in_code_block: bool = False
    current_code_language: str | None = None
    emphasis_active: bool = False
    strong_active: bool = False
    strikethrough_active: bool = False
    list_depth: int = 0
    inside_list: bool = False
    open_blocks: list[BlockKind] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        """True when no block is open and every flag is back at rest."""
        return (
            not self.open_blocks
            and self.list_depth == 0
            and not self.inside_list
            and not self.in_code_block
            and not (self.emphasis_active or self.strong_active or self.strikethrough_active)
        )


def process_event(state: RenderState, event: Event) -> list[VisualBlock]:
    """Process a single event and return the visual blocks it produces.

    Args:
        state: Render state of the current pass (mutated in place).
        event: The next event from the source.

    Returns:
        Visual blocks to hand to the sink, in order. Often empty.

    Raises:
        MalformedEventStreamError: If an EndBlock has no matching open block.
    """
    if isinstance(event, StartBlock):
        state.open_blocks.append(event.kind)
        return _start_block(state, event.kind)
    if isinstance(event, EndBlock):
        _close_block(state, event.kind)
        return _end_block(state, event.kind)
    if isinstance(event, Text):
        _append_text(state, event.text)
        return []
    if isinstance(event, InlineCode):
        return [_inline_code(state, event.code)]
    if isinstance(event, SoftBreak):
        state.text_accumulator += " "
        return []
    if isinstance(event, HardBreak):
        state.text_accumulator += "\n"
        return []

    # Unknown event type - ignore
    logger.debug("unknown_event_ignored", extra={"event_type": type(event).__name__})
    return []


def _close_block(state: RenderState, kind: BlockKind) -> None:
    """Remove the innermost open block of the same variant as ``kind``.

    Spans may still be open when their paragraph ends; only an end with no
    open block of its variant at all breaks the contract.
    """
    for index in range(len(state.open_blocks) - 1, -1, -1):
        if type(state.open_blocks[index]) is type(kind):
            del state.open_blocks[index]
            return
    raise MalformedEventStreamError(f"End of {type(kind).__name__} with no matching start")


# ---------------------------------------------------------------------------
# Start-of-block handlers
# ---------------------------------------------------------------------------


def _start_block(state: RenderState, kind: BlockKind) -> list[VisualBlock]:
    if isinstance(kind, Heading):
        state.text_accumulator = ""
        return [Spacer(HEADING_SPACE_BEFORE)]
    if isinstance(kind, Paragraph):
        state.text_accumulator = ""
        if state.inside_list:
            return []
        return [Spacer(PARAGRAPH_SPACE)]
    if isinstance(kind, CodeBlock):
        return _start_code_block(state, kind)
    if isinstance(kind, List):
        state.list_depth += 1
        state.inside_list = True
        return [Spacer(LIST_SPACE)]
    if isinstance(kind, ListItem):
        state.text_accumulator = ""
        return []
    if isinstance(kind, Emphasis):
        state.emphasis_active = True
        return []
    if isinstance(kind, Strong):
        state.strong_active = True
        return []
    if isinstance(kind, Strikethrough):
        state.strikethrough_active = True
        return []
    if isinstance(kind, BlockQuote):
        return [Spacer(BLOCK_QUOTE_SPACE), Separator()]

    # Other / unsupported kinds have no visual
    return []


def _start_code_block(state: RenderState, kind: CodeBlock) -> list[VisualBlock]:
    """Open a code block; the language label is emitted right away."""
    state.in_code_block = True
    state.code_accumulator = ""
    state.current_code_language = kind.language
    blocks: list[VisualBlock] = [Spacer(CODE_BLOCK_SPACE)]
    if kind.language:
        blocks.append(CodeLanguageLabel(f"```{kind.language}", size=CODE_LABEL_SIZE))
    return blocks


# ---------------------------------------------------------------------------
# Inline handlers
# ---------------------------------------------------------------------------


def _append_text(state: RenderState, text: str) -> None:
    if state.in_code_block:
        state.code_accumulator += text
    else:
        state.text_accumulator += text


def _inline_code(state: RenderState, code: str) -> StyledText:
    """Inline code is emitted immediately, outside the paragraph's run."""
    return StyledText(
        content=code,
        size=BODY_SIZE,
        monospace=True,
        background=palette_for(state.dark_mode).inline_code_background,
    )


# ---------------------------------------------------------------------------
# End-of-block handlers
# ---------------------------------------------------------------------------


def _end_block(state: RenderState, kind: BlockKind) -> list[VisualBlock]:
    if isinstance(kind, Heading):
        return _end_heading(state, kind.level)
    if isinstance(kind, Paragraph):
        return _end_paragraph(state)
    if isinstance(kind, CodeBlock):
        return _end_code_block(state)
    if isinstance(kind, List):
        return _end_list(state)
    if isinstance(kind, ListItem):
        return _end_list_item(state)
    if isinstance(kind, Emphasis):
        state.emphasis_active = False
        return []
    if isinstance(kind, Strong):
        state.strong_active = False
        return []
    if isinstance(kind, Strikethrough):
        state.strikethrough_active = False
        return []
    if isinstance(kind, BlockQuote):
        return [Spacer(BLOCK_QUOTE_SPACE)]

    return []


def _end_heading(state: RenderState, level: int) -> list[VisualBlock]:
    """Flush a heading; levels 1 and 2 get a rule underneath."""
    blocks: list[VisualBlock] = []
    level = clamp_heading_level(level)
    if state.text_accumulator:
        size, color = heading_style(level, state.dark_mode)
        blocks.append(
            StyledText(
                content=state.text_accumulator,
                size=size,
                weight=FontWeight.BOLD,
                color=color,
            )
        )
        if level <= 2:
            blocks.append(Separator())
            blocks.append(Spacer(HEADING_RULE_SPACE))
    blocks.append(Spacer(HEADING_SPACE_AFTER))
    state.text_accumulator = ""
    return blocks


def _end_paragraph(state: RenderState) -> list[VisualBlock]:
    """Flush a paragraph with the style flags active at its end."""
    blocks: list[VisualBlock] = []
    if state.text_accumulator:
        blocks.append(
            StyledText(
                content=state.text_accumulator,
                size=BODY_SIZE,
                weight=FontWeight.BOLD if state.strong_active else FontWeight.NORMAL,
                italic=state.emphasis_active,
                strikethrough=state.strikethrough_active,
            )
        )
        if not state.inside_list:
            blocks.append(Spacer(PARAGRAPH_SPACE))
    state.text_accumulator = ""
    return blocks


def _end_code_block(state: RenderState) -> list[VisualBlock]:
    blocks: list[VisualBlock] = []
    if state.code_accumulator:
        palette = palette_for(state.dark_mode)
        blocks.append(
            CodePanel(
                content=state.code_accumulator,
                fill=palette.code_panel_fill,
                stroke=palette.code_panel_stroke,
            )
        )
        blocks.append(Spacer(CODE_BLOCK_SPACE))
    state.in_code_block = False
    state.code_accumulator = ""
    state.current_code_language = None
    return blocks


def _end_list(state: RenderState) -> list[VisualBlock]:
    if state.list_depth <= 0:
        raise MalformedEventStreamError("List closed more often than opened")
    state.list_depth -= 1
    # An inner list closing leaves the outer list open
    state.inside_list = state.list_depth > 0
    return [Spacer(LIST_SPACE)]


def _end_list_item(state: RenderState) -> list[VisualBlock]:
    blocks: list[VisualBlock] = []
    if state.text_accumulator:
        blocks.append(
            ListBullet(
                indent_level=max(state.list_depth - 1, 0),
                content=state.text_accumulator,
            )
        )
    state.text_accumulator = ""
    return blocks


# ---------------------------------------------------------------------------
# Full pass
# ---------------------------------------------------------------------------


def render_events(
    events: Iterable[Event],
    sink: RenderSink,
    *,
    dark_mode: bool = False,
) -> RenderState:
    """Render a whole event stream into ``sink`` in one pass.

    Each visual block is handed to the sink as soon as it is produced. On a
    contract violation the sink keeps whatever was emitted before the
    offending event.

    Args:
        events: Forward-only event sequence; consumed exactly once.
        sink: Receiver of the visual blocks.
        dark_mode: Select the dark palette.

    Returns:
        The final RenderState of the pass.

    Raises:
        MalformedEventStreamError: If an EndBlock has no matching start.
    """
    state = RenderState(dark_mode=dark_mode)
    event_count = 0
    block_count = 0

    logger.debug("render_pass_started", extra={"dark_mode": dark_mode})

    for event in events:
        event_count += 1
        for block in process_event(state, event):
            sink.on_block(block)
            block_count += 1

    if state.open_blocks:
        logger.warning(
            "render_pass_unclosed_blocks",
            extra={"open_blocks": [type(kind).__name__ for kind in state.open_blocks]},
        )

    logger.debug(
        "render_pass_completed",
        extra={"event_count": event_count, "block_count": block_count},
    )
    return state


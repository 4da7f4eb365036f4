"""mdview: render markdown event streams into visual blocks."""

from mdview.blocks import (
    BlockQuoteMarker,
    CodeLanguageLabel,
    CodePanel,
    FontWeight,
    ListBullet,
    Separator,
    Spacer,
    StyledText,
    VisualBlock,
)
from mdview.consumer import BlockListSink, BlockLogSink, render_document, render_to_blocks
from mdview.emitter import BlockEmitter
from mdview.events import (
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
)
from mdview.parser import iter_events, read_event_log
from mdview.protocol import RenderSink
from mdview.renderer import MalformedEventStreamError, RenderState, process_event, render_events
from mdview.theme import Theme

__version__ = "0.1.0"

__all__ = [
    # Events module
    "BlockKind",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "List",
    "ListItem",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "BlockQuote",
    "Other",
    "Event",
    "StartBlock",
    "EndBlock",
    "Text",
    "InlineCode",
    "SoftBreak",
    "HardBreak",
    # Blocks module
    "VisualBlock",
    "StyledText",
    "FontWeight",
    "Spacer",
    "Separator",
    "CodeLanguageLabel",
    "CodePanel",
    "ListBullet",
    "BlockQuoteMarker",
    # Renderer module
    "RenderState",
    "MalformedEventStreamError",
    "process_event",
    "render_events",
    # Sinks
    "RenderSink",
    "BlockListSink",
    "BlockLogSink",
    "BlockEmitter",
    "render_to_blocks",
    "render_document",
    # Parser module
    "iter_events",
    "read_event_log",
    # Theme module
    "Theme",
]

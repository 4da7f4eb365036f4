"""Markdown event model.

This module defines the events consumed by the streaming renderer:
- BlockKind: Heading, Paragraph, CodeBlock, List, ListItem, Emphasis,
  Strong, Strikethrough, BlockQuote, and Other for unsupported constructs
- Event: StartBlock, EndBlock, Text, InlineCode, SoftBreak, HardBreak

Events and kinds serialize to plain dicts with a "type" discriminator so an
event stream can be stored as JSONL and replayed later.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


def _checked(value: object, expected: type, name: str, optional: bool = False) -> object:
    """Return value if it has the expected type, else raise ValueError."""
    if optional and value is None:
        return value
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValueError(f"{name} must be {expected.__name__}: {value!r}")
    return value


# --- BlockKind types ---


@dataclass(frozen=True)
class Heading:
    """ATX or setext heading, level 1..6."""

    level: int

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "heading", "level": self.level}

    @classmethod
    def from_dict(cls, data: dict) -> Heading:
        """Deserialize from dictionary."""
        return cls(level=_checked(data["level"], int, "level"))


@dataclass(frozen=True)
class Paragraph:
    """Paragraph of inline content."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "paragraph"}

    @classmethod
    def from_dict(cls, data: dict) -> Paragraph:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class CodeBlock:
    """Fenced or indented code block with an optional language tag."""

    language: str | None = None

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "code_block", "language": self.language}

    @classmethod
    def from_dict(cls, data: dict) -> CodeBlock:
        """Deserialize from dictionary."""
        return cls(language=_checked(data.get("language"), str, "language", optional=True))


@dataclass(frozen=True)
class List:
    """Bullet or ordered list. ``start`` is set for ordered lists."""

    start: int | None = None

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "list", "start": self.start}

    @classmethod
    def from_dict(cls, data: dict) -> List:
        """Deserialize from dictionary."""
        return cls(start=_checked(data.get("start"), int, "start", optional=True))


@dataclass(frozen=True)
class ListItem:
    """A single list item."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "list_item"}

    @classmethod
    def from_dict(cls, data: dict) -> ListItem:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class Emphasis:
    """Emphasis span (italic)."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "emphasis"}

    @classmethod
    def from_dict(cls, data: dict) -> Emphasis:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class Strong:
    """Strong span (bold)."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "strong"}

    @classmethod
    def from_dict(cls, data: dict) -> Strong:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class Strikethrough:
    """Strikethrough span."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "strikethrough"}

    @classmethod
    def from_dict(cls, data: dict) -> Strikethrough:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class BlockQuote:
    """Block quote container."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "block_quote"}

    @classmethod
    def from_dict(cls, data: dict) -> BlockQuote:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class Other:
    """Any construct the renderer has no visual for (tables, links, ...).

    The renderer ignores these, but their text still flows through.
    """

    name: str

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "other", "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> Other:
        """Deserialize from dictionary."""
        return cls(name=_checked(data.get("name", ""), str, "name"))


# Union type for all block kinds
BlockKind = Union[
    Heading,
    Paragraph,
    CodeBlock,
    List,
    ListItem,
    Emphasis,
    Strong,
    Strikethrough,
    BlockQuote,
    Other,
]


_KIND_TYPES = {
    "heading": Heading.from_dict,
    "paragraph": Paragraph.from_dict,
    "code_block": CodeBlock.from_dict,
    "list": List.from_dict,
    "list_item": ListItem.from_dict,
    "emphasis": Emphasis.from_dict,
    "strong": Strong.from_dict,
    "strikethrough": Strikethrough.from_dict,
    "block_quote": BlockQuote.from_dict,
    "other": Other.from_dict,
}


def kind_from_dict(data: dict) -> BlockKind:
    """Deserialize a BlockKind from dictionary using the type discriminator.

    Unknown kind names come back as ``Other(name)`` so that logs written by
    a newer grammar still replay.

    Args:
        data: Dictionary with "type" field indicating the kind.

    Returns:
        The matching BlockKind instance.

    Raises:
        KeyError: If the "type" field is missing.
        ValueError: If ``data`` is not a dict or a field has the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"kind must be an object: {data!r}")
    kind_type = data["type"]
    factory = _KIND_TYPES.get(kind_type)
    if factory is None:
        return Other(name=kind_type)
    return factory(data)


# --- Event types ---


@dataclass(frozen=True)
class StartBlock:
    """A block opens."""

    kind: BlockKind

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "start", "kind": self.kind.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> StartBlock:
        """Deserialize from dictionary."""
        return cls(kind=kind_from_dict(data["kind"]))


@dataclass(frozen=True)
class EndBlock:
    """A block closes."""

    kind: BlockKind

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "end", "kind": self.kind.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> EndBlock:
        """Deserialize from dictionary."""
        return cls(kind=kind_from_dict(data["kind"]))


@dataclass(frozen=True)
class Text:
    """A run of literal text."""

    text: str

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "text", "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> Text:
        """Deserialize from dictionary."""
        return cls(text=_checked(data["text"], str, "text"))


@dataclass(frozen=True)
class InlineCode:
    """An inline code span."""

    code: str

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "inline_code", "code": self.code}

    @classmethod
    def from_dict(cls, data: dict) -> InlineCode:
        """Deserialize from dictionary."""
        return cls(code=_checked(data["code"], str, "code"))


@dataclass(frozen=True)
class SoftBreak:
    """A line ending inside a paragraph."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "soft_break"}

    @classmethod
    def from_dict(cls, data: dict) -> SoftBreak:
        """Deserialize from dictionary."""
        return cls()


@dataclass(frozen=True)
class HardBreak:
    """An explicit line break."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"type": "hard_break"}

    @classmethod
    def from_dict(cls, data: dict) -> HardBreak:
        """Deserialize from dictionary."""
        return cls()


# Union type for all event types
Event = Union[StartBlock, EndBlock, Text, InlineCode, SoftBreak, HardBreak]


def event_from_dict(data: dict) -> Event:
    """Deserialize an Event from dictionary using the type discriminator.

    Args:
        data: Dictionary with "type" field indicating the event type.

    Returns:
        The appropriate Event instance.

    Raises:
        KeyError: If "type" field is missing or unknown.
        ValueError: If a field has the wrong type.
    """
    type_map = {
        "start": StartBlock.from_dict,
        "end": EndBlock.from_dict,
        "text": Text.from_dict,
        "inline_code": InlineCode.from_dict,
        "soft_break": SoftBreak.from_dict,
        "hard_break": HardBreak.from_dict,
    }
    return type_map[data["type"]](data)

"""Shared test fixtures for mdview."""

import pytest

from mdview.events import (
    CodeBlock,
    Emphasis,
    EndBlock,
    Event,
    Heading,
    List,
    ListItem,
    Paragraph,
    StartBlock,
    Strong,
    Text,
)


# ---------------------------------------------------------------------------
# Event stream fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_paragraph_events() -> list[Event]:
    return [
        StartBlock(Paragraph()),
        Text("hello world"),
        EndBlock(Paragraph()),
    ]


@pytest.fixture
def heading_events() -> list[Event]:
    return [
        StartBlock(Heading(1)),
        Text("Title"),
        EndBlock(Heading(1)),
    ]


@pytest.fixture
def rust_code_block_events() -> list[Event]:
    return [
        StartBlock(CodeBlock("rust")),
        Text("fn main() {}"),
        EndBlock(CodeBlock()),
    ]


@pytest.fixture
def nested_list_events() -> list[Event]:
    return [
        StartBlock(List()),
        StartBlock(ListItem()),
        Text("x"),
        StartBlock(List()),
        StartBlock(ListItem()),
        Text("y"),
        EndBlock(ListItem()),
        EndBlock(List()),
        EndBlock(ListItem()),
        EndBlock(List()),
    ]


@pytest.fixture
def styled_paragraph_events() -> list[Event]:
    return [
        StartBlock(Paragraph()),
        StartBlock(Emphasis()),
        StartBlock(Strong()),
        Text("a"),
        EndBlock(Paragraph()),
        EndBlock(Strong()),
        EndBlock(Emphasis()),
    ]


@pytest.fixture
def sample_markdown() -> str:
    return (
        "# Title\n"
        "\n"
        "Some *emphasis* here.\n"
        "\n"
        "- one\n"
        "- two\n"
        "\n"
        "```python\n"
        "print('hi')\n"
        "```\n"
    )

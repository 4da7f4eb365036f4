"""Watch a markdown file and re-render it whenever it changes.

Every change triggers a fresh full rendering pass over the whole document;
nothing from the previous pass is reused.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from watchfiles import Change, awatch

from .consumer import BlockListSink
from .formatter import DEFAULT_WIDTH
from .parser import iter_events, read_document
from .renderer import render_events

logger = logging.getLogger(__name__)


class DocumentWatcher:
    """Watches a markdown file and renders it to text on every change.

    The rendered text goes to ``output_path`` when given, otherwise to the
    ``on_render`` callback.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path | None = None,
        *,
        dark_mode: bool = False,
        width: int = DEFAULT_WIDTH,
        on_render: Callable[[str], None] | None = None,
        debounce_ms: int = 100,
    ) -> None:
        self.input_path = input_path
        self.output_path = output_path
        self.dark_mode = dark_mode
        self.width = width
        self.on_render = on_render
        self.debounce_ms = debounce_ms
        self.render_count = 0
        self._stop_event = asyncio.Event()

    def render_once(self) -> str:
        """Render the current file contents in a fresh pass and publish it."""
        text = read_document(self.input_path)
        sink = BlockListSink()
        render_events(iter_events(text), sink, dark_mode=self.dark_mode)
        output = sink.to_text(self.width)
        self.render_count += 1

        if self.output_path is not None:
            self.output_path.write_text(output, encoding="utf-8")
        if self.on_render is not None:
            self.on_render(output)

        logger.info(
            "document_rendered",
            extra={
                "input_path": str(self.input_path),
                "block_count": len(sink.blocks),
                "render_count": self.render_count,
            },
        )
        return output

    def _is_our_change(self, changes: set[tuple[Change, str]]) -> bool:
        target = self.input_path.resolve()
        return any(Path(path).resolve() == target for _change, path in changes)

    async def run(self) -> None:
        """Render once, then re-render on every change until stopped.

        A failed first render propagates. Later changes that leave the file
        unreadable are logged and skipped until the next change.
        """
        self.render_once()

        logger.info(
            "watching_for_changes",
            extra={"input_path": str(self.input_path)},
        )

        try:
            async for changes in awatch(
                self.input_path.parent,
                stop_event=self._stop_event,
                debounce=self.debounce_ms,
                recursive=False,
            ):
                if not self._is_our_change(changes):
                    continue
                if not self.input_path.exists():
                    logger.warning(
                        "input_file_missing",
                        extra={"input_path": str(self.input_path)},
                    )
                    continue
                try:
                    self.render_once()
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning(
                        "document_read_failed",
                        extra={"input_path": str(self.input_path), "error": str(e)},
                    )
        except asyncio.CancelledError:
            logger.info("watcher_cancelled")
            raise

    def stop(self) -> None:
        """Signal the watcher to stop."""
        self._stop_event.set()

"""Block emitter for dispatching visual blocks to multiple sinks.

This module provides the BlockEmitter class, itself a render sink, that hands
every block to each subscribed sink in subscription order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .blocks import VisualBlock
    from .protocol import RenderSink

logger = logging.getLogger(__name__)


class BlockEmitter:
    """Dispatches visual blocks to multiple sinks synchronously.

    Each block reaches every sink before on_block() returns, so all sinks see
    the same blocks in the same order. A failing sink aborts the pass.

    Example:
        emitter = BlockEmitter()
        emitter.subscribe(screen_sink)
        emitter.subscribe(log_sink)

        render_events(events, emitter)
    """

    def __init__(self) -> None:
        """Initialize the emitter with an empty subscriber list."""
        self._sinks: list[RenderSink] = []

    def subscribe(self, sink: RenderSink) -> None:
        """Subscribe a sink to receive blocks.

        Args:
            sink: A sink implementing the RenderSink protocol.
        """
        self._sinks.append(sink)
        logger.debug(
            "sink_subscribed",
            extra={
                "sink_type": type(sink).__name__,
                "total_subscribers": len(self._sinks),
            },
        )

    def unsubscribe(self, sink: RenderSink) -> None:
        """Unsubscribe a sink.

        Args:
            sink: The sink to remove.

        Raises:
            ValueError: If the sink is not subscribed.
        """
        self._sinks.remove(sink)
        logger.debug(
            "sink_unsubscribed",
            extra={
                "sink_type": type(sink).__name__,
                "total_subscribers": len(self._sinks),
            },
        )

    @property
    def subscriber_count(self) -> int:
        """Return the number of subscribed sinks."""
        return len(self._sinks)

    def on_block(self, block: VisualBlock) -> None:
        """Dispatch a block to all subscribed sinks.

        Args:
            block: The block to dispatch.

        Raises:
            Exception: Whatever the failing sink raised, after logging it.
        """
        block_type = type(block).__name__
        for sink in self._sinks:
            try:
                sink.on_block(block)
            except Exception:
                logger.exception(
                    "block_dispatch_failed",
                    extra={
                        "block_type": block_type,
                        "sink_type": type(sink).__name__,
                    },
                )
                raise

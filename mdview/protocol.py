"""Render sink protocol.

This module defines the Protocol every render sink implements. The renderer
hands each visual block to the sink synchronously, in emission order, before
it consumes the next event.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .blocks import VisualBlock


@runtime_checkable
class RenderSink(Protocol):
    """Protocol for render sinks.

    Sinks are responsible for appending each visual block to their own
    layout (a widget tree, a text buffer, a log file, ...). A sink must not
    hold the renderer up: ``on_block`` returns once the block is stored.
    """

    def on_block(self, block: VisualBlock) -> None:
        """Receive one visual block.

        Args:
            block: The block to append, in emission order.
        """
        ...

"""Per-frame input consumption against the owned view state."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from julialive.api.input_events import CloseEvent, PointerMovedEvent, ResizeEvent
from julialive.rendering.geometry import ViewportDimensions, pointer_to_complex
from julialive.runtime.state import ViewState

_LOG = logging.getLogger("julialive.input")


class InputDispatcher:
    """Applies one batch of events in delivery order, last write wins."""

    def drain(self, events: Iterable[object], state: ViewState) -> int:
        """Apply events to state and return how many were recognized."""
        applied = 0
        for event in events:
            if isinstance(event, CloseEvent):
                state.close_requested = True
            elif isinstance(event, ResizeEvent):
                state.dimensions = ViewportDimensions.clamped(event.width, event.height)
                _LOG.debug(
                    "viewport_resized width=%d height=%d aspect=%.4f",
                    state.dimensions.width,
                    state.dimensions.height,
                    state.aspect,
                )
            elif isinstance(event, PointerMovedEvent):
                state.parameter = pointer_to_complex(event.x, event.y, state.dimensions)
            else:
                continue
            applied += 1
        return applied


__all__ = ["InputDispatcher"]

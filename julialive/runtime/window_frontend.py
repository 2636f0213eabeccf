"""Adapter from the canvas draw callback to the frame loop controller."""

from __future__ import annotations

import logging
from typing import Protocol

from julialive.runtime.controller import LoopState, RenderLoopController

_LOG = logging.getLogger("julialive.runtime.frontend")


class FrontendWindow(Protocol):
    def request_draw(self, draw_function) -> None: ...

    def run_loop(self) -> None: ...

    def close(self) -> None: ...


class ViewerFrontend:
    """Runs one controller step per draw callback of a callback-driven window."""

    def __init__(self, window: FrontendWindow, controller: RenderLoopController) -> None:
        self._window = window
        self._controller = controller
        self._fatal_error: BaseException | None = None

    @property
    def fatal_error(self) -> BaseException | None:
        return self._fatal_error

    def run(self) -> None:
        """Start the controller, run the window loop, re-raise fatal frame errors."""
        try:
            self._controller.start()
        except Exception:
            self._window.close()
            raise
        try:
            self._window.request_draw(self._draw_frame)
            self._window.run_loop()
        finally:
            self._controller.shutdown()
        if self._fatal_error is not None:
            raise self._fatal_error

    def _draw_frame(self) -> None:
        if self._controller.is_closed():
            return
        try:
            state = self._controller.step()
        except Exception as exc:
            # The canvas swallows callback exceptions; keep the error for run().
            self._fatal_error = exc
            _LOG.error("frame_failed error=%s: %s", exc.__class__.__name__, exc)
            self._window.close()
            return
        if state is LoopState.CLOSING:
            self._window.close()


__all__ = ["FrontendWindow", "ViewerFrontend"]

"""Frame loop state machine: reload, draw, present, drain input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from julialive.api.render import (
    QUAD,
    Color,
    EventSource,
    FrameUniforms,
    ProgramSources,
    RenderProgram,
    SurfaceProvider,
)
from julialive.rendering.geometry import screen_to_complex
from julialive.rendering.program_loader import ProgramLoader
from julialive.rendering.sources import AlwaysReload, ReloadTrigger
from julialive.runtime.errors import InitialLoadError
from julialive.runtime.input_dispatcher import InputDispatcher
from julialive.runtime.reload_diagnostics import NullReloadObserver, ReloadObserver
from julialive.runtime.state import ViewState

_LOG = logging.getLogger("julialive.runtime")

DEFAULT_BACKGROUND: Color = (0.0, 0.0, 1.0, 1.0)


class LoopState(Enum):
    RUNNING = "running"
    CLOSING = "closing"


@dataclass(slots=True)
class LoopStats:
    frames: int = 0
    reload_attempts: int = 0
    reloads_succeeded: int = 0
    reloads_failed: int = 0
    reloads_skipped: int = 0


class RenderLoopController:
    """Owns the active program and view state and produces one frame per step."""

    def __init__(
        self,
        *,
        surface: SurfaceProvider,
        loader: ProgramLoader,
        sources: ProgramSources,
        events: EventSource,
        dispatcher: InputDispatcher | None = None,
        reload_trigger: ReloadTrigger | None = None,
        observer: ReloadObserver | None = None,
        background: Color = DEFAULT_BACKGROUND,
    ) -> None:
        self._surface = surface
        self._loader = loader
        self._sources = sources
        self._events = events
        self._dispatcher = dispatcher or InputDispatcher()
        self._trigger = reload_trigger or AlwaysReload()
        self._observer = observer or NullReloadObserver()
        self._background = background
        self._program: RenderProgram | None = None
        self._view: ViewState | None = None
        self._state: LoopState | None = None
        self._stats = LoopStats()

    @property
    def state(self) -> LoopState | None:
        """Current loop state; None until start() succeeded."""
        return self._state

    @property
    def program(self) -> RenderProgram | None:
        return self._program

    @property
    def view(self) -> ViewState:
        if self._view is None:
            raise RuntimeError("frame loop not started")
        return self._view

    @property
    def stats(self) -> LoopStats:
        return self._stats

    def is_closed(self) -> bool:
        return self._state is LoopState.CLOSING

    def start(self) -> None:
        """Load the startup program; failure is fatal and the loop never runs."""
        if self._state is not None:
            return
        result = self._loader.load(self._sources)
        if result.error is not None or result.program is None:
            raise InitialLoadError(result.error) from result.error
        self._program = result.program
        width, height = self._surface.current_dimensions()
        self._view = ViewState.for_viewport(width, height)
        self._state = LoopState.RUNNING
        _LOG.info(
            "frame_loop_started vertex=%s fragment=%s viewport=%dx%d",
            self._sources.vertex,
            self._sources.fragment,
            self._view.dimensions.width,
            self._view.dimensions.height,
        )

    def step(self) -> LoopState:
        """Produce one frame and apply the input received while producing it."""
        if self._state is None:
            raise RuntimeError("frame loop not started")
        if self._state is LoopState.CLOSING:
            raise RuntimeError("frame loop already closed")
        self._attempt_reload()
        try:
            self._render_frame()
        except Exception:
            self._state = LoopState.CLOSING
            raise
        self._dispatcher.drain(self._events.poll(), self.view)
        self._stats.frames += 1
        if self.view.close_requested:
            self._state = LoopState.CLOSING
            _LOG.info("frame_loop_closing frames=%d", self._stats.frames)
        return self._state

    def run(self) -> LoopStats:
        """Run frames until a close request or a fatal frame error."""
        self.start()
        try:
            while self._state is LoopState.RUNNING:
                self.step()
        finally:
            self.shutdown()
        return self._stats

    def shutdown(self) -> None:
        """Release the active program; the controller produces no more frames."""
        if self._state is not None:
            self._state = LoopState.CLOSING
        program, self._program = self._program, None
        if program is not None:
            self._loader.compiler.release(program)
        _LOG.info(
            "frame_loop_stats frames=%d reload_attempts=%d reloads_succeeded=%d "
            "reloads_failed=%d reloads_skipped=%d",
            self._stats.frames,
            self._stats.reload_attempts,
            self._stats.reloads_succeeded,
            self._stats.reloads_failed,
            self._stats.reloads_skipped,
        )

    def _attempt_reload(self) -> None:
        if not self._trigger.should_reload():
            self._stats.reloads_skipped += 1
            return
        self._stats.reload_attempts += 1
        result = self._loader.load(self._sources)
        if result.error is not None or result.program is None:
            # Keep drawing with the previous program; the failure is only reported.
            self._stats.reloads_failed += 1
            if result.error is not None:
                self._observer.reload_failed(result.error)
            return
        previous, self._program = self._program, result.program
        self._stats.reloads_succeeded += 1
        if previous is not None and previous is not result.program:
            self._loader.compiler.release(previous)
        self._observer.reload_succeeded(result.program)

    def _render_frame(self) -> None:
        view = self.view
        frame = self._surface.begin_frame()
        frame.clear(self._background)
        uniforms = FrameUniforms(
            screen_to_complex=screen_to_complex(view.aspect).as_tuple(),
            c=view.parameter.as_tuple(),
        )
        frame.draw(QUAD, self._program, uniforms)
        frame.present()


__all__ = ["DEFAULT_BACKGROUND", "LoopState", "LoopStats", "RenderLoopController"]

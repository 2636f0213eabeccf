"""Rendercanvas-backed window and event source."""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from julialive.api.input_events import (
    CloseEvent,
    InputEvent,
    KeyEvent,
    PointerMovedEvent,
    ResizeEvent,
)
from julialive.runtime.errors import EVENT_BINDING_ERRORS, log_recoverable

_LOG = logging.getLogger("julialive.window")


def run_backend_loop(rc_auto: Any) -> None:
    """Run rendercanvas backend loop."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_func = getattr(rc_auto, "run", None)
    if callable(run_func):
        run_func()
        return
    raise RuntimeError("rendercanvas.auto did not expose a runnable loop.")


def stop_backend_loop(rc_auto: Any) -> None:
    """Stop rendercanvas backend loop when supported."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "stop"):
        loop.stop()


@dataclass(slots=True)
class RenderCanvasWindow:
    """Buffers canvas callbacks into a per-frame event batch."""

    canvas: Any
    _events: deque[InputEvent] = field(default_factory=deque)
    _rc_auto: Any | None = field(default=None, repr=False)
    _debug_events: bool = field(default=False, repr=False)
    _closed: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        self._debug_events = (
            os.getenv("JULIALIVE_WINDOW_EVENTS_TRACE", "0").strip().lower()
            in {"1", "true", "yes", "on"}
        )
        self._bind_window_events()

    def poll(self) -> tuple[InputEvent, ...]:
        drained = tuple(self._events)
        self._events.clear()
        return drained

    def current_dimensions(self) -> tuple[int, int]:
        width, height = self.canvas.get_logical_size()
        return (max(1, int(round(float(width)))), max(1, int(round(float(height)))))

    def set_title(self, title: str) -> None:
        setter = getattr(self.canvas, "set_title", None)
        if callable(setter):
            setter(title)

    def request_draw(self, draw_function: Callable[[], None]) -> None:
        self.canvas.request_draw(draw_function)

    def run_loop(self) -> None:
        if self._rc_auto is None:
            return
        run_backend_loop(self._rc_auto)

    def stop_loop(self) -> None:
        if self._rc_auto is None:
            return
        stop_backend_loop(self._rc_auto)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        closer = getattr(self.canvas, "close", None)
        if callable(closer):
            closer()
        self.stop_loop()

    def _bind_window_events(self) -> None:
        add_handler = getattr(self.canvas, "add_event_handler", None)
        if not callable(add_handler):
            return
        self._try_add_event_handler(add_handler, self._on_resize, "resize")
        self._try_add_event_handler(add_handler, self._on_close, "close")
        self._try_add_event_handler(add_handler, self._on_pointer_move, "pointer_move")
        self._try_add_event_handler(add_handler, self._on_pointer_move, "mouse_move")
        self._try_add_event_handler(add_handler, self._on_key_down, "key_down")
        if self._debug_events:
            self._try_add_event_handler(add_handler, self._on_any_event, "*")

    def _on_resize(self, event: object) -> None:
        size = _event_value(event, "size")
        if isinstance(size, (tuple, list)) and len(size) >= 2:
            width, height = size[0], size[1]
        else:
            width = _event_value(event, "width")
            height = _event_value(event, "height")
        if not isinstance(width, (int, float)) or not isinstance(height, (int, float)):
            return
        self._events.append(ResizeEvent(width=int(round(width)), height=int(round(height))))

    def _on_close(self, event: object) -> None:
        _ = event
        self._events.append(CloseEvent())

    def _on_pointer_move(self, event: object) -> None:
        x = _event_value(event, "x")
        y = _event_value(event, "y")
        if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
            return
        self._events.append(PointerMovedEvent(x=float(x), y=float(y)))

    def _on_key_down(self, event: object) -> None:
        key = _event_value(event, "key")
        if isinstance(key, str):
            self._events.append(KeyEvent("key_down", key))

    def _try_add_event_handler(self, add_handler: Any, handler: Any, event_type: str) -> None:
        try:
            add_handler(handler, event_type)
        except EVENT_BINDING_ERRORS:
            log_recoverable(_LOG, f"window_event_type_unsupported type={event_type}")

    def _on_any_event(self, event: object) -> None:
        event_type = str(_event_value(event, "event_type", ""))
        if event_type in {"before_draw", "animate"}:
            return
        _LOG.debug("window_event type=%s payload=%r", event_type, event)


def create_rendercanvas_window(
    canvas: Any | None = None,
    *,
    width: int = 1024,
    height: int = 768,
    title: str = "julialive",
    max_fps: float = 60.0,
    vsync: bool = True,
) -> RenderCanvasWindow:
    """Create window adapter over an existing or newly created rendercanvas canvas."""
    if canvas is not None:
        return RenderCanvasWindow(canvas=canvas)
    try:
        import rendercanvas.auto as rc_auto
    except Exception as exc:
        raise RuntimeError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw."
        ) from exc
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
    try:
        canvas = canvas_cls(
            size=(int(width), int(height)),
            title=title,
            update_mode="continuous",
            max_fps=float(max_fps),
            vsync=bool(vsync),
        )
    except TypeError:
        canvas = canvas_cls(size=(int(width), int(height)), title=title)
    return RenderCanvasWindow(canvas=canvas, _rc_auto=rc_auto)


def _event_value(event: object, key: str, default: object | None = None) -> object | None:
    if isinstance(event, dict):
        return event.get(key, default)
    return getattr(event, key, default)


__all__ = [
    "RenderCanvasWindow",
    "create_rendercanvas_window",
    "run_backend_loop",
    "stop_backend_loop",
]

"""Public input event types consumed by the frame loop."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CloseEvent:
    """Normalized close-request event."""

    requested: bool = True


@dataclass(frozen=True, slots=True)
class ResizeEvent:
    """Viewport resize in the same units as pointer coordinates."""

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class PointerMovedEvent:
    """Pointer position in canvas coordinates, origin at the top-left."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Raw key event."""

    event_type: str
    value: str


InputEvent = CloseEvent | ResizeEvent | PointerMovedEvent | KeyEvent


__all__ = ["CloseEvent", "InputEvent", "KeyEvent", "PointerMovedEvent", "ResizeEvent"]

"""Viewer startup errors and the tolerated window-binding failures."""

from __future__ import annotations

import logging

from julialive.rendering.program_loader import ProgramLoadError

# rendercanvas rejects unknown event types with ValueError; older backends
# reject the handler signature with TypeError.
EVENT_BINDING_ERRORS: tuple[type[Exception], ...] = (ValueError, TypeError)


class InitialLoadError(RuntimeError):
    """No valid program exists to start the frame loop with."""

    def __init__(self, cause: ProgramLoadError) -> None:
        super().__init__(f"initial program load failed: {cause}")
        self.cause = cause


class SurfaceInitError(RuntimeError):
    """The GPU surface could not be created for the viewer window."""

    def __init__(self, details: dict[str, object]) -> None:
        super().__init__(f"wgpu_init_failed details={details!r}")
        self.details = details


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Log a tolerated exception with its traceback."""
    logger.log(level, message, exc_info=True)


__all__ = [
    "EVENT_BINDING_ERRORS",
    "InitialLoadError",
    "SurfaceInitError",
    "log_recoverable",
]

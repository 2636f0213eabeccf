"""Drawing surface, program compiler and source provider contracts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from julialive.api.input_events import InputEvent

RenderProgram: TypeAlias = object
Color: TypeAlias = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class QuadGeometry:
    """Static full-screen quad drawn every frame."""

    vertices: tuple[tuple[float, float], ...]
    indices: tuple[int, ...]


# Corners of clip space, two triangles covering it. The fragment stage does
# all the work, so every pixel just needs to be visited once.
QUAD = QuadGeometry(
    vertices=((1.0, 1.0), (-1.0, 1.0), (-1.0, -1.0), (1.0, -1.0)),
    indices=(0, 1, 2, 0, 2, 3),
)


@dataclass(frozen=True, slots=True)
class FrameUniforms:
    """The only frame-varying inputs of a draw."""

    screen_to_complex: tuple[float, float]
    c: tuple[float, float]


@dataclass(frozen=True, slots=True)
class ProgramSources:
    """Names of the vertex and fragment sources making up one program."""

    vertex: str
    fragment: str

    def names(self) -> tuple[str, str]:
        return (self.vertex, self.fragment)


class ProgramCompileError(RuntimeError):
    """Compiler rejected a vertex/fragment pair."""

    def __init__(self, message: str, *, diagnostics: str = "") -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


class PresentError(RuntimeError):
    """Frame could not be presented; the surface must be re-established."""


class RenderDeviceError(RuntimeError):
    """Unrecoverable device-level failure while drawing."""


class FrameSurface(Protocol):
    """Drawable target for exactly one frame."""

    def clear(self, color: Color) -> None:
        """Clear the whole target to one color."""

    def draw(self, geometry: QuadGeometry, program: RenderProgram, uniforms: FrameUniforms) -> None:
        """Draw geometry with a compiled program and frame uniforms."""

    def present(self) -> None:
        """Submit and present the frame, raising PresentError on failure."""


class SurfaceProvider(Protocol):
    """Owner of the window-backed drawing surface."""

    def current_dimensions(self) -> tuple[int, int]:
        """Return the current viewport size as (width, height)."""

    def begin_frame(self) -> FrameSurface:
        """Acquire the frame surface for the next frame."""


class ProgramCompiler(Protocol):
    """Turns shader source text into a usable program handle."""

    def compile(self, vertex_source: str, fragment_source: str) -> RenderProgram:
        """Compile and link sources, raising ProgramCompileError on rejection."""

    def release(self, program: RenderProgram) -> None:
        """Discard a program handle that is no longer active."""


class SourceProvider(Protocol):
    """Read access to named program sources."""

    def read(self, name: str) -> str:
        """Return source text, raising OSError when unavailable."""


class EventSource(Protocol):
    """Finite per-frame batch of input events."""

    def poll(self) -> Sequence[InputEvent]:
        """Return events received since the previous poll."""


__all__ = [
    "Color",
    "EventSource",
    "FrameSurface",
    "FrameUniforms",
    "PresentError",
    "ProgramCompileError",
    "ProgramCompiler",
    "ProgramSources",
    "QUAD",
    "QuadGeometry",
    "RenderDeviceError",
    "RenderProgram",
    "SourceProvider",
    "SurfaceProvider",
]

"""Public contracts shared by the frame loop and its collaborators."""

from julialive.api.config import ProgramConfig, RenderConfig, ViewerConfig, WindowConfig
from julialive.api.input_events import (
    CloseEvent,
    InputEvent,
    KeyEvent,
    PointerMovedEvent,
    ResizeEvent,
)
from julialive.api.logging import LoggingConfig
from julialive.api.render import (
    QUAD,
    EventSource,
    FrameSurface,
    FrameUniforms,
    PresentError,
    ProgramCompileError,
    ProgramCompiler,
    ProgramSources,
    QuadGeometry,
    RenderDeviceError,
    RenderProgram,
    SourceProvider,
    SurfaceProvider,
)

__all__ = [
    "CloseEvent",
    "EventSource",
    "FrameSurface",
    "FrameUniforms",
    "InputEvent",
    "KeyEvent",
    "LoggingConfig",
    "PointerMovedEvent",
    "PresentError",
    "ProgramCompileError",
    "ProgramCompiler",
    "ProgramConfig",
    "ProgramSources",
    "QUAD",
    "QuadGeometry",
    "RenderConfig",
    "RenderDeviceError",
    "RenderProgram",
    "ResizeEvent",
    "SourceProvider",
    "SurfaceProvider",
    "ViewerConfig",
    "WindowConfig",
]

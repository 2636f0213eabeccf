"""Rendering-side building blocks: mapping math, sources and program loading."""

from julialive.rendering.geometry import (
    ComplexParameter,
    GeometryMapping,
    ViewportDimensions,
    complex_to_pointer,
    mapped_corners,
    pointer_to_complex,
    screen_to_complex,
)
from julialive.rendering.program_loader import (
    CompileFailedError,
    ProgramLoadError,
    ProgramLoadResult,
    ProgramLoader,
    SourceUnavailableError,
)
from julialive.rendering.sources import (
    AlwaysReload,
    FileSourceProvider,
    NeverReload,
    ReloadTrigger,
    SourceChangeTrigger,
    create_reload_trigger,
    default_shader_dir,
)

__all__ = [
    "AlwaysReload",
    "CompileFailedError",
    "ComplexParameter",
    "FileSourceProvider",
    "GeometryMapping",
    "NeverReload",
    "ProgramLoadError",
    "ProgramLoadResult",
    "ProgramLoader",
    "ReloadTrigger",
    "SourceChangeTrigger",
    "SourceUnavailableError",
    "ViewportDimensions",
    "complex_to_pointer",
    "create_reload_trigger",
    "default_shader_dir",
    "mapped_corners",
    "pointer_to_complex",
    "screen_to_complex",
]

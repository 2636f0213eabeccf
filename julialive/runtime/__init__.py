"""Frame loop runtime modules."""

from julialive.runtime.config import load_env_file, load_viewer_config
from julialive.runtime.controller import LoopState, LoopStats, RenderLoopController
from julialive.runtime.errors import InitialLoadError, SurfaceInitError
from julialive.runtime.input_dispatcher import InputDispatcher
from julialive.runtime.logging import configure_logging
from julialive.runtime.reload_diagnostics import NullReloadObserver, ReloadDiagnostics
from julialive.runtime.state import ViewState

__all__ = [
    "InitialLoadError",
    "InputDispatcher",
    "LoopState",
    "LoopStats",
    "NullReloadObserver",
    "ReloadDiagnostics",
    "RenderLoopController",
    "SurfaceInitError",
    "ViewState",
    "configure_logging",
    "load_env_file",
    "load_viewer_config",
]

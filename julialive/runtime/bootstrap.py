"""Viewer composition: window, wgpu surface, loader and frame loop."""

from __future__ import annotations

import logging
import os
import traceback
from collections.abc import Callable
from typing import Any

from julialive.api.config import ViewerConfig
from julialive.api.render import PresentError, RenderDeviceError
from julialive.rendering.program_loader import ProgramLoader
from julialive.rendering.sources import FileSourceProvider, create_reload_trigger
from julialive.rendering.wgpu_backend import WgpuInitError, WgpuSurface, create_wgpu_surface
from julialive.runtime.config import load_viewer_config
from julialive.runtime.controller import RenderLoopController
from julialive.runtime.errors import InitialLoadError, SurfaceInitError
from julialive.runtime.logging import configure_logging, stop_logging
from julialive.runtime.reload_diagnostics import ReloadDiagnostics
from julialive.runtime.window_frontend import ViewerFrontend
from julialive.window import RenderCanvasWindow, create_rendercanvas_window

_LOG = logging.getLogger("julialive.runtime.bootstrap")

SurfaceFactory = Callable[[Any, tuple[str, ...]], WgpuSurface]


def build_controller(
    config: ViewerConfig,
    *,
    window: RenderCanvasWindow,
    surface: WgpuSurface,
) -> RenderLoopController:
    """Wire sources, loader and reload trigger into a frame loop controller."""
    provider = FileSourceProvider(config.program.shader_dir)
    loader = ProgramLoader(provider, surface.compiler())
    trigger = create_reload_trigger(
        config.program.reload_mode,
        provider=provider,
        sources=config.program.sources,
    )
    return RenderLoopController(
        surface=surface,
        loader=loader,
        sources=config.program.sources,
        events=window,
        reload_trigger=trigger,
        observer=ReloadDiagnostics(),
        background=config.render.background,
    )


def run_viewer(
    config: ViewerConfig | None = None,
    *,
    surface_factory: SurfaceFactory | None = None,
) -> None:
    """Open the window and run frames until it is closed or a frame fails."""
    cfg = config or load_viewer_config()
    configure_logging(cfg.logging)
    try:
        _run(cfg, surface_factory=surface_factory)
    except InitialLoadError as exc:
        _LOG.error(
            "startup_program_invalid kind=%s\n%s",
            exc.cause.__class__.__name__,
            exc.cause.diagnostics if exc.cause is not None else exc,
        )
        raise
    except SurfaceInitError as exc:
        _LOG.error(
            "surface_init_failed backend=%s error=%s: %s",
            exc.details.get("selected_backend", "unknown"),
            exc.details.get("exception_type"),
            exc.details.get("exception_message"),
        )
        raise
    except (PresentError, RenderDeviceError):
        _LOG.exception("render_device_failed")
        raise
    finally:
        stop_logging()


def _run(cfg: ViewerConfig, *, surface_factory: SurfaceFactory | None) -> None:
    window = create_rendercanvas_window(
        width=cfg.window.width,
        height=cfg.window.height,
        title=cfg.window.title,
        max_fps=cfg.window.max_fps,
        vsync=cfg.window.vsync,
    )
    factory = surface_factory or (lambda canvas, backends: create_wgpu_surface(canvas, backends=backends))
    try:
        surface = factory(window.canvas, cfg.render.wgpu_backends)
    except Exception as exc:
        details: dict[str, object] = {
            "backend_priority": tuple(cfg.render.wgpu_backends),
            "platform": os.name,
            "exception_type": exc.__class__.__name__,
            "exception_message": str(exc),
            "stack": traceback.format_exc(),
        }
        if isinstance(exc, WgpuInitError):
            details.update(exc.details)
        window.close()
        raise SurfaceInitError(details) from exc
    _LOG.info(
        "viewer_starting shader_dir=%s reload_mode=%s",
        cfg.program.shader_dir,
        cfg.program.reload_mode,
    )
    controller = build_controller(cfg, window=window, surface=surface)
    ViewerFrontend(window, controller).run()


__all__ = ["build_controller", "run_viewer"]

"""Window subsystem runtime adapters."""

from julialive.window.rendercanvas_window import RenderCanvasWindow, create_rendercanvas_window

__all__ = ["RenderCanvasWindow", "create_rendercanvas_window"]

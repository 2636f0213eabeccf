"""Viewer configuration contracts."""

from __future__ import annotations

from dataclasses import dataclass, field

from julialive.api.logging import LoggingConfig
from julialive.api.render import Color, ProgramSources

RELOAD_MODES: tuple[str, ...] = ("always", "on_change", "off")


@dataclass(frozen=True, slots=True)
class WindowConfig:
    width: int = 1024
    height: int = 768
    title: str = "julialive"
    vsync: bool = True
    max_fps: float = 60.0


@dataclass(frozen=True, slots=True)
class ProgramConfig:
    shader_dir: str = ""
    sources: ProgramSources = ProgramSources(vertex="julia.vert.wgsl", fragment="julia.frag.wgsl")
    reload_mode: str = "always"  # always|on_change|off


@dataclass(frozen=True, slots=True)
class RenderConfig:
    background: Color = (0.0, 0.0, 1.0, 1.0)
    wgpu_backends: tuple[str, ...] = ("vulkan", "metal", "dx12")


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    """Top-level immutable viewer configuration."""

    window: WindowConfig = field(default_factory=WindowConfig)
    program: ProgramConfig = field(default_factory=ProgramConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


__all__ = ["ProgramConfig", "RELOAD_MODES", "RenderConfig", "ViewerConfig", "WindowConfig"]

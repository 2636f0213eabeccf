"""Environment-sourced viewer configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from julialive.api.config import (
    RELOAD_MODES,
    ProgramConfig,
    RenderConfig,
    ViewerConfig,
    WindowConfig,
)
from julialive.api.logging import LoggingConfig
from julialive.api.render import Color, ProgramSources
from julialive.rendering.sources import default_shader_dir


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _csv(name: str, *, env: Mapping[str, str] | None = None) -> tuple[str, ...]:
    raw = _text(name, "", env=env)
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _color(name: str, default: Color, *, env: Mapping[str, str] | None = None) -> Color:
    parts = _csv(name, env=env)
    if len(parts) not in {3, 4}:
        return default
    try:
        values = [min(1.0, max(0.0, float(part))) for part in parts]
    except ValueError:
        return default
    if len(values) == 3:
        values.append(1.0)
    return (values[0], values[1], values[2], values[3])


def _normalize_reload_mode(raw: str, fallback: str) -> str:
    value = str(raw).strip().lower().replace("-", "_")
    if value not in RELOAD_MODES:
        return str(fallback)
    return value


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with the viewer-prefixed override."""
    value = _raw("JULIALIVE_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_viewer_config(*, env: Mapping[str, str] | None = None) -> ViewerConfig:
    window = WindowConfig(
        width=_int("JULIALIVE_WIDTH", 1024, minimum=1, env=env),
        height=_int("JULIALIVE_HEIGHT", 768, minimum=1, env=env),
        title=_text("JULIALIVE_TITLE", "julialive", env=env),
        vsync=_flag("JULIALIVE_VSYNC", True, env=env),
        max_fps=_float("JULIALIVE_MAX_FPS", 60.0, minimum=1.0, env=env),
    )
    program = ProgramConfig(
        shader_dir=_text("JULIALIVE_SHADER_DIR", str(default_shader_dir()), env=env),
        sources=ProgramSources(
            vertex=_text("JULIALIVE_VERTEX_SOURCE", "julia.vert.wgsl", env=env),
            fragment=_text("JULIALIVE_FRAGMENT_SOURCE", "julia.frag.wgsl", env=env),
        ),
        reload_mode=_normalize_reload_mode(_text("JULIALIVE_RELOAD_MODE", "always", env=env), "always"),
    )
    backends = tuple(item.lower() for item in _csv("JULIALIVE_WGPU_BACKENDS", env=env))
    render = RenderConfig(
        background=_color("JULIALIVE_BACKGROUND", (0.0, 0.0, 1.0, 1.0), env=env),
        wgpu_backends=backends or ("vulkan", "metal", "dx12"),
    )
    log_file = _text("JULIALIVE_LOG_FILE", "", env=env)
    logging_cfg = LoggingConfig(
        level_name=resolve_log_level_name(env=env),
        console_format=_text("JULIALIVE_LOG_FORMAT", "text", env=env).lower(),
        file_path=log_file or None,
        file_format="json",
    )
    return ViewerConfig(window=window, program=program, render=render, logging=logging_cfg)


def load_env_file(path: str | Path = ".env", *, override_existing: bool = False) -> bool:
    """Load KEY=VALUE pairs from an env file into the process environment.

    Returns False when the file does not exist. Existing variables win unless
    ``override_existing`` is set.
    """
    env_path = Path(path)
    if not env_path.exists():
        return False

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value
    return True


__all__ = ["load_env_file", "load_viewer_config", "resolve_log_level_name"]

"""Command-line entry point."""

from __future__ import annotations

import argparse
from dataclasses import replace

from julialive.api.config import RELOAD_MODES, ViewerConfig
from julialive.api.render import PresentError, ProgramSources, RenderDeviceError
from julialive.runtime.bootstrap import run_viewer
from julialive.runtime.config import load_env_file, load_viewer_config
from julialive.runtime.errors import InitialLoadError, SurfaceInitError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="julialive",
        description="Render a Julia set driven by the pointer, reloading shaders on the fly.",
    )
    parser.add_argument("--env-file", default=".env", help="KEY=VALUE file loaded before reading the environment.")
    parser.add_argument("--shader-dir", help="Directory holding the WGSL sources.")
    parser.add_argument("--vertex", help="Vertex source file name inside the shader directory.")
    parser.add_argument("--fragment", help="Fragment source file name inside the shader directory.")
    parser.add_argument("--width", type=int, help="Initial window width.")
    parser.add_argument("--height", type=int, help="Initial window height.")
    parser.add_argument("--reload-mode", choices=RELOAD_MODES, help="When to attempt a shader reload.")
    parser.add_argument("--log-level", help="Root log level, e.g. DEBUG or INFO.")
    return parser


def config_from_args(args: argparse.Namespace, base: ViewerConfig) -> ViewerConfig:
    """Overlay explicitly given CLI options on an environment-derived config."""
    program = base.program
    sources = program.sources
    if args.vertex or args.fragment:
        sources = ProgramSources(
            vertex=args.vertex or sources.vertex,
            fragment=args.fragment or sources.fragment,
        )
    program = replace(
        program,
        shader_dir=args.shader_dir or program.shader_dir,
        sources=sources,
        reload_mode=args.reload_mode or program.reload_mode,
    )
    window = replace(
        base.window,
        width=max(1, args.width) if args.width else base.window.width,
        height=max(1, args.height) if args.height else base.window.height,
    )
    logging_cfg = base.logging
    if args.log_level:
        logging_cfg = replace(logging_cfg, level_name=str(args.log_level).strip().upper())
    return replace(base, window=window, program=program, logging=logging_cfg)


def main(argv: list[str] | None = None) -> int:
    """Run the viewer; returns a process exit code."""
    args = build_parser().parse_args(argv)
    load_env_file(args.env_file)
    config = config_from_args(args, load_viewer_config())
    try:
        run_viewer(config)
    except InitialLoadError:
        return 2
    except (PresentError, RenderDeviceError):
        return 1
    except SurfaceInitError:
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

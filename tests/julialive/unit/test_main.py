from __future__ import annotations

import pytest

from julialive import main as main_module
from julialive.api.render import PresentError
from julialive.rendering.program_loader import CompileFailedError
from julialive.runtime.config import load_viewer_config
from julialive.runtime.errors import InitialLoadError, SurfaceInitError


def test_cli_options_override_environment_config() -> None:
    args = main_module.build_parser().parse_args(
        [
            "--shader-dir",
            "/tmp/kernels",
            "--fragment",
            "julia_perturbed.frag.wgsl",
            "--width",
            "0",
            "--reload-mode",
            "on_change",
            "--log-level",
            "debug",
        ]
    )
    base = load_viewer_config(env={"JULIALIVE_HEIGHT": "500"})
    config = main_module.config_from_args(args, base)

    assert config.program.shader_dir == "/tmp/kernels"
    assert config.program.sources.vertex == "julia.vert.wgsl"
    assert config.program.sources.fragment == "julia_perturbed.frag.wgsl"
    assert config.program.reload_mode == "on_change"
    # zero is not an explicit size
    assert config.window.width == 1024
    assert config.window.height == 500
    assert config.logging.level_name == "DEBUG"


def test_cli_without_options_keeps_base_config() -> None:
    args = main_module.build_parser().parse_args([])
    base = load_viewer_config(env={})
    assert main_module.config_from_args(args, base) == base


def test_cli_rejects_unknown_reload_mode() -> None:
    with pytest.raises(SystemExit):
        main_module.build_parser().parse_args(["--reload-mode", "sometimes"])


@pytest.mark.parametrize(
    "error,expected",
    [
        (None, 0),
        (InitialLoadError(CompileFailedError("rejected", diagnostics="bad")), 2),
        (PresentError("lost"), 1),
        (SurfaceInitError({"selected_backend": "vulkan", "exception_type": "WgpuInitError"}), 3),
    ],
)
def test_main_maps_outcomes_to_exit_codes(monkeypatch, tmp_path, error, expected) -> None:
    seen = []

    def fake_run_viewer(config):
        seen.append(config)
        if error is not None:
            raise error

    monkeypatch.setattr(main_module, "run_viewer", fake_run_viewer)
    code = main_module.main(["--env-file", str(tmp_path / ".env"), "--width", "320"])

    assert code == expected
    assert seen[0].window.width == 320

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

import pytest

from julialive.api.config import ProgramConfig, ViewerConfig
from julialive.api.input_events import CloseEvent, PointerMovedEvent
from julialive.api.render import PresentError
from julialive.rendering.wgpu_backend import WgpuInitError
from julialive.runtime import bootstrap
from julialive.runtime.errors import InitialLoadError, SurfaceInitError
from julialive.runtime.logging import stop_logging
from tests.julialive.conftest import SOURCES, FakeSurface, ScriptedCompiler, compile_error


class _BootstrapWindow:
    def __init__(self, *batches: tuple[object, ...]) -> None:
        self.canvas = object()
        self.batches = deque(batches)
        self.closed = 0
        self.draw_function = None

    def poll(self) -> tuple[object, ...]:
        return self.batches.popleft() if self.batches else (CloseEvent(),)

    def request_draw(self, draw_function) -> None:
        self.draw_function = draw_function

    def run_loop(self) -> None:
        while not self.closed:
            self.draw_function()

    def close(self) -> None:
        self.closed += 1


class _CompilingSurface(FakeSurface):
    def __init__(self, compiler: ScriptedCompiler) -> None:
        super().__init__(640, 480)
        self._compiler = compiler

    def compiler(self) -> ScriptedCompiler:
        return self._compiler


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    stop_logging()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def shader_dir(tmp_path: Path) -> Path:
    (tmp_path / SOURCES.vertex).write_text("vertex", encoding="utf-8")
    (tmp_path / SOURCES.fragment).write_text("fragment", encoding="utf-8")
    return tmp_path


def _config(shader_dir: Path, reload_mode: str = "always") -> ViewerConfig:
    return ViewerConfig(program=ProgramConfig(shader_dir=str(shader_dir), sources=SOURCES, reload_mode=reload_mode))


def _install_window(monkeypatch, window: _BootstrapWindow) -> None:
    monkeypatch.setattr(bootstrap, "create_rendercanvas_window", lambda **_: window)


def test_run_viewer_draws_until_close(monkeypatch, shader_dir: Path) -> None:
    window = _BootstrapWindow((PointerMovedEvent(320.0, 240.0),), ())
    _install_window(monkeypatch, window)
    compiler = ScriptedCompiler()
    surface = _CompilingSurface(compiler)
    seen_backends: list[tuple[str, ...]] = []

    def factory(canvas, backends):
        assert canvas is window.canvas
        seen_backends.append(backends)
        return surface

    bootstrap.run_viewer(_config(shader_dir), surface_factory=factory)

    assert seen_backends == [("vulkan", "metal", "dx12")]
    assert len(surface.frames) == 3
    assert compiler.compiled[0] == ("vertex", "fragment")
    assert window.closed == 1
    assert compiler.released[-1] == surface.drawn_programs()[-1]


def test_run_viewer_reads_sources_from_shader_dir_on_change(monkeypatch, shader_dir: Path) -> None:
    window = _BootstrapWindow((), ())
    _install_window(monkeypatch, window)
    compiler = ScriptedCompiler()

    bootstrap.run_viewer(
        _config(shader_dir, reload_mode="on_change"),
        surface_factory=lambda canvas, backends: _CompilingSurface(compiler),
    )

    # startup plus the first change check; unchanged files are not recompiled
    assert compiler.attempts == 2


def test_run_viewer_invalid_startup_program_is_fatal(monkeypatch, shader_dir: Path) -> None:
    window = _BootstrapWindow()
    _install_window(monkeypatch, window)
    surface = _CompilingSurface(ScriptedCompiler({1: compile_error("bad")}))

    with pytest.raises(InitialLoadError):
        bootstrap.run_viewer(_config(shader_dir), surface_factory=lambda canvas, backends: surface)

    assert surface.frames == []
    assert window.closed == 1


def test_run_viewer_present_failure_propagates(monkeypatch, shader_dir: Path) -> None:
    window = _BootstrapWindow()
    _install_window(monkeypatch, window)
    surface = _CompilingSurface(ScriptedCompiler())
    surface.present_error = PresentError("surface lost")

    with pytest.raises(PresentError):
        bootstrap.run_viewer(_config(shader_dir), surface_factory=lambda canvas, backends: surface)

    assert len(surface.frames) == 1


def test_surface_init_failure_reports_details(monkeypatch, shader_dir: Path) -> None:
    window = _BootstrapWindow()
    _install_window(monkeypatch, window)

    def factory(canvas, backends):
        raise WgpuInitError("no adapter", details={"adapter": "none"})

    with pytest.raises(SurfaceInitError, match="wgpu_init_failed") as excinfo:
        bootstrap.run_viewer(_config(shader_dir), surface_factory=factory)

    assert excinfo.value.details["adapter"] == "none"
    assert excinfo.value.details["exception_type"] == "WgpuInitError"
    assert isinstance(excinfo.value.__cause__, WgpuInitError)
    assert window.closed == 1

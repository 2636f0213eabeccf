"""WGPU-backed drawing surface and program compiler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from julialive.api.render import (
    Color,
    FrameUniforms,
    PresentError,
    ProgramCompileError,
    QuadGeometry,
    RenderDeviceError,
    RenderProgram,
)

_LOG = logging.getLogger("julialive.rendering.wgpu")

# vec2 screen_to_complex + vec2 c, std140-compatible as four packed f32.
UNIFORM_BUFFER_SIZE = 16
VERTEX_STRIDE = 8


class WgpuInitError(RuntimeError):
    """Backend initialization failure with structured details."""

    def __init__(self, message: str, *, details: dict[str, object]) -> None:
        super().__init__(message)
        self.details = details


@dataclass(frozen=True, slots=True)
class WgpuProgram:
    """Compiled render pipeline for one vertex/fragment pair."""

    pipeline: object
    label: str


@dataclass(frozen=True, slots=True)
class QuadBuffers:
    vertex_buffer: object
    index_buffer: object
    index_count: int


def pack_uniforms(uniforms: FrameUniforms) -> np.ndarray:
    """Pack frame uniforms in the layout the shaders declare."""
    sx, sy = uniforms.screen_to_complex
    cr, ci = uniforms.c
    return np.array([sx, sy, cr, ci], dtype=np.float32)


def quad_vertex_data(geometry: QuadGeometry) -> np.ndarray:
    return np.asarray(geometry.vertices, dtype=np.float32).reshape(-1, 2)


def quad_index_data(geometry: QuadGeometry) -> np.ndarray:
    indices = np.asarray(geometry.indices, dtype=np.uint16)
    if indices.nbytes % 4:
        # Buffer writes must be 4-byte aligned.
        indices = np.concatenate([indices, np.zeros(1, dtype=np.uint16)])
    return indices


class WgpuProgramCompiler:
    """Compile WGSL stage pairs into render pipelines sharing one layout."""

    def __init__(self, device: Any, pipeline_layout: object, color_format: str) -> None:
        self._device = device
        self._pipeline_layout = pipeline_layout
        self._color_format = color_format
        self._compiled = 0

    def compile(self, vertex_source: str, fragment_source: str) -> WgpuProgram:
        label = f"julialive.program.{self._compiled + 1}"
        try:
            vertex_module = self._device.create_shader_module(
                label=f"{label}.vert", code=vertex_source
            )
            fragment_module = self._device.create_shader_module(
                label=f"{label}.frag", code=fragment_source
            )
            pipeline = self._device.create_render_pipeline(
                label=label,
                layout=self._pipeline_layout,
                vertex={
                    "module": vertex_module,
                    "entry_point": "vs_main",
                    "buffers": [
                        {
                            "array_stride": VERTEX_STRIDE,
                            "step_mode": "vertex",
                            "attributes": [
                                {"shader_location": 0, "offset": 0, "format": "float32x2"},
                            ],
                        }
                    ],
                },
                primitive={"topology": "triangle-list", "cull_mode": "none"},
                depth_stencil=None,
                multisample=None,
                fragment={
                    "module": fragment_module,
                    "entry_point": "fs_main",
                    "targets": [{"format": self._color_format}],
                },
            )
        except Exception as exc:
            raise ProgramCompileError(
                f"wgpu_program_compile_failed label={label}",
                diagnostics=str(exc),
            ) from exc
        self._compiled += 1
        return WgpuProgram(pipeline=pipeline, label=label)

    def release(self, program: RenderProgram) -> None:
        # Pipelines have no explicit destroy; dropping the last reference frees them.
        if isinstance(program, WgpuProgram):
            _LOG.debug("program_released label=%s", program.label)


class WgpuFrame:
    """One acquired frame: clear, draw the quad, submit."""

    def __init__(self, *, surface: "WgpuSurface", target_view: object) -> None:
        self._surface = surface
        self._target_view = target_view
        self._encoder: Any = surface.device.create_command_encoder(label="julialive.frame")
        self._clear_color: Color = (0.0, 0.0, 0.0, 1.0)
        self._clear_pending = True

    def clear(self, color: Color) -> None:
        self._clear_color = (float(color[0]), float(color[1]), float(color[2]), float(color[3]))
        self._clear_pending = True

    def draw(self, geometry: QuadGeometry, program: RenderProgram, uniforms: FrameUniforms) -> None:
        if not isinstance(program, WgpuProgram):
            raise RenderDeviceError(f"invalid program binding: {program!r}")
        surface = self._surface
        try:
            buffers = surface.quad_buffers(geometry)
            surface.queue.write_buffer(surface.uniform_buffer, 0, pack_uniforms(uniforms).tobytes())
            render_pass = self._begin_pass()
            render_pass.set_pipeline(program.pipeline)
            render_pass.set_bind_group(0, surface.bind_group)
            render_pass.set_vertex_buffer(0, buffers.vertex_buffer)
            render_pass.set_index_buffer(buffers.index_buffer, "uint16")
            render_pass.draw_indexed(buffers.index_count, 1, 0, 0, 0)
            render_pass.end()
        except RenderDeviceError:
            raise
        except Exception as exc:
            raise RenderDeviceError(
                f"wgpu_draw_failed program={program.label} error={exc.__class__.__name__}: {exc}"
            ) from exc

    def present(self) -> None:
        try:
            if self._clear_pending:
                self._begin_pass().end()
            command_buffer = self._encoder.finish()
            self._surface.queue.submit([command_buffer])
        except Exception as exc:
            raise PresentError(f"wgpu_present_failed error={exc.__class__.__name__}: {exc}") from exc

    def _begin_pass(self) -> Any:
        load_op = "clear" if self._clear_pending else "load"
        self._clear_pending = False
        return self._encoder.begin_render_pass(
            color_attachments=[
                {
                    "view": self._target_view,
                    "resolve_target": None,
                    "clear_value": self._clear_color,
                    "load_op": load_op,
                    "store_op": "store",
                }
            ]
        )


@dataclass(slots=True)
class WgpuSurface:
    """Canvas-backed drawing surface owning device, uniforms and quad buffers."""

    canvas: Any
    backends: tuple[str, ...] = ("vulkan", "metal", "dx12")
    _wgpu: Any = field(default=None, repr=False)
    adapter: Any = field(init=False, default=None, repr=False)
    device: Any = field(init=False, default=None, repr=False)
    queue: Any = field(init=False, default=None, repr=False)
    color_format: str = field(init=False, default="bgra8unorm")
    uniform_buffer: Any = field(init=False, default=None, repr=False)
    bind_group: Any = field(init=False, default=None, repr=False)
    pipeline_layout: Any = field(init=False, default=None, repr=False)
    selected_backend: str = field(init=False, default="unknown")
    _context: Any = field(init=False, default=None, repr=False)
    _quad_cache: dict[QuadGeometry, QuadBuffers] = field(init=False, default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self._wgpu is None:
            try:
                import wgpu
            except Exception as exc:
                raise WgpuInitError(
                    "wgpu dependency unavailable",
                    details={
                        "selected_backend": "unknown",
                        "exception_type": exc.__class__.__name__,
                        "exception_message": str(exc),
                    },
                ) from exc
            self._wgpu = wgpu
        try:
            self.adapter = self._request_adapter()
            self.device = self.adapter.request_device_sync(label="julialive.device")
        except WgpuInitError:
            raise
        except Exception as exc:
            raise WgpuInitError(
                "wgpu backend initialization failed",
                details={
                    "selected_backend": self.selected_backend,
                    "attempted_backends": tuple(self.backends),
                    "exception_type": exc.__class__.__name__,
                    "exception_message": str(exc),
                },
            ) from exc
        self.queue = self.device.queue
        self._context = self.canvas.get_context("wgpu")
        self.color_format = str(self._context.get_preferred_format(self.adapter))
        self._context.configure(device=self.device, format=self.color_format)
        self._setup_bindings()
        _LOG.info(
            "wgpu_surface_ready backend=%s format=%s",
            self.selected_backend,
            self.color_format,
        )

    def compiler(self) -> WgpuProgramCompiler:
        return WgpuProgramCompiler(self.device, self.pipeline_layout, self.color_format)

    def current_dimensions(self) -> tuple[int, int]:
        width, height = self.canvas.get_logical_size()
        return (max(1, int(round(float(width)))), max(1, int(round(float(height)))))

    def begin_frame(self) -> WgpuFrame:
        try:
            target_view = self._context.get_current_texture().create_view()
        except Exception as exc:
            raise RenderDeviceError(
                f"wgpu_acquire_failed error={exc.__class__.__name__}: {exc}"
            ) from exc
        return WgpuFrame(surface=self, target_view=target_view)

    def quad_buffers(self, geometry: QuadGeometry) -> QuadBuffers:
        cached = self._quad_cache.get(geometry)
        if cached is not None:
            return cached
        usage = self._wgpu.BufferUsage
        buffers = QuadBuffers(
            vertex_buffer=self.device.create_buffer_with_data(
                data=quad_vertex_data(geometry).tobytes(), usage=usage.VERTEX
            ),
            index_buffer=self.device.create_buffer_with_data(
                data=quad_index_data(geometry).tobytes(), usage=usage.INDEX
            ),
            index_count=len(geometry.indices),
        )
        self._quad_cache[geometry] = buffers
        return buffers

    def _request_adapter(self) -> Any:
        gpu = getattr(self._wgpu, "gpu", None)
        if gpu is None:
            raise WgpuInitError("wgpu.gpu entrypoint unavailable", details={"selected_backend": "unknown"})
        adapter = None
        for backend_name in self.backends:
            self.selected_backend = str(backend_name)
            try:
                adapter = gpu.request_adapter_sync(
                    power_preference="high-performance",
                    backend=backend_name,
                )
            except TypeError:
                # Backend selection is not part of every wgpu release.
                self.selected_backend = "auto"
                adapter = gpu.request_adapter_sync(power_preference="high-performance")
            if adapter is not None:
                break
        if adapter is None:
            raise WgpuInitError(
                "wgpu adapter request returned None",
                details={
                    "selected_backend": self.selected_backend,
                    "attempted_backends": tuple(self.backends),
                },
            )
        return adapter

    def _setup_bindings(self) -> None:
        wgpu = self._wgpu
        self.uniform_buffer = self.device.create_buffer(
            label="julialive.uniforms",
            size=UNIFORM_BUFFER_SIZE,
            usage=wgpu.BufferUsage.UNIFORM | wgpu.BufferUsage.COPY_DST,
        )
        bind_group_layout = self.device.create_bind_group_layout(
            entries=[
                {
                    "binding": 0,
                    "visibility": wgpu.ShaderStage.VERTEX | wgpu.ShaderStage.FRAGMENT,
                    "buffer": {"type": "uniform"},
                }
            ]
        )
        self.pipeline_layout = self.device.create_pipeline_layout(
            bind_group_layouts=[bind_group_layout]
        )
        self.bind_group = self.device.create_bind_group(
            layout=bind_group_layout,
            entries=[
                {
                    "binding": 0,
                    "resource": {
                        "buffer": self.uniform_buffer,
                        "offset": 0,
                        "size": UNIFORM_BUFFER_SIZE,
                    },
                }
            ],
        )


def create_wgpu_surface(canvas: Any, *, backends: tuple[str, ...]) -> WgpuSurface:
    return WgpuSurface(canvas=canvas, backends=tuple(backends) or ("vulkan", "metal", "dx12"))


__all__ = [
    "QuadBuffers",
    "WgpuFrame",
    "WgpuInitError",
    "WgpuProgram",
    "WgpuProgramCompiler",
    "WgpuSurface",
    "create_wgpu_surface",
    "pack_uniforms",
]

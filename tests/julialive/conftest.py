from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from julialive.api.render import FrameUniforms, ProgramCompileError, ProgramSources, QuadGeometry

SOURCES = ProgramSources(vertex="julia.vert.wgsl", fragment="julia.frag.wgsl")


class MemorySources:
    def __init__(self, texts: dict[str, str] | None = None) -> None:
        self.texts = dict(texts or {SOURCES.vertex: "vert", SOURCES.fragment: "frag"})
        self.reads: list[str] = []

    def read(self, name: str) -> str:
        self.reads.append(name)
        if name not in self.texts:
            raise FileNotFoundError(name)
        return self.texts[name]


class ScriptedCompiler:
    """Returns programs named program-N unless an outcome is scripted for that attempt."""

    def __init__(self, outcomes: dict[int, object] | None = None) -> None:
        self.outcomes = dict(outcomes or {})
        self.attempts = 0
        self.compiled: list[tuple[str, str]] = []
        self.released: list[object] = []

    def compile(self, vertex_source: str, fragment_source: str) -> object:
        self.attempts += 1
        self.compiled.append((vertex_source, fragment_source))
        outcome = self.outcomes.get(self.attempts, f"program-{self.attempts}")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def release(self, program: object) -> None:
        self.released.append(program)


def compile_error(text: str = "error: expected ';'") -> ProgramCompileError:
    return ProgramCompileError("rejected", diagnostics=text)


@dataclass(slots=True)
class FakeFrame:
    ops: list[tuple[str, object]] = field(default_factory=list)
    present_error: BaseException | None = None

    def clear(self, color) -> None:
        self.ops.append(("clear", tuple(color)))

    def draw(self, geometry: QuadGeometry, program: object, uniforms: FrameUniforms) -> None:
        self.ops.append(("draw", (geometry, program, uniforms)))

    def present(self) -> None:
        self.ops.append(("present", None))
        if self.present_error is not None:
            raise self.present_error


class FakeSurface:
    def __init__(self, width: int = 800, height: int = 600) -> None:
        self.dimensions = (width, height)
        self.frames: list[FakeFrame] = []
        self.present_error: BaseException | None = None

    def current_dimensions(self) -> tuple[int, int]:
        return self.dimensions

    def begin_frame(self) -> FakeFrame:
        frame = FakeFrame(present_error=self.present_error)
        self.frames.append(frame)
        return frame

    def drawn_programs(self) -> list[object]:
        return [op[1][1] for frame in self.frames for op in frame.ops if op[0] == "draw"]

    def drawn_uniforms(self) -> list[FrameUniforms]:
        return [op[1][2] for frame in self.frames for op in frame.ops if op[0] == "draw"]


class QueuedEvents:
    def __init__(self, *batches: tuple[object, ...]) -> None:
        self.batches: deque[tuple[object, ...]] = deque(batches)
        self.polls = 0

    def push(self, *events: object) -> None:
        self.batches.append(tuple(events))

    def poll(self) -> tuple[object, ...]:
        self.polls += 1
        if not self.batches:
            return ()
        return self.batches.popleft()

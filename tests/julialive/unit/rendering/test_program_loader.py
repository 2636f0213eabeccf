from __future__ import annotations

from julialive.api.render import ProgramSources
from julialive.rendering.program_loader import (
    CompileFailedError,
    ProgramLoader,
    SourceUnavailableError,
)
from julialive.rendering.sources import FileSourceProvider
from tests.julialive.conftest import SOURCES, MemorySources, ScriptedCompiler, compile_error


def test_load_returns_compiled_program_from_both_sources() -> None:
    sources = MemorySources({SOURCES.vertex: "V", SOURCES.fragment: "F"})
    compiler = ScriptedCompiler()
    result = ProgramLoader(sources, compiler).load(SOURCES)

    assert result.ok
    assert result.program == "program-1"
    assert result.error is None
    assert compiler.compiled == [("V", "F")]


def test_missing_source_is_reported_without_compiling() -> None:
    sources = MemorySources({SOURCES.vertex: "V"})
    compiler = ScriptedCompiler()
    result = ProgramLoader(sources, compiler).load(SOURCES)

    assert not result.ok
    assert result.program is None
    assert isinstance(result.error, SourceUnavailableError)
    assert result.error.name == SOURCES.fragment
    assert compiler.attempts == 0


def test_undecodable_source_is_reported_as_unavailable() -> None:
    class _BinarySources:
        def read(self, name: str) -> str:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    result = ProgramLoader(_BinarySources(), ScriptedCompiler()).load(SOURCES)

    assert isinstance(result.error, SourceUnavailableError)
    assert result.error.name == SOURCES.vertex


def test_compiler_rejection_carries_diagnostics() -> None:
    compiler = ScriptedCompiler({1: compile_error("error: unknown identifier `zz`")})
    result = ProgramLoader(MemorySources(), compiler).load(SOURCES)

    assert isinstance(result.error, CompileFailedError)
    assert "unknown identifier" in result.error.diagnostics
    assert result.program is None


def test_unexpected_compiler_exception_never_escapes() -> None:
    compiler = ScriptedCompiler({1: RuntimeError("device exploded")})
    result = ProgramLoader(MemorySources(), compiler).load(SOURCES)

    assert isinstance(result.error, CompileFailedError)
    assert "device exploded" in result.error.diagnostics


def test_compiler_returning_nothing_is_a_failed_load() -> None:
    compiler = ScriptedCompiler({1: None})
    result = ProgramLoader(MemorySources(), compiler).load(SOURCES)

    assert isinstance(result.error, CompileFailedError)
    assert not result.ok


def test_sources_are_reread_on_every_load() -> None:
    sources = MemorySources()
    loader = ProgramLoader(sources, ScriptedCompiler())
    loader.load(SOURCES)
    sources.texts[SOURCES.fragment] = "edited"
    result = loader.load(SOURCES)

    assert sources.reads == [SOURCES.vertex, SOURCES.fragment] * 2
    assert result.program == "program-2"
    assert loader.compiler.compiled[-1] == ("vert", "edited")


def test_unexpected_provider_exception_is_reported_as_unavailable() -> None:
    class _GlitchingSources:
        def read(self, name: str) -> str:
            raise RuntimeError("provider glitch")

    result = ProgramLoader(_GlitchingSources(), ScriptedCompiler()).load(SOURCES)

    assert isinstance(result.error, SourceUnavailableError)
    assert result.error.name == SOURCES.vertex
    assert "RuntimeError: provider glitch" in result.error.diagnostics


def test_invalid_file_name_does_not_escape_load(tmp_path) -> None:
    (tmp_path / SOURCES.vertex).write_text("vertex", encoding="utf-8")
    compiler = ScriptedCompiler()
    names = ProgramSources(vertex=SOURCES.vertex, fragment="bad\0.wgsl")

    result = ProgramLoader(FileSourceProvider(tmp_path), compiler).load(names)

    assert isinstance(result.error, SourceUnavailableError)
    assert result.error.name == "bad\0.wgsl"
    assert compiler.attempts == 0

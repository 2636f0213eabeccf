"""Program loading boundary: read sources, compile, report without raising."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from julialive.api.render import (
    ProgramCompileError,
    ProgramCompiler,
    ProgramSources,
    RenderProgram,
    SourceProvider,
)

_LOG = logging.getLogger("julialive.rendering.loader")


class ProgramLoadError(RuntimeError):
    """Base class for recoverable program load failures."""

    @property
    def diagnostics(self) -> str:
        return str(self)


class SourceUnavailableError(ProgramLoadError):
    """A named source could not be read."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"source unavailable: {name}: {reason}")
        self.name = name
        self.reason = reason


class CompileFailedError(ProgramLoadError):
    """The compiler rejected the sources."""

    def __init__(self, message: str, *, diagnostics: str = "") -> None:
        super().__init__(message)
        self._diagnostics = diagnostics

    @property
    def diagnostics(self) -> str:
        return self._diagnostics or str(self)


@dataclass(frozen=True, slots=True)
class ProgramLoadResult:
    """Outcome of one load attempt; exactly one of program/error is set."""

    program: RenderProgram | None = None
    error: ProgramLoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.program is not None


class ProgramLoader:
    """Loads a program from named sources through injected collaborators."""

    def __init__(self, sources: SourceProvider, compiler: ProgramCompiler) -> None:
        self._sources = sources
        self._compiler = compiler

    @property
    def compiler(self) -> ProgramCompiler:
        return self._compiler

    def load(self, names: ProgramSources) -> ProgramLoadResult:
        texts: list[str] = []
        for name in names.names():
            try:
                texts.append(self._sources.read(name))
            except SourceUnavailableError as exc:
                return ProgramLoadResult(error=exc)
            except (OSError, UnicodeDecodeError) as exc:
                return ProgramLoadResult(error=SourceUnavailableError(name, str(exc)))
            except Exception as exc:
                _LOG.debug("program_source_unexpected_error name=%s", name, exc_info=True)
                return ProgramLoadResult(
                    error=SourceUnavailableError(name, f"{exc.__class__.__name__}: {exc}")
                )
        vertex_source, fragment_source = texts
        try:
            program = self._compiler.compile(vertex_source, fragment_source)
        except ProgramCompileError as exc:
            return ProgramLoadResult(
                error=CompileFailedError(str(exc), diagnostics=exc.diagnostics)
            )
        except Exception as exc:
            # Compiler backends raise their own error types; none may escape a reload.
            _LOG.debug("program_compile_unexpected_error", exc_info=True)
            return ProgramLoadResult(
                error=CompileFailedError(
                    f"{exc.__class__.__name__}: {exc}",
                    diagnostics=str(exc),
                )
            )
        if program is None:
            return ProgramLoadResult(error=CompileFailedError("compiler returned no program"))
        return ProgramLoadResult(program=program)


__all__ = [
    "CompileFailedError",
    "ProgramLoadError",
    "ProgramLoadResult",
    "ProgramLoader",
    "SourceUnavailableError",
]

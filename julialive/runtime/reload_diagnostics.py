"""Observers notified about hot-reload outcomes."""

from __future__ import annotations

import logging
from typing import Protocol

from julialive.api.render import RenderProgram
from julialive.rendering.program_loader import ProgramLoadError

_LOG = logging.getLogger("julialive.reload")


class ReloadObserver(Protocol):
    def reload_failed(self, error: ProgramLoadError) -> None: ...

    def reload_succeeded(self, program: RenderProgram) -> None: ...


class NullReloadObserver:
    def reload_failed(self, error: ProgramLoadError) -> None:
        _ = error

    def reload_succeeded(self, program: RenderProgram) -> None:
        _ = program


class ReloadDiagnostics:
    """Logs reload failures once per distinct diagnostic and logs recoveries.

    With unconditional per-frame reloads a broken source fails every frame;
    only a change in the diagnostic text is worth a warning.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or _LOG
        self._last_failure: str | None = None
        self.failures_reported = 0

    @property
    def failing(self) -> bool:
        return self._last_failure is not None

    def reload_failed(self, error: ProgramLoadError) -> None:
        text = error.diagnostics
        if text == self._last_failure:
            self._log.debug("program_reload_failed_again kind=%s", error.__class__.__name__)
            return
        self._last_failure = text
        self.failures_reported += 1
        self._log.warning(
            "program_reload_failed kind=%s keeping_previous_program=true\n%s",
            error.__class__.__name__,
            text,
        )

    def reload_succeeded(self, program: RenderProgram) -> None:
        if self._last_failure is None:
            return
        self._last_failure = None
        self._log.info("program_reloaded recovered=true program=%r", program)


__all__ = ["NullReloadObserver", "ReloadDiagnostics", "ReloadObserver"]

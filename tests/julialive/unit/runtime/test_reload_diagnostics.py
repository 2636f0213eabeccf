from __future__ import annotations

import logging

from julialive.rendering.program_loader import CompileFailedError, SourceUnavailableError
from julialive.runtime.reload_diagnostics import ReloadDiagnostics


def test_repeated_failure_is_warned_once(caplog) -> None:
    diagnostics = ReloadDiagnostics()
    error = CompileFailedError("rejected", diagnostics="error: expected ';'")

    with caplog.at_level(logging.DEBUG, logger="julialive.reload"):
        for _ in range(5):
            diagnostics.reload_failed(error)

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "expected ';'" in warnings[0].getMessage()
    assert diagnostics.failures_reported == 1
    assert diagnostics.failing


def test_changed_diagnostic_is_warned_again(caplog) -> None:
    diagnostics = ReloadDiagnostics()
    with caplog.at_level(logging.WARNING, logger="julialive.reload"):
        diagnostics.reload_failed(CompileFailedError("rejected", diagnostics="first"))
        diagnostics.reload_failed(SourceUnavailableError("julia.frag.wgsl", "missing"))

    assert diagnostics.failures_reported == 2
    assert "SourceUnavailableError" in caplog.records[-1].getMessage()


def test_recovery_is_logged_once(caplog) -> None:
    diagnostics = ReloadDiagnostics()
    with caplog.at_level(logging.INFO, logger="julialive.reload"):
        diagnostics.reload_succeeded("program-1")
        diagnostics.reload_failed(CompileFailedError("rejected", diagnostics="boom"))
        diagnostics.reload_succeeded("program-3")
        diagnostics.reload_succeeded("program-4")

    recovered = [record for record in caplog.records if "recovered=true" in record.getMessage()]
    assert len(recovered) == 1
    assert not diagnostics.failing

"""Filesystem program sources and reload triggers."""

from __future__ import annotations

from collections.abc import Callable
from importlib.resources import files
from pathlib import Path
from typing import Protocol

from julialive.api.render import ProgramSources

SourceFingerprint = tuple[int, int]


def default_shader_dir() -> Path:
    """Return the directory holding the packaged WGSL sources."""
    return Path(str(files("julialive.rendering") / "shaders"))


class FileSourceProvider:
    """Reads named sources from one directory, re-reading on every call."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, name: str) -> Path:
        return self._root / name

    def read(self, name: str) -> str:
        return self.path_for(name).read_text(encoding="utf-8")

    def fingerprint(self, name: str) -> SourceFingerprint | None:
        """Return (mtime_ns, size) for a source, or None when it is missing."""
        try:
            stat = self.path_for(name).stat()
        except OSError:
            return None
        return (int(stat.st_mtime_ns), int(stat.st_size))


class ReloadTrigger(Protocol):
    """Decides whether a frame attempts a program reload."""

    def should_reload(self) -> bool:
        """Return True when this frame should attempt a reload."""


class AlwaysReload:
    """Attempt a reload on every frame."""

    def should_reload(self) -> bool:
        return True


class NeverReload:
    """Keep the startup program for the whole run."""

    def should_reload(self) -> bool:
        return False


class SourceChangeTrigger:
    """Fires when any watched source changed since the previous check."""

    def __init__(
        self,
        fingerprint: Callable[[str], SourceFingerprint | None],
        sources: ProgramSources,
    ) -> None:
        self._fingerprint = fingerprint
        self._names = sources.names()
        self._last: tuple[SourceFingerprint | None, ...] | None = None

    def should_reload(self) -> bool:
        current = tuple(self._fingerprint(name) for name in self._names)
        if current == self._last:
            return False
        self._last = current
        return True


def create_reload_trigger(
    mode: str,
    *,
    provider: FileSourceProvider,
    sources: ProgramSources,
) -> ReloadTrigger:
    normalized = mode.strip().lower()
    if normalized == "always":
        return AlwaysReload()
    if normalized in {"on_change", "onchange", "changed"}:
        return SourceChangeTrigger(provider.fingerprint, sources)
    if normalized in {"off", "never", "none"}:
        return NeverReload()
    raise ValueError(f"Unsupported reload mode: {mode!r}")


__all__ = [
    "AlwaysReload",
    "FileSourceProvider",
    "NeverReload",
    "ReloadTrigger",
    "SourceChangeTrigger",
    "create_reload_trigger",
    "default_shader_dir",
]

"""Interactive Julia-set viewer with live shader reload."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from julialive.api.config import ViewerConfig


def run(config: "ViewerConfig | None" = None) -> None:
    """Run the viewer until its window is closed."""
    from julialive.runtime.bootstrap import run_viewer

    run_viewer(config)


__all__ = ["run"]

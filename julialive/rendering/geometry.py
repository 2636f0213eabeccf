"""Viewport-to-complex-plane mapping helpers.

Both directions keep the origin-centered disk of the iterated map in the
middle of the image: the shorter viewport side always spans the fixed range
and the longer side is widened by the aspect ratio.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ViewportDimensions:
    """Viewport size; both sides are at least one unit."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"viewport dimensions must be positive, got {self.width}x{self.height}")

    @classmethod
    def clamped(cls, width: float, height: float) -> "ViewportDimensions":
        """Build dimensions, clamping degenerate sides to 1."""
        return cls(width=max(1, int(width)), height=max(1, int(height)))

    @property
    def aspect(self) -> float:
        return float(self.width) / float(self.height)


@dataclass(frozen=True, slots=True)
class ComplexParameter:
    re: float = 0.0
    im: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (float(self.re), float(self.im))


@dataclass(frozen=True, slots=True)
class GeometryMapping:
    """Per-axis scale from normalized quad corners to the complex plane."""

    scale_x: float
    scale_y: float

    def as_tuple(self) -> tuple[float, float]:
        return (float(self.scale_x), float(self.scale_y))


def screen_to_complex(aspect: float) -> GeometryMapping:
    """Return the quad scale for one aspect ratio."""
    if not math.isfinite(aspect) or aspect <= 0.0:
        raise ValueError(f"aspect must be finite and positive, got {aspect!r}")
    if aspect < 1.0:
        return GeometryMapping(scale_x=2.0, scale_y=2.0 / aspect)
    return GeometryMapping(scale_x=2.0 * aspect, scale_y=2.0)


def mapped_corners(mapping: GeometryMapping) -> tuple[tuple[float, float], ...]:
    """Return the quad corners in complex-plane coordinates."""
    return tuple(
        (corner_x * mapping.scale_x, corner_y * mapping.scale_y)
        for corner_x, corner_y in ((1.0, 1.0), (-1.0, 1.0), (-1.0, -1.0), (1.0, -1.0))
    )


def pointer_to_complex(x: float, y: float, dimensions: ViewportDimensions) -> ComplexParameter:
    """Map a pointer position in viewport units to the complex parameter."""
    aspect = dimensions.aspect
    u = float(x) / float(dimensions.width) - 0.5
    v = float(y) / float(dimensions.height) - 0.5
    if dimensions.width > dimensions.height:
        return ComplexParameter(re=u * 2.0 * aspect, im=v * 2.0)
    return ComplexParameter(re=u * 2.0, im=v * 2.0 / aspect)


def complex_to_pointer(parameter: ComplexParameter, dimensions: ViewportDimensions) -> tuple[float, float]:
    """Inverse of pointer_to_complex for the same viewport."""
    aspect = dimensions.aspect
    if dimensions.width > dimensions.height:
        u = parameter.re / (2.0 * aspect)
        v = parameter.im / 2.0
    else:
        u = parameter.re / 2.0
        v = parameter.im * aspect / 2.0
    return ((u + 0.5) * float(dimensions.width), (v + 0.5) * float(dimensions.height))


__all__ = [
    "ComplexParameter",
    "GeometryMapping",
    "ViewportDimensions",
    "complex_to_pointer",
    "mapped_corners",
    "pointer_to_complex",
    "screen_to_complex",
]

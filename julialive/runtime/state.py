"""Mutable view state owned by the render loop controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from julialive.rendering.geometry import ComplexParameter, ViewportDimensions


@dataclass(slots=True)
class ViewState:
    """Everything a frame reads that input can change."""

    dimensions: ViewportDimensions
    parameter: ComplexParameter = field(default_factory=ComplexParameter)
    close_requested: bool = False

    @classmethod
    def for_viewport(cls, width: float, height: float) -> "ViewState":
        return cls(dimensions=ViewportDimensions.clamped(width, height))

    @property
    def aspect(self) -> float:
        return self.dimensions.aspect


__all__ = ["ViewState"]

"""Renderer-neutral chart descriptions for the two chart modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from keen.client.derivation import DerivedPoint, compact_magnitude, tooltip
from keen.client.selection import ChartMode

PRIMARY = "#3B82F6"
MARGIN = {"top": 18, "right": 12, "left": -20, "bottom": 12}


@dataclass(frozen=True)
class Layer:
    kind: str
    data_key: str = "value"
    style: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ChartSpec:
    mode: ChartMode
    points: Tuple[DerivedPoint, ...]
    layers: Tuple[Layer, ...]
    x_key: str = "year"
    margin: Dict[str, int] = field(default_factory=lambda: dict(MARGIN))
    y_tick_formatter: Callable[[float], str] = compact_magnitude

    @property
    def is_empty(self) -> bool:
        return not self.points

    def tooltip(self, year: str) -> Optional[Dict[str, str]]:
        return tooltip(self.points, year)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "x_key": self.x_key,
            "margin": dict(self.margin),
            "data": [point.to_dict() for point in self.points],
            "layers": [{"kind": layer.kind, "data_key": layer.data_key, "style": dict(layer.style)} for layer in self.layers],
        }


def _area_layers() -> Tuple[Layer, ...]:
    return (
        Layer("area", style={"curve": "monotone", "stroke": PRIMARY, "stroke_width": 3, "fill_opacity": 0.3}),
        Layer("line", style={"curve": "monotone", "stroke": PRIMARY, "stroke_width": 8, "opacity": 0.12, "glow": 4}),
    )


def _composed_layers() -> Tuple[Layer, ...]:
    return (
        Layer("bar", style={"fill": PRIMARY, "fill_opacity": 0.5, "bar_size": 26, "radius": [6, 6, 0, 0]}),
        Layer("line", style={"curve": "monotone", "stroke": "#2563EB", "stroke_width": 3, "glow": 3}),
    )


_LAYERS = {
    ChartMode.AREA: _area_layers,
    ChartMode.COMPOSED: _composed_layers,
}


def build_chart(points: Sequence[DerivedPoint], mode: Union[ChartMode, str] = ChartMode.AREA) -> ChartSpec:
    """Describe ``points`` for the renderer. The mode only picks the layers."""
    mode = ChartMode(mode)
    return ChartSpec(mode=mode, points=tuple(points), layers=_LAYERS[mode]())


__all__ = ["Layer", "ChartSpec", "build_chart"]

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, NamedTuple, Optional, Sequence, Tuple

Record = Mapping[str, Any]
Dataset = Sequence[Record]
Orientation = Literal["vertical", "horizontal"]
GridType = Literal["polygon", "circular"]
PieVariant = Literal["full", "semi"]
FieldKind = Literal["number", "text", "missing", "unsupported"]


class ChartGeometryError(Exception):
    """Base class for errors raised by the geometry engine."""


class InvalidInputError(ChartGeometryError, ValueError):
    """Raised when an input cannot be represented by the requested shape."""


class Vec2(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Domain:
    """Numeric extent ``[min, max]`` with ``max >= min``."""

    min: float
    max: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", float(self.min))
        object.__setattr__(self, "max", float(self.max))
        if self.max < self.min:
            raise InvalidInputError(f"domain max ({self.max}) is below min ({self.min})")

    def __iter__(self):
        yield self.min
        yield self.max

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class AxisSpec:
    key: str
    label: str
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    value: float


@dataclass(frozen=True)
class FieldValue:
    """Tagged result of looking a key up in a record."""

    kind: FieldKind
    raw: Any = None

    @property
    def is_missing(self) -> bool:
        return self.kind == "missing"


@dataclass(frozen=True)
class Zone:
    from_: float
    to: float
    color: str
    label: Optional[str] = None


@dataclass(frozen=True)
class ZoneArc:
    start_angle: float
    end_angle: float
    color: str
    label: Optional[str] = None


@dataclass(frozen=True)
class Series:
    id: str
    name: str
    record: Record
    color: Optional[str] = None


@dataclass(frozen=True)
class StackSegment:
    key: str
    value: float
    x: float
    y: float
    width: float
    height: float
    stack_index: int


@dataclass(frozen=True)
class StackedBar:
    bar_index: int
    label: str
    segments: Tuple[StackSegment, ...]
    positive_total: float
    negative_total: float

    @property
    def total(self) -> float:
        return self.positive_total + self.negative_total


@dataclass(frozen=True)
class StackLayout:
    bars: Tuple[StackedBar, ...]
    baseline: float
    max_abs_value: float
    orientation: Orientation = "vertical"
    # value range covered by the stacking axis: largest positive plus largest negative total
    span: float = 0.0

    @classmethod
    def empty(cls, orientation: Orientation = "vertical") -> "StackLayout":
        return cls(bars=(), baseline=0.0, max_abs_value=0.0, orientation=orientation)

    @property
    def is_empty(self) -> bool:
        return not self.bars


@dataclass(frozen=True)
class BarRect:
    index: int
    label: str
    value: float
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    r2: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class TrendLine:
    regression: RegressionResult
    start: Vec2
    end: Vec2


@dataclass(frozen=True)
class PieSlice:
    index: int
    value: float
    percentage: float
    start_angle: float
    end_angle: float
    mid_angle: float
    path: str


@dataclass(frozen=True)
class GaugeLayout:
    value_angle: float
    track_path: str
    progress_path: str
    zone_arcs: Tuple[ZoneArc, ...]
    zone_paths: Tuple[str, ...]
    min_label: Vec2
    max_label: Vec2
    active_zone: Optional[ZoneArc] = None


@dataclass(frozen=True)
class LabelAnchor:
    x: float
    y: float
    text_anchor: Literal["start", "middle", "end"]
    baseline: Literal["auto", "middle", "hanging"]


@dataclass(frozen=True)
class RadarAxisLayout:
    index: int
    key: str
    label: str
    angle: float
    domain: Domain
    endpoint: Vec2
    label_anchor: LabelAnchor


@dataclass(frozen=True)
class RadarPoint:
    axis_index: int
    raw_value: float
    normalized_value: float
    x: float
    y: float


@dataclass(frozen=True)
class RadarSeriesLayout:
    id: str
    name: str
    color: Optional[str]
    points: Tuple[RadarPoint, ...]
    path: str


@dataclass(frozen=True)
class ScatterPoint:
    index: int
    x_value: float
    y_value: float
    size_value: float
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class ScatterSeriesLayout:
    key: str
    points: Tuple[ScatterPoint, ...]
    trend_line: Optional[TrendLine] = None


@dataclass(frozen=True)
class ScatterLayout:
    series: Tuple[ScatterSeriesLayout, ...]
    x_domain: Domain
    y_domain: Domain
    x_ticks: Tuple[float, ...] = ()
    y_ticks: Tuple[float, ...] = ()


@dataclass(frozen=True)
class LinePoint:
    index: int
    value: Optional[float]
    x: float
    y: float

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class LineSeriesLayout:
    key: str
    points: Tuple[LinePoint, ...]
    line_path: str
    area_path: str = ""
    min_value: float = 0.0
    max_value: float = 0.0


@dataclass(frozen=True)
class LineLayout:
    series: Tuple[LineSeriesLayout, ...]
    domain: Domain
    ticks: Tuple[float, ...] = field(default_factory=tuple)


def is_finite_number(value: object) -> bool:
    """Return ``True`` when *value* is a real, finite number (booleans excluded)."""

    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)  # type: ignore[arg-type]
    except TypeError:
        return False


__all__ = [
    "AxisSpec",
    "BarRect",
    "ChartGeometryError",
    "Dataset",
    "Domain",
    "FieldKind",
    "FieldValue",
    "GaugeLayout",
    "GridType",
    "InvalidInputError",
    "LabelAnchor",
    "LineLayout",
    "LinePoint",
    "LineSeriesLayout",
    "Orientation",
    "PieSlice",
    "PieVariant",
    "Point",
    "RadarAxisLayout",
    "RadarPoint",
    "RadarSeriesLayout",
    "Record",
    "RegressionResult",
    "ScatterLayout",
    "ScatterPoint",
    "ScatterSeriesLayout",
    "Series",
    "StackLayout",
    "StackSegment",
    "StackedBar",
    "TrendLine",
    "Vec2",
    "Zone",
    "ZoneArc",
    "is_finite_number",
]

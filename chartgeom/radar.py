"""Radar (spider) chart geometry.

Angles here are radians measured clockwise from 12 o'clock: axis ``i`` of
``n`` sits at ``2*pi*i/n`` and is converted to screen space with a
``-pi/2`` offset.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from .coercion import coerce_number
from .config import GeometryConfig, resolve_config
from .diagnostics import DiagnosticSink
from .logging_utils import apply_debug_logging
from .paths import arc_to, fmt, join, move_to
from .scales import axis_bounds, normalize
from .types import (
    AxisSpec,
    GridType,
    LabelAnchor,
    RadarAxisLayout,
    RadarPoint,
    RadarSeriesLayout,
    Series,
    Vec2,
)

logger = logging.getLogger(__name__)

_TAU = 2.0 * math.pi


def axis_angle(index: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return _TAU * index / total


def radar_point(cx: float, cy: float, radius: float, angle: float) -> Vec2:
    adjusted = angle - math.pi / 2.0
    return Vec2(cx + radius * math.cos(adjusted), cy + radius * math.sin(adjusted))


def polygon_path(points: Sequence[Vec2], *, config: Optional[GeometryConfig] = None) -> str:
    """Closed polygon through *points*, degrading gracefully for short inputs.

    No points give ``""``, one point a small circle marker, two points an
    open line.
    """

    cfg = resolve_config(config)
    digits = cfg.radar_precision

    def coord(point: Vec2) -> str:
        return f"{fmt(point[0], digits, trim=False)} {fmt(point[1], digits, trim=False)}"

    if not points:
        return ""
    first = points[0]
    if len(points) == 1:
        r = cfg.marker_radius
        return (
            f"M {coord(first)} m {fmt(-r)} 0 "
            f"a {fmt(r)} {fmt(r)} 0 1 0 {fmt(2 * r)} 0 "
            f"a {fmt(r)} {fmt(r)} 0 1 0 {fmt(-2 * r)} 0"
        )
    if len(points) == 2:
        return f"M {coord(first)} L {coord(points[1])}"
    parts = [f"M {coord(first)}"]
    parts.extend(f"L {coord(point)}" for point in points[1:])
    parts.append("Z")
    return " ".join(parts)


def circular_grid_path(cx: float, cy: float, radius: float) -> str:
    if radius <= 0:
        return ""
    return join(
        [
            move_to(cx - radius, cy),
            arc_to(radius, radius, 1, 1, cx + radius, cy),
            arc_to(radius, radius, 1, 1, cx - radius, cy),
        ]
    )


def grid_ring_path(
    cx: float,
    cy: float,
    radius: float,
    sides: int,
    grid_type: GridType = "polygon",
    *,
    config: Optional[GeometryConfig] = None,
) -> str:
    """One concentric grid ring: a regular ``sides``-gon or a circle."""

    if grid_type == "circular":
        return circular_grid_path(cx, cy, radius)
    if radius <= 0 or sides < 3:
        return ""
    vertices = [radar_point(cx, cy, radius, axis_angle(i, sides)) for i in range(sides)]
    return polygon_path(vertices, config=config)


def radar_grid(
    cx: float,
    cy: float,
    radius: float,
    levels: int,
    sides: int,
    grid_type: GridType = "polygon",
    *,
    config: Optional[GeometryConfig] = None,
) -> List[str]:
    if radius <= 0 or levels <= 0:
        return []
    return [
        grid_ring_path(cx, cy, radius * (level + 1) / levels, sides, grid_type, config=config)
        for level in range(levels)
    ]


def label_anchor(
    angle: float,
    cx: float,
    cy: float,
    radius: float,
    offset: float,
    *,
    config: Optional[GeometryConfig] = None,
) -> LabelAnchor:
    """Place an axis label ``offset`` beyond *radius* and pick its alignment.

    Labels within the dead zone of 12 and 6 o'clock are centred; the top label
    sits above its anchor and the bottom one hangs below it.
    """

    dead = resolve_config(config).label_dead_zone
    x, y = radar_point(cx, cy, radius + offset, angle)
    theta = angle % _TAU

    if dead < theta < math.pi - dead:
        text_anchor = "start"
    elif math.pi + dead < theta < _TAU - dead:
        text_anchor = "end"
    else:
        text_anchor = "middle"

    if theta < dead or theta > _TAU - dead:
        baseline = "auto"
    elif math.pi - dead < theta < math.pi + dead:
        baseline = "hanging"
    else:
        baseline = "middle"

    return LabelAnchor(x=x, y=y, text_anchor=text_anchor, baseline=baseline)


def point_in_polygon(point: Vec2, polygon: Sequence[Vec2]) -> bool:
    """Even-odd ray casting test."""

    if len(polygon) < 3:
        return False
    x, y = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def polygon_centroid(points: Sequence[Vec2]) -> Vec2:
    """Vertex average, used to anchor tooltips."""

    if not points:
        return Vec2(0.0, 0.0)
    mean = np.asarray(points, dtype=float).mean(axis=0)
    return Vec2(float(mean[0]), float(mean[1]))


def radar_axes(
    axes: Sequence[AxisSpec],
    series: Sequence[Series],
    cx: float,
    cy: float,
    radius: float,
    label_offset: float,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
    config: Optional[GeometryConfig] = None,
) -> List[RadarAxisLayout]:
    if not axes or radius <= 0:
        return []
    layouts: List[RadarAxisLayout] = []
    for index, axis in enumerate(axes):
        angle = axis_angle(index, len(axes))
        values = [coerce_number(s.record, axis.key, diagnostics) for s in series]
        layouts.append(
            RadarAxisLayout(
                index=index,
                key=axis.key,
                label=axis.label,
                angle=angle,
                domain=axis_bounds(axis, values, config=config),
                endpoint=radar_point(cx, cy, radius, angle),
                label_anchor=label_anchor(angle, cx, cy, radius, label_offset, config=config),
            )
        )
    return layouts


def radar_series(
    series: Sequence[Series],
    axis_layouts: Sequence[RadarAxisLayout],
    cx: float,
    cy: float,
    radius: float,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
    config: Optional[GeometryConfig] = None,
) -> List[RadarSeriesLayout]:
    """One polygon per series, vertices scaled per axis domain."""

    if not series or not axis_layouts or radius <= 0:
        return []
    layouts: List[RadarSeriesLayout] = []
    for entry in series:
        points = []
        for axis in axis_layouts:
            raw = coerce_number(entry.record, axis.key, diagnostics)
            fraction = normalize(raw, axis.domain.min, axis.domain.max)
            x, y = radar_point(cx, cy, radius * fraction, axis.angle)
            points.append(RadarPoint(axis_index=axis.index, raw_value=raw, normalized_value=fraction, x=x, y=y))
        path = polygon_path([Vec2(p.x, p.y) for p in points], config=config)
        layouts.append(
            RadarSeriesLayout(id=entry.id, name=entry.name, color=entry.color, points=tuple(points), path=path)
        )
    logger.info("Radar layout: %d series on %d axes", len(layouts), len(axis_layouts))
    return layouts


apply_debug_logging(globals(), logger=logger, skip=["axis_angle", "radar_point", "point_in_polygon"])


__all__ = [
    "axis_angle",
    "circular_grid_path",
    "grid_ring_path",
    "label_anchor",
    "point_in_polygon",
    "polygon_centroid",
    "polygon_path",
    "radar_axes",
    "radar_grid",
    "radar_point",
    "radar_series",
]

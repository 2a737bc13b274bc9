"""Polar geometry: pie, donut, semi-circle and gauge arcs."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .config import GeometryConfig, resolve_config
from .logging_utils import apply_debug_logging
from .paths import arc_to, join, line_to, move_to
from .types import GaugeLayout, InvalidInputError, PieSlice, PieVariant, Vec2, Zone, ZoneArc

logger = logging.getLogger(__name__)

FULL_START_ANGLE = -90.0
SEMI_START_ANGLE = 180.0
# gauge markers stop just short of their end angle so adjacent arcs do not overlap
_GAUGE_END_TRIM = 0.01


def polar_to_cartesian(cx: float, cy: float, radius: float, angle_degrees: float) -> Vec2:
    """Point at *angle_degrees* on the circle of *radius* around ``(cx, cy)``.

    0 degrees points right and angles grow clockwise on screen (y down).
    """

    rad = math.radians(angle_degrees)
    return Vec2(cx + radius * math.cos(rad), cy + radius * math.sin(rad))


def _check_radii(outer: float, inner: float) -> None:
    if outer < 0 or inner < 0:
        raise InvalidInputError(f"radii must be non-negative (outer={outer}, inner={inner})")
    if inner > outer:
        raise InvalidInputError(f"inner radius {inner} exceeds outer radius {outer}")


def _wedge(
    cx: float,
    cy: float,
    outer: float,
    inner: float,
    start: float,
    end: float,
    bound: float,
    cfg: GeometryConfig,
) -> str:
    _check_radii(outer, inner)
    sweep = end - start
    if outer == 0 or not math.isfinite(sweep) or sweep <= 0:
        return ""
    if sweep > bound:
        end = start + bound
        sweep = bound

    if sweep >= bound - cfg.full_circle_epsilon:
        # start and end coincide on the circle, so draw two halves through the midpoint
        mid = start + bound / 2.0
        trimmed = start + bound - cfg.arc_epsilon
        outer_start = polar_to_cartesian(cx, cy, outer, start)
        outer_mid = polar_to_cartesian(cx, cy, outer, mid)
        outer_end = polar_to_cartesian(cx, cy, outer, trimmed)
        if inner > 0:
            inner_start = polar_to_cartesian(cx, cy, inner, start)
            inner_mid = polar_to_cartesian(cx, cy, inner, mid)
            inner_end = polar_to_cartesian(cx, cy, inner, trimmed)
            return join(
                [
                    move_to(*outer_start),
                    arc_to(outer, outer, 0, 1, *outer_mid),
                    arc_to(outer, outer, 0, 1, *outer_end),
                    line_to(*inner_end),
                    arc_to(inner, inner, 0, 0, *inner_mid),
                    arc_to(inner, inner, 0, 0, *inner_start),
                    "Z",
                ]
            )
        return join(
            [
                move_to(cx, cy),
                line_to(*outer_start),
                arc_to(outer, outer, 0, 1, *outer_mid),
                arc_to(outer, outer, 0, 1, *outer_end),
                "Z",
            ]
        )

    large_arc = 1 if sweep > 180.0 else 0
    outer_start = polar_to_cartesian(cx, cy, outer, start)
    outer_end = polar_to_cartesian(cx, cy, outer, end)
    if inner > 0:
        inner_start = polar_to_cartesian(cx, cy, inner, start)
        inner_end = polar_to_cartesian(cx, cy, inner, end)
        return join(
            [
                move_to(*outer_start),
                arc_to(outer, outer, large_arc, 1, *outer_end),
                line_to(*inner_end),
                arc_to(inner, inner, large_arc, 0, *inner_start),
                "Z",
            ]
        )
    return join(
        [
            move_to(cx, cy),
            line_to(*outer_start),
            arc_to(outer, outer, large_arc, 1, *outer_end),
            "Z",
        ]
    )


def describe_arc(
    cx: float,
    cy: float,
    outer_radius: float,
    inner_radius: float,
    start_angle: float,
    end_angle: float,
    *,
    config: Optional[GeometryConfig] = None,
) -> str:
    """Closed pie (``inner_radius == 0``) or donut wedge between two angles in degrees."""

    return _wedge(cx, cy, outer_radius, inner_radius, start_angle, end_angle, 360.0, resolve_config(config))


def describe_semi_arc(
    cx: float,
    cy: float,
    outer_radius: float,
    inner_radius: float,
    start_angle: float,
    end_angle: float,
    *,
    config: Optional[GeometryConfig] = None,
) -> str:
    """Wedge of a half-circle chart: sweeps are capped at 180 degrees."""

    return _wedge(cx, cy, outer_radius, inner_radius, start_angle, end_angle, 180.0, resolve_config(config))


def describe_stroke_arc(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    *,
    config: Optional[GeometryConfig] = None,
) -> str:
    """Open arc meant to be stroked, used for gauge tracks and zones."""

    cfg = resolve_config(config)
    span = min(end_angle - start_angle, cfg.stroke_arc_max_span)
    if radius <= 0 or not math.isfinite(span) or span <= 0:
        return ""
    clamped_end = start_angle + span
    start = polar_to_cartesian(cx, cy, radius, start_angle)
    end = polar_to_cartesian(cx, cy, radius, clamped_end)
    large_arc = 1 if span > 180.0 else 0
    return join([move_to(*start), arc_to(radius, radius, large_arc, 1, *end)])


def value_to_angle(
    value: float,
    min_value: float,
    max_value: float,
    *,
    config: Optional[GeometryConfig] = None,
) -> float:
    """Gauge angle of *value*: ``135 + fraction * 270`` with *value* clamped to the dial."""

    cfg = resolve_config(config)
    if min_value > max_value:
        raise InvalidInputError(f"gauge min ({min_value}) must not exceed max ({max_value})")
    if min_value == max_value:
        return cfg.gauge_start_angle
    clamped = min(max(value, min_value), max_value)
    fraction = (clamped - min_value) / (max_value - min_value)
    return cfg.gauge_start_angle + fraction * cfg.gauge_sweep


def zone_arcs(
    zones: Sequence[Zone],
    min_value: float,
    max_value: float,
    *,
    config: Optional[GeometryConfig] = None,
) -> List[ZoneArc]:
    """Angle bounds for each gauge zone, in the order given."""

    return [
        ZoneArc(
            start_angle=value_to_angle(zone.from_, min_value, max_value, config=config),
            end_angle=value_to_angle(zone.to, min_value, max_value, config=config),
            color=zone.color,
            label=zone.label,
        )
        for zone in zones
    ]


def _slice_frame(variant: PieVariant) -> Tuple[float, float]:
    if variant == "semi":
        return SEMI_START_ANGLE, 180.0
    if variant == "full":
        return FULL_START_ANGLE, 360.0
    raise InvalidInputError(f"unknown pie variant {variant!r}")


def pie_slices(
    values: Sequence[float],
    cx: float,
    cy: float,
    outer_radius: float,
    inner_radius: float = 0.0,
    *,
    variant: PieVariant = "full",
    config: Optional[GeometryConfig] = None,
) -> List[PieSlice]:
    """Slice angles and wedge paths for *values*.

    A full pie starts at 12 o'clock and sweeps 360 degrees; the semi variant
    covers the upper half from 9 to 3 o'clock. Negative values cannot be
    shown as proportions and raise :class:`InvalidInputError`.
    """

    numbers = [float(v) for v in values]
    for index, value in enumerate(numbers):
        if not math.isfinite(value):
            raise InvalidInputError(f"slice {index} has non-finite value {value}")
        if value < 0:
            raise InvalidInputError(f"pie charts cannot display negative values (slice {index} = {value})")

    total = math.fsum(numbers)
    if total <= 0:
        return []

    start_offset, total_angle = _slice_frame(variant)
    builder = describe_semi_arc if variant == "semi" else describe_arc
    slices: List[PieSlice] = []
    current = start_offset
    running = 0.0
    for index, value in enumerate(numbers):
        running += value
        start = current
        if index == len(numbers) - 1:
            end = start_offset + total_angle
        else:
            end = start_offset + (running / total) * total_angle
        current = end
        slices.append(
            PieSlice(
                index=index,
                value=value,
                percentage=value / total * 100.0,
                start_angle=start,
                end_angle=end,
                mid_angle=start + (end - start) / 2.0,
                path=builder(cx, cy, outer_radius, inner_radius, start, end, config=config),
            )
        )
    logger.info("Pie layout: %d slices, total=%s, variant=%s", len(slices), total, variant)
    return slices


def gauge_layout(
    value: float,
    min_value: float,
    max_value: float,
    cx: float,
    cy: float,
    radius: float,
    stroke_width: float,
    zones: Sequence[Zone] = (),
    *,
    config: Optional[GeometryConfig] = None,
) -> GaugeLayout:
    """Track, progress and zone arcs of a 270 degree gauge.

    Arcs are drawn on the stroke centre line, ``radius - stroke_width / 2``.
    """

    cfg = resolve_config(config)
    clamped = min(max(value, min_value), max_value) if min_value <= max_value else value
    value_angle = value_to_angle(clamped, min_value, max_value, config=cfg)
    arcs = tuple(zone_arcs(zones, min_value, max_value, config=cfg))
    active = next((arc for arc in reversed(arcs) if value_angle >= arc.start_angle), None)

    mid_radius = radius - stroke_width / 2.0
    if mid_radius <= 0:
        return GaugeLayout(
            value_angle=value_angle,
            track_path="",
            progress_path="",
            zone_arcs=arcs,
            zone_paths=tuple("" for _ in arcs),
            min_label=Vec2(0.0, 0.0),
            max_label=Vec2(0.0, 0.0),
            active_zone=active,
        )

    start = cfg.gauge_start_angle
    end = cfg.gauge_end_angle
    zone_paths = tuple(
        describe_stroke_arc(cx, cy, mid_radius, arc.start_angle, arc.end_angle - _GAUGE_END_TRIM, config=cfg)
        for arc in arcs
    )
    progress = (
        describe_stroke_arc(cx, cy, mid_radius, start, value_angle, config=cfg) if clamped > min_value else ""
    )
    label_radius = mid_radius + stroke_width * 0.8
    return GaugeLayout(
        value_angle=value_angle,
        track_path=describe_stroke_arc(cx, cy, mid_radius, start, end - _GAUGE_END_TRIM, config=cfg),
        progress_path=progress,
        zone_arcs=arcs,
        zone_paths=zone_paths,
        min_label=polar_to_cartesian(cx, cy, label_radius, start),
        max_label=polar_to_cartesian(cx, cy, label_radius, end),
        active_zone=active,
    )


apply_debug_logging(globals(), logger=logger, skip=["polar_to_cartesian"])


__all__ = [
    "FULL_START_ANGLE",
    "SEMI_START_ANGLE",
    "describe_arc",
    "describe_semi_arc",
    "describe_stroke_arc",
    "gauge_layout",
    "pie_slices",
    "polar_to_cartesian",
    "value_to_angle",
    "zone_arcs",
]

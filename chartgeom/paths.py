"""Path string writer and line/area chart geometry."""

from __future__ import annotations

import logging
from typing import Iterable, List, Literal, Optional, Sequence, Tuple, Union

from .coercion import coerce_optional_number
from .config import GeometryConfig, resolve_config
from .diagnostics import DiagnosticSink
from .logging_utils import apply_debug_logging
from .scales import linear_scale, nice_ticks, tick_domain
from .types import Dataset, Domain, LineLayout, LinePoint, LineSeriesLayout, Vec2

logger = logging.getLogger(__name__)

Curve = Literal["linear", "monotone"]
PathPoint = Union[Vec2, LinePoint]

# fraction of the horizontal gap used for bezier handles
_HANDLE = 0.3


def fmt(value: float, precision: Optional[int] = None, *, trim: bool = True) -> str:
    """Render a coordinate for a path string.

    With ``trim`` trailing zeros are dropped (``12.5000`` -> ``12.5``);
    negative zero is always written as ``0``.
    """

    if precision is None:
        precision = resolve_config(None).path_precision
    text = f"{value:.{precision}f}"
    if trim and "." in text:
        text = text.rstrip("0").rstrip(".")
    if text.lstrip("-").strip("0.") == "":
        text = text.lstrip("-")
        if trim:
            text = "0"
    return text


def move_to(x: float, y: float, precision: Optional[int] = None) -> str:
    return f"M {fmt(x, precision)} {fmt(y, precision)}"


def line_to(x: float, y: float, precision: Optional[int] = None) -> str:
    return f"L {fmt(x, precision)} {fmt(y, precision)}"


def arc_to(
    rx: float,
    ry: float,
    large_arc: int,
    sweep: int,
    x: float,
    y: float,
    precision: Optional[int] = None,
) -> str:
    return f"A {fmt(rx, precision)} {fmt(ry, precision)} 0 {large_arc} {sweep} {fmt(x, precision)} {fmt(y, precision)}"


def join(commands: Iterable[str]) -> str:
    return " ".join(command for command in commands if command)


def _segments(points: Sequence[PathPoint], connect_nulls: bool) -> List[List[Vec2]]:
    runs: List[List[Vec2]] = [[]]
    for point in points:
        if isinstance(point, LinePoint) and not point.has_value:
            if not connect_nulls and runs[-1]:
                runs.append([])
            continue
        runs[-1].append(Vec2(point.x, point.y))
    return [run for run in runs if run]


def _monotone(run: Sequence[Vec2], precision: Optional[int]) -> List[str]:
    commands = [move_to(run[0].x, run[0].y, precision)]
    for i in range(1, len(run)):
        prev, curr = run[i - 1], run[i]
        nxt = run[i + 1] if i + 1 < len(run) else None
        dx = curr.x - prev.x
        cp1y, cp2y = prev.y, curr.y
        if nxt is not None and dx != 0 and nxt.x != curr.x:
            slope1 = (curr.y - prev.y) / dx
            slope2 = (nxt.y - curr.y) / (nxt.x - curr.x)
            average = (slope1 + slope2) / 2.0
            cp1y = prev.y + dx * _HANDLE * average
            cp2y = curr.y - dx * _HANDLE * average
        commands.append(
            f"C {fmt(prev.x + dx * _HANDLE, precision)} {fmt(cp1y, precision)}, "
            f"{fmt(curr.x - dx * _HANDLE, precision)} {fmt(cp2y, precision)}, "
            f"{fmt(curr.x, precision)} {fmt(curr.y, precision)}"
        )
    return commands


def line_path(
    points: Sequence[PathPoint],
    curve: Curve = "linear",
    *,
    connect_nulls: bool = True,
    precision: Optional[int] = None,
) -> str:
    """Polyline (or monotone cubic) through *points*.

    Points without a value are skipped; with ``connect_nulls=False`` they
    break the line into separate subpaths instead of being bridged.
    """

    commands: List[str] = []
    for run in _segments(points, connect_nulls):
        if curve == "monotone" and len(run) >= 2:
            commands.extend(_monotone(run, precision))
            continue
        commands.append(move_to(run[0].x, run[0].y, precision))
        commands.extend(line_to(p.x, p.y, precision) for p in run[1:])
    return join(commands)


def area_path(
    points: Sequence[PathPoint],
    baseline: float,
    curve: Curve = "linear",
    *,
    precision: Optional[int] = None,
) -> str:
    """Closed area between the line through *points* and the ``y = baseline`` edge."""

    runs = _segments(points, connect_nulls=True)
    if not runs:
        return ""
    run = runs[0]
    line = line_path(run, curve, precision=precision)
    return join([line, line_to(run[-1].x, baseline, precision), line_to(run[0].x, baseline, precision), "Z"])


def _line_domain(values: Sequence[float]) -> Tuple[Domain, List[float]]:
    lower, upper = min(values), max(values)
    if lower == upper:
        ticks = [] if lower == 0 else [lower]
    else:
        ticks = nice_ticks(lower, upper)
    return tick_domain(ticks, Domain(lower, upper)), ticks


def line_layout(
    records: Dataset,
    y_keys: Sequence[str],
    width: float,
    height: float,
    *,
    curve: Curve = "linear",
    connect_nulls: bool = True,
    show_area: bool = False,
    diagnostics: Optional[DiagnosticSink] = None,
    config: Optional[GeometryConfig] = None,
) -> LineLayout:
    """Lay out one line per key in *y_keys* on a shared nice-tick domain."""

    rows = tuple(records)
    keys = tuple(y_keys)
    empty = LineLayout(series=(), domain=Domain(0.0, 1.0))
    if not rows or not keys or width <= 0 or height <= 0:
        return empty

    cfg = resolve_config(config)
    table = [[coerce_optional_number(row, key, diagnostics) for row in rows] for key in keys]
    present = [v for column in table for v in column if v is not None]
    if not present:
        return empty

    domain, ticks = _line_domain(present)
    count = len(rows)
    series: List[LineSeriesLayout] = []
    for key, column in zip(keys, table):
        valid = [v for v in column if v is not None]
        if not valid:
            continue
        points = tuple(
            LinePoint(
                index=index,
                value=value,
                x=(index / (count - 1)) * width if count > 1 else width / 2.0,
                y=linear_scale(value, domain, (height, 0.0)) if value is not None else height,
            )
            for index, value in enumerate(column)
        )
        line = line_path(points, curve, connect_nulls=connect_nulls, precision=cfg.path_precision)
        area = area_path(points, height, curve, precision=cfg.path_precision) if show_area else ""
        series.append(
            LineSeriesLayout(
                key=key,
                points=points,
                line_path=line,
                area_path=area,
                min_value=min(valid),
                max_value=max(valid),
            )
        )

    logger.info("Line layout: %d series over %d records, domain=(%s, %s)", len(series), count, domain.min, domain.max)
    return LineLayout(series=tuple(series), domain=domain, ticks=tuple(ticks))


apply_debug_logging(
    globals(),
    logger=logger,
    skip=["fmt", "move_to", "line_to", "arc_to", "join"],
)


__all__ = [
    "Curve",
    "arc_to",
    "area_path",
    "fmt",
    "join",
    "line_layout",
    "line_path",
    "line_to",
    "move_to",
]

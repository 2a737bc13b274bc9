"""Stacked and simple bar layouts on a single shared value scale."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .coercion import coerce_number
from .config import GeometryConfig, resolve_config
from .diagnostics import NON_FINITE_AGGREGATE, DiagnosticSink, emit
from .logging_utils import apply_debug_logging
from .scales import nice_ticks
from .types import BarRect, Dataset, InvalidInputError, Orientation, Record, StackedBar, StackLayout, StackSegment

logger = logging.getLogger(__name__)

_ORIENTATIONS = ("vertical", "horizontal")


@dataclass(frozen=True)
class _Frame:
    """Chart area seen along the stacking axis (``length``) and across it (``cross``)."""

    vertical: bool
    length: float
    cross: float
    bar_size: float
    thickness: float

    @property
    def gap(self) -> float:
        return self.bar_size - self.thickness

    def rect(self, bar_index: int, start: float, end: float) -> Tuple[float, float, float, float]:
        """``(x, y, width, height)`` of the span ``[start, end]`` measured from the negative end."""

        across = bar_index * self.bar_size + self.gap / 2.0
        extent = end - start
        if self.vertical:
            return across, self.length - end, self.thickness, extent
        return start, across, extent, self.thickness


def _check_orientation(orientation: str) -> None:
    if orientation not in _ORIENTATIONS:
        raise InvalidInputError(f"orientation must be one of {_ORIENTATIONS}, got {orientation!r}")


def _frame(width: float, height: float, bars: int, orientation: Orientation, cfg: GeometryConfig) -> _Frame:
    vertical = orientation == "vertical"
    length = height if vertical else width
    cross = width if vertical else height
    bar_size = cross / bars
    return _Frame(vertical, length, cross, bar_size, bar_size * cfg.bar_fill_ratio)


def _label(row: Record, label_key: Optional[str], index: int) -> str:
    if label_key is None:
        return str(index)
    return str(row.get(label_key, index)) if hasattr(row, "get") else str(index)


def _clamp(value: float, length: float) -> float:
    return min(max(value, 0.0), length)


def stack_layout(
    records: Dataset,
    keys: Sequence[str],
    width: float,
    height: float,
    orientation: Orientation = "vertical",
    *,
    label_key: Optional[str] = None,
    diagnostics: Optional[DiagnosticSink] = None,
    config: Optional[GeometryConfig] = None,
) -> StackLayout:
    """Lay out one stacked bar per record with a scale shared by every bar.

    Positive values stack outward from the zero baseline in key order and
    negative values stack the other way. The scale spans the largest positive
    total plus the largest negative total over *all* bars, so bar lengths stay
    comparable across the chart. Vertical bars grow upward, horizontal bars
    grow rightward.

    An empty layout is returned when there is nothing to draw, or when a bar
    total is not finite (reported as ``non_finite_aggregate``).
    """

    _check_orientation(orientation)
    rows = tuple(records)
    stack_keys = tuple(keys)
    if not rows or not stack_keys or width <= 0 or height <= 0:
        return StackLayout.empty(orientation)

    cfg = resolve_config(config)
    values = np.array(
        [[coerce_number(row, key, diagnostics) for key in stack_keys] for row in rows],
        dtype=float,
    )
    with np.errstate(over="ignore", invalid="ignore"):
        positive = np.where(values >= 0, values, 0.0).sum(axis=1)
        negative = np.where(values < 0, values, 0.0).sum(axis=1)
        span = float(positive.max(initial=0.0)) - float(negative.min(initial=0.0))

    if not (np.all(np.isfinite(positive)) and np.all(np.isfinite(negative)) and np.isfinite(span)):
        bad = [int(i) for i in np.flatnonzero(~(np.isfinite(positive) & np.isfinite(negative)))]
        emit(
            diagnostics,
            NON_FINITE_AGGREGATE,
            None,
            bad,
            f"Stacked totals are not finite for bars {bad or 'combined'}; layout aborted",
        )
        logger.warning("Aborting stacked layout: non-finite totals for bars %s", bad)
        return StackLayout.empty(orientation)

    global_positive = max(float(positive.max()), 0.0)
    global_negative = min(float(negative.min()), 0.0)
    max_abs = max(global_positive, abs(global_negative))

    frame = _frame(width, height, len(rows), orientation, cfg)
    length = frame.length
    base = length * abs(global_negative) / span if span > 0 else 0.0

    bars: List[StackedBar] = []
    for bar_index, row in enumerate(rows):
        segments: List[StackSegment] = []
        up = base
        down = base
        for stack_index, key in enumerate(stack_keys):
            value = float(values[bar_index, stack_index])
            extent = abs(value) / span * length if span > 0 else 0.0
            if value >= 0:
                start, end = _clamp(up, length), _clamp(up + extent, length)
                up += extent
            else:
                start, end = _clamp(down - extent, length), _clamp(down, length)
                down -= extent
            x, y, w, h = frame.rect(bar_index, start, end)
            segments.append(
                StackSegment(key=key, value=value, x=x, y=y, width=w, height=h, stack_index=stack_index)
            )
        bars.append(
            StackedBar(
                bar_index=bar_index,
                label=_label(row, label_key, bar_index),
                segments=tuple(segments),
                positive_total=float(positive[bar_index]),
                negative_total=float(negative[bar_index]),
            )
        )

    baseline = length - base if frame.vertical else base
    logger.info(
        "Stacked layout: %d bars x %d keys, max_abs=%s, baseline=%s (%s)",
        len(bars),
        len(stack_keys),
        max_abs,
        baseline,
        orientation,
    )
    return StackLayout(
        bars=tuple(bars),
        baseline=baseline,
        max_abs_value=max_abs,
        orientation=orientation,
        span=span,
    )


def segment_contribution(layout: StackLayout, segment: StackSegment, length: float) -> float:
    """Signed value represented by *segment*, recovered from its position.

    ``length`` is the size in pixels of the stacking axis.
    """

    if length <= 0:
        return 0.0
    if layout.orientation == "vertical":
        extent = segment.height
        positive = segment.y + segment.height <= layout.baseline + 1e-9
    else:
        extent = segment.width
        positive = segment.x >= layout.baseline - 1e-9
    magnitude = extent / length * layout.span
    return magnitude if positive else -magnitude


def bar_layout(
    records: Dataset,
    key: str,
    width: float,
    height: float,
    orientation: Orientation = "vertical",
    *,
    label_key: Optional[str] = None,
    diagnostics: Optional[DiagnosticSink] = None,
    config: Optional[GeometryConfig] = None,
) -> List[BarRect]:
    """Single-series bars measured from zero against the top nice tick.

    Negative values are drawn with zero length.
    """

    _check_orientation(orientation)
    rows = tuple(records)
    if not rows or width <= 0 or height <= 0:
        return []

    cfg = resolve_config(config)
    values = [coerce_number(row, key, diagnostics) for row in rows]
    max_value = max(max(values), 0.0)
    frame = _frame(width, height, len(rows), orientation, cfg)
    ticks = nice_ticks(0.0, max_value, config=cfg) if max_value > 0 else []
    scale_max = max(ticks) if ticks else max_value

    bars: List[BarRect] = []
    for index, (row, value) in enumerate(zip(rows, values)):
        extent = max(0.0, value / scale_max * frame.length) if scale_max > 0 else 0.0
        x, y, w, h = frame.rect(index, 0.0, min(extent, frame.length))
        bars.append(
            BarRect(index=index, label=_label(row, label_key, index), value=value, x=x, y=y, width=w, height=h)
        )
    return bars


apply_debug_logging(globals(), logger=logger, skip=["segment_contribution"])


__all__ = ["bar_layout", "segment_contribution", "stack_layout"]

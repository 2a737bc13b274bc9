"""Scatter and bubble chart layout."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple

from .coercion import coerce_optional_number
from .diagnostics import DiagnosticSink
from .logging_utils import apply_debug_logging
from .regression import linear_regression, trend_line
from .scales import domain_pair, linear_scale, nice_ticks, padded_domain
from .types import Dataset, Domain, ScatterLayout, ScatterPoint, ScatterSeriesLayout

logger = logging.getLogger(__name__)

DEFAULT_POINT_SIZE = 6.0
DEFAULT_SIZE_RANGE = (4.0, 40.0)
DEFAULT_SERIES = "default"
X_TICK_COUNT = 6
Y_TICK_COUNT = 5


def _series_name(record, series_key: Optional[str]) -> str:
    if series_key is None:
        return DEFAULT_SERIES
    try:
        return str(record[series_key])
    except (KeyError, TypeError, IndexError):
        return str(None)


def scatter_layout(
    records: Dataset,
    x_key: str,
    y_key: str,
    width: float,
    height: float,
    series_key: Optional[str] = None,
    size_key: Optional[str] = None,
    size_range: Sequence[float] = DEFAULT_SIZE_RANGE,
    x_domain: Optional[Tuple[float, float]] = None,
    y_domain: Optional[Tuple[float, float]] = None,
    trend: bool = False,
    *,
    point_size: float = DEFAULT_POINT_SIZE,
    diagnostics: Optional[DiagnosticSink] = None,
) -> ScatterLayout:
    """Position every record with numeric x and y, grouped into series.

    Records whose x or y cannot be read are dropped. Domains default to the
    data extent padded by 5% on each side. With *size_key* the radius is
    scaled linearly from the smallest to the largest size value onto
    *size_range*; otherwise every point uses *point_size*. With *trend* each
    series of two or more points gets a least-squares trend line.
    """

    rows = []
    for index, record in enumerate(records):
        x_value = coerce_optional_number(record, x_key, diagnostics)
        y_value = coerce_optional_number(record, y_key, diagnostics)
        if x_value is None or y_value is None:
            continue
        if size_key is not None:
            size_value = coerce_optional_number(record, size_key, diagnostics)
            if size_value is None:
                size_value = point_size
        else:
            size_value = point_size
        rows.append((index, x_value, y_value, size_value, _series_name(record, series_key)))

    if not rows:
        return ScatterLayout(series=(), x_domain=Domain(0.0, 1.0), y_domain=Domain(0.0, 1.0))

    x_dom = domain_pair(x_domain) or padded_domain([row[1] for row in rows])
    y_dom = domain_pair(y_domain) or padded_domain([row[2] for row in rows])
    sizes = [row[3] for row in rows]
    size_dom = (min(sizes), max(sizes))

    groups: Dict[str, List[ScatterPoint]] = OrderedDict()
    for index, x_value, y_value, size_value, name in rows:
        radius = linear_scale(size_value, size_dom, size_range) if size_key is not None else point_size
        groups.setdefault(name, []).append(
            ScatterPoint(
                index=index,
                x_value=x_value,
                y_value=y_value,
                size_value=size_value,
                x=linear_scale(x_value, x_dom, (0.0, width)),
                y=linear_scale(y_value, y_dom, (height, 0.0)),
                radius=radius,
            )
        )

    series: List[ScatterSeriesLayout] = []
    for name, points in groups.items():
        line = None
        if trend and len(points) >= 2:
            fit = linear_regression([(p.x_value, p.y_value) for p in points])
            line = trend_line(fit, x_dom, y_dom, width, height)
        series.append(ScatterSeriesLayout(key=name, points=tuple(points), trend_line=line))

    logger.info(
        "Scatter layout: %d points in %d series, x=(%s, %s), y=(%s, %s)",
        len(rows),
        len(series),
        x_dom.min,
        x_dom.max,
        y_dom.min,
        y_dom.max,
    )
    return ScatterLayout(
        series=tuple(series),
        x_domain=x_dom,
        y_domain=y_dom,
        x_ticks=tuple(nice_ticks(x_dom.min, x_dom.max, X_TICK_COUNT)),
        y_ticks=tuple(nice_ticks(y_dom.min, y_dom.max, Y_TICK_COUNT)),
    )


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "DEFAULT_POINT_SIZE",
    "DEFAULT_SIZE_RANGE",
    "scatter_layout",
]

"""Ordinary least-squares regression and trend line endpoints."""

from __future__ import annotations

import logging
from typing import Any, Sequence, Tuple

import numpy as np

from .logging_utils import apply_debug_logging
from .scales import linear_scale
from .types import Domain, RegressionResult, TrendLine, Vec2

logger = logging.getLogger(__name__)


def _xy(point: Any) -> Tuple[float, float]:
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    x, y = point
    return float(x), float(y)


def linear_regression(points: Sequence[Any]) -> RegressionResult:
    """Fit ``y = slope * x + intercept`` through *points* by least squares.

    *points* may hold ``(x, y)`` pairs or objects with ``x``/``y`` attributes.

    Degenerate inputs never raise:

    * fewer than two points: slope 0, intercept the lone y (or 0), r2 0;
    * every point on one vertical line: slope 0, intercept mean(y), r2 0;
    * every y equal: r2 is 1 since the fit is exact.
    """

    pairs = [_xy(point) for point in points]
    if len(pairs) < 2:
        return RegressionResult(slope=0.0, intercept=pairs[0][1] if pairs else 0.0, r2=0.0)

    data = np.asarray(pairs, dtype=float)
    xs, ys = data[:, 0], data[:, 1]
    n = float(len(pairs))
    sum_x = float(xs.sum())
    sum_y = float(ys.sum())
    sum_xy = float((xs * ys).sum())
    sum_x2 = float((xs * xs).sum())

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return RegressionResult(slope=0.0, intercept=sum_y / n, r2=0.0)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    mean_y = sum_y / n
    ss_total = float(((ys - mean_y) ** 2).sum())
    ss_residual = float(((ys - (slope * xs + intercept)) ** 2).sum())
    r2 = 1.0 if ss_total == 0 else 1.0 - ss_residual / ss_total

    logger.debug("Regression over %d points: slope=%s intercept=%s r2=%s", len(pairs), slope, intercept, r2)
    return RegressionResult(slope=slope, intercept=intercept, r2=r2)


def trend_line(
    result: RegressionResult,
    x_domain: Domain,
    y_domain: Domain,
    width: float,
    height: float,
) -> TrendLine:
    """Screen endpoints of *result* drawn across the whole x domain."""

    x_range = (0.0, width)
    y_range = (height, 0.0)
    start = Vec2(
        linear_scale(x_domain.min, x_domain, x_range),
        linear_scale(result.predict(x_domain.min), y_domain, y_range),
    )
    end = Vec2(
        linear_scale(x_domain.max, x_domain, x_range),
        linear_scale(result.predict(x_domain.max), y_domain, y_range),
    )
    return TrendLine(regression=result, start=start, end=end)


apply_debug_logging(globals(), logger=logger)


__all__ = ["linear_regression", "trend_line"]

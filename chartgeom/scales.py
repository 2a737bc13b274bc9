"""Linear scales, nice tick generation and axis bound derivation."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import GeometryConfig, resolve_config
from .logging_utils import apply_debug_logging
from .types import AxisSpec, Domain

logger = logging.getLogger(__name__)

_NICE_FACTORS = (1.0, 2.0, 5.0)


def linear_scale(value: float, domain: Sequence[float], range_: Sequence[float]) -> float:
    """Map *value* from *domain* onto *range_*.

    A zero-width domain maps every value to the middle of the range.
    """

    d0, d1 = domain
    r0, r1 = range_
    if d1 == d0:
        return (r0 + r1) / 2.0
    return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


def normalize(value: float, min_value: float, max_value: float) -> float:
    """Position of *value* inside ``[min_value, max_value]``, clamped to ``[0, 1]``."""

    if max_value == min_value:
        return 0.5
    fraction = (value - min_value) / (max_value - min_value)
    if math.isnan(fraction):
        return 0.0
    return max(0.0, min(1.0, fraction))


def _snap(value: float) -> float:
    magnitude = 10.0 ** math.floor(math.log10(value))
    normalized = value / magnitude
    for factor in _NICE_FACTORS:
        if normalized <= factor:
            return factor * magnitude
    return 10.0 * magnitude


def nice_step(raw_step: float) -> float:
    """Smallest value of the form ``{1, 2, 5, 10} * 10**k`` that is ``>= raw_step``."""

    if not math.isfinite(raw_step) or raw_step <= 0.0:
        raise ValueError(f"step must be a positive finite number, got {raw_step!r}")
    return _snap(raw_step)


def nice_round_up(value: float) -> float:
    """Round *value* away from zero to a ``{1, 2, 5, 10} * 10**k`` number."""

    if value == 0 or not math.isfinite(value):
        return value
    if value < 0:
        return -nice_round_up(-value)
    return _snap(value)


def _step_decimals(step: float) -> int:
    return max(0, -math.floor(math.log10(step))) + 1


def nice_ticks(
    min_value: float,
    max_value: float,
    count: Optional[int] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> List[float]:
    """Evenly spaced, human friendly tick values covering ``[min_value, max_value]``.

    The raw step ``(max - min) / (count - 1)`` is snapped up to a nice step and
    the bounds are pushed outward to multiples of it, so the first tick is
    ``<= min_value`` and the last is ``>= max_value``.
    """

    cfg = resolve_config(config)
    if count is None:
        count = cfg.default_tick_count
    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        return []
    if min_value == max_value:
        return [float(min_value)]
    if min_value > max_value:
        min_value, max_value = max_value, min_value

    count = max(2, int(count))
    step = nice_step((max_value - min_value) / (count - 1))
    decimals = _step_decimals(step)
    first = math.floor(min_value / step)
    last = math.ceil(max_value / step)
    # i * step instead of accumulating, so drift never compounds
    ticks = [round(index * step, decimals) + 0.0 for index in range(first, last + 1)]
    # rounding can pull an outer tick inside a bound that carries float noise
    while ticks[0] > min_value:
        first -= 1
        ticks.insert(0, round(first * step, decimals) + 0.0)
    while ticks[-1] < max_value:
        last += 1
        ticks.append(round(last * step, decimals) + 0.0)
    return ticks


def even_ticks(min_value: float, max_value: float, count: int = 5) -> List[float]:
    """``count`` evenly spaced values from *min_value* to *max_value*, 3 decimals."""

    if count < 2:
        return [min_value, max_value]
    step = (max_value - min_value) / (count - 1)
    return [round(min_value + step * index, 3) + 0.0 for index in range(count)]


def _finite(values: Iterable[float]) -> np.ndarray:
    array = np.asarray(list(values), dtype=float)
    return array[np.isfinite(array)]


def axis_bounds(
    axis: AxisSpec,
    values: Sequence[float],
    *,
    config: Optional[GeometryConfig] = None,
) -> Domain:
    """Derive the domain of *axis* from its coerced *values*.

    Explicit bounds win. Otherwise the minimum defaults to ``min(0, data_min)``
    and the maximum to the nice round-up of ``data_max`` plus headroom.
    """

    if axis.min is not None and axis.max is not None:
        return Domain(axis.min, axis.max)

    data = _finite(values)
    if data.size == 0:
        lower = axis.min if axis.min is not None else 0.0
        upper = axis.max if axis.max is not None else 1.0
        return _widen(lower, upper)

    cfg = resolve_config(config)
    data_min = float(data.min())
    data_max = float(data.max())
    lower = axis.min if axis.min is not None else min(0.0, data_min)
    upper = axis.max if axis.max is not None else nice_round_up(data_max * cfg.headroom_factor)
    return _widen(lower, upper)


def _widen(lower: float, upper: float) -> Domain:
    if upper <= lower:
        upper = lower + 1.0
    return Domain(lower, upper)


def padded_domain(values: Sequence[float], padding: float = 0.05) -> Domain:
    """Data extent widened by ``padding`` of its span on each side (1 when flat)."""

    data = _finite(values)
    if data.size == 0:
        return Domain(0.0, 1.0)
    lower = float(data.min())
    upper = float(data.max())
    pad = (upper - lower) * padding or 1.0
    return Domain(lower - pad, upper + pad)


def tick_domain(ticks: Sequence[float], fallback: Domain) -> Domain:
    if not ticks:
        return fallback
    return Domain(min(ticks), max(ticks))


def domain_pair(domain: Optional[Tuple[float, float]]) -> Optional[Domain]:
    if domain is None:
        return None
    if isinstance(domain, Domain):
        return domain
    lower, upper = domain
    return Domain(lower, upper)


apply_debug_logging(globals(), logger=logger, skip=["linear_scale", "normalize", "domain_pair"])


__all__ = [
    "axis_bounds",
    "domain_pair",
    "even_ticks",
    "linear_scale",
    "nice_round_up",
    "nice_step",
    "nice_ticks",
    "normalize",
    "padded_domain",
    "tick_domain",
]

"""Field access and number coercion for loosely typed records."""

from __future__ import annotations

import logging
import math
import numbers
import re
from typing import Any, Optional

from .diagnostics import (
    MISSING_VALUE,
    NON_FINITE_NUMBER,
    UNPARSEABLE_TEXT,
    UNSUPPORTED_TYPE,
    DiagnosticSink,
    emit,
)
from .logging_utils import apply_debug_logging
from .scales import normalize
from .types import FieldValue, Record

logger = logging.getLogger(__name__)

_FORMATTING_CHARS_RE = re.compile(r"[,$€£¥₹%\s]")
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

PLACEHOLDER = "—"


def read_field(record: Record, key: str) -> FieldValue:
    """Look *key* up in *record* and tag the result by kind."""

    try:
        raw = record[key]
    except (KeyError, TypeError, IndexError):
        return FieldValue("missing")
    if raw is None:
        return FieldValue("missing")
    if isinstance(raw, bool):
        return FieldValue("unsupported", raw)
    if isinstance(raw, numbers.Real):
        return FieldValue("number", raw)
    if isinstance(raw, str):
        return FieldValue("text", raw)
    return FieldValue("unsupported", raw)


def parse_numeric_text(text: str) -> Optional[float]:
    """Parse the leading number of *text* after stripping formatting characters.

    Thousands separators, currency symbols, percent signs and whitespace are
    removed first; ``"$1,200"`` gives ``1200.0`` and ``"12px"`` gives ``12.0``.
    Returns ``None`` when nothing finite can be read.
    """

    cleaned = _FORMATTING_CHARS_RE.sub("", text)
    match = _FLOAT_PREFIX_RE.match(cleaned)
    if not match:
        return None
    parsed = float(match.group(0))
    if not math.isfinite(parsed):
        return None
    return parsed


def _lookup_number(
    record: Record,
    key: str,
    diagnostics: Optional[DiagnosticSink],
    *,
    report_missing: bool,
) -> Optional[float]:
    field = read_field(record, key)
    if field.kind == "number":
        try:
            value = float(field.raw)
        except OverflowError:
            value = math.inf
        if math.isfinite(value):
            return value
        emit(diagnostics, NON_FINITE_NUMBER, key, field.raw, f'Invalid numeric value for key "{key}": {field.raw}')
        return None
    if field.kind == "text":
        parsed = parse_numeric_text(field.raw)
        if parsed is not None:
            return parsed
        emit(diagnostics, UNPARSEABLE_TEXT, key, field.raw, f'Could not parse value for key "{key}": "{field.raw}"')
        return None
    if field.kind == "missing":
        if report_missing:
            emit(diagnostics, MISSING_VALUE, key, None, f'No value for key "{key}"')
        return None
    emit(
        diagnostics,
        UNSUPPORTED_TYPE,
        key,
        field.raw,
        f'Unexpected value type for key "{key}": {type(field.raw).__name__}',
    )
    return None


def coerce_number(record: Record, key: str, diagnostics: Optional[DiagnosticSink] = None) -> float:
    """Return the finite number stored under *key*, or ``0.0``.

    Every fallback to ``0.0`` is reported in *diagnostics*; this function
    never raises.
    """

    value = _lookup_number(record, key, diagnostics, report_missing=True)
    return 0.0 if value is None else value


def coerce_optional_number(
    record: Record, key: str, diagnostics: Optional[DiagnosticSink] = None
) -> Optional[float]:
    """Like :func:`coerce_number` but returns ``None`` for absent or bad values.

    Missing values are expected in sparse series and are not reported.
    """

    return _lookup_number(record, key, diagnostics, report_missing=False)


def _group_decimal(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    rendered = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if rendered in ("-0", "") else rendered


def format_number(value: Any) -> str:
    """Format *value* for labels using ``K``/``M`` suffixes for large magnitudes."""

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return str(value)
    try:
        number = float(value)
    except OverflowError:
        return PLACEHOLDER
    if not math.isfinite(number):
        return PLACEHOLDER
    magnitude = abs(number)
    if magnitude >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{number / 1_000:.1f}K"
    return _group_decimal(number)


def format_percentage(value: float, min_value: float, max_value: float) -> str:
    return f"{math.floor(normalize(value, min_value, max_value) * 100 + 0.5)}%"


apply_debug_logging(globals(), logger=logger, skip=["read_field", "parse_numeric_text"])


__all__ = [
    "PLACEHOLDER",
    "coerce_number",
    "coerce_optional_number",
    "format_number",
    "format_percentage",
    "parse_numeric_text",
    "read_field",
]

"""Development-time diagnostics emitted while computing geometry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

NON_FINITE_NUMBER = "non_finite_number"
UNPARSEABLE_TEXT = "unparseable_text"
UNSUPPORTED_TYPE = "unsupported_type"
MISSING_VALUE = "missing_value"
NON_FINITE_AGGREGATE = "non_finite_aggregate"

DiagnosticSink = List["Diagnostic"]


@dataclass(frozen=True)
class Diagnostic:
    code: str
    key: Optional[str]
    value: Any
    message: str

    @property
    def value_type(self) -> str:
        return type(self.value).__name__

    def __str__(self) -> str:
        return self.message


def emit(
    sink: Optional[DiagnosticSink],
    code: str,
    key: Optional[str],
    value: Any,
    message: str,
) -> Diagnostic:
    """Record a diagnostic in *sink* (when given) and mirror it to the logger."""

    diagnostic = Diagnostic(code=code, key=key, value=value, message=message)
    if sink is not None:
        sink.append(diagnostic)
    logger.debug("[%s] %s", code, message)
    return diagnostic


def codes(sink: DiagnosticSink) -> List[str]:
    return [diagnostic.code for diagnostic in sink]


__all__ = [
    "Diagnostic",
    "DiagnosticSink",
    "MISSING_VALUE",
    "NON_FINITE_AGGREGATE",
    "NON_FINITE_NUMBER",
    "UNPARSEABLE_TEXT",
    "UNSUPPORTED_TYPE",
    "codes",
    "emit",
]

"""Opt-in memoization for geometry calls.

Every builder in this package is pure, so two calls with equal arguments give
equal results. :class:`GeometryCache` exploits that at the call site; nothing
in the package caches on its own.
"""

from __future__ import annotations

import dataclasses
import hashlib
import logging
from collections import OrderedDict
from typing import Any, Callable, List, Mapping

from .diagnostics import Diagnostic

logger = logging.getLogger(__name__)


def _canonical(value: Any) -> str:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        inner = ",".join(
            f"{fld.name}={_canonical(getattr(value, fld.name))}" for fld in dataclasses.fields(value)
        )
        return f"{type(value).__name__}({inner})"
    if isinstance(value, Mapping):
        items = sorted((_canonical(k), _canonical(v)) for k, v in value.items())
        return "{" + ",".join(f"{k}:{v}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonical(item) for item in value) + "]"
    return f"{type(value).__name__}:{value!r}"


def call_digest(fn: Callable[..., Any], args: tuple, kwargs: Mapping[str, Any]) -> str:
    name = f"{getattr(fn, '__module__', '')}.{getattr(fn, '__qualname__', repr(fn))}"
    payload = "|".join([name, _canonical(list(args)), _canonical(dict(kwargs))])
    return hashlib.sha256(payload.encode("utf8")).hexdigest()


class GeometryCache:
    """Least-recently-used cache of geometry results keyed by argument digest.

    Results are shared between hits; callers must not mutate returned lists.
    Pass a ``diagnostics`` sink by keyword so it can be replayed on hits.
    """

    def __init__(self, maxsize: int = 128) -> None:
        if maxsize <= 0:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: "OrderedDict[str, Any]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Return ``fn(*args, **kwargs)``, computing it at most once per argument set.

        A ``diagnostics`` list passed by keyword is not part of the key. The
        diagnostics a call emits are stored with its result and appended to
        the caller's list on every hit, so each caller sees the same reports
        as an uncached call would give.
        """

        capturing = "diagnostics" in kwargs
        sink = kwargs.pop("diagnostics", None)
        key = call_digest(fn, args, kwargs)
        if capturing:
            key += ":diagnostics"

        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            result, emitted = self._entries[key]
        else:
            self.misses += 1
            if capturing:
                captured: List[Diagnostic] = []
                result = fn(*args, diagnostics=captured, **kwargs)
                emitted = tuple(captured)
            else:
                result = fn(*args, **kwargs)
                emitted = ()
            self._entries[key] = (result, emitted)
            if len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached geometry %s", evicted[:12])

        if sink is not None:
            sink.extend(emitted)
        return result

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


__all__ = ["GeometryCache", "call_digest"]

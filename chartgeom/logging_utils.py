from __future__ import annotations

import dataclasses
import inspect
import logging
import reprlib
import time
from functools import wraps
from typing import Any, Callable, Iterable, Mapping, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .types import ChartGeometryError

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxstring = 120
_repr.maxdict = 8
_repr.maxlist = 8
_repr.maxtuple = 8


def _summarize_array(value: np.ndarray, max_items: int) -> str:
    head = f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if value.size == 0:
        return head
    if value.size <= max_items:
        return f"{head}, values={_repr.repr(value.tolist())}"
    if not np.issubdtype(value.dtype, np.number):
        return head
    return f"{head}, min={float(np.nanmin(value)):.6g}, max={float(np.nanmax(value)):.6g}"


def _summarize_items(items: Iterable[str], total: int, max_items: int, brackets: str) -> str:
    rendered = list(items)
    if total > max_items:
        rendered.append(f"... (+{total - max_items})")
    return brackets[0] + ", ".join(rendered) + brackets[1]


def summarize(value: Any, *, max_items: int = 5, max_length: int = 240) -> str:
    """Return a bounded, log-friendly representation of *value*.

    Records and datasets can be arbitrarily large and path strings grow with
    the number of vertices, so containers are cut after ``max_items`` entries
    and long strings after ``max_length`` characters.
    """

    if isinstance(value, np.ndarray):
        return _summarize_array(value, max_items)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        parts = []
        for fld in dataclasses.fields(value)[:max_items]:
            parts.append(f"{fld.name}={summarize(getattr(value, fld.name), max_items=max_items)}")
        return f"{type(value).__name__}({', '.join(parts)})"

    if isinstance(value, Mapping):
        pairs = list(value.items())
        return _summarize_items(
            (f"{summarize(k)}: {summarize(v)}" for k, v in pairs[:max_items]),
            len(pairs),
            max_items,
            "{}",
        )

    if isinstance(value, (list, tuple)):
        brackets = "()" if isinstance(value, tuple) else "[]"
        return _summarize_items(
            (summarize(item, max_items=max_items) for item in value[:max_items]),
            len(value),
            max_items,
            brackets,
        )

    if isinstance(value, str):
        if len(value) > max_length:
            return repr(value[:max_length]) + f"... ({len(value)} chars)"
        return repr(value)

    return _repr.repr(value)


def _format_arguments(args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(summarize(arg) for arg in args) + "]")
    if kwargs:
        parts.append("kwargs={" + ", ".join(f"{k}={summarize(v)}" for k, v in kwargs.items()) + "}")
    return ", ".join(parts) if parts else "no-args"


def _sink_size(kwargs: Mapping[str, Any]) -> Optional[int]:
    sink = kwargs.get("diagnostics")
    return len(sink) if isinstance(sink, list) else None


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls of the wrapped function at DEBUG.

    The exit line carries the call duration and, when a ``diagnostics`` list
    was passed by keyword, how many diagnostics the call appended to it.
    Rejected input (:class:`ChartGeometryError`) is logged as a plain DEBUG
    line; any other exception is logged with its traceback.
    """

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        label = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def traced(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)

            logger.debug("Entering %s (%s)", label, _format_arguments(args, kwargs))
            before = _sink_size(kwargs)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except ChartGeometryError as exc:
                logger.debug("%s rejected its input: %s", label, exc)
                raise
            except Exception:
                logger.exception("Exception in %s", label)
                raise

            details = [f"{(time.perf_counter() - started) * 1000.0:.3f} ms"]
            after = _sink_size(kwargs)
            if before is not None and after is not None and after > before:
                details.append(f"diagnostics=+{after - before}")
            suffix = f" -> {summarize(result)}" if log_result else ""
            logger.debug("Exiting %s [%s]%s", label, ", ".join(details), suffix)
            return result

        setattr(traced, "_debug_logging_wrapped", True)
        return cast(F, traced)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of *namespace* with ``debug_log_call``."""

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for attr, value in list(namespace.items()):
        if attr.startswith("_") or attr in skip_set:
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)


__all__ = ["apply_debug_logging", "debug_log_call", "summarize"]

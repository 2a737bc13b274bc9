import pytest

from chartgeom.cache import GeometryCache, call_digest
from chartgeom.diagnostics import UNPARSEABLE_TEXT, codes
from chartgeom.polar import pie_slices
from chartgeom.stack import stack_layout


def _counting():
    calls = []

    def compute(values, scale=1.0):
        calls.append(values)
        return [v * scale for v in values]

    return compute, calls


def test_repeated_calls_hit_the_cache():
    compute, calls = _counting()
    cache = GeometryCache(maxsize=4)
    first = cache.call(compute, [1, 2], scale=2.0)
    second = cache.call(compute, [1, 2], scale=2.0)
    assert first == second == [2.0, 4.0]
    assert len(calls) == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_different_arguments_miss():
    compute, calls = _counting()
    cache = GeometryCache()
    cache.call(compute, [1, 2])
    cache.call(compute, [1, 3])
    cache.call(compute, [1, 2], scale=1.0)
    assert len(calls) == 3


def test_digest_ignores_mapping_order():
    def fn(record):
        return record

    assert call_digest(fn, ({"a": 1, "b": 2},), {}) == call_digest(fn, ({"b": 2, "a": 1},), {})
    assert call_digest(fn, (1,), {}) != call_digest(fn, (1.0,), {})


def test_least_recently_used_entry_is_evicted():
    compute, calls = _counting()
    cache = GeometryCache(maxsize=2)
    cache.call(compute, [1])
    cache.call(compute, [2])
    cache.call(compute, [1])
    cache.call(compute, [3])
    assert len(cache) == 2
    cache.call(compute, [1])
    assert len(calls) == 3
    cache.call(compute, [2])
    assert len(calls) == 4


def test_caches_geometry_results():
    cache = GeometryCache()
    first = cache.call(pie_slices, [1, 2, 3], 50, 50, 40)
    assert cache.call(pie_slices, [1, 2, 3], 50, 50, 40) is first
    cache.clear()
    assert len(cache) == 0 and cache.hits == 0


def test_rejects_non_positive_size():
    with pytest.raises(ValueError):
        GeometryCache(maxsize=0)


def test_diagnostics_are_replayed_on_hits():
    cache = GeometryCache()
    records = [{"a": "oops", "b": 1}]
    first, second = [], []
    layout = cache.call(stack_layout, records, ["a", "b"], 100, 100, diagnostics=first)
    again = cache.call(stack_layout, records, ["a", "b"], 100, 100, diagnostics=second)
    assert again is layout
    assert cache.hits == 1
    assert codes(first) == [UNPARSEABLE_TEXT]
    assert codes(second) == [UNPARSEABLE_TEXT]


def test_calls_without_a_sink_do_not_hide_diagnostics_from_later_callers():
    cache = GeometryCache()
    records = [{"a": "oops"}]
    cache.call(stack_layout, records, ["a"], 100, 100)
    sink = []
    cache.call(stack_layout, records, ["a"], 100, 100, diagnostics=sink)
    assert codes(sink) == [UNPARSEABLE_TEXT]
    cache.call(stack_layout, records, ["a"], 100, 100, diagnostics=None)
    assert cache.hits == 1

import math

import pytest

from chartgeom.diagnostics import UNPARSEABLE_TEXT, codes
from chartgeom.scatter import scatter_layout
from chartgeom.types import Domain


def test_unreadable_points_are_dropped():
    records = [{"x": 1, "y": 2}, {"x": "3", "y": "4"}, {"x": None, "y": 1}, {"x": "abc", "y": 1}]
    sink = []
    layout = scatter_layout(records, "x", "y", 200, 100, diagnostics=sink)
    (series,) = layout.series
    assert series.key == "default"
    assert [p.index for p in series.points] == [0, 1]
    assert all(p.radius == 6.0 for p in series.points)
    assert codes(sink) == [UNPARSEABLE_TEXT]
    assert layout.x_domain.min == pytest.approx(0.9)
    assert layout.x_domain.max == pytest.approx(3.1)


def test_points_are_scaled_into_the_plot():
    layout = scatter_layout(
        [{"x": 0, "y": 0}, {"x": 10, "y": 10}], "x", "y", 200, 100, x_domain=(0, 10), y_domain=(0, 10)
    )
    low, high = layout.series[0].points
    assert (low.x, low.y) == (0.0, 100.0)
    assert (high.x, high.y) == (200.0, 0.0)
    assert layout.x_domain == Domain(0, 10)


def test_series_keep_first_seen_order():
    records = [{"x": 1, "y": 1, "g": "b"}, {"x": 2, "y": 2, "g": "a"}, {"x": 3, "y": 3, "g": "b"}]
    layout = scatter_layout(records, "x", "y", 100, 100, series_key="g")
    assert [s.key for s in layout.series] == ["b", "a"]
    assert [p.index for p in layout.series[0].points] == [0, 2]


def test_bubble_radius_follows_size_range():
    records = [{"x": 1, "y": 1, "s": 10}, {"x": 2, "y": 2, "s": 20}, {"x": 3, "y": 3, "s": 30}]
    layout = scatter_layout(records, "x", "y", 100, 100, size_key="s")
    assert [p.radius for p in layout.series[0].points] == pytest.approx([4.0, 22.0, 40.0])


def test_trend_line_per_series():
    records = [{"x": i, "y": i} for i in range(3)]
    layout = scatter_layout(records, "x", "y", 100, 100, x_domain=(0, 2), y_domain=(0, 2), trend=True)
    line = layout.series[0].trend_line
    assert line is not None
    assert math.isclose(line.regression.r2, 1.0)
    assert line.start.x == pytest.approx(0) and line.start.y == pytest.approx(100)
    assert line.end.x == pytest.approx(100) and line.end.y == pytest.approx(0)


def test_single_point_series_has_no_trend_line():
    layout = scatter_layout([{"x": 1, "y": 1}], "x", "y", 100, 100, trend=True)
    assert layout.series[0].trend_line is None
    assert layout.x_domain == Domain(0, 2)


def test_ticks_cover_domains():
    records = [{"x": 3, "y": 120}, {"x": 17, "y": 480}]
    layout = scatter_layout(records, "x", "y", 100, 100)
    assert layout.x_ticks[0] <= layout.x_domain.min
    assert layout.x_ticks[-1] >= layout.x_domain.max
    assert layout.y_ticks[0] <= layout.y_domain.min
    assert layout.y_ticks[-1] >= layout.y_domain.max


def test_empty_scatter():
    layout = scatter_layout([], "x", "y", 100, 100)
    assert layout.series == ()
    assert layout.x_domain == Domain(0, 1)

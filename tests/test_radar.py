import math

import pytest

from chartgeom.diagnostics import UNPARSEABLE_TEXT, codes
from chartgeom.radar import (
    axis_angle,
    grid_ring_path,
    label_anchor,
    point_in_polygon,
    polygon_centroid,
    polygon_path,
    radar_axes,
    radar_grid,
    radar_point,
    radar_series,
)
from chartgeom.types import AxisSpec, Series, Vec2


def test_axis_angle_and_point():
    assert math.isclose(axis_angle(1, 4), math.pi / 2)
    assert axis_angle(0, 0) == 0.0
    top = radar_point(0, 0, 10, 0)
    assert math.isclose(top.x, 0, abs_tol=1e-9) and math.isclose(top.y, -10)
    right = radar_point(0, 0, 10, math.pi / 2)
    assert math.isclose(right.x, 10) and math.isclose(right.y, 0, abs_tol=1e-9)


def test_polygon_path_closes_three_or_more_points():
    path = polygon_path([Vec2(0, 0), Vec2(10, 0), Vec2(5, 8)])
    assert path == "M 0.00 0.00 L 10.00 0.00 L 5.00 8.00 Z"
    assert path.startswith("M")
    assert path.endswith("Z")


def test_polygon_path_short_inputs():
    assert polygon_path([]) == ""
    assert polygon_path([Vec2(0, 0), Vec2(10, 0)]) == "M 0.00 0.00 L 10.00 0.00"
    assert polygon_path([Vec2(5, 5)]) == "M 5.00 5.00 m -2 0 a 2 2 0 1 0 4 0 a 2 2 0 1 0 -4 0"


def test_grid_rings():
    square = grid_ring_path(0, 0, 10, 4)
    assert square.startswith("M 0.00 -10.00")
    assert square.endswith("Z")
    assert grid_ring_path(0, 0, 10, 2) == ""
    circle = grid_ring_path(0, 0, 10, 5, "circular")
    assert circle == "M -10 0 A 10 10 0 1 1 10 0 A 10 10 0 1 1 -10 0"


def test_radar_grid_levels():
    rings = radar_grid(0, 0, 90, 3, 6)
    assert len(rings) == 3
    assert rings[0].startswith("M 0.00 -30.00")
    assert rings[-1].startswith("M 0.00 -90.00")
    assert radar_grid(0, 0, 90, 0, 6) == []


@pytest.mark.parametrize(
    "angle, text_anchor, baseline",
    [
        (0.0, "middle", "auto"),
        (0.05, "middle", "auto"),
        (math.pi / 2, "start", "middle"),
        (math.pi, "middle", "hanging"),
        (3 * math.pi / 2, "end", "middle"),
        (2 * math.pi - 0.05, "middle", "auto"),
    ],
)
def test_label_anchor_alignment(angle, text_anchor, baseline):
    anchor = label_anchor(angle, 0, 0, 100, 10)
    assert anchor.text_anchor == text_anchor
    assert anchor.baseline == baseline


def test_label_anchor_position():
    anchor = label_anchor(0.0, 0, 0, 100, 10)
    assert math.isclose(anchor.x, 0, abs_tol=1e-9)
    assert math.isclose(anchor.y, -110)


def test_point_in_polygon_and_centroid():
    square = [Vec2(0, 0), Vec2(10, 0), Vec2(10, 10), Vec2(0, 10)]
    assert point_in_polygon(Vec2(5, 5), square)
    assert not point_in_polygon(Vec2(15, 5), square)
    assert not point_in_polygon(Vec2(5, 5), square[:2])
    assert polygon_centroid(square) == Vec2(5.0, 5.0)
    assert polygon_centroid([]) == Vec2(0.0, 0.0)


def _radar_fixture():
    axes = [AxisSpec("a", "Alpha"), AxisSpec("b", "Beta", min=0, max=10), AxisSpec("c", "Gamma")]
    series = [Series("s1", "First", {"a": 50, "b": 5, "c": "20"}, color="#f00")]
    return axes, series


def test_radar_axes_domains():
    axes, series = _radar_fixture()
    layouts = radar_axes(axes, series, 100, 100, 80, 12)
    assert [layout.domain.max for layout in layouts] == [100.0, 10.0, 50.0]
    assert all(layout.domain.min == 0.0 for layout in layouts)
    assert math.isclose(layouts[0].endpoint.y, 20)
    assert layouts[0].label_anchor.baseline == "auto"


def test_radar_series_vertices():
    axes, series = _radar_fixture()
    layouts = radar_axes(axes, series, 100, 100, 80, 12)
    (shape,) = radar_series(series, layouts, 100, 100, 80)
    assert [p.normalized_value for p in shape.points] == [0.5, 0.5, 0.4]
    first = shape.points[0]
    assert math.isclose(first.x, 100, abs_tol=1e-9) and math.isclose(first.y, 60)
    assert shape.path.startswith("M 100.00 60.00")
    assert shape.path.endswith("Z")
    assert shape.color == "#f00"


def test_radar_series_reports_bad_values():
    axes, _ = _radar_fixture()
    series = [Series("s", "S", {"a": "n/a", "b": 1, "c": 1})]
    sink = []
    layouts = radar_axes(axes, series, 0, 0, 10, 5)
    (shape,) = radar_series(series, layouts, 0, 0, 10, diagnostics=sink)
    assert shape.points[0].raw_value == 0.0
    assert codes(sink) == [UNPARSEABLE_TEXT]


def test_radar_empty_inputs():
    assert radar_axes([], [], 0, 0, 10, 5) == []
    assert radar_series([], [], 0, 0, 10) == []

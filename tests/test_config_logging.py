import logging

import numpy as np
import pytest

from chartgeom.coercion import coerce_number
from chartgeom.config import GeometryConfig, get_geometry_config, set_geometry_config
from chartgeom.logging_utils import summarize
from chartgeom.polar import pie_slices
from chartgeom.radar import polygon_path
from chartgeom.scales import nice_ticks
from chartgeom.stack import stack_layout
from chartgeom.types import InvalidInputError, Vec2


def test_get_geometry_config_returns_copy():
    config = get_geometry_config()
    config.marker_radius = 50.0
    assert get_geometry_config().marker_radius == 2.0


def test_set_geometry_config_changes_defaults():
    previous = get_geometry_config()
    try:
        set_geometry_config(GeometryConfig(marker_radius=3.0))
        assert " a 3 3 " in polygon_path([Vec2(0, 0)])
    finally:
        set_geometry_config(previous)
    assert " a 2 2 " in polygon_path([Vec2(0, 0)])


def test_explicit_config_overrides_global():
    path = polygon_path([Vec2(1, 1), Vec2(2, 2)], config=GeometryConfig(radar_precision=1))
    assert path == "M 1.0 1.0 L 2.0 2.0"


def test_entry_points_are_traced_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="chartgeom.scales")
    nice_ticks(0, 94, 5)
    assert "Entering nice_ticks" in caplog.text
    assert "Exiting nice_ticks [" in caplog.text
    assert "ms] -> [0.0, 50.0, 100.0]" in caplog.text


def test_trace_counts_diagnostics_added_by_the_call(caplog):
    caplog.set_level(logging.DEBUG, logger="chartgeom.stack")
    sink = []
    stack_layout([{"a": "oops", "b": "bad"}], ["a", "b"], 100, 100, diagnostics=sink)
    assert len(sink) == 2
    assert "diagnostics=+2" in caplog.text


def test_rejected_input_is_traced_without_traceback(caplog):
    caplog.set_level(logging.DEBUG, logger="chartgeom.polar")
    with pytest.raises(InvalidInputError):
        pie_slices([1, -1], 0, 0, 10)
    assert "pie_slices rejected its input" in caplog.text
    assert not any(record.exc_info for record in caplog.records)


def test_diagnostics_are_mirrored_to_logger(caplog):
    caplog.set_level(logging.DEBUG, logger="chartgeom.diagnostics")
    coerce_number({"a": "abc"}, "a")
    assert "[unparseable_text]" in caplog.text


def test_summarize_bounds_output():
    assert summarize(np.arange(10)).startswith("ndarray(shape=(10,)")
    assert "values=[1.0, 2.0]" in summarize(np.array([1.0, 2.0]))
    assert summarize(list(range(8))) == "[0, 1, 2, 3, 4, ... (+3)]"
    assert summarize("x" * 300).endswith("... (300 chars)")

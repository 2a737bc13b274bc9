import pytest

from chartgeom.diagnostics import NON_FINITE_AGGREGATE, UNPARSEABLE_TEXT, codes
from chartgeom.stack import bar_layout, segment_contribution, stack_layout
from chartgeom.types import InvalidInputError

MIXED = [{"label": "q1", "a": 10, "b": -5}, {"label": "q2", "a": 3, "b": -20}]


def test_largest_negative_total_reaches_chart_edge():
    layout = stack_layout(MIXED, ["a", "b"], 200, 300, label_key="label")
    assert layout.max_abs_value == 20
    assert layout.baseline == pytest.approx(100)

    first, second = layout.bars
    assert [bar.label for bar in layout.bars] == ["q1", "q2"]
    first_negative = first.segments[1]
    second_negative = second.segments[1]
    assert second_negative.y == pytest.approx(layout.baseline)
    assert second_negative.y + second_negative.height == pytest.approx(300)
    assert first_negative.y + first_negative.height == pytest.approx(150)


def test_largest_positive_total_reaches_top():
    layout = stack_layout(MIXED, ["a", "b"], 200, 300)
    top = layout.bars[0].segments[0]
    assert top.y == pytest.approx(0)
    assert top.y + top.height == pytest.approx(layout.baseline)


@pytest.mark.parametrize("orientation, length", [("vertical", 300.0), ("horizontal", 200.0)])
@pytest.mark.parametrize(
    "records",
    [
        MIXED,
        [{"a": 1, "b": 2, "c": 3}, {"a": 4, "b": 0, "c": 1.5}],
        [{"a": -1, "b": -2, "c": -3}, {"a": -0.5, "b": -7, "c": 0}],
        [{"a": 5, "b": -1, "c": 2}, {"a": -3, "b": 8, "c": -4}, {"a": 0, "b": 0, "c": 0}],
    ],
)
def test_segment_positions_reconstruct_bar_totals(records, orientation, length):
    layout = stack_layout(records, ["a", "b", "c"], 200, 300, orientation)
    for bar in layout.bars:
        reconstructed = sum(segment_contribution(layout, seg, length) for seg in bar.segments)
        assert reconstructed == pytest.approx(bar.positive_total + bar.negative_total, abs=1e-9)


def test_horizontal_stacks_grow_rightward():
    layout = stack_layout([{"a": 10, "b": -10}], ["a", "b"], 200, 100, "horizontal")
    positive, negative = layout.bars[0].segments
    assert layout.baseline == pytest.approx(100)
    assert positive.x == pytest.approx(100)
    assert positive.width == pytest.approx(100)
    assert negative.x == pytest.approx(0)
    assert negative.x + negative.width == pytest.approx(layout.baseline)


def test_bar_slots_use_fill_ratio():
    layout = stack_layout(MIXED, ["a", "b"], 200, 300)
    first, second = layout.bars
    assert first.segments[0].x == pytest.approx(10)
    assert first.segments[0].width == pytest.approx(80)
    assert second.segments[0].x == pytest.approx(110)


def test_all_zero_values_sit_on_baseline():
    layout = stack_layout([{"a": 0, "b": 0}], ["a", "b"], 100, 50)
    assert layout.max_abs_value == 0
    for segment in layout.bars[0].segments:
        assert segment.height == 0
        assert segment.y == pytest.approx(layout.baseline)


def test_non_finite_totals_abort_layout():
    sink = []
    layout = stack_layout([{"a": 1e308, "b": 1e308}], ["a", "b"], 100, 100, diagnostics=sink)
    assert layout.is_empty
    assert NON_FINITE_AGGREGATE in codes(sink)


def test_unparseable_values_count_as_zero():
    sink = []
    layout = stack_layout([{"a": "oops", "b": 4}], ["a", "b"], 100, 100, diagnostics=sink)
    assert layout.bars[0].segments[0].height == 0
    assert layout.bars[0].positive_total == 4
    assert codes(sink) == [UNPARSEABLE_TEXT]


@pytest.mark.parametrize("records, keys, width", [([], ["a"], 100), (MIXED, [], 100), (MIXED, ["a"], 0)])
def test_empty_inputs(records, keys, width):
    assert stack_layout(records, keys, width, 100).is_empty


def test_unknown_orientation_is_rejected():
    with pytest.raises(InvalidInputError):
        stack_layout(MIXED, ["a"], 100, 100, "diagonal")


def test_bar_layout_scales_to_top_tick():
    bars = bar_layout([{"v": 40}, {"v": -5}, {"v": "94"}], "v", 300, 100)
    assert [bar.height for bar in bars] == pytest.approx([40, 0, 94])
    assert bars[0].y == pytest.approx(60)
    assert bars[1].y == pytest.approx(100)
    assert [bar.label for bar in bars] == ["0", "1", "2"]


def test_bar_layout_all_non_positive():
    bars = bar_layout([{"v": 0}, {"v": -3}], "v", 100, 100, "horizontal")
    assert all(bar.width == 0 for bar in bars)
    assert bar_layout([], "v", 100, 100) == []

import math

import pytest

from exptran.errors import ExpTranError
from exptran.markers import (
    FEATURE_LABELS,
    ClickableCanvas,
    FeaturePointCanvas,
    VectorFieldCanvas,
)


def test_click_marks_without_drawing():
    canvas = ClickableCanvas()
    canvas.press(10, 20)
    canvas.move(11, 21)
    assert canvas.marked == [(10.0, 20.0)]
    assert canvas.drawing is False


def test_drawing_collects_moves_until_release():
    canvas = ClickableCanvas(drawable=True)
    canvas.press(1, 2)
    canvas.move(3, 4)
    canvas.release()
    canvas.move(5, 6)
    assert canvas.marked == [(1.0, 2.0), (3.0, 4.0)]


def test_set_marked_copies_and_marked_returns_copy():
    source = [(1, 1), (2, 2)]
    canvas = ClickableCanvas()
    canvas.set_marked(source)
    source.append((3, 3))
    snapshot = canvas.marked
    snapshot.clear()
    assert canvas.marked == [(1.0, 1.0), (2.0, 2.0)]


def test_clear_marked():
    canvas = ClickableCanvas()
    canvas.press(1, 1)
    canvas.clear_marked()
    assert canvas.marked == []


def test_feature_prompt_advances_and_wraps():
    canvas = FeaturePointCanvas()
    assert canvas.prompt() == "Tip of the Nose"
    canvas.press(0, 0)
    assert canvas.prompt() == "Left Nostril"
    canvas.set_marked([(0, 0)] * len(FEATURE_LABELS))
    assert canvas.prompt() == FEATURE_LABELS[0]


def test_feature_canvas_is_not_drawable():
    canvas = FeaturePointCanvas()
    canvas.press(0, 0)
    canvas.move(1, 1)
    assert len(canvas.marked) == 1


def test_no_arrows_without_field():
    canvas = VectorFieldCanvas()
    canvas.set_marked([(1, 1)])
    assert canvas.arrows() == []


def test_arrow_geometry():
    canvas = VectorFieldCanvas()
    canvas.set_marked([(10, 20), (0, 0)])
    field = [(2, -1), (0, 5)]
    canvas.set_vector_field(field)
    arrows = canvas.arrows()
    assert len(arrows) == 2
    for arrow, point, (dx, dy) in zip(arrows, [(10, 20), (0, 0)], field):
        assert arrow.start == point
        assert arrow.end[0] - arrow.start[0] == pytest.approx(3 * dx)
        assert arrow.end[1] - arrow.start[1] == pytest.approx(3 * dy)
        assert math.dist(arrow.end, arrow.left_head) == pytest.approx(9.0)
        assert math.dist(arrow.end, arrow.right_head) == pytest.approx(9.0)
        a = (arrow.left_head[0] - arrow.end[0], arrow.left_head[1] - arrow.end[1])
        b = (arrow.right_head[0] - arrow.end[0], arrow.right_head[1] - arrow.end[1])
        assert a[0] * b[0] + a[1] * b[1] == pytest.approx(0.0, abs=1e-9)
        # Head points back along the shaft.
        shaft = (dx, dy)
        assert (a[0] + b[0]) * shaft[0] + (a[1] + b[1]) * shaft[1] < 0


def test_short_field_raises():
    canvas = VectorFieldCanvas()
    canvas.set_marked([(1, 1), (2, 2)])
    canvas.set_vector_field([(1, 0)])
    with pytest.raises(ExpTranError):
        canvas.arrows()


def test_clear_vector_field():
    canvas = VectorFieldCanvas()
    canvas.set_marked([(1, 1)])
    canvas.set_vector_field([(1, 0)])
    canvas.clear_vector_field()
    assert canvas.vector_field == []
    assert canvas.arrows() == []
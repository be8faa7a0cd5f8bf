import math

import pytest

from graphplot.expression import create_parser
from graphplot.plot import (
    ViewState,
    axis_labels,
    compute_graph_points,
    crosshair_pixels,
    format_label,
)
from graphplot.textinput import Key


def _parser(text):
    parser = create_parser()
    parser.set_expression(text)
    return parser


def test_no_keys_leave_state_unchanged():
    state = ViewState()
    assert state.apply_keys(set(), set(), (0, 0)) is False
    assert state == ViewState()


def test_left_then_right_restores_phase():
    state = ViewState()
    assert state.apply_keys({Key.LEFT}) is True
    assert state.phase > 0
    assert state.apply_keys({Key.RIGHT}) is True
    assert state == ViewState()


def test_left_and_right_together_cancel():
    state = ViewState()
    assert state.apply_keys({Key.LEFT, Key.RIGHT}) is True
    assert state.phase == ViewState().phase


def test_zoom_in_then_out_restores_amplitude():
    state = ViewState()
    state.apply_keys({Key.Z})
    assert state.amplitude > ViewState().amplitude
    state.apply_keys({Key.X})
    assert state.amplitude == ViewState().amplitude


def test_zoom_out_ignored_when_amplitude_not_positive():
    state = ViewState(amplitude=-1.0)
    assert state.apply_keys({Key.X}) is False
    assert state.amplitude == -1.0


def test_up_then_down_restores_position():
    state = ViewState()
    state.apply_keys({Key.UP})
    assert state.y_position > ViewState().y_position
    state.apply_keys({Key.DOWN})
    assert state.y_position == ViewState().y_position


def test_space_press_sets_point_truncated():
    state = ViewState()
    assert state.apply_keys(set(), {Key.SPACE}, (10.9, 20.2)) is False
    assert state.point == (10, 20)


def test_space_held_only_does_not_set_point():
    state = ViewState()
    state.apply_keys({Key.SPACE}, set(), (5, 5))
    assert state.point is None


def test_constant_zero_lies_on_axis():
    points = compute_graph_points(_parser("0"), 0, 2.0, 123)
    assert len(points) == 600
    assert [x for x, _ in points] == [float(i) for i in range(600)]
    assert all(y == 123 for _, y in points)


@pytest.mark.parametrize("phase", [0, 15, -40])
@pytest.mark.parametrize("amplitude", [2.0, 4.0])
def test_identity_is_diagonal(phase, amplitude):
    points = compute_graph_points(_parser("X"), phase, amplitude, 300)
    for x, y in points:
        assert y == 300 - (x - 300 + phase)


def test_invalid_expression_falls_back_to_axis(capsys):
    points = compute_graph_points(_parser("SIN("), 0, 2.0, 250)
    assert all(y == 250 for _, y in points)
    err = capsys.readouterr().err
    assert err.count("Parser error") == 1


def test_non_finite_values_fall_back_to_axis():
    points = compute_graph_points(_parser("LOG(X-X)"), 0, 2.0, 200)
    assert all(y == 200 for _, y in points)


def test_zero_amplitude_rejected():
    with pytest.raises(ValueError):
        compute_graph_points(_parser("X"), 0, 0.0, 300)


@pytest.mark.parametrize("num_labels", [4, 10])
def test_axis_label_counts_and_positions(num_labels):
    x_labels, y_labels = axis_labels(310, num_labels, 2.0, 7)
    assert len(x_labels) == num_labels + 1
    assert len(y_labels) == num_labels
    assert all(y == 310 + 5 for _, _, y in x_labels)
    assert all(x == 305 - 7 for _, x, _ in y_labels)


def test_axis_label_values_are_monotonic():
    x_labels, y_labels = axis_labels(300, 10, 2.0, 0)
    x_values = [float(text) for text, _, _ in x_labels]
    y_values = [float(text) for text, _, _ in y_labels]
    assert x_values == sorted(x_values)
    assert y_values == sorted(y_values, reverse=True)


def test_axis_origin_label():
    x_labels, _ = axis_labels(300, 10, 2.0, 0)
    assert ("0.0", 300, 305) in x_labels


@pytest.mark.parametrize("value", [0.0, 2.5, -3.14159, 123.456, -0.04])
def test_format_label_one_decimal(value):
    text = format_label(value)
    assert len(text.split(".")[1]) == 1
    assert math.isclose(float(text), value, abs_tol=0.05 + 1e-9)


def test_crosshair_unset_has_no_pixels():
    assert crosshair_pixels(None, 300, 0) == []


@pytest.mark.parametrize("point,phase", [((310, 290), 0), ((290, 310), 0), ((50, 500), 20)])
def test_crosshair_guides_connect_axes_to_point(point, phase):
    px, py = point
    y_position = 300
    axis_x = 300 - phase
    pixels = crosshair_pixels(point, y_position, phase)
    horizontal = [p for p in pixels if p[0] != px]
    vertical = [p for p in pixels if p[0] == px]
    assert horizontal and vertical
    assert all(y == py for _, y in horizontal)
    xs = [x for x, _ in horizontal]
    assert xs[0] == axis_x
    assert all(abs(b - a) == 2 for a, b in zip(xs, xs[1:]))
    assert all(min(axis_x, px) <= x <= max(axis_x, px) for x in xs)
    ys = [y for _, y in vertical]
    assert ys[0] == py
    assert all(abs(b - a) == 2 for a, b in zip(ys, ys[1:]))
    assert y_position not in ys
    assert all(min(py, y_position) <= y <= max(py, y_position) for y in ys)


def test_crosshair_on_axes_has_no_guides():
    assert crosshair_pixels((300, 300), 300, 0) == []
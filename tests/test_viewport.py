import pytest

from bandbrot.complex import Complex
from bandbrot.errors import InvalidDimensions, InvalidViewport
from bandbrot.viewport import (
    Command,
    CornerViewport,
    DeltaViewport,
    apply_command,
    check_bounds,
    pixel_to_point,
)


UNIT = CornerViewport(Complex(-1.0, 1.0), Complex(1.0, -1.0))


def test_corner_upper_left_pixel():
    assert pixel_to_point((100, 100), (0, 0), UNIT) == Complex(-1.0, 1.0)


def test_corner_last_pixel():
    point = pixel_to_point((100, 100), (99, 99), UNIT)
    assert point.re == pytest.approx(0.98)
    assert point.im == pytest.approx(-0.98)


def test_corner_independent_scales():
    viewport = CornerViewport((-2.0, 1.0), (2.0, -1.0))
    point = pixel_to_point((200, 50), (100, 25), viewport)
    assert point == Complex(0.0, 0.0)


def test_delta_mapping():
    viewport = DeltaViewport(Complex(-1.95, 1.15), 0.5)
    assert pixel_to_point((800, 800), (0, 0), viewport) == Complex(-1.95, 1.15)
    assert pixel_to_point((800, 800), (4, 2), viewport) == Complex(-1.95 + 2.0, 1.15 - 1.0)


@pytest.mark.parametrize('pixel', [(100, 0), (0, 100), (-1, 0), (150, 150)])
def test_pixel_outside_bounds_fails(pixel):
    with pytest.raises(IndexError):
        pixel_to_point((100, 100), pixel, UNIT)


def test_corner_ordering_enforced():
    with pytest.raises(InvalidViewport):
        CornerViewport((-1.0, -1.0), (1.0, 1.0))
    with pytest.raises(InvalidViewport):
        CornerViewport((1.0, 1.0), (-1.0, -1.0))


@pytest.mark.parametrize('delta', [0.0, -0.1, float('nan')])
def test_delta_must_be_positive(delta):
    with pytest.raises(InvalidViewport):
        DeltaViewport((0.0, 0.0), delta)


def test_viewport_copies_corner():
    corner = Complex(-1.0, 1.0)
    viewport = DeltaViewport(corner, 0.1)
    corner.transform(5.0, 5.0)
    assert viewport.upper_left == Complex(-1.0, 1.0)


@pytest.mark.parametrize('bounds', [(0, 10), (10, -1), (1.5, 10), ('10', 10), (10,), None])
def test_check_bounds_rejects(bounds):
    with pytest.raises(InvalidDimensions):
        check_bounds(bounds)


def test_check_bounds_accepts():
    assert check_bounds((800, 600)) == (800, 600)


class TestDeltaCommands:
    bounds = (800, 800)
    start = DeltaViewport(Complex(-1.95, 1.15), 0.01)

    def test_pan_right_moves_a_tenth_of_the_window(self):
        moved = apply_command(self.start, Command.PAN_RIGHT, self.bounds)
        assert moved.upper_left.re == pytest.approx(-1.95 + 0.8)
        assert moved.upper_left.im == self.start.upper_left.im
        assert moved.delta == self.start.delta

    def test_pan_directions(self):
        up = apply_command(self.start, Command.PAN_UP, self.bounds)
        down = apply_command(self.start, Command.PAN_DOWN, self.bounds)
        left = apply_command(self.start, Command.PAN_LEFT, self.bounds)
        assert up.upper_left.im > self.start.upper_left.im
        assert down.upper_left.im < self.start.upper_left.im
        assert left.upper_left.re < self.start.upper_left.re

    def test_zoom_in_shrinks_delta_and_shifts_corner(self):
        zoomed = apply_command(self.start, Command.ZOOM_IN, self.bounds, zoom_factor=1.1)
        delta = 0.01 / 1.1
        assert zoomed.delta == delta
        assert zoomed.upper_left.re == pytest.approx(-1.95 + delta * 44)
        assert zoomed.upper_left.im == pytest.approx(1.15 - delta * 44)

    def test_zoom_out_grows_delta(self):
        zoomed = apply_command(self.start, Command.ZOOM_OUT, self.bounds, zoom_factor=1.1)
        assert zoomed.delta == pytest.approx(0.011)
        assert zoomed.upper_left.re < self.start.upper_left.re
        assert zoomed.upper_left.im > self.start.upper_left.im

    def test_original_viewport_untouched(self):
        apply_command(self.start, Command.PAN_RIGHT, self.bounds)
        assert self.start.upper_left == Complex(-1.95, 1.15)

    def test_zoom_factor_must_exceed_one(self):
        with pytest.raises(ValueError):
            apply_command(self.start, Command.ZOOM_IN, self.bounds, zoom_factor=1.0)


class TestCornerCommands:
    bounds = (100, 100)

    def test_zoom_in_about_centre(self):
        zoomed = apply_command(UNIT, Command.ZOOM_IN, self.bounds, zoom_factor=2.0)
        assert zoomed.upper_left == Complex(-0.5, 0.5)
        assert zoomed.lower_right == Complex(0.5, -0.5)

    def test_zoom_out_about_centre(self):
        zoomed = apply_command(UNIT, Command.ZOOM_OUT, self.bounds, zoom_factor=2.0)
        assert zoomed.upper_left == Complex(-2.0, 2.0)
        assert zoomed.lower_right == Complex(2.0, -2.0)

    def test_pan_translates_both_corners(self):
        moved = apply_command(UNIT, Command.PAN_DOWN, self.bounds)
        assert moved.upper_left.im == pytest.approx(0.8)
        assert moved.lower_right.im == pytest.approx(-1.2)
        assert moved.span == pytest.approx(UNIT.span)

"""
Viewports onto the complex plane and the pixel-to-point mapping.

Two descriptions of the visible region are supported:
    - CornerViewport: explicit upper-left and lower-right corners. The
      x and y scales follow from the pixel bounds and may differ.
    - DeltaViewport: an upper-left corner plus one uniform plane distance
      per pixel. This is the model used by the interactive window, where
      zooming changes the delta and panning moves the corner.

Viewports are immutable; pan and zoom return new ones (see apply_command).
The numba kernels in compute.py repeat the arithmetic of pixel_to_point
operation for operation, so both give identical floats.
"""

import enum
from dataclasses import dataclass

from .complex import Complex
from .errors import InvalidDimensions, InvalidViewport


# Keyboard navigation constants (fractions of the window size)
PAN_DIVISOR = 10
ZOOM_SHIFT_DIVISOR = 18
DEFAULT_ZOOM_FACTOR = 1.1


def check_bounds(bounds):
    """
    Validate pixel bounds and return them as a (width, height) tuple of ints.

    Raises:
        InvalidDimensions: if either side is not a positive integer.
    """
    try:
        width, height = bounds
    except (TypeError, ValueError):
        raise InvalidDimensions(f"bounds must be a (width, height) pair, got {bounds!r}") from None
    for side in (width, height):
        if isinstance(side, bool) or not isinstance(side, int) or side <= 0:
            raise InvalidDimensions(f"bounds must be positive integers, got {bounds!r}")
    return width, height


def _as_complex(point):
    re, im = point
    return Complex(float(re), float(im))


@dataclass(frozen=True)
class CornerViewport:
    """Region between two corners; x and y scales are independent."""

    upper_left: Complex
    lower_right: Complex

    def __post_init__(self):
        ul = _as_complex(self.upper_left)
        lr = _as_complex(self.lower_right)
        if ul.im < lr.im:
            raise InvalidViewport(f"upper-left {ul} lies below lower-right {lr}")
        if ul.re > lr.re:
            raise InvalidViewport(f"upper-left {ul} lies right of lower-right {lr}")
        object.__setattr__(self, 'upper_left', ul)
        object.__setattr__(self, 'lower_right', lr)

    @property
    def span(self):
        """Width and height of the region in plane units."""
        return (
            self.lower_right.re - self.upper_left.re,
            self.upper_left.im - self.lower_right.im,
        )

    def point_at(self, bounds, pixel):
        width, height = bounds
        x, y = pixel
        re = self.upper_left.re + x * (self.lower_right.re - self.upper_left.re) / width
        im = self.upper_left.im - y * (self.upper_left.im - self.lower_right.im) / height
        return Complex(re, im)

    def translated(self, re, im):
        ul = self.upper_left.copy()
        lr = self.lower_right.copy()
        ul.transform(re, im)
        lr.transform(re, im)
        return CornerViewport(ul, lr)

    def scaled(self, factor):
        """Scale the region about its centre; factor < 1 zooms in."""
        span_re, span_im = self.span
        center = Complex(
            self.upper_left.re + span_re / 2,
            self.lower_right.im + span_im / 2,
        )
        half = Complex(span_re * factor / 2, span_im * factor / 2)
        return CornerViewport(
            Complex(center.re - half.re, center.im + half.im),
            Complex(center.re + half.re, center.im - half.im),
        )


@dataclass(frozen=True)
class DeltaViewport:
    """Region anchored at its upper-left corner with a uniform pixel delta."""

    upper_left: Complex
    delta: float

    def __post_init__(self):
        if not self.delta > 0:
            raise InvalidViewport(f"pixel delta must be positive, got {self.delta!r}")
        object.__setattr__(self, 'upper_left', _as_complex(self.upper_left))
        object.__setattr__(self, 'delta', float(self.delta))

    def point_at(self, bounds, pixel):
        x, y = pixel
        re = self.upper_left.re + x * self.delta
        im = self.upper_left.im - y * self.delta
        return Complex(re, im)

    def lower_right(self, bounds):
        """Plane point just past the last pixel of a frame of `bounds`."""
        width, height = bounds
        return Complex(
            self.upper_left.re + width * self.delta,
            self.upper_left.im - height * self.delta,
        )

    def translated(self, re, im):
        ul = self.upper_left.copy()
        ul.transform(re, im)
        return DeltaViewport(ul, self.delta)

    def with_delta(self, delta):
        return DeltaViewport(self.upper_left, delta)


def pixel_to_point(bounds, pixel, viewport):
    """
    Map an integer pixel coordinate to a point in the complex plane.

    Args:
        bounds: (width, height) of the pixel grid
        pixel: (x, y) with x to the right and y downwards
        viewport: CornerViewport or DeltaViewport

    Returns:
        Complex plane coordinate of the pixel's upper-left corner.

    Raises:
        IndexError: if the pixel lies outside bounds.
    """
    width, height = bounds
    x, y = pixel
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError(f"pixel {pixel} outside bounds {bounds}")
    return viewport.point_at(bounds, pixel)


class Command(enum.Enum):
    """Discrete navigation commands issued by the input layer."""

    PAN_UP = 'pan_up'
    PAN_DOWN = 'pan_down'
    PAN_LEFT = 'pan_left'
    PAN_RIGHT = 'pan_right'
    ZOOM_IN = 'zoom_in'
    ZOOM_OUT = 'zoom_out'


def apply_command(viewport, command, bounds, zoom_factor=DEFAULT_ZOOM_FACTOR):
    """
    Return the viewport that results from one navigation command.

    For a DeltaViewport a pan moves the corner by a tenth of the shorter
    window side. Zooming divides (or multiplies) the delta by `zoom_factor`
    and nudges the corner by 1/18 of the window so the view stays roughly
    centred. CornerViewports pan by the same fraction of their span and zoom
    about their centre.

    Args:
        viewport: Current CornerViewport or DeltaViewport
        command: A Command
        bounds: (width, height) of the window in pixels
        zoom_factor: Scale change per zoom step (> 1)

    Returns:
        New viewport; the input viewport is not modified.
    """
    width, height = check_bounds(bounds)
    if zoom_factor <= 1:
        raise ValueError(f"zoom_factor must be greater than 1, got {zoom_factor}")

    if isinstance(viewport, CornerViewport):
        return _apply_to_corners(viewport, command, zoom_factor)

    delta = viewport.delta
    if command is Command.ZOOM_IN:
        delta /= zoom_factor
        shifted = viewport.with_delta(delta)
        return shifted.translated(
            delta * (width // ZOOM_SHIFT_DIVISOR),
            -delta * (height // ZOOM_SHIFT_DIVISOR),
        )
    if command is Command.ZOOM_OUT:
        delta *= zoom_factor
        shifted = viewport.with_delta(delta)
        return shifted.translated(
            -delta * (width // ZOOM_SHIFT_DIVISOR),
            delta * (height // ZOOM_SHIFT_DIVISOR),
        )

    step = delta * (min(width, height) // PAN_DIVISOR)
    re, im = _pan_direction(command)
    return viewport.translated(re * step, im * step)


def _apply_to_corners(viewport, command, zoom_factor):
    if command is Command.ZOOM_IN:
        return viewport.scaled(1 / zoom_factor)
    if command is Command.ZOOM_OUT:
        return viewport.scaled(zoom_factor)
    span_re, span_im = viewport.span
    re, im = _pan_direction(command)
    return viewport.translated(re * span_re / PAN_DIVISOR, im * span_im / PAN_DIVISOR)


def _pan_direction(command):
    directions = {
        Command.PAN_UP: (0, 1),
        Command.PAN_DOWN: (0, -1),
        Command.PAN_LEFT: (-1, 0),
        Command.PAN_RIGHT: (1, 0),
    }
    try:
        return directions[command]
    except KeyError:
        raise ValueError(f"unknown command {command!r}") from None

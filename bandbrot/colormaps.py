"""
Color mapping from escape results to RGB.

The scheme is a two-stage red/white banding:
    - points in the set are black
    - escapes in the lower half of the iteration range ramp black -> red
    - escapes in the upper half ramp red -> white

colorize() is the reference function. create_colormap() tabulates it into
a (max_iter + 1, 3) uint8 lookup table for compute.apply_colormap, so the
vectorised path can never disagree with the scalar one.
"""

import math

import numpy as np

from .escape import Escaped, InSet, IN_SET


BLACK = (0, 0, 0)


def halfway_point(iteration_limit):
    """
    Iteration count where the ramp switches from red to white.

    Rounded up: with an odd limit, rounding down would make the last
    iteration wrap to 0 in the upper half and draw a red seam where the
    band should be nearly white.
    """
    return (iteration_limit + 1) // 2


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def colorize(result, iteration_limit):
    """
    Map one escape result to an (r, g, b) tuple of ints in 0..255.

    Args:
        result: InSet or Escaped(i) with 0 <= i < iteration_limit
        iteration_limit: The limit the result was computed with

    Returns:
        RGB tuple
    """
    if isinstance(result, InSet):
        return BLACK
    if not isinstance(result, Escaped):
        raise TypeError(f"expected an EscapeResult, got {result!r}")
    iterations = result.iterations
    if not 0 <= iterations < iteration_limit:
        raise ValueError(
            f"iteration count {iterations} outside [0, {iteration_limit})"
        )

    halfway = halfway_point(iteration_limit)
    color_factor = 255.0 / halfway

    if iterations < halfway:
        return (_round_half_up(iterations * color_factor), 0, 0)

    c = _round_half_up((iterations % halfway) * color_factor)
    return (255, c, c)


def create_colormap(iteration_limit):
    """
    Tabulate colorize() for every escape code.

    Returns:
        (iteration_limit + 1, 3) uint8 array. Row i is the color of
        Escaped(i); the last row is the in-set color.
    """
    if iteration_limit < 1:
        raise ValueError(f"iteration_limit must be positive, got {iteration_limit}")
    colors = np.zeros((iteration_limit + 1, 3), dtype=np.uint8)
    for i in range(iteration_limit):
        colors[i] = colorize(Escaped(i), iteration_limit)
    colors[iteration_limit] = colorize(IN_SET, iteration_limit)
    return colors

"""
Escape-time oracle for the Mandelbrot iteration z -> z*z + c.

The iteration starts from z = 0 and checks the squared magnitude after each
update. A point whose orbit leaves the disc of radius 2 diverges, so the
check compares against 4.0 and never needs a square root.

Results are InSet or Escaped(iterations). Numpy buffers store them as plain
integers (see encode/decode), with IN_SET_CODE standing for InSet.
"""

from dataclasses import dataclass

from .complex import Complex


ESCAPE_RADIUS_SQUARED = 4.0
IN_SET_CODE = -1  # Buffer code for points that never escaped


class EscapeResult:
    """Base class of the two possible escape-time outcomes."""

    __slots__ = ()


@dataclass(frozen=True)
class InSet(EscapeResult):
    """The orbit stayed bounded for the whole iteration limit."""

    def __repr__(self):
        return "InSet"


@dataclass(frozen=True)
class Escaped(EscapeResult):
    """The orbit left the escape radius after `iterations` completed steps."""

    iterations: int


IN_SET = InSet()


def evaluate(c, iteration_limit):
    """
    Decide whether `c` belongs to the Mandelbrot set.

    Args:
        c: Complex point to test
        iteration_limit: Number of iterations to try before giving up

    Returns:
        Escaped(i) where i is the 0-based index of the first iteration whose
        result exceeds the escape radius, or IN_SET.
    """
    if iteration_limit < 1:
        raise ValueError(f"iteration_limit must be positive, got {iteration_limit}")

    z = Complex.identity()
    for i in range(iteration_limit):
        z = z * z + c
        if z.abs_squared() > ESCAPE_RADIUS_SQUARED:
            return Escaped(i)
    return IN_SET


def encode(result):
    """Convert an EscapeResult to its integer buffer code."""
    if isinstance(result, Escaped):
        return result.iterations
    return IN_SET_CODE


def decode(code):
    """Convert an integer buffer code back into an EscapeResult."""
    code = int(code)
    if code == IN_SET_CODE:
        return IN_SET
    if code < 0:
        raise ValueError(f"invalid escape code {code}")
    return Escaped(code)

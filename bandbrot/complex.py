"""
Complex number type used by the pure-Python side of the renderer.

Arithmetic is spelled out component by component so that the numba kernels
in compute.py can repeat the exact same operations and produce bit-identical
floats. Operators always return new values; only the transform methods
modify a number in place.
"""

import math
from numbers import Real

from .errors import DegenerateDivision


class Complex:
    """
    A complex number made of two scalars of any numeric type.

    Works with ints (useful in tests, since results are exact) as well as
    floats.
    """

    __slots__ = ('re', 'im')

    def __init__(self, re, im):
        self.re = re
        self.im = im

    @classmethod
    def identity(cls, kind=float):
        """Return the additive identity built from `kind`'s zero."""
        return cls(kind(), kind())

    def copy(self):
        return Complex(self.re, self.im)

    def __add__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.re + other.re, self.im + other.im)

    def __sub__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.re - other.re, self.im - other.im)

    def __mul__(self, other):
        if isinstance(other, Complex):
            return Complex(
                self.re * other.re - self.im * other.im,
                self.re * other.im + self.im * other.re,
            )
        if isinstance(other, Real):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other):
        """
        Divide by another complex number.

        Raises:
            DegenerateDivision: if the divisor is zero.
        """
        if not isinstance(other, Complex):
            return NotImplemented
        a, b = self.re, self.im
        c, d = other.re, other.im

        divisor = c * c + d * d
        if divisor == 0:
            raise DegenerateDivision(f"cannot divide {self} by {other}")

        return Complex((a * c + b * d) / divisor, (b * c - a * d) / divisor)

    def __neg__(self):
        return Complex(-self.re, -self.im)

    def scale(self, factor):
        """Multiply both components by a real scalar."""
        return Complex(self.re * factor, self.im * factor)

    def abs_squared(self):
        """Squared magnitude; the escape test uses this to skip the sqrt."""
        return self.re * self.re + self.im * self.im

    def __abs__(self):
        return math.sqrt(self.abs_squared())

    def transform(self, re, im):
        """Translate this number in place by (re, im)."""
        self.re += re
        self.im += im

    def transform_re(self, re):
        self.re += re

    def transform_im(self, im):
        self.im += im

    def __eq__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.re == other.re and self.im == other.im

    # Mutable through transform(), so not hashable
    __hash__ = None

    def __iter__(self):
        yield self.re
        yield self.im

    def __repr__(self):
        return f"Complex(re={self.re!r}, im={self.im!r})"

    def __str__(self):
        sign = '+' if self.im >= 0 else ''
        return f"{self.re}{sign}{self.im}i"

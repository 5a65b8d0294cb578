"""
Exception types raised by the bandbrot core.

Everything derives from BandbrotError, and each class also derives from the
closest builtin so callers can catch either.
"""


class BandbrotError(Exception):
    """Base class for all bandbrot errors."""


class InvalidDimensions(BandbrotError, ValueError):
    """Pixel bounds or an output buffer do not describe a valid frame."""


class InvalidViewport(BandbrotError, ValueError):
    """A viewport's corners or pixel delta break its ordering invariants."""


class DegenerateDivision(BandbrotError, ZeroDivisionError):
    """Complex division by a divisor whose squared magnitude is zero."""


class WorkerFailure(BandbrotError, RuntimeError):
    """
    A band worker raised while computing its rows.

    The whole frame is discarded. The original exception is chained as
    __cause__ and also kept on the `error` attribute.
    """

    def __init__(self, band, error):
        super().__init__(
            f"band {band.index} (rows {band.top}-{band.top + band.height}) "
            f"failed: {error!r}"
        )
        self.band = band
        self.error = error

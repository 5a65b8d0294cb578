"""
Band-parallel Mandelbrot renderer.

A frame is split into horizontal row-bands, one per worker thread. Each
thread gets a numpy view of its own rows of the output buffer and runs a
GIL-releasing Numba kernel over it, so bands compute in parallel without
any locking. The render call joins every thread before returning; the
buffer is only meaningful once render() has returned normally.

Usage:
    bounds = (800, 600)
    viewport = CornerViewport((-2.5, 1.25), (1.0, -1.25))

    codes = new_escape_buffer(bounds)
    render(codes, bounds, viewport, 256)

    rgb = new_rgb_buffer(bounds)
    render_rgb(rgb, bounds, viewport, 256)
"""

import logging
import os
import threading
import time
from dataclasses import dataclass

import numpy as np

from .colormaps import create_colormap
from .complex import Complex
from .compute import apply_colormap, compute_band_corners, compute_band_delta
from .errors import InvalidDimensions, WorkerFailure
from .viewport import CornerViewport, DeltaViewport, check_bounds, pixel_to_point


logger = logging.getLogger(__name__)

ESCAPE_DTYPE = np.int32
RGB_CHANNELS = 3


@dataclass(frozen=True)
class Band:
    """
    A contiguous row range of the frame owned by a single worker.

    Attributes:
        index: Position of the band, counting from the top
        top: First row of the band
        height: Number of rows (may be 0 for a trailing band)
        upper_left: Plane coordinate of the band's first pixel
    """

    index: int
    top: int
    height: int
    upper_left: Complex = None

    @property
    def rows(self):
        return range(self.top, self.top + self.height)


def default_worker_count():
    """Number of logical CPUs, at least 1."""
    return max(os.cpu_count() or 1, 1)


def partition_rows(height, workers):
    """
    Split `height` rows into bands of ceil(height / workers) rows.

    The bands cover [0, height) exactly, in order and without overlap.
    Fewer than `workers` bands are returned when the rows run out, and
    the last band may be shorter than the others.

    Args:
        height: Number of rows in the frame
        workers: Number of worker threads available (>= 1)

    Returns:
        List of Band without plane coordinates (upper_left is None).
    """
    if height < 0:
        raise InvalidDimensions(f"height must not be negative, got {height}")
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    rows_per_band = -(-height // workers)
    bands = []
    for index, top in enumerate(range(0, height, max(rows_per_band, 1))):
        bands.append(Band(index, top, min(rows_per_band, height - top)))
    return bands


def new_escape_buffer(bounds):
    """Allocate a (height, width) escape-code buffer for `bounds`."""
    width, height = check_bounds(bounds)
    return np.zeros((height, width), dtype=ESCAPE_DTYPE)


def new_rgb_buffer(bounds):
    """Allocate a (height, width, 3) uint8 RGB buffer for `bounds`."""
    width, height = check_bounds(bounds)
    return np.zeros((height, width, RGB_CHANNELS), dtype=np.uint8)


def render(output, bounds, viewport, iteration_limit, workers=None):
    """
    Compute the escape code of every pixel in the frame.

    Args:
        output: C-contiguous signed integer array of width * height
            elements, shaped (height, width) or flat. Modified in place.
            Codes are iteration counts, or escape.IN_SET_CODE.
        bounds: (width, height) in pixels
        viewport: CornerViewport or DeltaViewport
        iteration_limit: Maximum iterations per point
        workers: Number of band threads (default: number of CPUs)

    Raises:
        InvalidDimensions: if output does not match bounds
        WorkerFailure: if any band fails; the buffer is then not valid
    """
    width, height = check_bounds(bounds)
    _check_limit(iteration_limit)
    codes = _escape_view(output, width, height, iteration_limit)

    def work(band):
        _compute_band(codes[band.top:band.top + band.height], band, bounds, viewport, iteration_limit)

    _run_bands(work, bounds, viewport, workers)


def render_rgb(output, bounds, viewport, iteration_limit, workers=None):
    """
    Compute the frame and color it in the same pass.

    Each worker computes escape codes for its rows into a scratch buffer
    and immediately maps them through the colormap into its rows of
    `output`.

    Args:
        output: C-contiguous uint8 array of width * height * 3 elements,
            shaped (height, width, 3) or flat. Modified in place.
        bounds, viewport, iteration_limit, workers: As for render()

    Raises:
        InvalidDimensions: if output does not match bounds
        WorkerFailure: if any band fails; the buffer is then not valid
    """
    width, height = check_bounds(bounds)
    _check_limit(iteration_limit)
    rgb = _rgb_view(output, width, height)
    codes = np.empty((height, width), dtype=ESCAPE_DTYPE)
    colormap = create_colormap(iteration_limit)

    def work(band):
        rows = slice(band.top, band.top + band.height)
        _compute_band(codes[rows], band, bounds, viewport, iteration_limit)
        apply_colormap(codes[rows], colormap, rgb[rows])

    _run_bands(work, bounds, viewport, workers)


def _run_bands(work, bounds, viewport, workers):
    """Run `work(band)` on one thread per band and join them all."""
    width, height = bounds
    if workers is None:
        workers = default_worker_count()

    bands = [
        Band(band.index, band.top, band.height,
             pixel_to_point(bounds, (0, band.top), viewport))
        for band in partition_rows(height, workers)
    ]
    logger.debug("Rendering %dx%d in %d bands of up to %d rows",
                 width, height, len(bands), bands[0].height)

    errors = [None] * len(bands)

    def run(band):
        try:
            work(band)
        except Exception as e:
            errors[band.index] = e

    start = time.perf_counter()
    threads = [
        threading.Thread(target=run, args=(band,), name=f"bandbrot-band-{band.index}")
        for band in bands
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for band, error in zip(bands, errors):
        if error is not None:
            logger.error("Band %d failed: %r", band.index, error)
            raise WorkerFailure(band, error) from error

    logger.debug("Rendered %dx%d in %.3fs", width, height, time.perf_counter() - start)


def _compute_band(out, band, bounds, viewport, iteration_limit):
    """Dispatch one band to the kernel matching the viewport type."""
    width, height = bounds
    if isinstance(viewport, CornerViewport):
        ul, lr = viewport.upper_left, viewport.lower_right
        compute_band_corners(out, band.top, width, height,
                             ul.re, ul.im, lr.re, lr.im, iteration_limit)
    elif isinstance(viewport, DeltaViewport):
        ul = viewport.upper_left
        compute_band_delta(out, band.top, ul.re, ul.im, viewport.delta, iteration_limit)
    else:
        raise TypeError(f"unsupported viewport {viewport!r}")


def _check_limit(iteration_limit):
    if isinstance(iteration_limit, bool) or not isinstance(iteration_limit, (int, np.integer)) \
            or iteration_limit < 1:
        raise ValueError(f"iteration_limit must be a positive integer, got {iteration_limit!r}")


def _escape_view(output, width, height, iteration_limit):
    """Return a (height, width) view of an escape-code buffer."""
    if not isinstance(output, np.ndarray):
        raise InvalidDimensions(f"output must be a numpy array, got {type(output).__name__}")
    if not np.issubdtype(output.dtype, np.signedinteger):
        raise InvalidDimensions(f"escape buffer must have a signed integer dtype, got {output.dtype}")
    if iteration_limit - 1 > np.iinfo(output.dtype).max:
        raise InvalidDimensions(
            f"dtype {output.dtype} cannot hold iteration counts up to {iteration_limit - 1}"
        )
    return _shaped_view(output, (height, width))


def _rgb_view(output, width, height):
    """Return a (height, width, 3) view of an RGB buffer."""
    if not isinstance(output, np.ndarray):
        raise InvalidDimensions(f"output must be a numpy array, got {type(output).__name__}")
    if output.dtype != np.uint8:
        raise InvalidDimensions(f"RGB buffer must be uint8, got {output.dtype}")
    return _shaped_view(output, (height, width, RGB_CHANNELS))


def _shaped_view(output, shape):
    expected = int(np.prod(shape))
    if output.size != expected:
        raise InvalidDimensions(
            f"output has {output.size} elements, expected {expected} for shape {shape}"
        )
    if output.ndim != 1 and output.shape != shape:
        raise InvalidDimensions(f"output has shape {output.shape}, expected {shape} or flat")
    if not output.flags.c_contiguous or not output.flags.writeable:
        raise InvalidDimensions("output must be a writeable C-contiguous array")
    # Reshape of a contiguous array is a view, so workers write into output
    return output.reshape(shape)

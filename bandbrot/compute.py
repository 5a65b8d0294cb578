"""
Mandelbrot band kernels using Numba JIT compilation.

This module contains the performance-critical loops. Every kernel is
compiled with nogil=True so the band threads started by renderer.py run
truly in parallel. The functions handle:
- Escape-time iteration for a single point
- Filling one row-band of escape codes, for corner and delta viewports
- Mapping escape codes to RGB through a colormap lookup table

The arithmetic mirrors complex.Complex, escape.evaluate and
viewport.pixel_to_point operation for operation. fastmath stays off: any
reassociation would change which pixels escape on which iteration.
"""

import numpy as np
from numba import jit

from .escape import ESCAPE_RADIUS_SQUARED, IN_SET_CODE


@jit(nopython=True, nogil=True, cache=True)
def escape_time(cr, ci, max_iter):
    """
    Iterate z -> z*z + c from z = 0 for a single point.

    Returns:
        0-based index of the first iteration that escapes, or IN_SET_CODE.
    """
    zr = 0.0
    zi = 0.0
    for i in range(max_iter):
        # Same operation order as Complex.__mul__ followed by __add__
        zr, zi = zr * zr - zi * zi + cr, zr * zi + zi * zr + ci
        if zr * zr + zi * zi > ESCAPE_RADIUS_SQUARED:
            return i
    return IN_SET_CODE


@jit(nopython=True, nogil=True, cache=True)
def compute_band_corners(out, top, width, height, ul_re, ul_im, lr_re, lr_im, max_iter):
    """
    Fill one band of escape codes for a corner viewport.

    Args:
        out: 2D integer array (band_rows, width), modified in place
        top: Row of the full frame that out[0] corresponds to
        width, height: Full frame dimensions in pixels
        ul_re, ul_im: Upper-left corner of the full frame
        lr_re, lr_im: Lower-right corner of the full frame
        max_iter: Iteration limit
    """
    rows = out.shape[0]
    for row in range(rows):
        y = top + row
        ci = ul_im - y * (ul_im - lr_im) / height
        for x in range(width):
            cr = ul_re + x * (lr_re - ul_re) / width
            out[row, x] = escape_time(cr, ci, max_iter)


@jit(nopython=True, nogil=True, cache=True)
def compute_band_delta(out, top, ul_re, ul_im, delta, max_iter):
    """
    Fill one band of escape codes for a uniform-delta viewport.

    Args:
        out: 2D integer array (band_rows, width), modified in place
        top: Row of the full frame that out[0] corresponds to
        ul_re, ul_im: Upper-left corner of the full frame
        delta: Plane distance between adjacent pixels
        max_iter: Iteration limit
    """
    rows, width = out.shape
    for row in range(rows):
        y = top + row
        ci = ul_im - y * delta
        for x in range(width):
            cr = ul_re + x * delta
            out[row, x] = escape_time(cr, ci, max_iter)


@jit(nopython=True, nogil=True, cache=True)
def apply_colormap(codes, colormap, out):
    """
    Map escape codes to RGB through a lookup table.

    Args:
        codes: 2D integer array of escape codes
        colormap: (max_iter + 1, 3) uint8 table; the last row is the
            in-set color, row i is the color of Escaped(i)
        out: (rows, width, 3) uint8 array, modified in place
    """
    rows, width = codes.shape
    in_set_row = colormap.shape[0] - 1
    for row in range(rows):
        for x in range(width):
            code = codes[row, x]
            idx = in_set_row if code == IN_SET_CODE else code
            out[row, x, 0] = colormap[idx, 0]
            out[row, x, 1] = colormap[idx, 1]
            out[row, x, 2] = colormap[idx, 2]


def warmup_jit(colormap):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to compile the kernels before the first
    frame, avoiding a pause on first actual use.

    Args:
        colormap: A colormap table to use for warming up apply_colormap
    """
    codes = np.zeros((2, 2), dtype=np.int32)
    rgb = np.zeros((2, 2, 3), dtype=np.uint8)
    compute_band_corners(codes, 0, 2, 2, -2.0, 1.0, 1.0, -1.0, 2)
    compute_band_delta(codes, 0, -2.0, 1.0, 0.5, 2)
    apply_colormap(codes, colormap, rgb)

"""
Band-parallel Mandelbrot renderer

Computes the escape time of every pixel of a viewport onto the complex
plane, splitting the frame into row-bands that run on separate threads
with Numba-compiled, GIL-releasing kernels. A small Pygame viewer sits on
top for interactive panning and zooming.

Quick Start:
    from bandbrot import CornerViewport, new_rgb_buffer, render_rgb

    bounds = (800, 600)
    rgb = new_rgb_buffer(bounds)
    render_rgb(rgb, bounds, CornerViewport((-2.5, 1.25), (1.0, -1.25)), 256)

Or from command line:
    python -m bandbrot 800x800 -1.95,1.15

Package Structure:
    - complex.py: Complex number arithmetic
    - escape.py: Escape-time oracle and its InSet/Escaped results
    - viewport.py: Viewports, pixel-to-point mapping, pan/zoom commands
    - compute.py: JIT-compiled band and colormap kernels
    - colormaps.py: Red/white banded color mapping
    - renderer.py: Band partitioning and thread-per-band rendering
    - app.py: Pygame window and event loop

Controls:
    - Up/Down: Zoom in/out
    - W/A/S/D: Pan
    - ESC: Quit
"""

from .complex import Complex
from .colormaps import colorize, create_colormap
from .errors import (
    BandbrotError,
    DegenerateDivision,
    InvalidDimensions,
    InvalidViewport,
    WorkerFailure,
)
from .escape import IN_SET, IN_SET_CODE, Escaped, EscapeResult, InSet, decode, encode, evaluate
from .renderer import Band, new_escape_buffer, new_rgb_buffer, partition_rows, render, render_rgb
from .viewport import Command, CornerViewport, DeltaViewport, apply_command, pixel_to_point

__version__ = "1.0.0"
__all__ = [
    "Band",
    "BandbrotError",
    "Command",
    "Complex",
    "CornerViewport",
    "DegenerateDivision",
    "DeltaViewport",
    "Escaped",
    "EscapeResult",
    "IN_SET",
    "IN_SET_CODE",
    "InSet",
    "InvalidDimensions",
    "InvalidViewport",
    "WorkerFailure",
    "apply_command",
    "colorize",
    "create_colormap",
    "decode",
    "encode",
    "evaluate",
    "new_escape_buffer",
    "new_rgb_buffer",
    "partition_rows",
    "pixel_to_point",
    "render",
    "render_rgb",
]

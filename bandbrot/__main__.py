"""
Command line entry point: python -m bandbrot [PIXELS] [UPPERLEFT]

PIXELS is WIDTHxHEIGHT (e.g. 800x800) and UPPERLEFT is RE,IM
(e.g. -1.95,1.15). Either or both may be omitted; defaults come from
settings.json.
"""

import argparse
import logging

from .complex import Complex
from .settings import load_settings


EXAMPLE = "800x800 -1.95,1.15"


def parse_pair(text, separator, kind):
    """
    Parse two values of type `kind` separated by `separator`.

    Returns:
        (left, right) tuple, or None if the text does not parse
    """
    left, sep, right = text.partition(separator)
    if not sep:
        return None
    try:
        return kind(left), kind(right)
    except ValueError:
        return None


def parse_bounds(text):
    """Parse WIDTHxHEIGHT into positive ints, or None."""
    pair = parse_pair(text, 'x', int)
    if pair is None or min(pair) <= 0:
        return None
    return pair


def parse_complex(text):
    """Parse RE,IM into a Complex, or None."""
    pair = parse_pair(text, ',', float)
    if pair is None:
        return None
    return Complex(*pair)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='bandbrot',
        description="Interactive Mandelbrot viewer. Up/Down zoom, W/A/S/D pan, Esc quits.",
        epilog=f"Example: bandbrot {EXAMPLE}",
    )
    parser.add_argument('positional', nargs='*', metavar='PIXELS|UPPERLEFT',
                        help='window size as WIDTHxHEIGHT and/or upper left corner as RE,IM')
    parser.add_argument('--iterations', type=int, dest='max_iterations', metavar='N',
                        help='maximum number of iterations per point')
    parser.add_argument('--workers', type=int, metavar='N',
                        help='number of band threads (default: number of CPUs)')
    parser.add_argument('--pixel-delta', type=float, dest='pixel_delta', metavar='DELTA',
                        help='initial distance in the complex plane between adjacent pixels')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log render timings and band layout')
    return parser


def parse_arguments(argv=None, settings=None):
    """
    Parse the command line into run() keyword arguments.

    Args:
        argv: Argument list (default: sys.argv[1:])
        settings: Defaults to fall back on (default: load_settings())

    Returns:
        (options dict, verbose flag)
    """
    parser = build_parser()
    # Corners like -1.95,1.15 look like options to argparse
    args, extra = parser.parse_known_args(argv)
    for text in extra:
        if parse_complex(text) is None:
            parser.error(f"unrecognized arguments: {text}")
        args.positional.append(text)
    if settings is None:
        settings = load_settings()

    bounds = (settings['width'], settings['height'])
    upper_left = Complex(*settings['upper_left'])

    if len(args.positional) == 0:
        print(f"Running with default arguments: {bounds[0]}x{bounds[1]} {upper_left.re},{upper_left.im}")
    elif len(args.positional) == 1:
        text = args.positional[0]
        parsed_bounds = parse_bounds(text)
        parsed_corner = parse_complex(text)
        if parsed_bounds is not None:
            bounds = parsed_bounds
        elif parsed_corner is not None:
            upper_left = parsed_corner
        else:
            parser.error(f"could not parse {text!r} as PIXELS or UPPERLEFT")
    elif len(args.positional) == 2:
        bounds = parse_bounds(args.positional[0])
        if bounds is None:
            parser.error(f"error parsing image dimensions {args.positional[0]!r}")
        upper_left = parse_complex(args.positional[1])
        if upper_left is None:
            parser.error(f"error parsing upper left corner point {args.positional[1]!r}")
    else:
        parser.error("expected at most two positional arguments")

    max_iterations = args.max_iterations if args.max_iterations is not None else settings['max_iterations']
    if max_iterations < 1:
        parser.error("--iterations must be positive")
    workers = args.workers if args.workers is not None else settings['workers']
    if workers is not None and workers < 1:
        parser.error("--workers must be positive")
    pixel_delta = args.pixel_delta if args.pixel_delta is not None else settings['pixel_delta']
    if pixel_delta <= 0:
        parser.error("--pixel-delta must be positive")

    options = {
        'bounds': bounds,
        'upper_left': upper_left,
        'max_iter': max_iterations,
        'pixel_delta': pixel_delta,
        'zoom_factor': settings['zoom_factor'],
        'workers': workers,
    }
    return options, args.verbose


def main(argv=None):
    options, verbose = parse_arguments(argv)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s %(name)s %(message)s')

    # Imported late so --help works without opening pygame
    from .app import run
    run(**options)


if __name__ == "__main__":
    main()

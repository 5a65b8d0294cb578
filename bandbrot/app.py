"""
Main application module for the Mandelbrot viewer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Keyboard input (zoom and pan)
- Rendering a new frame for every navigation command and displaying it

The only state carried between frames is the current viewport. Each
command produces a new DeltaViewport and a fresh band-parallel render.
"""

import pygame

from .compute import warmup_jit
from .colormaps import create_colormap
from .errors import BandbrotError
from .renderer import new_rgb_buffer, render_rgb
from .viewport import Command, DeltaViewport, apply_command, DEFAULT_ZOOM_FACTOR


KEY_COMMANDS = {
    pygame.K_UP: Command.ZOOM_IN,
    pygame.K_DOWN: Command.ZOOM_OUT,
    pygame.K_w: Command.PAN_UP,
    pygame.K_s: Command.PAN_DOWN,
    pygame.K_a: Command.PAN_LEFT,
    pygame.K_d: Command.PAN_RIGHT,
}


def command_for_key(key):
    """Return the navigation Command bound to a pygame key, or None."""
    return KEY_COMMANDS.get(key)


class MandelbrotApp:
    """
    Pygame window showing the Mandelbrot set.

    Handles the window, the event loop and re-rendering on navigation.
    """

    CAPTION = "Mandelbrot Visualization"

    def __init__(self, bounds, viewport, max_iter, zoom_factor=DEFAULT_ZOOM_FACTOR, workers=None):
        """
        Initialize the application.

        Args:
            bounds: (width, height) of the window in pixels
            viewport: Initial DeltaViewport
            max_iter: Maximum iteration count
            zoom_factor: Scale change per zoom key press
            workers: Number of band threads (None = CPU count)
        """
        self.bounds = bounds
        self.viewport = viewport
        self.max_iter = max_iter
        self.zoom_factor = zoom_factor
        self.workers = workers

        self.rgb = new_rgb_buffer(bounds)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(create_colormap(self.max_iter))
        self._render()

        self.running = True
        while self.running:
            for event in pygame.event.get():
                self._handle_event(event)
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(self.bounds)
        pygame.display.set_caption(self.CAPTION)
        self.clock = pygame.time.Clock()

    def _handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
                return
            command = command_for_key(event.key)
            if command is not None:
                self.navigate(command)

    def navigate(self, command):
        """Apply a navigation command and render the new view."""
        previous = self.viewport
        try:
            self.viewport = apply_command(self.viewport, command, self.bounds, self.zoom_factor)
        except BandbrotError as e:
            print(f"Ignoring {command.value}: {e}")
            return
        if not self._render():
            self.viewport = previous

    def _render(self):
        """Render the current viewport and present it; keep the old frame on failure."""
        pygame.display.set_caption("Computing...")
        try:
            render_rgb(self.rgb, self.bounds, self.viewport, self.max_iter, self.workers)
        except BandbrotError as e:
            print(f"Render failed, keeping previous frame: {e}")
            pygame.display.set_caption(self.CAPTION)
            return False

        # surfarray expects (x, y) indexing
        self.current_surface = pygame.surfarray.make_surface(self.rgb.swapaxes(0, 1))
        self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()
        ul = self.viewport.upper_left
        pygame.display.set_caption(
            f"{self.CAPTION} - {ul} @ {self.viewport.delta:.3g}/px"
        )
        return True


def run(bounds, upper_left, max_iter, pixel_delta, zoom_factor=DEFAULT_ZOOM_FACTOR, workers=None):
    """
    Run the Mandelbrot viewer.

    Args:
        bounds: (width, height) of the window
        upper_left: Complex plane coordinate of the top-left pixel
        max_iter: Maximum iterations
        pixel_delta: Initial plane distance per pixel
        zoom_factor: Scale change per zoom key press
        workers: Number of band threads (None = CPU count)
    """
    app = MandelbrotApp(bounds, DeltaViewport(upper_left, pixel_delta), max_iter,
                        zoom_factor=zoom_factor, workers=workers)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()

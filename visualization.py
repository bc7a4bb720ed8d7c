# visualization.py
import pygame
import numpy as np
from typing import Sequence, Tuple
import logging
from config import config, ConfigurationError
from physics_utils import Vector2D, ZERO
from visual_effects import VisualEffects, StarField


def to_screen(position: Vector2D, width: int, height: int, box: float) -> Tuple[float, float]:
    """Maps a simulation-space point to pixel coordinates.

    The square `[-box, box] x [-box, box]` is stretched over the window with
    the origin at its center and simulation +y pointing up the screen.
    """
    u = (position.x / box + 1.0) * 0.5
    v = (position.y / box + 1.0) * 0.5
    return u * (width - 1), (1.0 - v) * (height - 1)


def to_screen_array(points: np.ndarray, width: int, height: int, box: float) -> np.ndarray:
    """Vectorized `to_screen` for an (N, 2) array of simulation-space points."""
    uv = (np.asarray(points, dtype=np.float64) / box + 1.0) * 0.5
    screen = np.empty_like(uv)
    screen[:, 0] = uv[:, 0] * (width - 1)
    screen[:, 1] = (1.0 - uv[:, 1]) * (height - 1)
    return screen


def trail_alphas(count: int) -> np.ndarray:
    """Alpha for each trail point, 255 at the newest point fading to 0 at the oldest."""
    if count <= 0:
        return np.zeros(0, dtype=np.int32)
    fraction = np.arange(count, dtype=np.float64) / max(1, count - 1)
    return (255.0 * (1.0 - fraction)).astype(np.int32)


class Visualization:
    """Renders a `GravitySimulation` with pygame and turns input into session actions.

    Controls:
        Space: pause / resume.
        R: reset to the initial conditions.
        Up / Down: zoom in / out (scales the visible simulation square).
        Resizing the window regenerates the starfield for the new size.

    Attributes:
        screen (pygame.Surface | None): The display surface.
        visualization_enabled (bool): False when the display could not be created;
            rendering calls are then skipped.
        clock (pygame.time.Clock | None): Frame rate limiter.
        width (int), height (int): Current window size in pixels.
        box (float): Half-width of the visible simulation square.
        starfield (StarField | None): Background stars.
        visual_effects (VisualEffects | None): Glow drawing helper with its surface cache.

    Raises:
        ConfigurationError: If the configured window size is invalid.
    """
    def __init__(self):
        pygame.init()
        self.visualization_enabled = True
        self.clock = None
        self.starfield = self.visual_effects = self.trail_layer = None
        self.box = config.Visualization.VIEW_BOX

        screen_w = config.Visualization.SCREEN_WIDTH_PX
        screen_h = config.Visualization.SCREEN_HEIGHT_PX
        if not (isinstance(screen_w, int) and screen_w > 0 and isinstance(screen_h, int) and screen_h > 0):
            raise ConfigurationError("SCREEN_WIDTH_PX and SCREEN_HEIGHT_PX must be positive integers.")
        self.width, self.height = screen_w, screen_h

        try:
            self.screen = pygame.display.set_mode((screen_w, screen_h), pygame.RESIZABLE)
        except pygame.error as e_disp:
            logging.critical(f"Error setting display mode: {e_disp}. Visualization disabled.", exc_info=True)
            self.screen = None
            self.visualization_enabled = False
            return

        pygame.display.set_caption(config.Visualization.WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.visual_effects = VisualEffects()
        self.starfield = StarField(self.width, self.height)
        self.trail_layer = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        logging.info(f"Visualization initialized at {self.width}x{self.height} px.")

    def zoom(self, factor: float):
        self.box = float(np.clip(self.box * factor, config.Visualization.MIN_VIEW_BOX, config.Visualization.MAX_VIEW_BOX))

    def _on_resize(self, width: int, height: int):
        self.width, self.height = max(1, width), max(1, height)
        # pygame 2 resizes the display surface itself; re-query it instead of calling set_mode again
        self.screen = pygame.display.get_surface()
        self.starfield.resize(self.width, self.height)
        self.trail_layer = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        logging.debug(f"Window resized to {self.width}x{self.height} px; starfield regenerated ({len(self.starfield)} stars).")

    def handle_events(self, simulation) -> bool:
        """Processes the pygame event queue.

        Returns:
            bool: `False` if the window was closed or the display is unavailable,
                  `True` otherwise.
        """
        if not self.visualization_enabled:
            return False
        try:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logging.info("QUIT event received via Pygame window. Signaling shutdown.")
                    return False
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        simulation.toggle_pause()
                    elif event.key == pygame.K_r:
                        simulation.reset()
                    elif event.key == pygame.K_UP:
                        self.zoom(config.Visualization.ZOOM_IN_FACTOR)
                    elif event.key == pygame.K_DOWN:
                        self.zoom(config.Visualization.ZOOM_OUT_FACTOR)
                elif event.type == pygame.VIDEORESIZE:
                    self._on_resize(event.w, event.h)
            return True
        except pygame.error as e_pygame_event:
            logging.error(f"Pygame error during event handling: {e_pygame_event}. Attempting to continue.", exc_info=True)
            return True

    def _draw_trail(self, trail: Sequence[Vector2D]):
        if len(trail) < 2:
            return
        points = to_screen_array(np.array([p.to_array() for p in trail]), self.width, self.height, self.box)
        alphas = trail_alphas(len(points))
        color = config.Visualization.TRAIL_COLOR
        self.trail_layer.fill((0, 0, 0, 0))
        for i in range(len(points) - 1):
            if alphas[i] <= 0:
                continue
            pygame.draw.line(self.trail_layer, (*color, int(alphas[i])), tuple(points[i]), tuple(points[i + 1]))
        self.screen.blit(self.trail_layer, (0, 0))

    def render(self, simulation):
        """Draws one frame: background, stars, central body, trail, orbiter and HUD caption."""
        if not self.visualization_enabled or self.screen is None:
            return

        vis = config.Visualization
        try:
            center_px = to_screen(ZERO, self.width, self.height, self.box)
            body_px = to_screen(simulation.state.position, self.width, self.height, self.box)

            self.screen.fill(vis.BACKGROUND_COLOR)
            self.starfield.draw(self.screen)

            self.visual_effects.draw_glow(self.screen, center_px, vis.CENTER_GLOW_RADIUS_PX, vis.CENTER_GLOW_COLOR, vis.CENTER_GLOW_ALPHA)
            self.visual_effects.draw_core(self.screen, center_px, vis.CENTER_CORE_RADIUS_PX, vis.CENTER_CORE_COLOR)

            self._draw_trail(simulation.trail)

            self.visual_effects.draw_glow(self.screen, body_px, vis.BODY_GLOW_RADIUS_PX, vis.BODY_GLOW_COLOR, vis.BODY_GLOW_ALPHA)
            self.visual_effects.draw_core(self.screen, body_px, vis.BODY_CORE_RADIUS_PX, vis.BODY_CORE_COLOR)

            pygame.display.set_caption(simulation.hud_text())
            pygame.display.flip()
            self.clock.tick(vis.FPS)
        except pygame.error as e_pygame_render:
            logging.error(f"Pygame error during render: {e_pygame_render}. Attempting to continue.", exc_info=True)

    def close(self):
        pygame.quit()

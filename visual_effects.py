import pygame
import numpy as np
from config import config


class VisualEffects:
    def __init__(self):
        self.glow_cache = {}  # Cache for glow surfaces, keyed by (radius, color, alpha)

    def _glow_surface(self, radius, color, alpha):
        key = (radius, tuple(color), alpha)
        glow_surf = self.glow_cache.get(key)
        if glow_surf is None:
            size = radius * 2
            glow_surf = pygame.Surface((size, size), pygame.SRCALPHA)
            pygame.draw.circle(glow_surf, (*color, alpha), (radius, radius), radius)
            self.glow_cache[key] = glow_surf
        return glow_surf

    def draw_glow(self, surface, pos, radius, color, alpha):
        """Draw a translucent disc centered on pos"""
        radius = int(radius)
        if radius <= 1 or alpha <= 0:  # Min radius for visibility
            return
        glow_surf = self._glow_surface(radius, color, int(alpha))
        surface.blit(glow_surf, (int(pos[0] - radius), int(pos[1] - radius)))

    def draw_core(self, surface, pos, radius, color):
        pygame.draw.circle(surface, color, (int(pos[0]), int(pos[1])), int(radius))


def star_count_for(width, height):
    """Number of stars for a window; density scales with its area."""
    return max(config.Visualization.MIN_STAR_COUNT, (width * height) // config.Visualization.PIXELS_PER_STAR)


class StarField:
    def __init__(self, width, height, seed=None):
        self.seed = config.Visualization.STAR_SEED if seed is None else seed
        self.resize(width, height)

    def resize(self, width, height):
        """Regenerate stars so they cover the whole (new) window"""
        self.width = width
        self.height = height
        count = star_count_for(width, height)
        rng = np.random.default_rng(self.seed)
        low_alpha, high_alpha = config.Visualization.STAR_ALPHA_RANGE

        self.positions = np.column_stack((
            rng.uniform(0.0, max(width - 1, 0), count),
            rng.uniform(0.0, max(height - 1, 0), count),
        )).astype(np.int32)
        self.alphas = rng.integers(low_alpha, high_alpha, size=count, endpoint=True)

        # Pre-blend white stars onto the background; set_at ignores alpha on the display surface
        background = np.array(config.Visualization.BACKGROUND_COLOR, dtype=np.float64)
        weights = (self.alphas / 255.0)[:, None]
        self.colors = (weights * 255.0 + (1.0 - weights) * background).astype(np.uint8)

    def __len__(self):
        return len(self.positions)

    def draw(self, surface):
        for (x, y), color in zip(self.positions, self.colors):
            surface.set_at((int(x), int(y)), tuple(int(c) for c in color))

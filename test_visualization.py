import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import unittest
from unittest import mock
import numpy as np
import pygame
from config import config
from initial_conditions import InitialConditions
from physics_utils import Vector2D
from simulation import GravitySimulation
from visualization import Visualization, to_screen, to_screen_array, trail_alphas
from visual_effects import StarField, VisualEffects, star_count_for


def setUpModule():
    pygame.init()


def tearDownModule():
    pygame.quit()


class TestScreenMapping(unittest.TestCase):

    def test_origin_maps_to_center(self):
        x, y = to_screen(Vector2D(0.0, 0.0), 901, 701, 2.0)
        self.assertAlmostEqual(x, 450.0)
        self.assertAlmostEqual(y, 350.0)

    def test_corners(self):
        self.assertEqual(to_screen(Vector2D(-2.0, 2.0), 900, 700, 2.0), (0.0, 0.0))
        self.assertEqual(to_screen(Vector2D(2.0, -2.0), 900, 700, 2.0), (899.0, 699.0))

    def test_y_axis_points_up(self):
        _, y_up = to_screen(Vector2D(0.0, 1.0), 900, 700, 2.0)
        _, y_down = to_screen(Vector2D(0.0, -1.0), 900, 700, 2.0)
        self.assertLess(y_up, y_down)

    def test_array_matches_scalar(self):
        points = [Vector2D(1.0, 0.0), Vector2D(-0.3, 0.7), Vector2D(1.4, -1.1)]
        screen = to_screen_array([tuple(p) for p in points], 900, 700, 1.5)
        expected = np.array([to_screen(p, 900, 700, 1.5) for p in points])
        np.testing.assert_array_almost_equal(screen, expected)


class TestTrailAlphas(unittest.TestCase):

    def test_fades_from_newest_to_oldest(self):
        alphas = trail_alphas(5)
        np.testing.assert_array_equal(alphas, np.array([255, 191, 127, 63, 0]))

    def test_degenerate_lengths(self):
        self.assertEqual(len(trail_alphas(0)), 0)
        np.testing.assert_array_equal(trail_alphas(1), np.array([255]))


class TestStarField(unittest.TestCase):

    def test_star_count_scales_with_area(self):
        self.assertEqual(star_count_for(900, 700), 300)
        self.assertEqual(star_count_for(2000, 1500), 600)

    def test_stars_within_window_and_alpha_range(self):
        field = StarField(2000, 1500)
        self.assertEqual(len(field), 600)
        self.assertTrue(np.all(field.positions[:, 0] >= 0) and np.all(field.positions[:, 0] <= 1999))
        self.assertTrue(np.all(field.positions[:, 1] >= 0) and np.all(field.positions[:, 1] <= 1499))
        self.assertTrue(np.all(field.alphas >= 80) and np.all(field.alphas <= 200))

    def test_same_seed_same_stars(self):
        a = StarField(900, 700, seed=7)
        b = StarField(900, 700, seed=7)
        np.testing.assert_array_equal(a.positions, b.positions)
        np.testing.assert_array_equal(a.colors, b.colors)

    def test_resize_regenerates(self):
        field = StarField(900, 700)
        field.resize(2500, 2000)
        self.assertEqual(len(field), 1000)
        self.assertEqual((field.width, field.height), (2500, 2000))

    def test_draw_on_surface(self):
        surface = pygame.Surface((50, 40), 0, 32)
        field = StarField(50, 40, seed=3)
        field.draw(surface)
        # the last star is drawn last, so it wins any shared pixel
        x, y = field.positions[-1]
        self.assertEqual(tuple(surface.get_at((int(x), int(y))))[:3], tuple(int(c) for c in field.colors[-1]))


class TestVisualEffects(unittest.TestCase):

    def test_glow_surfaces_are_cached(self):
        effects = VisualEffects()
        surface = pygame.Surface((100, 100), pygame.SRCALPHA)
        effects.draw_glow(surface, (50, 50), 10, (255, 220, 80), 35)
        effects.draw_glow(surface, (20, 20), 10, (255, 220, 80), 35)
        self.assertEqual(len(effects.glow_cache), 1)
        self.assertGreater(surface.get_at((50, 50)).a, 0)

    def test_tiny_glow_skipped(self):
        effects = VisualEffects()
        surface = pygame.Surface((10, 10), pygame.SRCALPHA)
        effects.draw_glow(surface, (5, 5), 1, (255, 255, 255), 100)
        self.assertEqual(len(effects.glow_cache), 0)


class TestVisualizationControls(unittest.TestCase):

    def setUp(self):
        self.visualization = Visualization()
        self.simulation = GravitySimulation(InitialConditions.default(), steps_per_frame=2)
        pygame.event.clear()

    def press(self, key):
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))
        return self.visualization.handle_events(self.simulation)

    def test_space_toggles_pause(self):
        with self.assertLogs(level='INFO'):
            self.assertTrue(self.press(pygame.K_SPACE))
        self.assertTrue(self.simulation.paused)
        with self.assertLogs(level='INFO'):
            self.press(pygame.K_SPACE)
        self.assertFalse(self.simulation.paused)

    def test_r_resets_session(self):
        self.simulation.advance_frame()
        self.simulation.advance_frame()
        self.press(pygame.K_r)
        self.assertEqual(self.simulation.frame_count, 0)
        self.assertEqual(self.simulation.state.position, Vector2D(1.0, 0.0))
        self.assertEqual(self.simulation.state.elapsed_time, 0.0)

    def test_arrow_keys_zoom(self):
        self.press(pygame.K_UP)
        self.assertAlmostEqual(self.visualization.box, config.Visualization.VIEW_BOX * config.Visualization.ZOOM_IN_FACTOR)
        self.press(pygame.K_DOWN)
        self.assertAlmostEqual(
            self.visualization.box,
            config.Visualization.VIEW_BOX * config.Visualization.ZOOM_IN_FACTOR * config.Visualization.ZOOM_OUT_FACTOR,
        )

    def test_zoom_is_clamped(self):
        for _ in range(200):
            self.visualization.zoom(config.Visualization.ZOOM_IN_FACTOR)
        self.assertEqual(self.visualization.box, config.Visualization.MIN_VIEW_BOX)
        for _ in range(500):
            self.visualization.zoom(config.Visualization.ZOOM_OUT_FACTOR)
        self.assertEqual(self.visualization.box, config.Visualization.MAX_VIEW_BOX)

    def test_quit_event_stops(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        with self.assertLogs(level='INFO'):
            self.assertFalse(self.visualization.handle_events(self.simulation))

    def test_render_draws_frame(self):
        self.simulation.advance_frame()
        self.simulation.advance_frame()
        self.assertGreaterEqual(len(self.simulation.trail), 2)
        self.visualization.render(self.simulation)
        center = (self.visualization.width // 2, self.visualization.height // 2)
        self.assertNotEqual(self.visualization.screen.get_at(center)[:3], config.Visualization.BACKGROUND_COLOR)


class TestDisplayUnavailable(unittest.TestCase):

    def test_failed_set_mode_disables_visualization(self):
        with mock.patch.object(pygame.display, "set_mode", side_effect=pygame.error("no display")), \
             self.assertLogs(level='CRITICAL'):
            visualization = Visualization()
        self.assertFalse(visualization.visualization_enabled)
        self.assertIsNone(visualization.screen)
        simulation = GravitySimulation(InitialConditions.default())
        self.assertFalse(visualization.handle_events(simulation))
        visualization.render(simulation)


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)

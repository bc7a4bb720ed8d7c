import unittest
from unittest import mock
from config import SimulationConfig, ConfigurationError, config


class TestSimulationConfig(unittest.TestCase):

    def test_module_config_is_valid(self):
        self.assertIsInstance(config, SimulationConfig)
        config.validate()  # must not raise

    def test_defaults_match_documented_values(self):
        self.assertEqual(SimulationConfig.Physics.MU_DEFAULT, 1.0)
        self.assertEqual(SimulationConfig.Physics.TIMESTEP, 1e-3)
        self.assertEqual(SimulationConfig.InitialConditions.POSITION_DEFAULT, (1.0, 0.0))
        self.assertEqual(SimulationConfig.InitialConditions.VELOCITY_DEFAULT, (0.0, 1.0))

    def test_rejects_non_positive_mu_min(self):
        with mock.patch.object(SimulationConfig.Physics, 'MU_MIN', 0.0):
            with self.assertRaises(ConfigurationError):
                SimulationConfig()

    def test_rejects_default_mu_outside_bounds(self):
        with mock.patch.object(SimulationConfig.Physics, 'MU_DEFAULT', 20.0):
            with self.assertRaises(ConfigurationError):
                SimulationConfig()

    def test_rejects_non_positive_timestep(self):
        with mock.patch.object(SimulationConfig.Physics, 'TIMESTEP', 0.0):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_non_integer_steps_per_frame(self):
        with mock.patch.object(SimulationConfig.Physics, 'STEPS_PER_FRAME', 2.5):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_degenerate_default_position(self):
        with mock.patch.object(SimulationConfig.InitialConditions, 'POSITION_DEFAULT', (0.0, 0.0)):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_unordered_range(self):
        with mock.patch.object(SimulationConfig.InitialConditions, 'VELOCITY_RANGE', (3.0, -3.0)):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_bad_zoom_factors(self):
        with mock.patch.object(SimulationConfig.Visualization, 'ZOOM_IN_FACTOR', 1.2):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_bad_star_alpha_range(self):
        with mock.patch.object(SimulationConfig.Visualization, 'STAR_ALPHA_RANGE', (200, 300)):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_zero_screen_size(self):
        with mock.patch.object(SimulationConfig.Visualization, 'SCREEN_WIDTH_PX', 0):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_zero_energy_interval(self):
        with mock.patch.object(SimulationConfig.Debug, 'ENERGY_CHECK_INTERVAL_FRAMES', 0):
            with self.assertRaises(ConfigurationError):
                config.validate()


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)

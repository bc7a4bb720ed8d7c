# config.py
import logging

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(module)s - %(message)s')


class ConfigurationError(Exception):
    """Custom exception for simulation configuration errors.

    Raised by `SimulationConfig.validate()` and by components that receive
    settings they cannot run with (e.g. a non-positive gravitational parameter),
    so bad values are rejected before they reach the integrator.

    Attributes:
        message (str): A human-readable explanation of the configuration error.
                       This is the first argument passed to the exception constructor.
    """
    pass


class SimulationConfig:
    """Centralized, hierarchical configuration for the Gravity Simulator.

    Parameters are grouped into nested static classes (`SimulationConfig.Physics`,
    `SimulationConfig.InitialConditions`, `SimulationConfig.Visualization`,
    `SimulationConfig.Debug`). An instance named `config` is created at the end
    of this module and validated on construction.

    Simulation units are normalized: lengths of order 1, `mu` standing in for
    G*M, and time such that a circular orbit of radius 1 around `mu = 1` has
    period 2*pi.

    Example Usage:
        >>> from config import config
        >>> print(f"Timestep: {config.Physics.TIMESTEP}")
        >>> print(f"Window: {config.Visualization.SCREEN_WIDTH_PX}x{config.Visualization.SCREEN_HEIGHT_PX}")
    """

    # --- Physics Configuration ---
    class Physics:
        """Configuration for the integrator and the central body.

        Attributes:
            MU_DEFAULT (float): Gravitational parameter used when the user keeps the default.
            MU_MIN (float): Smallest accepted gravitational parameter. Must be > 0.
            MU_MAX (float): Largest accepted gravitational parameter.
            TIMESTEP (float): Fixed integration step. Held constant for a run.
            STEPS_PER_FRAME (int): Integrator sub-steps executed per rendered frame.
        """
        MU_DEFAULT = 1.0
        MU_MIN = 0.001
        MU_MAX = 10.0
        TIMESTEP = 1e-3
        STEPS_PER_FRAME = 16

    # --- Initial Conditions Configuration ---
    class InitialConditions:
        """Defaults and prompt ranges for the orbiting body's starting state.

        Attributes:
            POSITION_DEFAULT (Tuple[float, float]): Default initial position (x, y).
            VELOCITY_DEFAULT (Tuple[float, float]): Default initial velocity (vx, vy).
            POSITION_RANGE (Tuple[float, float]): Suggested component range shown in prompts.
            VELOCITY_RANGE (Tuple[float, float]): Suggested component range shown in prompts.
            DEGENERATE_RADIUS (float): Initial positions closer to the origin than this
                                       are replaced by `POSITION_DEFAULT`.
        """
        POSITION_DEFAULT = (1.0, 0.0)
        VELOCITY_DEFAULT = (0.0, 1.0)
        POSITION_RANGE = (0.2, 1.5)
        VELOCITY_RANGE = (-3.0, 3.0)
        DEGENERATE_RADIUS = 1e-6

    # --- Visualization Configuration ---
    class Visualization:
        """Configuration for the pygame window and rendering.

        Attributes:
            SCREEN_WIDTH_PX (int): Initial window width in pixels.
            SCREEN_HEIGHT_PX (int): Initial window height in pixels.
            FPS (int): Target frames per second.
            WINDOW_TITLE (str): Caption shown before the first HUD update.
            VIEW_BOX (float): Initial half-width of the visible simulation square.
            ZOOM_IN_FACTOR (float): Multiplier applied to `VIEW_BOX` on zoom in (< 1).
            ZOOM_OUT_FACTOR (float): Multiplier applied to `VIEW_BOX` on zoom out (> 1).
            MIN_VIEW_BOX (float): Lower clamp for the view half-width.
            MAX_VIEW_BOX (float): Upper clamp for the view half-width.
            MAX_TRAIL_POINTS (int): Number of past positions drawn as the fading trail.
            BACKGROUND_COLOR (Tuple[int,int,int]): Deep space clear color.
            CENTER_CORE_COLOR / CENTER_GLOW_COLOR: RGB of the central body and its halo.
            CENTER_CORE_RADIUS_PX / CENTER_GLOW_RADIUS_PX / CENTER_GLOW_ALPHA: Sizes and halo opacity.
            BODY_CORE_COLOR / BODY_GLOW_COLOR: RGB of the orbiter and its halo.
            BODY_CORE_RADIUS_PX / BODY_GLOW_RADIUS_PX / BODY_GLOW_ALPHA: Sizes and halo opacity.
            TRAIL_COLOR (Tuple[int,int,int]): RGB of the trail; alpha fades along it.
            STAR_SEED (int): Seed for the starfield so it is identical across runs.
            MIN_STAR_COUNT (int): Lower bound on the number of stars.
            PIXELS_PER_STAR (int): Window area per star; density scales with window size.
            STAR_ALPHA_RANGE (Tuple[int, int]): Inclusive star brightness range (0-255).
            HUD_PRECISION (int): Decimal places in the HUD caption.
        """
        SCREEN_WIDTH_PX = 900
        SCREEN_HEIGHT_PX = 700
        FPS = 60
        WINDOW_TITLE = "Gravity Simulator"
        VIEW_BOX = 2.0
        ZOOM_IN_FACTOR = 0.9
        ZOOM_OUT_FACTOR = 1.1
        MIN_VIEW_BOX = 0.05
        MAX_VIEW_BOX = 200.0
        MAX_TRAIL_POINTS = 800

        BACKGROUND_COLOR = (5, 7, 15)
        CENTER_CORE_COLOR = (255, 230, 120)
        CENTER_CORE_RADIUS_PX = 6
        CENTER_GLOW_COLOR = (255, 220, 80)
        CENTER_GLOW_RADIUS_PX = 36
        CENTER_GLOW_ALPHA = 35
        BODY_CORE_COLOR = (120, 220, 255)
        BODY_CORE_RADIUS_PX = 4
        BODY_GLOW_COLOR = (120, 220, 255)
        BODY_GLOW_RADIUS_PX = 14
        BODY_GLOW_ALPHA = 40
        TRAIL_COLOR = (120, 220, 255)

        STAR_SEED = 1337
        MIN_STAR_COUNT = 300
        PIXELS_PER_STAR = 5000
        STAR_ALPHA_RANGE = (80, 200)

        HUD_PRECISION = 3

    # --- Debug Configuration ---
    class Debug:
        """Configuration for runtime monitoring.

        Attributes:
            MONITOR_ENERGY_CONSERVATION (bool): If True, periodically logs the drift of the
                                                specific orbital energy since the last reset.
            ENERGY_CHECK_INTERVAL_FRAMES (int): Frequency (rendered frames) of energy checks.
            ENERGY_DRIFT_WARNING (float): Relative energy drift above which a warning is logged.
            MEMORY_CHECK_INTERVAL_FRAMES (int): Frequency (rendered frames) of process memory logging.
        """
        MONITOR_ENERGY_CONSERVATION = True
        ENERGY_CHECK_INTERVAL_FRAMES = 600
        ENERGY_DRIFT_WARNING = 1e-3
        MEMORY_CHECK_INTERVAL_FRAMES = 3600

    def __init__(self):
        """Initializes the `SimulationConfig` instance and validates it.

        Raises:
            ConfigurationError: If `self.validate()` detects any invalid setting.
        """
        self.validate()

    def validate(self):
        """Performs validation of all simulation configuration settings.

        -   **Physics**: `0 < MU_MIN <= MU_DEFAULT <= MU_MAX`, positive timestep and
            steps per frame.
        -   **InitialConditions**: ordered ranges, positive degenerate radius, and a
            default position that is not itself degenerate.
        -   **Visualization**: positive screen size, FPS, trail length and star
            parameters; zoom factors on the correct side of 1; valid alpha ranges.
        -   **Debug**: positive monitoring intervals and threshold.

        Raises:
            ConfigurationError: If any configuration setting is found to be invalid.
        """
        # Physics validation
        if not (0.0 < self.Physics.MU_MIN <= self.Physics.MU_DEFAULT <= self.Physics.MU_MAX):
            raise ConfigurationError(
                f"Physics mu bounds (MU_MIN: {self.Physics.MU_MIN}, MU_DEFAULT: {self.Physics.MU_DEFAULT}, "
                f"MU_MAX: {self.Physics.MU_MAX}) must satisfy 0 < MU_MIN <= MU_DEFAULT <= MU_MAX."
            )
        if self.Physics.TIMESTEP <= 0:
            raise ConfigurationError("Physics.TIMESTEP must be positive.")
        if not isinstance(self.Physics.STEPS_PER_FRAME, int) or self.Physics.STEPS_PER_FRAME <= 0:
            raise ConfigurationError("Physics.STEPS_PER_FRAME must be a positive integer.")

        # Initial conditions validation
        ic = self.InitialConditions
        for name, value_range in (("POSITION_RANGE", ic.POSITION_RANGE), ("VELOCITY_RANGE", ic.VELOCITY_RANGE)):
            if len(value_range) != 2 or value_range[0] >= value_range[1]:
                raise ConfigurationError(f"InitialConditions.{name} ({value_range}) must be an ordered (low, high) pair.")
        if ic.DEGENERATE_RADIUS <= 0:
            raise ConfigurationError("InitialConditions.DEGENERATE_RADIUS must be positive.")
        if len(ic.POSITION_DEFAULT) != 2 or len(ic.VELOCITY_DEFAULT) != 2:
            raise ConfigurationError("InitialConditions defaults must be (x, y) pairs.")
        default_radius = (ic.POSITION_DEFAULT[0] ** 2 + ic.POSITION_DEFAULT[1] ** 2) ** 0.5
        if default_radius < ic.DEGENERATE_RADIUS:
            raise ConfigurationError(
                f"InitialConditions.POSITION_DEFAULT {ic.POSITION_DEFAULT} is closer to the origin than "
                f"DEGENERATE_RADIUS ({ic.DEGENERATE_RADIUS})."
            )

        # Visualization validation
        vis = self.Visualization
        if not (isinstance(vis.SCREEN_WIDTH_PX, int) and vis.SCREEN_WIDTH_PX > 0 and
                isinstance(vis.SCREEN_HEIGHT_PX, int) and vis.SCREEN_HEIGHT_PX > 0):
            raise ConfigurationError("Visualization.SCREEN_WIDTH_PX and SCREEN_HEIGHT_PX must be positive integers.")
        if vis.FPS <= 0:
            raise ConfigurationError("Visualization.FPS must be positive.")
        if not (0 < vis.MIN_VIEW_BOX <= vis.VIEW_BOX <= vis.MAX_VIEW_BOX):
            raise ConfigurationError(
                f"Visualization.VIEW_BOX ({vis.VIEW_BOX}) must lie within "
                f"[MIN_VIEW_BOX ({vis.MIN_VIEW_BOX}), MAX_VIEW_BOX ({vis.MAX_VIEW_BOX})] with MIN_VIEW_BOX > 0."
            )
        if not (0 < vis.ZOOM_IN_FACTOR < 1 < vis.ZOOM_OUT_FACTOR):
            raise ConfigurationError("Visualization zoom factors must satisfy 0 < ZOOM_IN_FACTOR < 1 < ZOOM_OUT_FACTOR.")
        if vis.MAX_TRAIL_POINTS <= 0:
            raise ConfigurationError("Visualization.MAX_TRAIL_POINTS must be positive.")
        if vis.MIN_STAR_COUNT < 0 or vis.PIXELS_PER_STAR <= 0:
            raise ConfigurationError("Visualization.MIN_STAR_COUNT must be >= 0 and PIXELS_PER_STAR positive.")
        low_alpha, high_alpha = vis.STAR_ALPHA_RANGE
        if not (0 <= low_alpha <= high_alpha <= 255):
            raise ConfigurationError(f"Visualization.STAR_ALPHA_RANGE {vis.STAR_ALPHA_RANGE} must be ordered within 0..255.")
        for name in ("CENTER_GLOW_ALPHA", "BODY_GLOW_ALPHA"):
            if not (0 <= getattr(vis, name) <= 255):
                raise ConfigurationError(f"Visualization.{name} must be within 0..255.")
        if vis.HUD_PRECISION < 0:
            raise ConfigurationError("Visualization.HUD_PRECISION cannot be negative.")

        # Debug validation
        if self.Debug.ENERGY_CHECK_INTERVAL_FRAMES <= 0 or self.Debug.MEMORY_CHECK_INTERVAL_FRAMES <= 0:
            raise ConfigurationError("Debug check intervals must be positive.")
        if self.Debug.ENERGY_DRIFT_WARNING <= 0:
            raise ConfigurationError("Debug.ENERGY_DRIFT_WARNING must be positive.")

        logging.info("Configuration validated successfully.")


# --- Instantiate the configuration ---
# This makes the config object available for import and runs validation.
# e.g., from config import config
try:
    config = SimulationConfig()
except ConfigurationError as e:
    logging.error(f"FATAL CONFIGURATION ERROR: {e}", exc_info=True)

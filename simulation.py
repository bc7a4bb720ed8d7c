# simulation.py
import logging
from collections import deque
from typing import Deque

from config import config, ConfigurationError
from initial_conditions import InitialConditions
from orbital_mechanics import OrbitalState
from physics_utils import Vector2D


class GravitySimulation:
    """Owns one two-body run and its running / paused / reset life cycle.

    The session is independent of pygame: the visualization reads `state`,
    `trail` and `hud_text()` and calls `toggle_pause()` / `reset()` in
    response to input, while the main loop calls `advance_frame()` once per
    rendered frame.

    Attributes:
        initial (InitialConditions): Sanitized starting point restored by `reset()`.
        dt (float): Fixed integration step for the whole run.
        steps_per_frame (int): Integrator sub-steps per `advance_frame()` call.
        state (OrbitalState): Current position, velocity, acceleration, time and mu.
        paused (bool): While True, `advance_frame()` does nothing.
        frame_count (int): Frames advanced since the last reset (paused frames excluded).
        trail (Deque[Vector2D]): Recent positions, newest first, bounded by `trail_length`.
        reference_energy (float): Specific energy at the last reset, for drift monitoring.

    Raises:
        ConfigurationError: If `mu`, `dt` or `steps_per_frame` are not positive.
    """
    def __init__(self, initial: InitialConditions, dt: float = None, steps_per_frame: int = None,
                 trail_length: int = None):
        self.initial = initial
        self.dt = dt if dt is not None else config.Physics.TIMESTEP
        self.steps_per_frame = steps_per_frame if steps_per_frame is not None else config.Physics.STEPS_PER_FRAME
        trail_length = trail_length if trail_length is not None else config.Visualization.MAX_TRAIL_POINTS

        if not initial.mu > 0:
            raise ConfigurationError(f"Gravitational parameter mu must be positive, got {initial.mu}.")
        if not self.dt > 0:
            raise ConfigurationError(f"Timestep must be positive, got {self.dt}.")
        if self.steps_per_frame <= 0:
            raise ConfigurationError(f"steps_per_frame must be positive, got {self.steps_per_frame}.")

        self.trail: Deque[Vector2D] = deque(maxlen=trail_length)
        self.paused = False
        self.reset()

    def reset(self):
        """Restores the initial conditions, zeroes the clock and clears the trail."""
        self.state = OrbitalState.initial(self.initial.position, self.initial.velocity, self.initial.mu)
        self.reference_energy = self.state.energy
        self.frame_count = 0
        self.trail.clear()
        logging.info(f"Simulation reset: mu={self.state.mu}, r0={self.state.position}, v0={self.state.velocity}")

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        logging.info("Simulation paused." if self.paused else "Simulation resumed.")
        return self.paused

    def advance_frame(self) -> int:
        """Runs one frame worth of integrator steps.

        Returns:
            int: Number of integrator steps taken (0 while paused).
        """
        if self.paused:
            return 0

        state = self.state
        for _ in range(self.steps_per_frame):
            state = state.advance(self.dt)
        self.state = state
        self.trail.appendleft(state.position)
        self.frame_count += 1

        if config.Debug.MONITOR_ENERGY_CONSERVATION and self.frame_count % config.Debug.ENERGY_CHECK_INTERVAL_FRAMES == 0:
            self.check_energy_drift()
        return self.steps_per_frame

    def energy_drift(self) -> float:
        """Relative change of the specific energy since the last reset."""
        current = self.state.energy
        reference = self.reference_energy
        if reference == 0.0:
            return abs(current)
        return abs((current - reference) / reference)

    def check_energy_drift(self) -> float:
        drift = self.energy_drift()
        if drift > config.Debug.ENERGY_DRIFT_WARNING:
            logging.warning(f"Energy drift {drift:.3e} at t={self.state.elapsed_time:.3f} exceeds "
                            f"{config.Debug.ENERGY_DRIFT_WARNING:.1e} (E0={self.reference_energy:.6f}, E={self.state.energy:.6f}).")
        else:
            logging.debug(f"Energy drift {drift:.3e} at t={self.state.elapsed_time:.3f}.")
        return drift

    def hud_text(self) -> str:
        """One-line readout of time, radius, speed, energy, angular momentum and mu."""
        p = config.Visualization.HUD_PRECISION
        s = self.state
        prefix = "[PAUSED]  " if self.paused else ""
        return (f"{prefix}t={s.elapsed_time:.{p}f}  r={s.radius:.{p}f}  v={s.speed:.{p}f}"
                f"  E={s.energy:.{p}f}  L={s.angular_momentum:.{p}f}  mu={s.mu:.{p}f}")

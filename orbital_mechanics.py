# orbital_mechanics.py
import logging
from dataclasses import dataclass, replace
from typing import Tuple

from physics_utils import Vector2D, add, scale, dot, cross, magnitude

# Radius floor used before dividing by |r|^3 in the acceleration law.
MIN_RADIUS = 1e-9


def acceleration(position: Vector2D, mu: float) -> Vector2D:
    """
    Gravitational acceleration of a test mass at `position` around a central body at the origin.

    The force is inverse-square and attractive: magnitude `mu / r^2`, pointing
    opposite `position`. If `|position|` is below `MIN_RADIUS` the radius is
    clamped to `MIN_RADIUS` and a warning is logged, so the result stays finite.

    Args:
        position: Position of the orbiting body in simulation units.
        mu: Gravitational parameter (G*M) of the central body. Must be positive;
            validated upstream, not here.

    Returns:
        Vector2D: Acceleration in simulation units per time unit squared.
    """
    r = magnitude(position)
    if r < MIN_RADIUS:
        logging.warning(f"Very small radius |r|={r:.3e} in acceleration; clamping to {MIN_RADIUS:.0e}.")
        r = MIN_RADIUS
    return scale(position, -mu / (r * r * r))


def step(position: Vector2D, velocity: Vector2D, accel: Vector2D, dt: float, mu: float) -> Tuple[Vector2D, Vector2D, Vector2D]:
    """
    Advances (position, velocity, acceleration) by one velocity Verlet step.

    `accel` must be a(t), i.e. `acceleration(position, mu)`. The returned
    acceleration is a(t+dt) and should be passed back in on the next call.
    Advancing the elapsed time is left to the caller.
    """
    # x(t+dt) = x(t) + v(t)dt + 1/2 a(t)dt^2
    new_position = add(position, add(scale(velocity, dt), scale(accel, 0.5 * dt * dt)))
    new_accel = acceleration(new_position, mu)
    # v(t+dt) = v(t) + 1/2 (a(t) + a(t+dt)) dt
    new_velocity = add(velocity, scale(add(accel, new_accel), 0.5 * dt))
    return new_position, new_velocity, new_accel


def specific_energy(position: Vector2D, velocity: Vector2D, mu: float) -> float:
    """Kinetic plus potential energy per unit mass, `0.5*|v|^2 - mu/|r|`."""
    return 0.5 * dot(velocity, velocity) - mu / magnitude(position)


def specific_angular_momentum(position: Vector2D, velocity: Vector2D) -> float:
    """`r.x*v.y - r.y*v.x`. Constant under any central force."""
    return cross(position, velocity)


@dataclass(frozen=True)
class OrbitalState:
    """Snapshot of a two-body simulation run.

    Attributes:
        position (Vector2D): Position relative to the central body.
        velocity (Vector2D): Velocity.
        acceleration (Vector2D): a(t), always `acceleration(position, mu)`.
        elapsed_time (float): Simulation time since the run started.
        mu (float): Gravitational parameter of the central body.
    """
    position: Vector2D
    velocity: Vector2D
    acceleration: Vector2D
    elapsed_time: float
    mu: float

    @classmethod
    def initial(cls, position: Vector2D, velocity: Vector2D, mu: float) -> "OrbitalState":
        """Builds the t=0 state, deriving the acceleration from position."""
        return cls(position, velocity, acceleration(position, mu), 0.0, mu)

    def advance(self, dt: float) -> "OrbitalState":
        new_position, new_velocity, new_accel = step(self.position, self.velocity, self.acceleration, dt, self.mu)
        return replace(self,
                       position=new_position,
                       velocity=new_velocity,
                       acceleration=new_accel,
                       elapsed_time=self.elapsed_time + dt)

    @property
    def radius(self) -> float:
        return magnitude(self.position)

    @property
    def speed(self) -> float:
        return magnitude(self.velocity)

    @property
    def energy(self) -> float:
        return specific_energy(self.position, self.velocity, self.mu)

    @property
    def angular_momentum(self) -> float:
        return specific_angular_momentum(self.position, self.velocity)

# initial_conditions.py
import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Tuple

from config import config
from physics_utils import Vector2D, magnitude


@dataclass(frozen=True)
class InitialConditions:
    """User-supplied starting point of a run.

    Attributes:
        mu (float): Gravitational parameter of the central body.
        position (Vector2D): Initial position of the orbiting body.
        velocity (Vector2D): Initial velocity of the orbiting body.
    """
    mu: float
    position: Vector2D
    velocity: Vector2D

    @classmethod
    def default(cls) -> "InitialConditions":
        return cls(
            mu=config.Physics.MU_DEFAULT,
            position=Vector2D.from_iterable(config.InitialConditions.POSITION_DEFAULT),
            velocity=Vector2D.from_iterable(config.InitialConditions.VELOCITY_DEFAULT),
        )


def _parse_numbers(line: str, count: int):
    """Parses the first `count` whitespace-separated numbers of `line`, or returns None."""
    tokens = line.split()
    if len(tokens) < count:
        return None
    try:
        values = [float(token) for token in tokens[:count]]
    except ValueError:
        return None
    if not all(math.isfinite(v) for v in values):
        logging.warning(f"Ignoring non-finite input {line.strip()!r}; keeping current value.")
        return None
    return values


def read_or_keep(prompt: str, value: float, hint: str, input_func: Callable[[str], str] = input) -> float:
    """Asks for one number. An empty or unparsable answer keeps `value`."""
    line = input_func(f"{prompt} {hint}")
    parsed = _parse_numbers(line, 1)
    if parsed is None:
        return value
    return parsed[0]


def read_pair_or_keep(prompt: str, pair: Tuple[float, float], hint: str,
                      input_func: Callable[[str], str] = input) -> Tuple[float, float]:
    """Asks for two numbers on one line. Anything short of two valid numbers keeps `pair`."""
    line = input_func(f"{prompt} {hint}")
    parsed = _parse_numbers(line, 2)
    if parsed is None:
        return pair
    return parsed[0], parsed[1]


def _range_hint(default: str, value_range) -> str:
    low, high = value_range
    return f"[default {default}, range: {low:g}..{high:g}]: "


def _finite_or_default(name: str, value: Vector2D, default) -> Vector2D:
    """Returns `value`, or the configured default when any component is NaN or infinite."""
    if math.isfinite(value.x) and math.isfinite(value.y):
        return value
    replacement = Vector2D.from_iterable(default)
    logging.warning(f"{name}={value} is not finite; using default {replacement}.")
    return replacement


def sanitize(conditions: InitialConditions) -> InitialConditions:
    """
    Makes user-supplied initial conditions safe to integrate.

    - `mu` is clamped into `[Physics.MU_MIN, Physics.MU_MAX]`, which keeps it
      strictly positive for the whole run.
    - A position or velocity with a NaN or infinite component is replaced by
      the configured default.
    - A position closer to the origin than `InitialConditions.DEGENERATE_RADIUS`
      is replaced by the default position.

    Args:
        conditions (InitialConditions): Raw values, e.g. from the console.

    Returns:
        InitialConditions: The sanitized values; `conditions` is left untouched.
    """
    mu = conditions.mu
    if not math.isfinite(mu):
        logging.warning(f"mu={mu} is not finite; using default {config.Physics.MU_DEFAULT}.")
        mu = config.Physics.MU_DEFAULT
    clamped_mu = min(max(mu, config.Physics.MU_MIN), config.Physics.MU_MAX)
    if clamped_mu != mu:
        logging.warning(f"mu={mu} is outside [{config.Physics.MU_MIN}, {config.Physics.MU_MAX}]; clamped to {clamped_mu}.")

    position = _finite_or_default("r0", conditions.position, config.InitialConditions.POSITION_DEFAULT)
    velocity = _finite_or_default("v0", conditions.velocity, config.InitialConditions.VELOCITY_DEFAULT)
    if magnitude(position) < config.InitialConditions.DEGENERATE_RADIUS:
        position = Vector2D.from_iterable(config.InitialConditions.POSITION_DEFAULT)
        default_x, default_y = config.InitialConditions.POSITION_DEFAULT
        print(f"Note: |r0| too small; using default ({default_x:g},{default_y:g}).")
        logging.info(f"Degenerate initial position {conditions.position} replaced by {position}.")

    return replace(conditions, mu=clamped_mu, position=position, velocity=velocity)


def prompt_initial_conditions(input_func: Callable[[str], str] = input) -> InitialConditions:
    """Interactively asks for mu, r0 and v0 on the console, then sanitizes the answers."""
    defaults = InitialConditions.default()
    ic = config.InitialConditions

    mu = read_or_keep("mu (gravity strength)", defaults.mu,
                      _range_hint(f"{defaults.mu}", (config.Physics.MU_MIN, config.Physics.MU_MAX)),
                      input_func)
    r0 = read_pair_or_keep("r0.x r0.y (initial position)", tuple(defaults.position),
                           _range_hint(f"{defaults.position.x:g} {defaults.position.y:g}", ic.POSITION_RANGE),
                           input_func)
    v0 = read_pair_or_keep("v0.x v0.y (initial velocity)", tuple(defaults.velocity),
                           _range_hint(f"{defaults.velocity.x:g} {defaults.velocity.y:g}", ic.VELOCITY_RANGE),
                           input_func)

    return sanitize(InitialConditions(mu=mu, position=Vector2D.from_iterable(r0), velocity=Vector2D.from_iterable(v0)))


def describe(conditions: InitialConditions) -> str:
    r, v = conditions.position, conditions.velocity
    return f"Using mu={conditions.mu:g}, r0=({r.x:g}, {r.y:g}), v0=({v.x:g}, {v.y:g})"

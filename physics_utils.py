# physics_utils.py

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector2D:
    """Immutable 2D vector in simulation space.

    The arithmetic operators are shorthand for the module-level functions
    `add`, `subtract` and `scale`, so both styles can be mixed freely.

    Attributes:
        x (float): Horizontal component.
        y (float): Vertical component.
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        return add(self, other)

    def __sub__(self, other):
        return subtract(self, other)

    def __mul__(self, k):
        return scale(self, k)

    __rmul__ = __mul__

    def __neg__(self):
        return Vector2D(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def to_array(self) -> np.ndarray:
        """Returns the vector as a float64 NumPy array `[x, y]`."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_iterable(cls, values) -> "Vector2D":
        x, y = values
        return cls(float(x), float(y))


ZERO = Vector2D(0.0, 0.0)


def add(a: Vector2D, b: Vector2D) -> Vector2D:
    return Vector2D(a.x + b.x, a.y + b.y)


def subtract(a: Vector2D, b: Vector2D) -> Vector2D:
    return Vector2D(a.x - b.x, a.y - b.y)


def scale(a: Vector2D, k: float) -> Vector2D:
    return Vector2D(a.x * k, a.y * k)


def dot(a: Vector2D, b: Vector2D) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Vector2D, b: Vector2D) -> float:
    """z-component of the cross product of `a` and `b` lifted into 3D."""
    return a.x * b.y - a.y * b.x


def magnitude(a: Vector2D) -> float:
    """
    Euclidean norm of a vector.

    Args:
        a (Vector2D): The vector to measure.

    Returns:
        float: `sqrt(dot(a, a))`. Zero for the zero vector, never negative.
               Values that should be zero may come back as tiny positives
               because of rounding, so compare against a tolerance.
    """
    return math.sqrt(dot(a, a))

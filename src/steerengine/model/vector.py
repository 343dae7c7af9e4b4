"""Vector2: immutable 2D vector used for positions, velocities and steering."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """A 2D vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> Vector2:
        """Return the zero vector."""
        return cls(0.0, 0.0)

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def magnitude(self) -> float:
        """Calculate the Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vector2) -> float:
        """Euclidean distance between two points."""
        return (other - self).magnitude()

    def normalized(self) -> Vector2:
        """Return the unit vector in the same direction.

        The zero vector has no direction and normalizes to the zero vector.
        """
        mag = self.magnitude()
        if mag == 0:
            return Vector2.zero()
        return Vector2(self.x / mag, self.y / mag)

    def clamp(self, max_mag: float) -> Vector2:
        """Clamp the vector magnitude to a maximum value."""
        mag = self.magnitude()
        if mag > max_mag and mag > 0:
            scale = max_mag / mag
            return Vector2(self.x * scale, self.y * scale)
        return self

    def is_finite(self) -> bool:
        """Check that both components are finite numbers."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        """Return the vector as an (x, y) tuple."""
        return (self.x, self.y)

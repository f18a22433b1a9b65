"""Vector3 value type: positions in scene space, y is up."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """An immutable 3D vector.

    The vertical axis is ``y``; the planar (ground) axes are ``x`` and ``z``.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    @property
    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: Vector3) -> float:
        """Euclidean distance to another point."""
        return (self - other).magnitude

    def planar_distance_to(self, other: Vector3) -> float:
        """Distance to another point measured in the x/z plane only."""
        return math.hypot(self.x - other.x, self.z - other.z)

    def with_y(self, y: float) -> Vector3:
        """Copy of this vector with the vertical component replaced."""
        return Vector3(self.x, y, self.z)

    @classmethod
    def from_sequence(cls, values: tuple[float, ...] | list[float]) -> Vector3:
        """Build a vector from a 3-item numeric sequence.

        Raises:
            ValueError: If the sequence does not hold exactly three numbers.
        """
        if len(values) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(values)}")
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

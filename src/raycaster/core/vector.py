"""Immutable 3D vector type and vector utilities.

``Vec3`` is used interchangeably as a point, a direction and an RGB color
(components in [0, 255] for colors, unconstrained reals for geometry). Every
operation returns a new instance; two vectors are equal when their components
are equal.

The free functions mirror the methods so shading code can be written either
way, e.g. ``dot(n, l)`` or ``n.dot(l)``.

Example:
    >>> from raycaster.core.vector import Vec3, reflect
    >>> n = Vec3(0.0, 1.0, 0.0)
    >>> reflect(Vec3(1.0, 1.0, 0.0), n)
    Vec3(x=-1.0, y=1.0, z=0.0)
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3:
    """A real-valued (x, y, z) triple.

    Attributes:
        x: First component (red channel for colors).
        y: Second component (green channel for colors).
        z: Third component (blue channel for colors).
    """

    x: float
    y: float
    z: float

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, s: float) -> "Vec3":
        return self.scale(s)

    def __rmul__(self, s: float) -> "Vec3":
        return self.scale(s)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def scale(self, s: float) -> "Vec3":
        """Return the vector multiplied component-wise by the scalar ``s``."""
        return Vec3(s * self.x, s * self.y, s * self.z)

    def dot(self, other: "Vec3") -> float:
        """Return the dot product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        """Return the cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> "Vec3":
        """Return the unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        n = self.length()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self.scale(1.0 / n)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_sequence(cls, values) -> "Vec3":
        """Build a vector from any 3-element sequence (list, tuple, array).

        Raises:
            ValueError: If ``values`` does not hold exactly 3 components.
        """
        items = [float(v) for v in values]
        if len(items) != 3:
            raise ValueError(f"Expected 3 components, got {len(items)}")
        return cls(items[0], items[1], items[2])


ZERO = Vec3(0.0, 0.0, 0.0)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def add(a: Vec3, b: Vec3) -> Vec3:
    return a + b


def sub(a: Vec3, b: Vec3) -> Vec3:
    return a - b


def scale(v: Vec3, s: float) -> Vec3:
    return v.scale(s)


def dot(a: Vec3, b: Vec3) -> float:
    return a.dot(b)


def cross(a: Vec3, b: Vec3) -> Vec3:
    return a.cross(b)


def length(v: Vec3) -> float:
    return v.length()


def length_squared(v: Vec3) -> float:
    return v.length_squared()


def normalize(v: Vec3) -> Vec3:
    return v.normalize()


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about the normal ``n``.

    Computes ``2 * (v . n) * n - v``. Both the outgoing view direction and the
    light vector are reflected this way, so ``v`` points away from the surface
    and the result does too. ``n`` should be unit length.

    Args:
        v: The vector to mirror (pointing away from the surface).
        n: The unit surface normal.

    Returns:
        The mirrored vector.
    """
    return n.scale(2.0 * v.dot(n)) - v

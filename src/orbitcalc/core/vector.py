"""
===============================================================================
ORBITCALC - Three-Component Vector Algebra
===============================================================================
Immutable Vector3 value type used for both positions (km) and velocities
(km/s). The meaning of a vector comes from the context it is used in; the
algebra is the same for both.

Every operation is total: normalising the zero vector returns the zero
vector instead of dividing by zero, so callers that need a unit direction
from coincident points must check for that case themselves.
===============================================================================
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """Cartesian triple (x, y, z)."""
    x: float
    y: float
    z: float

    # -------------------------------------------------------------------------
    # Construction / numpy interop
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, arr) -> 'Vector3':
        """Build a Vector3 from any 3-element sequence or ndarray."""
        a = np.asarray(arr, dtype=np.float64).reshape(3)
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def magnitude(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))

    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalize(self) -> 'Vector3':
        """Unit vector along self; the zero vector maps to itself."""
        mag = self.magnitude()
        if mag > 0:
            return Vector3(self.x / mag, self.y / mag, self.z / mag)
        return Vector3.zero()

    def scale(self, s: float) -> 'Vector3':
        return Vector3(self.x * s, self.y * s, self.z * s)

    def add(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    # Operator forms
    __add__ = add
    __sub__ = subtract

    def __mul__(self, s: float) -> 'Vector3':
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)


Z_HAT = Vector3(0.0, 0.0, 1.0)

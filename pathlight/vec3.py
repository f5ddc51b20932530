"""
Vector3 class for 3D math operations.

Used for points in 3D space, direction vectors and linear RGB colors.
The random sampling helpers draw from an explicit numpy Generator so each
render worker can own an independent stream.
"""

from __future__ import annotations
from typing import Optional, Union
import numpy as np


def _uniform(rng: Optional[np.random.Generator], low: float, high: float, size: int) -> np.ndarray:
    if rng is None:
        return np.random.uniform(low, high, size)
    return rng.uniform(low, high, size)


class Vec3:
    """A 3D vector backed by a float64 numpy array.

    Instances are treated as values: every operation returns a new vector.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from a numpy array without copying."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Color channel aliases
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data))

    def __reduce__(self):
        return (Vec3, (self.x, self.y, self.z))

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data + other._data)
        return Vec3.from_array(self._data + other)

    def __radd__(self, other: float) -> Vec3:
        return Vec3.from_array(other + self._data)

    def __sub__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data - other._data)
        return Vec3.from_array(self._data - other)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data * other._data)
        return Vec3.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3.from_array(other * self._data)

    def __truediv__(self, other: float) -> Vec3:
        return Vec3.from_array(self._data / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def length(self) -> float:
        """Return the magnitude of the vector."""
        return float(np.sqrt(self.length_squared()))

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction (zero stays zero)."""
        length = self.length()
        if length == 0:
            return Vec3(0, 0, 0)
        return Vec3.from_array(self._data / length)

    def dot(self, other: Vec3) -> float:
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        return Vec3.from_array(np.cross(self._data, other._data))

    def reflect(self, normal: Vec3) -> Vec3:
        """Mirror this vector about ``normal``: v - 2(v·n)n."""
        return self - normal * (2.0 * self.dot(normal))

    def to_array(self) -> np.ndarray:
        """Return a copy of the underlying numpy array."""
        return self._data.copy()

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
        """Random vector with components uniform in [min_val, max_val)."""
        return Vec3.from_array(_uniform(rng, min_val, max_val, 3))

    @staticmethod
    def random_in_unit_sphere(rng: Optional[np.random.Generator] = None) -> Vec3:
        """Rejection-sample a point strictly inside the unit sphere."""
        while True:
            p = _uniform(rng, -1.0, 1.0, 3)
            if np.dot(p, p) < 1.0:
                return Vec3.from_array(p)

    @staticmethod
    def random_unit_vector(rng: Optional[np.random.Generator] = None) -> Vec3:
        """Random unit vector, uniform on the sphere surface."""
        while True:
            p = _uniform(rng, -1.0, 1.0, 3)
            lensq = np.dot(p, p)
            # Reject tiny samples: normalizing them amplifies rounding error
            if 1e-160 < lensq < 1.0:
                return Vec3.from_array(p / np.sqrt(lensq))

    @staticmethod
    def random_in_unit_disk(rng: Optional[np.random.Generator] = None) -> Vec3:
        """Rejection-sample a point inside the unit disk in the z=0 plane."""
        while True:
            x, y = _uniform(rng, -1.0, 1.0, 2)
            if x * x + y * y < 1.0:
                return Vec3(x, y, 0.0)


# Convenience type aliases
Point3 = Vec3
Color = Vec3

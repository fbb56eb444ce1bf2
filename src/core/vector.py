# core/vector.py
import math
from typing import Iterator, Union

import numpy as np


class Vector3:
    """
    An immutable 3D vector supporting arithmetic, dot and cross products,
    and normalization. Used both for points (locations) and for directions;
    the distinction only matters when a Matrix is applied to it.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))

    def __setattr__(self, name, value):
        raise AttributeError("Vector3 is immutable")

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union[float, "Vector3"]) -> "Vector3":
        if isinstance(other, Vector3):
            # Element-wise multiplication.
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> "Vector3":
        """
        Returns the unit vector with the same direction.

        The zero vector has no direction: callers must not normalize it.
        Doing so raises ValueError instead of producing NaN components.
        """
        l = self.length()
        if l == 0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / l

    def is_close(self, other: "Vector3", tol: float = 1e-9) -> bool:
        return (abs(self.x - other.x) <= tol and
                abs(self.y - other.y) <= tol and
                abs(self.z - other.z) <= tol)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @staticmethod
    def from_array(values) -> "Vector3":
        return Vector3(values[0], values[1], values[2])

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


def min_bound(a: Vector3, b: Vector3) -> Vector3:
    """Component-wise minimum of two points."""
    return Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))


def max_bound(a: Vector3, b: Vector3) -> Vector3:
    """Component-wise maximum of two points."""
    return Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

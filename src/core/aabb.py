# core/aabb.py
import math
from typing import Iterable

from core.vector import Vector3, min_bound, max_bound

class AABB:
    """
    Axis-aligned bounding box given by its minimum and maximum corners.

    AABB.empty() is a sentinel with inverted infinite corners: it has no
    extent, contains nothing and is the identity for surrounding_box().
    """
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    @classmethod
    def empty(cls) -> "AABB":
        return cls(Vector3(math.inf, math.inf, math.inf),
                   Vector3(-math.inf, -math.inf, -math.inf))

    @classmethod
    def enclose_points(cls, points: Iterable[Vector3]) -> "AABB":
        box = cls.empty()
        for p in points:
            box = cls(min_bound(box.minimum, p), max_bound(box.maximum, p))
        return box

    @property
    def is_empty(self) -> bool:
        return (self.minimum.x > self.maximum.x or
                self.minimum.y > self.maximum.y or
                self.minimum.z > self.maximum.z)

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (*self.minimum, *self.maximum))

    def contains(self, point: Vector3) -> bool:
        return (self.minimum.x <= point.x <= self.maximum.x and
                self.minimum.y <= point.y <= self.maximum.y and
                self.minimum.z <= point.z <= self.maximum.z)

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(min_bound(box0.minimum, box1.minimum),
                    max_bound(box0.maximum, box1.maximum))

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"

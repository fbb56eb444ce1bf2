# core/ray.py
from core.vector import Vector3

class Ray:
    """
    Represents a ray in 3D space with an origin and direction.

    Geometric comparisons between ray parameters (shadow distances, nearest
    hit ordering across rays) assume a unit-length direction; use
    Ray.towards() or normalize the direction before constructing.
    """
    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vector3, direction: Vector3):
        self.origin = origin
        self.direction = direction

    @classmethod
    def towards(cls, origin: Vector3, target: Vector3) -> "Ray":
        """
        Builds a ray from origin through target with a unit direction, so
        that the parameter t measures distance.
        """
        return cls(origin, (target - origin).normalize())

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r})"

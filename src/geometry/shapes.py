# geometry/shapes.py
"""
Renderable primitives.

Shapes are immutable values forming a closed set: Sphere, Plane and Triangle.
The operations over them (intersection, normals, transforms, bounds) live in
geometry.intersect and dispatch on the concrete type, so a Triangle does not
inherit Plane's behaviour; its supporting plane is given by p0 and its normal.
"""
from dataclasses import dataclass, field
from typing import Optional, Union

from core.aabb import AABB
from core.vector import Vector3


def _unit_or_zero(v: Vector3) -> Vector3:
    # A zero normal is kept as-is: such a plane never reports a hit.
    if v.length() == 0:
        return v
    return v.normalize()


@dataclass(frozen=True)
class Sphere:
    center: Vector3
    radius: float

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError(f"sphere radius must be non-negative, got {self.radius}")


@dataclass(frozen=True)
class Plane:
    """
    Infinite plane through `point` with unit `normal`.

    Planes have no natural extent, so `bounds` starts as the empty AABB and
    stays unset until the scene supplies its bounds (see Plane.with_bounds).
    """
    normal: Vector3
    point: Vector3
    bounds: AABB = field(default_factory=AABB.empty, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "normal", _unit_or_zero(self.normal))

    def with_bounds(self, bounds: AABB) -> "Plane":
        return Plane(self.normal, self.point, bounds)


@dataclass(frozen=True)
class Triangle:
    """
    Flat triangle p0, p1, p2 with a single face normal.

    When no normal is given it is taken from the winding, (p1-p0) x (p2-p0).
    The edge vectors and the dot products used to solve barycentric
    coordinates are derived on construction; since a transformed triangle is
    always a new value they can never go stale.
    """
    p0: Vector3
    p1: Vector3
    p2: Vector3
    normal: Optional[Vector3] = None
    edge0: Vector3 = field(init=False, repr=False, compare=False)
    edge1: Vector3 = field(init=False, repr=False, compare=False)
    dot00: float = field(init=False, repr=False, compare=False)
    dot01: float = field(init=False, repr=False, compare=False)
    dot11: float = field(init=False, repr=False, compare=False)
    denom: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        edge0 = self.p1 - self.p0
        edge1 = self.p2 - self.p0
        normal = self.normal if self.normal is not None else edge0.cross(edge1)
        object.__setattr__(self, "normal", _unit_or_zero(normal))

        dot00 = edge0.dot(edge0)
        dot01 = edge0.dot(edge1)
        dot11 = edge1.dot(edge1)
        object.__setattr__(self, "edge0", edge0)
        object.__setattr__(self, "edge1", edge1)
        object.__setattr__(self, "dot00", dot00)
        object.__setattr__(self, "dot01", dot01)
        object.__setattr__(self, "dot11", dot11)
        object.__setattr__(self, "denom", dot00 * dot11 - dot01 * dot01)

Shape = Union[Sphere, Plane, Triangle]

# geometry/intersect.py
"""
Per-variant geometry for Sphere, Plane and Triangle.

Every function here is pure: it reads a shape value and returns a number,
a vector or a new shape. A miss is reported as NO_HIT (-1.0), never raised.
"""
import math
from itertools import product
from typing import Optional, Tuple

from core.aabb import AABB
from core.constants import EPSILON, NO_HIT
from core.ray import Ray
from core.transform import Matrix
from core.vector import Vector3
from geometry.shapes import Plane, Shape, Sphere, Triangle


def _sphere_intersect(sphere: Sphere, ray: Ray) -> float:
    # Solves |o + t*d - c|^2 = R^2; a == 1 for the usual unit direction.
    diff = ray.origin - sphere.center
    a = ray.direction.dot(ray.direction)
    b = -2.0 * diff.dot(ray.direction)
    c = diff.dot(diff) - sphere.radius * sphere.radius
    delta = b * b - 4.0 * a * c

    # Tangent rays (delta ~ 0) count as misses.
    if delta < EPSILON:
        return NO_HIT

    sqrt_delta = math.sqrt(delta)
    near = (b - sqrt_delta) / (2.0 * a)
    far = (b + sqrt_delta) / (2.0 * a)
    if near > EPSILON:
        return near
    if far > EPSILON:
        return far
    return NO_HIT


def _plane_intersect(normal: Vector3, point: Vector3, ray: Ray) -> float:
    denom = ray.direction.dot(normal)
    if abs(denom) < EPSILON:
        return NO_HIT
    t = (point - ray.origin).dot(normal) / denom
    if t > EPSILON:
        return t
    return NO_HIT


def _solve_barycentric(tri: Triangle, point: Vector3) -> Optional[Tuple[float, float, float]]:
    if tri.denom == 0:
        return None
    c = point - tri.p0
    dot_c0 = c.dot(tri.edge0)
    dot_c1 = c.dot(tri.edge1)
    beta = (dot_c0 * tri.dot11 - dot_c1 * tri.dot01) / tri.denom
    gamma = (dot_c1 * tri.dot00 - dot_c0 * tri.dot01) / tri.denom
    alpha = 1.0 - beta - gamma
    return alpha, beta, gamma


def _triangle_intersect(tri: Triangle, ray: Ray) -> float:
    t = _plane_intersect(tri.normal, tri.p0, ray)
    if t < EPSILON:
        return NO_HIT

    weights = _solve_barycentric(tri, ray.at(t))
    if weights is None:
        return NO_HIT
    # Strictly inside: hits within EPSILON of an edge are rejected too.
    if min(weights) < EPSILON:
        return NO_HIT
    return t


def ray_intersect(shape: Shape, ray: Ray) -> float:
    """
    Returns the smallest ray parameter t > EPSILON at which ray meets shape,
    or NO_HIT. Degenerate inputs (parallel rays, tangent rays, zero-area
    triangles) are misses.
    """
    match shape:
        case Sphere():
            return _sphere_intersect(shape, ray)
        case Triangle():
            return _triangle_intersect(shape, ray)
        case Plane():
            return _plane_intersect(shape.normal, shape.point, ray)
    raise TypeError(f"not a shape: {shape!r}")


def plane_normal_facing(normal: Vector3, point: Vector3, origin: Vector3) -> Vector3:
    """Flips a plane normal so it points to the side of the plane holding origin."""
    if normal.dot(origin - point) > EPSILON:
        return normal
    return -normal


def surface_normal(shape: Shape, ray: Ray, t: float) -> Vector3:
    """
    Unit surface normal of shape at ray.at(t).

    Sphere normals point outward. Plane and triangle normals are flipped to
    face the ray origin so shading always sees the lit side.
    """
    match shape:
        case Sphere(center=center):
            return (ray.at(t) - center).normalize()
        case Triangle(normal=normal, p0=p0):
            return plane_normal_facing(normal, p0, ray.origin)
        case Plane(normal=normal, point=point):
            return plane_normal_facing(normal, point, ray.origin)
    raise TypeError(f"not a shape: {shape!r}")


def _transform_box(box: AABB, matrix: Matrix) -> AABB:
    # Encloses the eight moved corners. Empty or unbounded boxes have no
    # corners to move and are reset to empty.
    if box.is_empty or not box.is_finite:
        return AABB.empty()
    lo, hi = box.minimum, box.maximum
    return AABB.enclose_points(matrix.apply_point(Vector3(x, y, z))
                               for x, y, z in product((lo.x, hi.x), (lo.y, hi.y), (lo.z, hi.z)))


def apply_transform(shape: Shape, matrix: Matrix) -> Shape:
    """
    Returns shape moved by an affine transform.

    A sphere's center is transformed exactly, but its radius is multiplied by
    the mean of the three axis scale factors. This is an approximation that
    keeps the result a sphere under non-uniform scale; it is exact for uniform
    scale, rotation and translation.

    Compose a chain of transforms into one matrix before applying it:
    normals are renormalized after every application and repeated
    applications accumulate rounding error.
    """
    match shape:
        case Sphere(center=center, radius=radius):
            sx, sy, sz = matrix.axis_scales()
            return Sphere(matrix.apply_point(center), radius * (sx + sy + sz) / 3.0)
        case Triangle(p0=p0, p1=p1, p2=p2, normal=normal):
            return Triangle(matrix.apply_point(p0),
                            matrix.apply_point(p1),
                            matrix.apply_point(p2),
                            matrix.apply_normal(normal))
        case Plane(normal=normal, point=point, bounds=bounds):
            return Plane(matrix.apply_normal(normal), matrix.apply_point(point),
                         _transform_box(bounds, matrix))
    raise TypeError(f"not a shape: {shape!r}")


def bounding_box(shape: Shape) -> AABB:
    """
    Current extent of shape. A plane reports whatever bounds it was given,
    which is the empty AABB until the scene assigns them.
    """
    match shape:
        case Sphere(center=center, radius=radius):
            offset = Vector3(radius, radius, radius)
            return AABB(center - offset, center + offset)
        case Triangle(p0=p0, p1=p1, p2=p2):
            return AABB.enclose_points((p0, p1, p2))
        case Plane(bounds=bounds):
            return bounds
    raise TypeError(f"not a shape: {shape!r}")


def representative_point(shape: Shape) -> Vector3:
    """The sphere's center, the plane's anchor point or the triangle's first vertex."""
    match shape:
        case Sphere(center=center):
            return center
        case Triangle(p0=p0):
            return p0
        case Plane(point=point):
            return point
    raise TypeError(f"not a shape: {shape!r}")


def barycentric(tri: Triangle, point: Vector3) -> Optional[Tuple[float, float, float]]:
    """
    Barycentric weights (alpha, beta, gamma) of point with respect to
    p0, p1, p2. None for a zero-area triangle.
    """
    return _solve_barycentric(tri, point)

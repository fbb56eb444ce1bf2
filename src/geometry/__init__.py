from geometry.shapes import Plane, Shape, Sphere, Triangle
from geometry.intersect import (
    apply_transform,
    barycentric,
    bounding_box,
    ray_intersect,
    representative_point,
    surface_normal,
)
from geometry.world import Scene, SceneFrozenError

__all__ = [
    "Plane",
    "Shape",
    "Sphere",
    "Triangle",
    "apply_transform",
    "barycentric",
    "bounding_box",
    "ray_intersect",
    "representative_point",
    "surface_normal",
    "Scene",
    "SceneFrozenError",
]

# src/geometry/world.py
import logging
import math
from typing import List, Optional, Tuple

from core.aabb import AABB
from core.ray import Ray
from core.transform import Matrix
from core.vector import Vector3
from geometry.intersect import apply_transform, bounding_box, ray_intersect
from geometry.shapes import Plane, Shape
from materials.light import Light
from materials.material import Coefficient, Material

logger = logging.getLogger(__name__)


class SceneFrozenError(RuntimeError):
    """Raised when a frozen scene is asked to change."""


class Scene:
    """
    Shapes, the materials that wrap them, lights and the ambient light.

    A scene is built single-threaded (add shapes and materials, apply model
    transforms) and then frozen. A frozen scene is read-only, so nearest()
    and Material.shade() can be called from many threads at once.

    shadow_bias moves shadow ray origins off the surface along the shading
    normal; 0 casts them from the hit point itself.
    """
    def __init__(self, ambient_light: Vector3 = Vector3(0.0, 0.0, 0.0),
                 shadow_bias: float = 0.0):
        self.shapes: List[Shape] = []
        self.materials: List[Material] = []
        self.lights: List[Light] = []
        self.ambient_light = ambient_light
        self.shadow_bias = shadow_bias
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise SceneFrozenError("scene is frozen; build a new one to change it")

    def add_shape(self, shape: Shape) -> int:
        self._check_mutable()
        self.shapes.append(shape)
        return len(self.shapes) - 1

    def add_material(self, material: Material) -> Material:
        self._check_mutable()
        if not 0 <= material.shape_index < len(self.shapes):
            raise IndexError(f"material refers to unknown shape {material.shape_index}")
        self.materials.append(material)
        return material

    def add(self, shape: Shape, color: Vector3,
            ka: Coefficient = 0.1, kd: Coefficient = 0.7, ks: Coefficient = 0.2,
            kr: Coefficient = 0.0, kt: Coefficient = 0.0,
            eta: int = 1, ior: float = 1.0) -> Material:
        """Registers shape and wraps it in a new material (color in 0-255 RGB)."""
        index = self.add_shape(shape)
        return self.add_material(Material(index, color, ka, kd, ks, kr, kt, eta, ior))

    def add_light(self, light: Light):
        self._check_mutable()
        self.lights.append(light)

    def shape_of(self, material: Material) -> Shape:
        return self.shapes[material.shape_index]

    def transform(self, index: int, matrix: Matrix):
        """Replaces shape `index` with its image under matrix."""
        self._check_mutable()
        self.shapes[index] = apply_transform(self.shapes[index], matrix)

    def bounds(self) -> AABB:
        """Union of every bounded shape's box. Unbounded planes are skipped."""
        box = AABB.empty()
        for shape in self.shapes:
            shape_box = bounding_box(shape)
            if not shape_box.is_empty and shape_box.is_finite:
                box = AABB.surrounding_box(box, shape_box)
        return box

    def set_plane_bounds(self, bounds: Optional[AABB] = None):
        """Gives every plane a bounding box, by default the scene's bounds."""
        self._check_mutable()
        if bounds is None:
            bounds = self.bounds()
        for i, shape in enumerate(self.shapes):
            if isinstance(shape, Plane):
                self.shapes[i] = shape.with_bounds(bounds)

    def freeze(self) -> "Scene":
        if not self._frozen:
            self._frozen = True
            logger.info("Scene frozen: %d shapes, %d materials, %d lights",
                        len(self.shapes), len(self.materials), len(self.lights))
        return self

    def nearest(self, ray: Ray) -> Tuple[Optional[Material], float]:
        """
        Closest material hit by ray and the ray parameter of the hit, or
        (None, inf) when nothing is hit. Scans every registered material.
        """
        hit = None
        closest = math.inf
        for material in self.materials:
            t = ray_intersect(self.shapes[material.shape_index], ray)
            if 0 < t < closest:
                closest = t
                hit = material
        if hit is None:
            return None, math.inf
        return hit, closest

    def is_occluded(self, point: Vector3, normal: Vector3, target: Vector3) -> bool:
        """
        True when a surface lies between point and target.

        An occluder counts only if it is not strictly farther away than the
        target; anything beyond the light leaves it visible.
        """
        origin = point + normal * self.shadow_bias if self.shadow_bias else point
        to_target = target - origin
        distance = to_target.length()
        if distance == 0:
            return False
        occluder, t = self.nearest(Ray(origin, to_target / distance))
        return occluder is not None and t <= distance

    def __len__(self) -> int:
        return len(self.materials)

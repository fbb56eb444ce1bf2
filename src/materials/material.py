# materials/material.py
from dataclasses import dataclass, field
from typing import Union

from core.vector import Vector3

# Phong coefficients are either one scalar or a per-channel weight.
Coefficient = Union[float, Vector3]


@dataclass
class MaterialProperties:
    """
    Material record as read from an MTL file.

    ka, kd, ks and ke are the ambient, diffuse, specular and emissive colors
    (0-1 per channel), ns the shininess, ni the refractive index and d the
    opacity (1 = fully opaque).
    """
    ka: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    kd: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    ks: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    ke: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    ns: float = 0.0
    ni: float = 0.0
    d: float = 0.0


class Material:
    """
    Surface appearance of one registered shape under the local Phong model.

    The material refers to its shape by index into the owning Scene's shape
    list. `color` is given as 0-255 RGB and stored normalized to 0-1.
    kr, kt and ior (reflection, transmission, refractive index) are carried
    as data only; shading is strictly direct lighting plus hard shadows.
    """
    def __init__(self, shape_index: int, color: Vector3,
                 ka: Coefficient = 0.1, kd: Coefficient = 0.7, ks: Coefficient = 0.2,
                 kr: Coefficient = 0.0, kt: Coefficient = 0.0,
                 eta: int = 1, ior: float = 1.0):
        self.shape_index = shape_index
        self.color = color / 255.0
        self.ka = ka
        self.kd = kd
        self.ks = ks
        self.kr = kr
        self.kt = kt
        self.eta = eta
        self.ior = ior

    @classmethod
    def from_properties(cls, shape_index: int, props: MaterialProperties) -> "Material":
        """Maps an MTL record onto Phong parameters, using kd as the base color."""
        return cls(shape_index, props.kd * 255.0,
                   ka=props.ka, kd=props.kd, ks=props.ks,
                   kr=props.ke, kt=1.0 - props.d,
                   eta=props.ns, ior=props.ni)

    def shade(self, scene, point: Vector3, view: Vector3, normal: Vector3) -> Vector3:
        """
        Color seen at `point` looking back along `view` (unit vector from the
        point toward the viewer) on a surface with unit `normal`.

        Ambient plus, for every light not blocked by another surface, a
        diffuse and a specular term. The sum is not clamped.
        """
        res_color = self.color * (scene.ambient_light * self.ka)

        for light in scene.lights:
            to_light = light.position - point
            if to_light.length() == 0:
                # A light sitting on the surface has no direction.
                continue
            light_dir = to_light.normalize()
            reflected = normal * (2.0 * normal.dot(light_dir)) - light_dir

            if scene.is_occluded(point, normal, light.position):
                continue

            dot_diff = light_dir.dot(normal)
            if dot_diff > 0:
                res_color = res_color + self.color * light.color * self.kd * (dot_diff * light.intensity)

            dot_spec = reflected.dot(view)
            if dot_spec > 0:
                res_color = res_color + light.color * self.ks * (dot_spec ** self.eta * light.intensity)

        return res_color

    def __repr__(self) -> str:
        return (f"Material(shape_index={self.shape_index}, color={self.color!r}, "
                f"ka={self.ka!r}, kd={self.kd!r}, ks={self.ks!r}, eta={self.eta})")

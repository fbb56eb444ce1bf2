# materials/presets.py
from typing import Dict

from core.vector import Vector3
from materials.light import Light

class PhongPresets:
    """
    Predefined Phong coefficient sets, to be splatted into Scene.add():

        scene.add(sphere, ColorPresets.RED, **PhongPresets.plastic())
    """

    @staticmethod
    def matte() -> Dict[str, float]:
        return dict(ka=0.1, kd=0.9, ks=0.0, eta=1)

    @staticmethod
    def plastic() -> Dict[str, float]:
        return dict(ka=0.1, kd=0.7, ks=0.4, eta=32)

    @staticmethod
    def metal() -> Dict[str, float]:
        return dict(ka=0.05, kd=0.3, ks=0.8, eta=64, kr=0.6)

    @staticmethod
    def mirror() -> Dict[str, float]:
        return dict(ka=0.0, kd=0.05, ks=1.0, eta=256, kr=0.95)

    @staticmethod
    def glass() -> Dict[str, float]:
        return dict(ka=0.0, kd=0.1, ks=0.9, eta=128, kt=0.9, ior=1.52)

class LightPresets:
    """Point lights with common color temperatures."""

    @staticmethod
    def warm_light(position: Vector3, intensity: float = 1.0) -> Light:
        return Light(position, Vector3(1.0, 0.95, 0.9), intensity)

    @staticmethod
    def cool_light(position: Vector3, intensity: float = 1.0) -> Light:
        return Light(position, Vector3(0.9, 0.95, 1.0), intensity)

    @staticmethod
    def daylight(position: Vector3, intensity: float = 1.0) -> Light:
        return Light(position, Vector3(1.0, 1.0, 1.0), intensity)

class ColorPresets:
    """Common base colors, as 0-255 RGB."""

    # Warm colors
    RED = Vector3(230, 50, 50)
    ORANGE = Vector3(230, 150, 25)
    YELLOW = Vector3(230, 230, 25)

    # Cool colors
    BLUE = Vector3(50, 75, 230)
    GREEN = Vector3(50, 200, 50)
    PURPLE = Vector3(150, 50, 200)

    # Neutral colors
    WHITE = Vector3(230, 230, 230)
    GRAY = Vector3(128, 128, 128)
    SLATE = Vector3(112, 128, 144)

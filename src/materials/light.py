# materials/light.py
from core.vector import Vector3

class Light:
    """
    Point light source. A passive value: the shading pass reads its position,
    color and intensity and never modifies it.
    """
    __slots__ = ("position", "color", "intensity")

    def __init__(self, position: Vector3, color: Vector3 = Vector3(1.0, 1.0, 1.0),
                 intensity: float = 1.0):
        self.position = position
        self.color = color
        self.intensity = intensity

    def __repr__(self) -> str:
        return f"Light({self.position!r}, {self.color!r}, {self.intensity})"

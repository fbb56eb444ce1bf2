import math
from core.vector import Vector3
from core.ray import Ray

class Camera:
    """
    Pinhole camera oriented by yaw and pitch (radians). Yaw 0, pitch 0 looks
    down -z with +y up.
    """
    def __init__(self, position: Vector3, yaw: float, pitch: float,
                 fov: float, aspect_ratio: float):
        self.position = position
        self.yaw = yaw
        self.pitch = pitch
        self.fov = fov
        self.aspect_ratio = aspect_ratio
        self.update_camera()

    @classmethod
    def look_at(cls, position: Vector3, target: Vector3, fov: float,
                aspect_ratio: float) -> "Camera":
        forward = (target - position).normalize()
        pitch = math.asin(max(-1.0, min(1.0, forward.y)))
        yaw = math.atan2(forward.x, -forward.z)
        return cls(position, yaw, pitch, fov, aspect_ratio)

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        global_up = Vector3(0, 1, 0)

        # Compute forward vector
        self.forward = Vector3(
            math.sin(self.yaw) * math.cos(self.pitch),
            math.sin(self.pitch),
            -math.cos(self.yaw) * math.cos(self.pitch)
        ).normalize()

        # Compute right and up vectors
        self.right = self.forward.cross(global_up).normalize()
        self.up = self.right.cross(self.forward).normalize()

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(self.fov / 2)
        viewport_width = self.aspect_ratio * viewport_height

        self.horizontal = self.right * viewport_width
        self.vertical = self.up * viewport_height

        self.lower_left_corner = (self.position +
                                  self.forward -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5)

    def get_ray(self, u: float, v: float) -> Ray:
        """
        Primary ray through viewport coordinates (u, v) in [0, 1], (0, 0)
        being the lower left corner. The direction is unit length.
        """
        target = (self.lower_left_corner +
                  self.horizontal * u +
                  self.vertical * v)
        return Ray.towards(self.position, target)

# renderer/raytracer.py
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from camera.camera import Camera
from core.ray import Ray
from core.vector import Vector3
from geometry.intersect import surface_normal
from geometry.world import Scene
from renderer.config import RenderSettings

logger = logging.getLogger(__name__)


class Renderer:
    """
    Casts one primary ray per pixel and shades the nearest hit.

    Rows are traced in parallel on a thread pool. The scene is frozen
    before the first ray so that no worker can observe a half-built scene.
    """
    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings if settings is not None else RenderSettings()
        self.width = self.settings.width
        self.height = self.settings.height
        self.background = Vector3(*self.settings.background)

    def trace(self, scene: Scene, ray: Ray) -> Vector3:
        """Color seen along ray: the shaded nearest hit, or the background."""
        material, t = scene.nearest(ray)
        if material is None:
            return self.background
        point = ray.at(t)
        normal = surface_normal(scene.shape_of(material), ray, t)
        return material.shade(scene, point, -ray.direction, normal)

    def render_row(self, scene: Scene, camera: Camera, y: int) -> np.ndarray:
        row = np.zeros((self.width, 3), dtype=np.float32)
        # Row 0 is the top of the image.
        v = (self.height - 1 - y + 0.5) / self.height
        for x in range(self.width):
            u = (x + 0.5) / self.width
            row[x] = tuple(self.trace(scene, camera.get_ray(u, v)))
        return row

    def render(self, scene: Scene, camera: Camera) -> np.ndarray:
        """
        Renders scene into an unclamped linear float32 buffer of shape
        (height, width, 3).
        """
        scene.freeze()
        logger.info("Rendering %dx%d with %d workers",
                    self.width, self.height, self.settings.workers)
        start = time.perf_counter()

        image = np.zeros((self.height, self.width, 3), dtype=np.float32)
        if self.settings.workers == 1:
            for y in range(self.height):
                image[y] = self.render_row(scene, camera, y)
        else:
            with ThreadPoolExecutor(max_workers=self.settings.workers) as pool:
                rows = pool.map(lambda y: self.render_row(scene, camera, y), range(self.height))
                for y, row in enumerate(rows):
                    image[y] = row

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

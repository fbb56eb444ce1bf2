# main.py
import argparse
import logging
import math
import os
from typing import Optional

import numpy as np

from camera.camera import Camera
from core.transform import Matrix
from core.vector import Vector3
from geometry.mesh import load_obj
from geometry.shapes import Plane, Sphere, Triangle
from geometry.world import Scene
from materials.material import Material
from materials.presets import ColorPresets, LightPresets, PhongPresets
from renderer.config import ConfigError, RenderSettings
from renderer.raytracer import Renderer
from renderer.tone_mapping import save_image, tone_map

logger = logging.getLogger(__name__)


def create_scene(settings: RenderSettings, model_path: Optional[str] = None) -> Scene:
    scene = Scene(ambient_light=Vector3(0.2, 0.2, 0.2), shadow_bias=settings.shadow_bias)

    # Floor
    scene.add(Plane(Vector3(0, 1, 0), Vector3(0, 0, 0)), ColorPresets.SLATE, **PhongPresets.matte())

    scene.add(Sphere(Vector3(-1.5, 1, -5), 1.0), ColorPresets.RED, **PhongPresets.plastic())
    scene.add(Sphere(Vector3(1.5, 0.75, -4), 0.75), ColorPresets.BLUE, **PhongPresets.metal())

    # A small sphere scaled up into place: model transforms happen before freezing.
    index = scene.add_shape(Sphere(Vector3(0, 0, 0), 0.25))
    scene.add_material(Material(index, ColorPresets.GREEN, **PhongPresets.plastic()))
    scene.transform(index, Matrix.translation(Vector3(0, 0.5, -2.5)) @ Matrix.scaling(2.0))

    scene.add(Triangle(Vector3(-3, 0.01, -7), Vector3(3, 0.01, -7), Vector3(0, 3, -8)),
              ColorPresets.YELLOW, **PhongPresets.matte())

    if model_path is not None:
        if os.path.exists(model_path):
            placement = Matrix.translation(Vector3(0, 1, -6)) @ Matrix.rotation_y(math.radians(30))
            load_obj(model_path, scene, placement)
        else:
            logger.warning("Model not found at %s", model_path)

    scene.set_plane_bounds()
    scene.add_light(LightPresets.warm_light(Vector3(-4, 6, 0), intensity=0.8))
    scene.add_light(LightPresets.cool_light(Vector3(5, 4, -2), intensity=0.5))
    return scene.freeze()


def preview(pixels: np.ndarray, scale: int = 2):
    """Show the image in a pygame window until it is closed."""
    import pygame

    pygame.init()
    height, width, _ = pixels.shape
    screen = pygame.display.set_mode((width * scale, height * scale))
    pygame.display.set_caption("Ray Tracer")

    # pygame surfaces are indexed [x, y].
    surf = pygame.surfarray.make_surface(np.transpose(pixels, (1, 0, 2)))
    surf = pygame.transform.scale(surf, (width * scale, height * scale))

    clock = pygame.time.Clock()
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
        screen.blit(surf, (0, 0))
        pygame.display.flip()
        clock.tick(30)
    pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a demo scene with Phong shading and hard shadows.")
    parser.add_argument("output", nargs="?", default="render.png", help="output image path")
    parser.add_argument("--model", help="OBJ file to add to the scene")
    parser.add_argument("--show", action="store_true", help="display the result in a window")
    args = parser.parse_args(argv)

    try:
        settings = RenderSettings.from_env()
    except ConfigError as e:
        parser.error(str(e))

    logging.basicConfig(level=settings.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    camera = Camera.look_at(Vector3(0, 2, 3), Vector3(0, 1, -4),
                            fov=math.radians(60), aspect_ratio=settings.aspect_ratio)
    scene = create_scene(settings, args.model)

    image = Renderer(settings).render(scene, camera)
    pixels = tone_map(image, settings.tone_mapper, settings.exposure, settings.gamma)
    save_image(pixels, args.output)
    logger.info("Saved %s", args.output)

    if args.show:
        preview(pixels)


if __name__ == "__main__":
    main()

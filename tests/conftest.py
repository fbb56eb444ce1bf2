"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Make the src/ packages importable without installing
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from core.vector import Vector3  # noqa: E402
from geometry.shapes import Plane, Sphere, Triangle  # noqa: E402
from geometry.world import Scene  # noqa: E402
from materials.light import Light  # noqa: E402

WHITE = Vector3(255, 255, 255)


@pytest.fixture
def unit_sphere():
    """Radius-1 sphere at the origin."""
    return Sphere(Vector3(0, 0, 0), 1.0)


@pytest.fixture
def floor():
    """The y = 0 plane facing up."""
    return Plane(Vector3(0, 1, 0), Vector3(0, 0, 0))


@pytest.fixture
def right_triangle():
    """Triangle (0,0,0), (1,0,0), (0,1,0) with normal +z."""
    return Triangle(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(0, 0, 1))


@pytest.fixture
def lit_floor_scene(floor):
    """
    White floor with a pure diffuse material (kd = 0.5) under one white
    light straight above the origin, no ambient light.
    """
    scene = Scene()
    material = scene.add(floor, WHITE, ka=0.0, kd=0.5, ks=0.0)
    scene.add_light(Light(Vector3(0, 10, 0), Vector3(1, 1, 1), 1.0))
    return scene, material

"""
Pytest fixtures shared by the ray tracer tests.

Sources live under src/ as top-level packages; pytest puts src/ on the
path through the pythonpath setting in pyproject.toml.
"""

import numpy as np
import pytest
from camera.camera import Camera
from core.vector import Vector3
from geometry.plane import GeometryPlane
from geometry.sphere import Sphere
from geometry.world import World
from materials.light import Light
from materials.presets import ColorPresets, MaterialPresets


@pytest.fixture
def origin():
    return Vector3(0, 0, 0)


@pytest.fixture
def forward():
    return Vector3(0, 0, 1)


@pytest.fixture
def empty_world():
    return World()


@pytest.fixture
def matte_white():
    return MaterialPresets.matte(ColorPresets.WHITE)


@pytest.fixture
def floor(matte_white):
    """Patch of the plane y = 0, 20 units across."""
    return GeometryPlane(Vector3(0, 0, 0), Vector3(0, 1, 0), 0.0, 10.0, matte_white)


@pytest.fixture
def lit_floor_world(floor):
    """Floor lit from straight above by one point light."""
    world = World()
    world.add(floor)
    world.add_light(Light.point(1.0, Vector3(0, 5, 0)))
    return world


@pytest.fixture
def mirror_corridor():
    """Two facing mirrors at z = 2 and z = -2, no lights."""
    world = World()
    mirror = MaterialPresets.mirror()
    world.add(GeometryPlane(Vector3(0, 0, 2), Vector3(0, 0, 1), -2.0, 10.0, mirror))
    world.add(GeometryPlane(Vector3(0, 0, -2), Vector3(0, 0, 1), 2.0, 10.0, mirror))
    return world


@pytest.fixture
def sphere_world():
    """A red sphere in front of the origin, lit from behind the viewer."""
    world = World()
    world.add(Sphere(Vector3(0, 0, 3), 0.5, MaterialPresets.red()))
    world.add_light(Light.point(1.0, Vector3(0, 0, -2)))
    return world


@pytest.fixture
def camera():
    return Camera(Vector3(0, 0, 0), Vector3(0, 0, 0))


def assert_vector_close(actual, expected, atol=1e-9, err_msg=""):
    """Assert that two Vector3 values are component-wise close."""
    np.testing.assert_allclose(
        list(actual), list(expected), rtol=0, atol=atol,
        err_msg=f"Vector mismatch: {err_msg}"
    )

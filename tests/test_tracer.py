import pytest
from conftest import assert_vector_close
from core.constants import EPSILON
from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere
from materials.light import Light
from materials.presets import ColorPresets, MaterialPresets
from renderer.tracer import BACKGROUND, MAX_DEPTH, Tracer


def test_empty_world_returns_background(empty_world, origin):
    tracer = Tracer(empty_world)
    for direction in [Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0, -1, 0)]:
        assert tracer.trace_primary(origin, direction) == BACKGROUND
    assert BACKGROUND.to_color() == (255, 255, 255)


def test_custom_background(empty_world, origin, forward):
    tracer = Tracer(empty_world, background=Vector3(0.2, 0.3, 0.4))
    assert tracer.trace_primary(origin, forward) == Vector3(0.2, 0.3, 0.4)


def test_lighting_directly_below_point_light(lit_floor_world):
    tracer = Tracer(lit_floor_world)
    diffuse, specular = tracer.compute_lighting(
        Vector3(0, 0, 0), Vector3(0, 1, 0), Vector3(0, -1, 0), MaterialPresets.matte(ColorPresets.WHITE))
    assert diffuse == pytest.approx(1.0)
    assert specular == 0.0


def test_occluder_casts_shadow(lit_floor_world, matte_white):
    lit_floor_world.add(Sphere(Vector3(0, 2.5, 0), 1.0, matte_white))
    tracer = Tracer(lit_floor_world)
    diffuse, specular = tracer.compute_lighting(
        Vector3(0, 0, 0), Vector3(0, 1, 0), Vector3(0, -1, 0), matte_white)
    assert diffuse == 0.0
    assert specular == 0.0


def test_occluder_beyond_point_light_casts_no_shadow(lit_floor_world, matte_white):
    lit_floor_world.add(Sphere(Vector3(0, 8, 0), 1.0, matte_white))
    tracer = Tracer(lit_floor_world)
    diffuse, _ = tracer.compute_lighting(
        Vector3(0, 0, 0), Vector3(0, 1, 0), Vector3(0, -1, 0), matte_white)
    assert diffuse == pytest.approx(1.0)


def test_directional_light_is_blocked_at_any_distance(floor, matte_white, empty_world):
    world = empty_world
    world.add(floor)
    world.add(Sphere(Vector3(0, 50, 0), 1.0, matte_white))
    world.add_light(Light.directional(0.5, Vector3(0, 1, 0)))
    tracer = Tracer(world)
    diffuse, _ = tracer.compute_lighting(
        Vector3(0, 0, 0), Vector3(0, 1, 0), Vector3(0, -1, 0), matte_white)
    assert diffuse == 0.0


def test_lit_floor_color(lit_floor_world):
    tracer = Tracer(lit_floor_world)
    color = tracer.trace_primary(Vector3(0, 1, 0), Vector3(0, -1, 0))
    # Matte white: diffuse only, no secondary rays.
    assert_vector_close(color, Vector3(1, 1, 1))


def test_specular_highlight_on_sphere(sphere_world, origin, forward):
    tracer = Tracer(sphere_world)
    color = tracer.trace_primary(origin, forward)
    # Light sits behind the viewer, so the front of the sphere is fully lit.
    assert color.x > 1.0
    assert color.y == pytest.approx(color.z)
    assert color.y > 0.0


def test_recursion_depth_is_bounded(mirror_corridor, origin, forward, monkeypatch):
    tracer = Tracer(mirror_corridor, max_depth=MAX_DEPTH)
    original = tracer.trace
    nesting = {"current": 0, "max": 0}

    def counting_trace(ray, min_distance, max_distance, depth):
        nesting["current"] += 1
        nesting["max"] = max(nesting["max"], nesting["current"])
        try:
            return original(ray, min_distance, max_distance, depth)
        finally:
            nesting["current"] -= 1

    monkeypatch.setattr(tracer, "trace", counting_trace)
    color = tracer.trace_primary(origin, forward)

    # The primary call plus at most max_depth + 1 levels of secondary rays.
    assert nesting["max"] == MAX_DEPTH + 2
    # Without lights the mirrors only ever reflect darkness.
    assert color == Vector3(0, 0, 0)


def test_secondary_rays_skip_origin_surface(mirror_corridor):
    tracer = Tracer(mirror_corridor)
    rec = mirror_corridor.hit(Ray(Vector3(0, 0, 2), Vector3(0, 0, -1)), EPSILON, float("inf"))
    assert rec.t == pytest.approx(4.0)


def test_glass_refraction_sees_through(empty_world, origin, forward):
    glass = MaterialPresets.glass()
    empty_world.add(Sphere(Vector3(0, 0, 3), 0.5, glass))
    tracer = Tracer(empty_world)
    color = tracer.trace_primary(origin, forward)
    # No lights: only the background reaches the eye, via reflection and refraction.
    assert color.x > 0.0
    assert color.x == pytest.approx(color.y)

# scenes.py
from camera.camera import Camera
from core.vector import Vector3
from geometry.cylinder import Cylinder
from geometry.plane import ChessGeometryPlane
from geometry.sphere import Sphere
from geometry.world import World
from materials.light import Light
from materials.presets import ColorPresets, MaterialPresets

def create_camera() -> Camera:
    """Starting viewpoint: slightly left of and behind the objects, pitched a little down."""
    return Camera(position=Vector3(-0.25, 0, -1.5), angle=Vector3(6.1, 0, 0))

def create_world() -> World:
    world = World()

    # Materials are shared, one instance per kind.
    red = MaterialPresets.red()
    green = MaterialPresets.green()
    blue = MaterialPresets.blue()
    glass = MaterialPresets.glass()
    mirror = MaterialPresets.mirror()
    yellow = MaterialPresets.yellow()

    world.add(Sphere(Vector3(-1.0, 0, 3), 0.5, red))
    world.add(Sphere(Vector3(0, 0.5, 3), 0.3, green))
    world.add(Sphere(Vector3(1.0, 0, 3), 0.6, blue))
    world.add(Cylinder(Vector3(0, -0.3, 0.5), 0.25, 0.5, glass))
    world.add(Cylinder(Vector3(0, 0, 3.5), 0.5, 0.75, mirror))

    # Chessboard floor on the plane y = -0.5.
    world.add(ChessGeometryPlane(
        center=Vector3(0, 0, 12),
        normal=Vector3(0, 1, 0),
        offset=0.5,
        size=16,
        cell_count=100,
        material=yellow,
        color1=ColorPresets.BLACK,
        color2=ColorPresets.WHITE,
    ))

    world.add_light(Light.point(0.3, Vector3(2, 1, 0)))
    world.add_light(Light.point(0.3, Vector3(0, 1, 0)))
    world.add_light(Light.point(0.3, Vector3(-2, 1, 0)))
    world.add_light(Light.directional(0.5, Vector3(0, 1, 1)))

    return world

# renderer/tracer.py
from typing import Tuple
from core.constants import EPSILON, INFINITY
from core.ray import Ray
from core.utils import reflect, refract
from core.vector import Vector3
from geometry.world import World
from materials.light import LightType
from materials.material import Material

MAX_DEPTH = 4
BACKGROUND = Vector3(1.0, 1.0, 1.0)

class Tracer:
    """
    Whitted-style recursive ray tracer over a World.

    Each hit is shaded with Phong diffuse/specular terms from every
    unshadowed light, then a reflected and a refracted ray are spawned while
    the depth budget lasts.
    """
    def __init__(self, world: World, max_depth: int = MAX_DEPTH, background: Vector3 = BACKGROUND):
        self.world = world
        self.max_depth = max_depth
        self.background = background

    def compute_lighting(self, point: Vector3, normal: Vector3, direction: Vector3,
                         material: Material) -> Tuple[float, float]:
        """
        Returns the (diffuse, specular) intensities at `point`, already
        scaled by the material's first two albedo weights.
        """
        diffuse = 0.0
        specular = 0.0

        for light in self.world.lights:
            if light.type is LightType.POINT:
                to_light = light.position - point
                max_distance = to_light.length() - EPSILON
                light_dir = to_light.normalize()
            else:
                light_dir = light.position
                max_distance = INFINITY

            if self.world.occluded(Ray(point, light_dir), EPSILON, max_distance):
                continue

            light_cos = light_dir.dot(normal)
            specular_cos = reflect(light_dir, normal).dot(direction)

            if light_cos > 0:
                diffuse += light_cos * light.intensity
            if specular_cos > 0:
                specular += specular_cos ** material.specular_exponent * light.intensity

        return diffuse * material.albedo[0], specular * material.albedo[1]

    def trace(self, ray: Ray, min_distance: float, max_distance: float, depth: int) -> Vector3:
        """
        Color seen along `ray`. Recursion stops once `depth` drops below zero,
        so a primary ray started at depth d spawns at most d + 1 levels of
        secondary rays.
        """
        rec = self.world.hit(ray, min_distance, max_distance)
        if rec is None:
            return self.background

        material = rec.material
        diffuse, specular = self.compute_lighting(rec.p, rec.normal, ray.direction, material)
        color = rec.shape.color(rec.p) * diffuse + Vector3(specular, specular, specular)

        if depth < 0:
            return color

        direction_cos = ray.direction.dot(rec.normal)

        if abs(material.albedo[2]) > EPSILON:
            reflected = Ray(rec.p, reflect(ray.direction, rec.normal))
            color = color + self.trace(reflected, EPSILON, INFINITY, depth - 1) * material.albedo[2]

        if abs(material.albedo[3]) > EPSILON:
            refracted = Ray(rec.p, refract(ray.direction, rec.normal, -direction_cos,
                                           material.refractive_index))
            color = color + self.trace(refracted, EPSILON, INFINITY, depth - 1) * material.albedo[3]

        return color

    def trace_primary(self, origin: Vector3, direction: Vector3) -> Vector3:
        return self.trace(Ray(origin, direction), 0.0, INFINITY, self.max_depth)

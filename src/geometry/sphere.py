# geometry/sphere.py
import math
from typing import Tuple
from core.constants import EPSILON, INFINITY
from core.vector import Vector3
from core.ray import Ray
from geometry.shape import Shape
from materials.material import Material

class Sphere(Shape):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material: Material):
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        super().__init__(material)
        self.center = center
        self.radius = float(radius)

    def intersect(self, ray: Ray) -> Tuple[bool, float]:
        # The direction is unit length, so the quadratic reduces to b^2 - c.
        oc = ray.origin - self.center
        b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - c

        if discriminant < EPSILON:
            return False, INFINITY

        sqrt_disc = math.sqrt(discriminant)
        t = -b - sqrt_disc
        if t < EPSILON:
            t = -b + sqrt_disc
        if t > EPSILON:
            return True, t
        return False, INFINITY

    def normal(self, point: Vector3) -> Vector3:
        return (point - self.center).normalize()

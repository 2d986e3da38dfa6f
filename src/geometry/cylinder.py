# geometry/cylinder.py
import math
from typing import Tuple
from core.constants import EPSILON, INFINITY
from core.vector import Vector3
from core.ray import Ray
from geometry.shape import Shape
from materials.material import Material

class Cylinder(Shape):
    """
    A closed cylinder whose axis is parallel to Y, centered at `center`.
    `height` is the full height; the caps sit at center.y +/- height / 2.
    """
    def __init__(self, center: Vector3, radius: float, height: float, material: Material):
        if radius <= 0 or height <= 0:
            raise ValueError(f"Cylinder radius and height must be positive, got {radius}, {height}")
        super().__init__(material)
        self.center = center
        self.radius = float(radius)
        self.half_height = float(height) / 2

    def _cap_hit(self, oc: Vector3, direction: Vector3) -> float:
        """Nearest valid end-cap distance, or INFINITY."""
        if direction.y == 0:
            return INFINITY
        nearest = INFINITY
        r2 = self.radius * self.radius
        for cap_y in (self.half_height, -self.half_height):
            t = (cap_y - oc.y) / direction.y
            if t <= EPSILON:
                continue
            x = oc.x + direction.x * t
            z = oc.z + direction.z * t
            if x * x + z * z - r2 < EPSILON and t < nearest:
                nearest = t
        return nearest

    def intersect(self, ray: Ray) -> Tuple[bool, float]:
        d = ray.direction
        oc = ray.origin - self.center
        t_cap = self._cap_hit(oc, d)

        # Curved side: quadratic in x and z only.
        a = d.x * d.x + d.z * d.z
        b = oc.x * d.x + oc.z * d.z
        c = oc.x * oc.x + oc.z * oc.z - self.radius * self.radius
        discriminant = b * b - a * c

        if discriminant < EPSILON:
            return t_cap < INFINITY, t_cap

        sqrt_disc = math.sqrt(discriminant)
        t = (-b - sqrt_disc) / a
        if t < EPSILON:
            t = (-b + sqrt_disc) / a

        if t > EPSILON and abs(oc.y + t * d.y) <= self.half_height and t < t_cap:
            return True, t
        return t_cap < INFINITY, t_cap

    def normal(self, point: Vector3) -> Vector3:
        local = point - self.center
        if abs(local.y) < self.half_height:
            return Vector3(local.x, 0, local.z).normalize()
        return local.normalize()

# geometry/shape.py
from typing import Tuple
from core.ray import Ray
from core.vector import Vector3
from materials.material import Material

class HitRecord:
    """
    Records the closest ray-shape intersection found in a scene.
    """
    __slots__ = ("shape", "t", "p", "normal")

    def __init__(self, shape: "Shape", t: float, p: Vector3, normal: Vector3):
        self.shape = shape      # Shape that was hit
        self.t = t              # Ray parameter at intersection
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal at intersection

    @property
    def material(self) -> Material:
        return self.shape.material

class Shape:
    """
    Interface for primitives a ray can hit.

    intersect() returns (hit, t) where t is the smallest root greater than
    EPSILON, or (False, INFINITY) when the ray misses.
    """
    def __init__(self, material: Material):
        self.material = material

    def intersect(self, ray: Ray) -> Tuple[bool, float]:
        raise NotImplementedError("intersect() must be implemented by subclasses.")

    def normal(self, point: Vector3) -> Vector3:
        raise NotImplementedError("normal() must be implemented by subclasses.")

    def color(self, point: Vector3) -> Vector3:
        return self.material.diffuse_color

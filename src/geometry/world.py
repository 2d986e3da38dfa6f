# geometry/world.py
from typing import List, Optional
from core.constants import INFINITY
from core.ray import Ray
from geometry.shape import HitRecord, Shape
from materials.light import Light

class World:
    """
    The scene: an ordered list of shapes and the lights illuminating them.
    It is searched linearly; shape order only matters for ties, where the
    earlier shape wins.
    """
    def __init__(self):
        self.objects: List[Shape] = []
        self.lights: List[Light] = []

    def add(self, obj: Shape):
        self.objects.append(obj)

    def add_light(self, light: Light):
        self.lights.append(light)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """
        Closest intersection with t_min <= t <= t_max, or None.
        """
        closest_shape = None
        closest_so_far = INFINITY
        for obj in self.objects:
            hit, t = obj.intersect(ray)
            if not hit:
                continue
            if t_min <= t <= t_max and t < closest_so_far:
                closest_so_far = t
                closest_shape = obj

        if closest_shape is None:
            return None
        p = ray.at(closest_so_far)
        return HitRecord(closest_shape, closest_so_far, p, closest_shape.normal(p))

    def occluded(self, ray: Ray, t_min: float, t_max: float) -> bool:
        """
        Shadow query: True as soon as any shape is hit within [t_min, t_max].
        """
        for obj in self.objects:
            hit, t = obj.intersect(ray)
            if hit and t_min <= t <= t_max:
                return True
        return False

    def __len__(self) -> int:
        return len(self.objects)

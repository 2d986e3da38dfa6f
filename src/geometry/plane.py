# geometry/plane.py
from typing import Tuple
from core.constants import EPSILON, INFINITY
from core.vector import Vector3
from core.ray import Ray
from geometry.shape import Shape
from materials.material import Material

class GeometryPlane(Shape):
    """
    A finite square patch of the plane  p . normal + offset = 0.

    `size` is the half-extent: a point belongs to the patch when it lies
    within `size` of `center` along every world axis.
    """
    def __init__(self, center: Vector3, normal: Vector3, offset: float,
                 size: float, material: Material):
        if size <= 0:
            raise ValueError(f"Plane size must be positive, got {size}")
        super().__init__(material)
        self.center = center
        self.normal_vector = normal.normalize()
        self.offset = float(offset)
        self.size = float(size)

    def intersect(self, ray: Ray) -> Tuple[bool, float]:
        cos = ray.direction.dot(self.normal_vector)

        # Parallel to the plane.
        if abs(cos) < EPSILON:
            return False, INFINITY

        t = -(self.offset + ray.origin.dot(self.normal_vector)) / cos
        if t <= EPSILON:
            return False, INFINITY

        local = ray.at(t) - self.center
        if abs(local.x) > self.size or abs(local.y) > self.size or abs(local.z) > self.size:
            return False, INFINITY
        return True, t

    def normal(self, point: Vector3) -> Vector3:
        return self.normal_vector

class ChessGeometryPlane(GeometryPlane):
    """
    A GeometryPlane colored as a checkerboard. The parity of the cell index
    along each of the three axes is XORed to choose between two colors.
    """
    def __init__(self, center: Vector3, normal: Vector3, offset: float, size: float,
                 cell_count: int, material: Material, color1: Vector3, color2: Vector3):
        super().__init__(center, normal, offset, size, material)
        self.cell_count = int(cell_count)
        self.color1 = color1
        self.color2 = color2

    def cell_parity(self, point: Vector3) -> int:
        cells = self.cell_count - 1
        span = 2 * self.size
        parity = 0
        for value, origin in zip(point, self.center):
            # round() breaks ties to even.
            parity ^= int(round((value - origin + self.size) / span * cells)) % 2
        return parity

    def color(self, point: Vector3) -> Vector3:
        return self.color1 if self.cell_parity(point) == 1 else self.color2

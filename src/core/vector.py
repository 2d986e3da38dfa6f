# core/vector.py
import math
import numbers
from typing import Tuple

class Vector3:
    """
    A 3D vector value supporting arithmetic, dot product, normalization and
    conversion to an 8-bit color. Vectors are never mutated after creation;
    every operation returns a new instance.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        # Component-wise product, used to tint a color.
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> "Vector3":
        """
        Returns a unit-length copy. A zero vector is divided by 1 instead,
        so it comes back unchanged rather than raising.
        """
        l = self.length()
        if l <= 0:
            l = 1.0
        return Vector3(self.x / l, self.y / l, self.z / l)

    def to_color(self) -> Tuple[int, int, int]:
        """
        Converts a linear color to an 8-bit RGB triple. Each channel is
        clamped to [0, 1] and truncated; NaN channels become 0.
        """
        return (_channel(self.x), _channel(self.y), _channel(self.z))

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


def _channel(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(255 * min(1.0, max(0.0, value)))

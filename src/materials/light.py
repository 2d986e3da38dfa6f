# materials/light.py
from enum import Enum
from core.vector import Vector3

class LightType(Enum):
    DIRECTIONAL = "directional"
    POINT = "point"

class Light:
    """
    A light source. Directional lights keep a normalized direction pointing
    towards the light; point lights keep their raw position.
    """
    __slots__ = ("type", "intensity", "position")

    def __init__(self, light_type: LightType, intensity: float, position: Vector3):
        if intensity < 0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")
        self.type = light_type
        self.intensity = float(intensity)
        if light_type is LightType.DIRECTIONAL:
            self.position = position.normalize()
        else:
            self.position = Vector3(position.x, position.y, position.z)

    @classmethod
    def point(cls, intensity: float, position: Vector3) -> "Light":
        return cls(LightType.POINT, intensity, position)

    @classmethod
    def directional(cls, intensity: float, direction: Vector3) -> "Light":
        return cls(LightType.DIRECTIONAL, intensity, direction)

    def __repr__(self) -> str:
        return f"Light({self.type.name}, {self.intensity}, {self.position!r})"

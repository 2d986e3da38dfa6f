# materials/presets.py
from core.vector import Vector3
from materials.material import Material

class ColorPresets:
    """Common colors."""

    RED = Vector3(1, 0, 0)
    GREEN = Vector3(0, 1, 0)
    BLUE = Vector3(0, 0, 1)
    YELLOW = Vector3(1, 1, 0)
    WHITE = Vector3(1, 1, 1)
    BLACK = Vector3(0, 0, 0)
    GLASS_TINT = Vector3(0.6, 0.7, 0.8)

class MaterialPresets:
    """Materials used by the demo scene."""

    @staticmethod
    def glass() -> Material:
        return Material(1.4, ColorPresets.GLASS_TINT, 125, (0, 0.5, 0.1, 0.8))

    @staticmethod
    def mirror() -> Material:
        return Material(1.0, ColorPresets.WHITE, 1425, (0, 10, 0.8, 0))

    @staticmethod
    def red() -> Material:
        return Material(1.0, ColorPresets.RED, 500, (1, 0.5, 0.2, 0))

    @staticmethod
    def blue() -> Material:
        return Material(1.0, ColorPresets.BLUE, 500, (1, 0.5, 0.3, 0))

    @staticmethod
    def green() -> Material:
        return Material(1.0, ColorPresets.GREEN, 10, (1, 0.5, 0.5, 0))

    @staticmethod
    def yellow() -> Material:
        return Material(1.0, ColorPresets.YELLOW, 1000, (0.8, 10, 0.5, 0))

    @staticmethod
    def matte(color: Vector3) -> Material:
        """Create a purely diffuse material with the given color."""
        return Material(1.0, color, 1, (1, 0, 0, 0))

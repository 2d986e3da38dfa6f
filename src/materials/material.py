# materials/material.py
from typing import Sequence
from core.vector import Vector3

class Material:
    """
    Optical properties shared by every shape that uses them.

    `albedo` holds four independent weights for the diffuse, specular,
    reflected and refracted contributions, in that order. They are not
    required to sum to one.
    """
    __slots__ = ("refractive_index", "diffuse_color", "specular_exponent", "albedo")

    def __init__(self, refractive_index: float, diffuse_color: Vector3,
                 specular_exponent: float, albedo: Sequence[float]):
        albedo = tuple(float(a) for a in albedo)
        if len(albedo) != 4:
            raise ValueError(f"albedo needs 4 weights, got {len(albedo)}")
        self.refractive_index = float(refractive_index)
        self.diffuse_color = diffuse_color
        self.specular_exponent = float(specular_exponent)
        self.albedo = albedo

    def __repr__(self) -> str:
        return (f"Material(refractive_index={self.refractive_index}, "
                f"diffuse_color={self.diffuse_color!r}, "
                f"specular_exponent={self.specular_exponent}, albedo={self.albedo})")

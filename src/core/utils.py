# core/utils.py
import math
from core.vector import Vector3

# Returned when refraction is impossible (total internal reflection).
TIR_DIRECTION = Vector3(1, 0, 0)

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * (2 * v.dot(n))

def refract(incident: Vector3, normal: Vector3, cos: float,
            eta_t: float, eta_i: float = 1.0) -> Vector3:
    """
    Refracts `incident` through a surface using Snell's law.

    `cos` is the cosine between the reversed incident ray and `normal`.
    A negative cosine means the ray leaves the medium, so the normal is
    flipped and the two indices swap roles. When no transmitted ray exists
    the fixed TIR_DIRECTION is returned.
    """
    if cos < 0:
        return refract(incident, -normal, -cos, eta_i, eta_t)
    eta = eta_i / eta_t
    k = 1 - eta * eta * (1 - cos * cos)
    if k < 0:
        return TIR_DIRECTION
    return incident * eta + normal * (eta * cos - math.sqrt(k))

"""
Numeric thresholds shared by the geometry and the tracer.
"""
import math

# Near-zero threshold: root positivity, shadow-ray offset and albedo significance.
EPSILON = 1e-4

INFINITY = math.inf

# renderer/kernels.py
#
# Compiled tracer over the flattened scene built by Renderer.update_scene_data.
#
# Shape rows of `params` (PARAM_WIDTH floats):
#   SPHERE       cx cy cz radius
#   CYLINDER     cx cy cz radius half_height
#   PLANE        cx cy cz nx ny nz offset size
#   CHESS_PLANE  as PLANE, then cell_count, color1 (3), color2 (3)
# Material rows (MATERIAL_WIDTH floats):
#   refractive_index, diffuse r g b, specular_exponent, albedo 0..3
# Light rows (LIGHT_WIDTH floats): intensity, x y z

import math
import numpy as np
from numba import njit, prange
from core.constants import EPSILON, INFINITY

SPHERE = 0
CYLINDER = 1
PLANE = 2
CHESS_PLANE = 3

POINT_LIGHT = 0
DIRECTIONAL_LIGHT = 1

PARAM_WIDTH = 16
MATERIAL_WIDTH = 9
LIGHT_WIDTH = 4

# Pending rays per pixel: ox oy oz dx dy dz weight depth min_distance
STACK_SIZE = 64
STACK_WIDTH = 9

# Each depth level leaves at most one extra ray pending.
MAX_SUPPORTED_DEPTH = STACK_SIZE - 2

@njit
def normalize(x, y, z):
    length = math.sqrt(x * x + y * y + z * z)
    if length <= 0:
        length = 1.0
    return x / length, y / length, z / length

@njit
def camera_direction(x, y, sin_pitch, cos_pitch, sin_yaw, cos_yaw):
    new_y = cos_pitch * y + sin_pitch
    z = -sin_pitch * y + cos_pitch
    new_x = cos_yaw * x + sin_yaw * z
    new_z = -sin_yaw * x + cos_yaw * z
    return normalize(new_x, new_y, new_z)

@njit
def refract(ix, iy, iz, nx, ny, nz, cos, eta_t, eta_i):
    if cos < 0:
        nx = -nx
        ny = -ny
        nz = -nz
        cos = -cos
        eta_t, eta_i = eta_i, eta_t
    eta = eta_i / eta_t
    k = 1 - eta * eta * (1 - cos * cos)
    if k < 0:
        return 1.0, 0.0, 0.0
    f = eta * cos - math.sqrt(k)
    return ix * eta + nx * f, iy * eta + ny * f, iz * eta + nz * f

@njit
def intersect_sphere(p, ox, oy, oz, dx, dy, dz):
    ocx = ox - p[0]
    ocy = oy - p[1]
    ocz = oz - p[2]
    b = ocx * dx + ocy * dy + ocz * dz
    c = ocx * ocx + ocy * ocy + ocz * ocz - p[3] * p[3]
    discriminant = b * b - c
    if discriminant < EPSILON:
        return INFINITY
    sqrt_disc = math.sqrt(discriminant)
    t = -b - sqrt_disc
    if t < EPSILON:
        t = -b + sqrt_disc
    if t > EPSILON:
        return t
    return INFINITY

@njit
def intersect_cylinder(p, ox, oy, oz, dx, dy, dz):
    ocx = ox - p[0]
    ocy = oy - p[1]
    ocz = oz - p[2]
    radius = p[3]
    half_height = p[4]
    r2 = radius * radius

    t_cap = INFINITY
    if dy != 0.0:
        for k in range(2):
            cap_y = half_height if k == 0 else -half_height
            t = (cap_y - ocy) / dy
            if t > EPSILON:
                x = ocx + dx * t
                z = ocz + dz * t
                if x * x + z * z - r2 < EPSILON and t < t_cap:
                    t_cap = t

    a = dx * dx + dz * dz
    b = ocx * dx + ocz * dz
    c = ocx * ocx + ocz * ocz - r2
    discriminant = b * b - a * c
    if discriminant < EPSILON:
        return t_cap

    sqrt_disc = math.sqrt(discriminant)
    t = (-b - sqrt_disc) / a
    if t < EPSILON:
        t = (-b + sqrt_disc) / a
    if t > EPSILON and abs(ocy + t * dy) <= half_height and t < t_cap:
        return t
    return t_cap

@njit
def intersect_plane(p, ox, oy, oz, dx, dy, dz):
    cos = dx * p[3] + dy * p[4] + dz * p[5]
    if abs(cos) < EPSILON:
        return INFINITY
    t = -(p[6] + (ox * p[3] + oy * p[4] + oz * p[5])) / cos
    if t <= EPSILON:
        return INFINITY
    size = p[7]
    if abs(ox + dx * t - p[0]) > size:
        return INFINITY
    if abs(oy + dy * t - p[1]) > size:
        return INFINITY
    if abs(oz + dz * t - p[2]) > size:
        return INFINITY
    return t

@njit
def intersect_shape(kind, p, ox, oy, oz, dx, dy, dz):
    if kind == SPHERE:
        return intersect_sphere(p, ox, oy, oz, dx, dy, dz)
    elif kind == CYLINDER:
        return intersect_cylinder(p, ox, oy, oz, dx, dy, dz)
    return intersect_plane(p, ox, oy, oz, dx, dy, dz)

@njit
def shape_normal(kind, p, px, py, pz):
    if kind == SPHERE:
        return normalize(px - p[0], py - p[1], pz - p[2])
    elif kind == CYLINDER:
        lx = px - p[0]
        ly = py - p[1]
        lz = pz - p[2]
        if abs(ly) < p[4]:
            return normalize(lx, 0.0, lz)
        return normalize(lx, ly, lz)
    return p[3], p[4], p[5]

@njit
def shape_color(kind, p, material, px, py, pz):
    if kind == CHESS_PLANE:
        size = p[7]
        span = 2 * size
        cells = p[8] - 1
        v1 = int(round((px - p[0] + size) / span * cells)) % 2
        v2 = int(round((py - p[1] + size) / span * cells)) % 2
        v3 = int(round((pz - p[2] + size) / span * cells)) % 2
        if (v1 ^ v2 ^ v3) == 1:
            return p[9], p[10], p[11]
        return p[12], p[13], p[14]
    return material[1], material[2], material[3]

@njit
def closest_hit(shape_types, params, ox, oy, oz, dx, dy, dz, t_min, t_max):
    closest = -1
    closest_t = INFINITY
    for i in range(shape_types.shape[0]):
        t = intersect_shape(shape_types[i], params[i], ox, oy, oz, dx, dy, dz)
        if t < INFINITY and t >= t_min and t <= t_max and t < closest_t:
            closest_t = t
            closest = i
    return closest, closest_t

@njit
def occluded(shape_types, params, ox, oy, oz, dx, dy, dz, t_min, t_max):
    for i in range(shape_types.shape[0]):
        t = intersect_shape(shape_types[i], params[i], ox, oy, oz, dx, dy, dz)
        if t < INFINITY and t >= t_min and t <= t_max:
            return True
    return False

@njit
def compute_lighting(shape_types, params, light_types, light_data,
                     px, py, pz, nx, ny, nz, dx, dy, dz, material):
    diffuse = 0.0
    specular = 0.0
    for li in range(light_types.shape[0]):
        intensity = light_data[li, 0]
        if light_types[li] == POINT_LIGHT:
            tx = light_data[li, 1] - px
            ty = light_data[li, 2] - py
            tz = light_data[li, 3] - pz
            max_distance = math.sqrt(tx * tx + ty * ty + tz * tz) - EPSILON
            lx, ly, lz = normalize(tx, ty, tz)
        else:
            lx = light_data[li, 1]
            ly = light_data[li, 2]
            lz = light_data[li, 3]
            max_distance = INFINITY

        if occluded(shape_types, params, px, py, pz, lx, ly, lz, EPSILON, max_distance):
            continue

        light_cos = lx * nx + ly * ny + lz * nz
        k = 2 * light_cos
        specular_cos = (lx - nx * k) * dx + (ly - ny * k) * dy + (lz - nz * k) * dz

        if light_cos > 0:
            diffuse += light_cos * intensity
        if specular_cos > 0:
            specular += specular_cos ** material[4] * intensity

    return diffuse * material[5], specular * material[6]

@njit
def trace_ray(shape_types, params, materials, light_types, light_data,
              ox, oy, oz, dx, dy, dz, max_depth, bg_r, bg_g, bg_b, stack):
    """
    Iterative form of the recursive tracer. Every hit adds its local color
    scaled by the product of albedo weights along its path, which sums to
    the same color as the recursion.
    """
    r = 0.0
    g = 0.0
    b = 0.0

    stack[0, 0] = ox
    stack[0, 1] = oy
    stack[0, 2] = oz
    stack[0, 3] = dx
    stack[0, 4] = dy
    stack[0, 5] = dz
    stack[0, 6] = 1.0
    stack[0, 7] = max_depth
    stack[0, 8] = 0.0
    sp = 1

    while sp > 0:
        sp -= 1
        rox = stack[sp, 0]
        roy = stack[sp, 1]
        roz = stack[sp, 2]
        rdx = stack[sp, 3]
        rdy = stack[sp, 4]
        rdz = stack[sp, 5]
        weight = stack[sp, 6]
        depth = stack[sp, 7]
        t_min = stack[sp, 8]

        idx, t = closest_hit(shape_types, params, rox, roy, roz, rdx, rdy, rdz, t_min, INFINITY)
        if idx < 0:
            r += weight * bg_r
            g += weight * bg_g
            b += weight * bg_b
            continue

        kind = shape_types[idx]
        p = params[idx]
        material = materials[idx]
        px = rox + rdx * t
        py = roy + rdy * t
        pz = roz + rdz * t
        nx, ny, nz = shape_normal(kind, p, px, py, pz)

        diffuse, specular = compute_lighting(shape_types, params, light_types, light_data,
                                             px, py, pz, nx, ny, nz, rdx, rdy, rdz, material)
        cr, cg, cb = shape_color(kind, p, material, px, py, pz)
        r += weight * (cr * diffuse + specular)
        g += weight * (cg * diffuse + specular)
        b += weight * (cb * diffuse + specular)

        if depth < 0:
            continue

        direction_cos = rdx * nx + rdy * ny + rdz * nz

        if abs(material[7]) > EPSILON:
            k = 2 * direction_cos
            stack[sp, 0] = px
            stack[sp, 1] = py
            stack[sp, 2] = pz
            stack[sp, 3] = rdx - nx * k
            stack[sp, 4] = rdy - ny * k
            stack[sp, 5] = rdz - nz * k
            stack[sp, 6] = weight * material[7]
            stack[sp, 7] = depth - 1
            stack[sp, 8] = EPSILON
            sp += 1

        if abs(material[8]) > EPSILON:
            fx, fy, fz = refract(rdx, rdy, rdz, nx, ny, nz, -direction_cos, material[0], 1.0)
            stack[sp, 0] = px
            stack[sp, 1] = py
            stack[sp, 2] = pz
            stack[sp, 3] = fx
            stack[sp, 4] = fy
            stack[sp, 5] = fz
            stack[sp, 6] = weight * material[8]
            stack[sp, 7] = depth - 1
            stack[sp, 8] = EPSILON
            sp += 1

    return r, g, b

@njit(parallel=True)
def render_kernel(x_coords, y_coords, camera_position, camera_trig,
                  shape_types, params, materials, light_types, light_data,
                  max_depth, background, out):
    """Traces every pixel; each column is an independent parallel task."""
    width = x_coords.shape[0]
    height = x_coords.shape[1]
    ox = camera_position[0]
    oy = camera_position[1]
    oz = camera_position[2]
    for i in prange(width):
        stack = np.empty((STACK_SIZE, STACK_WIDTH))
        for j in range(height):
            dx, dy, dz = camera_direction(x_coords[i, j], y_coords[i, j],
                                          camera_trig[0], camera_trig[1],
                                          camera_trig[2], camera_trig[3])
            r, g, b = trace_ray(shape_types, params, materials, light_types, light_data,
                                ox, oy, oz, dx, dy, dz, max_depth,
                                background[0], background[1], background[2], stack)
            out[i, j, 0] = r
            out[i, j, 1] = g
            out[i, j, 2] = b

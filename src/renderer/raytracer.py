# renderer/raytracer.py
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
import numpy as np
from camera.camera import Camera
from core.vector import Vector3
from geometry.cylinder import Cylinder
from geometry.plane import ChessGeometryPlane, GeometryPlane
from geometry.sphere import Sphere
from geometry.world import World
from materials.light import LightType
from renderer import kernels
from renderer.tone_mapping import clamp_tone_mapping
from renderer.tracer import BACKGROUND, MAX_DEPTH, Tracer

BACKENDS = ("numba", "python")

class Renderer:
    def __init__(self, width: int, height: int, max_depth: int = MAX_DEPTH,
                 backend: str = "numba", workers: Optional[int] = None,
                 background: Vector3 = BACKGROUND, debug_mode: bool = False):
        if width <= 0 or height <= 0:
            raise ValueError(f"Render size must be positive, got {width}x{height}")
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")
        if not 0 <= max_depth <= kernels.MAX_SUPPORTED_DEPTH:
            raise ValueError(f"max_depth must be in [0, {kernels.MAX_SUPPORTED_DEPTH}], got {max_depth}")
        self.width = width
        self.height = height
        self.max_depth = max_depth
        self.backend = backend
        self.workers = workers
        self.background = background
        self.debug_mode = debug_mode
        self.frame_number = 0
        self.last_render_time = 0.0

        # Camera-space coordinates of every pixel, indexed [column, row].
        # Both axes are divided by the larger dimension to keep the aspect ratio.
        size = max(width, height)
        cols, rows = np.meshgrid(np.arange(width, dtype=np.float64),
                                 np.arange(height, dtype=np.float64), indexing="ij")
        self.x_coords = cols / size - 0.5
        self.y_coords = 0.5 - rows / size

        # Front buffer is the last finished frame; the back buffer is being rendered.
        self.frame_output = np.zeros((width, height, 3), dtype=np.uint8)
        self.back_buffer = np.zeros((width, height, 3), dtype=np.uint8)
        self.d_frame_output = np.zeros((width, height, 3), dtype=np.float64)

        self.scene_world = None
        self.d_shape_types = None
        self.d_shape_params = None
        self.d_shape_materials = None
        self.d_light_types = None
        self.d_light_data = None
        self.d_background = np.array([background.x, background.y, background.z], dtype=np.float64)

    def update_scene_data(self, world: World) -> None:
        """
        Flatten the world into the arrays consumed by the compiled kernel:
        one type code, parameter row and material row per shape, and one
        type code and data row per light.
        """
        print("\n=== Updating Scene Data ===")
        print(f"World contains {len(world.objects)} objects and {len(world.lights)} lights")

        count = len(world.objects)
        shape_types = np.zeros(count, dtype=np.int64)
        params = np.zeros((count, kernels.PARAM_WIDTH), dtype=np.float64)
        materials = np.zeros((count, kernels.MATERIAL_WIDTH), dtype=np.float64)

        for idx, obj in enumerate(world.objects):
            row = params[idx]
            if isinstance(obj, Sphere):
                shape_types[idx] = kernels.SPHERE
                row[0:4] = [obj.center.x, obj.center.y, obj.center.z, obj.radius]
            elif isinstance(obj, Cylinder):
                shape_types[idx] = kernels.CYLINDER
                row[0:5] = [obj.center.x, obj.center.y, obj.center.z, obj.radius, obj.half_height]
            elif isinstance(obj, GeometryPlane):
                n = obj.normal_vector
                row[0:8] = [obj.center.x, obj.center.y, obj.center.z, n.x, n.y, n.z, obj.offset, obj.size]
                if isinstance(obj, ChessGeometryPlane):
                    shape_types[idx] = kernels.CHESS_PLANE
                    row[8] = obj.cell_count
                    row[9:12] = list(obj.color1)
                    row[12:15] = list(obj.color2)
                else:
                    shape_types[idx] = kernels.PLANE
            else:
                raise TypeError(f"Cannot flatten shape of type {type(obj).__name__}")

            mat = obj.material
            materials[idx, 0] = mat.refractive_index
            materials[idx, 1:4] = list(mat.diffuse_color)
            materials[idx, 4] = mat.specular_exponent
            materials[idx, 5:9] = mat.albedo

            if self.debug_mode:
                print(f"    Shape {idx}: {type(obj).__name__}, albedo={mat.albedo}")

        light_types = np.zeros(len(world.lights), dtype=np.int64)
        light_data = np.zeros((len(world.lights), kernels.LIGHT_WIDTH), dtype=np.float64)
        for idx, light in enumerate(world.lights):
            if light.type is LightType.POINT:
                light_types[idx] = kernels.POINT_LIGHT
            else:
                light_types[idx] = kernels.DIRECTIONAL_LIGHT
            light_data[idx] = [light.intensity, light.position.x, light.position.y, light.position.z]

        self.d_shape_types = shape_types
        self.d_shape_params = params
        self.d_shape_materials = materials
        self.d_light_types = light_types
        self.d_light_data = light_data
        self.scene_world = world

        if self.debug_mode:
            print("Scene data initialization complete.")

    def render_frame(self, camera: Camera, world: World) -> np.ndarray:
        """
        Trace every pixel and return the finished (width, height, 3) uint8
        frame. The returned array is the renderer's front buffer and is
        overwritten by the next call; copy it to keep it.
        """
        render_start = time.perf_counter()

        if self.backend == "numba":
            self._render_numba(camera, world)
        else:
            self._render_python(camera, world)

        # Every pixel task has joined; publish the whole frame at once.
        self.frame_output, self.back_buffer = self.back_buffer, self.frame_output
        self.frame_number += 1
        self.last_render_time = time.perf_counter() - render_start

        if self.debug_mode:
            print(f"Frame {self.frame_number}: {self.width}x{self.height} "
                  f"({self.backend}) in {self.last_render_time * 1000:.1f} ms")
        return self.frame_output

    def _render_numba(self, camera: Camera, world: World) -> None:
        if self.scene_world is not world:
            self.update_scene_data(world)

        position = camera.position
        camera_position = np.array([position.x, position.y, position.z], dtype=np.float64)
        camera_trig = np.array([camera.sin_pitch, camera.cos_pitch,
                                camera.sin_yaw, camera.cos_yaw], dtype=np.float64)

        kernels.render_kernel(
            self.x_coords, self.y_coords, camera_position, camera_trig,
            self.d_shape_types, self.d_shape_params, self.d_shape_materials,
            self.d_light_types, self.d_light_data,
            self.max_depth, self.d_background, self.d_frame_output
        )
        self.back_buffer[...] = clamp_tone_mapping(self.d_frame_output)

    def _render_python(self, camera: Camera, world: World) -> None:
        tracer = Tracer(world, self.max_depth, self.background)
        origin = camera.position
        x_coords = self.x_coords
        y_coords = self.y_coords
        buffer = self.back_buffer

        def render_row(row: int) -> None:
            for col in range(self.width):
                direction = camera.get_direction(x_coords[col, row], y_coords[col, row])
                buffer[col, row] = tracer.trace_primary(origin, direction).to_color()

        # Rows write disjoint slices of the buffer, so no locking is needed.
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            list(pool.map(render_row, range(self.height)))

    def cleanup(self):
        self.scene_world = None
        self.d_shape_types = None
        self.d_shape_params = None
        self.d_shape_materials = None
        self.d_light_types = None
        self.d_light_data = None

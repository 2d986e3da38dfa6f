# camera/camera.py
import math
from core.vector import Vector3

TWO_PI = 2 * math.pi
MOVE_STEP = 0.5

def wrap_angle(angle: float) -> float:
    """Maps an angle into [0, 2*pi)."""
    wrapped = angle % TWO_PI
    # A tiny negative angle rounds up to exactly 2*pi.
    if wrapped >= TWO_PI:
        return 0.0
    return wrapped

class Camera:
    """
    A first-person camera. `angle.x` is the pitch and `angle.y` the yaw,
    both kept in [0, 2*pi); `angle.z` is unused. Y is up and the unrotated
    view looks down +Z.
    """
    def __init__(self, position: Vector3, angle: Vector3, move_step: float = MOVE_STEP):
        self.position = position
        self.angle = Vector3(wrap_angle(angle.x), wrap_angle(angle.y), angle.z)
        self.move_step = move_step
        self.update_camera()

    def update_camera(self):
        """Refreshes the cached sine and cosine of pitch and yaw."""
        self.sin_pitch = math.sin(self.angle.x)
        self.cos_pitch = math.cos(self.angle.x)
        self.sin_yaw = math.sin(self.angle.y)
        self.cos_yaw = math.cos(self.angle.y)

    def get_direction(self, x: float, y: float) -> Vector3:
        """
        Unit direction of the ray through screen point (x, y): the forward
        ray (x, y, 1) rotated by the pitch, then by the yaw.
        """
        new_y = self.cos_pitch * y + self.sin_pitch
        z = -self.sin_pitch * y + self.cos_pitch
        new_x = self.cos_yaw * x + self.sin_yaw * z
        new_z = -self.sin_yaw * x + self.cos_yaw * z
        return Vector3(new_x, new_y, new_z).normalize()

    def rotate(self, dx: float, dy: float):
        """Adds dx to the pitch and dy to the yaw."""
        self.angle = Vector3(wrap_angle(self.angle.x + dx),
                             wrap_angle(self.angle.y + dy),
                             self.angle.z)
        self.update_camera()

    def _translate(self, dx: float, dy: float, dz: float):
        p = self.position
        self.position = Vector3(p.x + dx, p.y + dy, p.z + dz)

    def move_forward(self):
        s = self.move_step
        pitch, yaw = self.angle.x, self.angle.y
        self._translate(math.cos(yaw + math.pi / 2) * math.cos(pitch) * s,
                        math.sin(pitch) * s,
                        math.sin(yaw + math.pi / 2) * math.cos(pitch) * s)

    def move_backward(self):
        s = self.move_step
        pitch, yaw = self.angle.x, self.angle.y
        self._translate(math.cos(yaw - math.pi / 2) * math.cos(pitch) * s,
                        -math.sin(pitch) * s,
                        math.sin(yaw - math.pi / 2) * math.cos(pitch) * s)

    def move_left(self):
        s = self.move_step
        self._translate(-math.cos(self.angle.y) * s, 0, -math.sin(self.angle.y) * s)

    def move_right(self):
        s = self.move_step
        self._translate(math.cos(self.angle.y) * s, 0, math.sin(self.angle.y) * s)

    def move_up(self):
        self._translate(0, self.move_step, 0)

    def move_down(self):
        self._translate(0, -self.move_step, 0)

    def __repr__(self) -> str:
        return f"Camera(position={self.position!r}, angle={self.angle!r})"

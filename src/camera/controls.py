# camera/controls.py
from enum import Enum
from camera.camera import Camera

ROTATE_STEP = 0.15

class CameraCommand(Enum):
    """Discrete camera commands issued by the input layer."""
    PITCH_UP = "pitch_up"
    PITCH_DOWN = "pitch_down"
    YAW_LEFT = "yaw_left"
    YAW_RIGHT = "yaw_right"
    MOVE_FORWARD = "move_forward"
    MOVE_BACKWARD = "move_backward"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"

_ROTATIONS = {
    CameraCommand.PITCH_UP: (ROTATE_STEP, 0.0),
    CameraCommand.PITCH_DOWN: (-ROTATE_STEP, 0.0),
    CameraCommand.YAW_LEFT: (0.0, -ROTATE_STEP),
    CameraCommand.YAW_RIGHT: (0.0, ROTATE_STEP),
}

_MOVES = {
    CameraCommand.MOVE_FORWARD: Camera.move_forward,
    CameraCommand.MOVE_BACKWARD: Camera.move_backward,
    CameraCommand.MOVE_LEFT: Camera.move_left,
    CameraCommand.MOVE_RIGHT: Camera.move_right,
    CameraCommand.MOVE_UP: Camera.move_up,
    CameraCommand.MOVE_DOWN: Camera.move_down,
}

def apply_command(camera: Camera, command: CameraCommand):
    """Mutates the camera according to one input command."""
    if command in _ROTATIONS:
        camera.rotate(*_ROTATIONS[command])
    else:
        _MOVES[command](camera)

import math
import pytest
from conftest import assert_vector_close
from camera.camera import MOVE_STEP, TWO_PI, Camera, wrap_angle
from camera.controls import ROTATE_STEP, CameraCommand, apply_command
from core.vector import Vector3


def test_unrotated_camera_looks_down_z(camera):
    assert_vector_close(camera.get_direction(0, 0), Vector3(0, 0, 1))


def test_direction_is_unit_length(camera):
    camera.rotate(0.3, 1.1)
    for x, y in [(-0.5, 0.5), (0.25, -0.1), (0.5, 0.0)]:
        assert camera.get_direction(x, y).length() == pytest.approx(1.0)


def test_pitch_quarter_turn_looks_up(camera):
    camera.rotate(math.pi / 2, 0)
    assert_vector_close(camera.get_direction(0, 0), Vector3(0, 1, 0), atol=1e-12)


def test_screen_x_maps_to_world_x(camera):
    d = camera.get_direction(0.5, 0)
    assert d.x > 0
    assert d.y == 0


def test_angles_wrap_into_range():
    camera = Camera(Vector3(0, 0, 0), Vector3(6.1, 0, 0))
    camera.rotate(0.15, 0)
    assert camera.angle.x == pytest.approx(6.25)
    camera.rotate(0.2, 0)
    assert camera.angle.x == pytest.approx(6.45 - TWO_PI)
    camera.rotate(0, -0.15)
    assert camera.angle.y == pytest.approx(TWO_PI - 0.15)


def test_constructor_wraps_angles():
    camera = Camera(Vector3(0, 0, 0), Vector3(-0.5, 7.0, 0))
    assert 0 <= camera.angle.x < TWO_PI
    assert camera.angle.y == pytest.approx(7.0 - TWO_PI)


@pytest.mark.parametrize("angle", [-1e-17, -1e-300, TWO_PI, 0.0])
def test_wrap_angle_stays_below_two_pi(angle):
    wrapped = wrap_angle(angle)
    assert 0.0 <= wrapped < TWO_PI
    assert wrapped == 0.0


def test_tiny_negative_rotation_wraps_to_zero(camera):
    camera.rotate(-1e-17, -1e-17)
    assert camera.angle.x == 0.0
    assert camera.angle.y == 0.0
    assert Camera(Vector3(0, 0, 0), Vector3(-1e-17, 0, 0)).angle.x == 0.0


def test_rotate_refreshes_cached_trig(camera):
    camera.rotate(0.4, 0.7)
    assert camera.sin_pitch == pytest.approx(math.sin(0.4))
    assert camera.cos_yaw == pytest.approx(math.cos(0.7))


@pytest.mark.parametrize("method, expected", [
    ("move_forward", (0, 0, MOVE_STEP)),
    ("move_backward", (0, 0, -MOVE_STEP)),
    ("move_left", (-MOVE_STEP, 0, 0)),
    ("move_right", (MOVE_STEP, 0, 0)),
    ("move_up", (0, MOVE_STEP, 0)),
    ("move_down", (0, -MOVE_STEP, 0)),
])
def test_moves_from_rest(camera, method, expected):
    getattr(camera, method)()
    assert_vector_close(camera.position, Vector3(*expected), atol=1e-12)


def test_forward_follows_pitch(camera):
    camera.rotate(math.pi / 2, 0)
    camera.move_forward()
    assert_vector_close(camera.position, Vector3(0, MOVE_STEP, 0), atol=1e-12)


def test_forward_then_backward_returns(camera):
    camera.rotate(0.3, 1.2)
    camera.move_forward()
    camera.move_backward()
    assert_vector_close(camera.position, Vector3(0, 0, 0), atol=1e-12)


class TestControls:
    def test_yaw_commands(self, camera):
        apply_command(camera, CameraCommand.YAW_RIGHT)
        assert camera.angle.y == pytest.approx(ROTATE_STEP)
        apply_command(camera, CameraCommand.YAW_LEFT)
        assert camera.angle.y == pytest.approx(0.0)

    def test_pitch_commands(self, camera):
        apply_command(camera, CameraCommand.PITCH_UP)
        assert camera.angle.x == pytest.approx(ROTATE_STEP)
        apply_command(camera, CameraCommand.PITCH_DOWN)
        apply_command(camera, CameraCommand.PITCH_DOWN)
        assert camera.angle.x == pytest.approx(TWO_PI - ROTATE_STEP)

    def test_move_up_command(self, camera):
        apply_command(camera, CameraCommand.MOVE_UP)
        assert camera.position == Vector3(0, MOVE_STEP, 0)

    @pytest.mark.parametrize("command", list(CameraCommand))
    def test_every_command_changes_camera(self, camera, command):
        before = (camera.position, camera.angle)
        apply_command(camera, command)
        assert (camera.position, camera.angle) != before

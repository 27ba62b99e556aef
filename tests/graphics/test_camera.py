import math
import random

import numpy as np
import pytest

from wren.graphics.camera import SAFE_FRAC_PI_2, Camera
from wren.input.bindings import MoveAxis
from wren.input.controller import ScrollDelta
from wren.types import Vector3


def assert_vec_close(actual: Vector3, expected, abs=1e-9):
    assert tuple(actual) == pytest.approx(tuple(expected), abs=abs)


@pytest.mark.parametrize("yaw", [-7.0, -1.0, 0.0, 0.3, math.pi, 12.5])
@pytest.mark.parametrize("pitch", [-SAFE_FRAC_PI_2, -0.7, 0.0, 0.4, SAFE_FRAC_PI_2])
def test_forward_vector_is_unit_length(yaw, pitch):
    cam = Camera(Vector3.zero(), yaw, pitch)
    assert cam.forward().magnitude() == pytest.approx(1.0)


def test_view_matrix_looks_down_forward():
    cam = Camera((0.0, 0.0, 0.0), yaw=0.0, pitch=0.0)
    view = cam.view_matrix()

    # A point straight ahead ends up on the -Z axis in view space
    ahead = view @ np.array([1.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(ahead, [0.0, 0.0, -1.0, 1.0], atol=1e-12)

    # +Z is to the right at yaw 0
    right = view @ np.array([0.0, 0.0, 1.0, 1.0])
    np.testing.assert_allclose(right, [1.0, 0.0, 0.0, 1.0], atol=1e-12)


def test_view_matrix_moves_eye_to_origin():
    cam = Camera((3.0, -2.0, 7.0), yaw=0.8, pitch=-0.3)
    eye = cam.view_matrix() @ np.array([3.0, -2.0, 7.0, 1.0])
    np.testing.assert_allclose(eye, [0.0, 0.0, 0.0, 1.0], atol=1e-12)


def test_view_matrix_has_no_side_effects():
    cam = Camera((1.0, 2.0, 3.0), yaw=0.5, pitch=0.1)
    cam.view_matrix()
    assert cam.position == Vector3(1.0, 2.0, 3.0)
    assert (cam.yaw, cam.pitch) == (0.5, 0.1)


def test_forward_movement_ignores_pitch(controller):
    cam = Camera(Vector3.zero(), yaw=0.0, pitch=1.0)
    controller.set_movement(MoveAxis.FORWARD, True)

    cam.update(controller, 0.5)

    assert_vec_close(cam.position, (controller.speed * 0.5, 0.0, 0.0))


def test_strafe_and_vertical_movement(controller):
    cam = Camera(Vector3.zero(), yaw=0.0, pitch=0.0)
    controller.set_movement(MoveAxis.RIGHT, True)
    controller.set_movement(MoveAxis.UP, True)

    cam.update(controller, 0.25)

    step = controller.speed * 0.25
    assert_vec_close(cam.position, (0.0, step, step))


def test_held_keys_keep_moving(controller):
    cam = Camera(Vector3.zero(), yaw=0.0, pitch=0.0)
    controller.set_movement(MoveAxis.BACKWARD, True)

    cam.update(controller, 0.1)
    cam.update(controller, 0.1)

    assert_vec_close(cam.position, (-2 * controller.speed * 0.1, 0.0, 0.0))


def test_scroll_dollies_along_view_direction(controller):
    cam = Camera(Vector3.zero(), yaw=0.0, pitch=math.pi / 4.0)
    controller.accumulate_scroll(ScrollDelta(-1.0))  # scroll = +100

    dt = 0.1
    cam.update(controller, dt)

    dist = 100.0 * controller.speed * controller.sensitivity * dt
    h = math.cos(math.pi / 4.0) * dist
    assert_vec_close(cam.position, (h, h, 0.0))
    assert controller.scroll == 0.0


def test_rotation_integrates_with_sensitivity(controller):
    cam = Camera(Vector3.zero(), yaw=1.0, pitch=0.0)
    controller.accumulate_rotation(2.0, 0.5)

    cam.update(controller, 0.5)

    assert cam.yaw == pytest.approx(1.0 + 2.0 * controller.sensitivity * 0.5)
    # Pointer moving down (positive dy) looks down
    assert cam.pitch == pytest.approx(-0.5 * controller.sensitivity * 0.5)


def test_pitch_is_clamped(controller):
    cam = Camera(Vector3.zero(), yaw=0.0, pitch=0.0)

    controller.accumulate_rotation(0.0, -1e6)
    cam.update(controller, 1.0)
    assert cam.pitch == SAFE_FRAC_PI_2

    controller.accumulate_rotation(0.0, 1e6)
    cam.update(controller, 1.0)
    assert cam.pitch == -SAFE_FRAC_PI_2


def test_pitch_stays_in_range_for_random_input(controller):
    rng = random.Random(1234)
    cam = Camera(Vector3.zero(), yaw=0.0, pitch=0.0)

    for _ in range(500):
        controller.accumulate_rotation(
            rng.uniform(-500.0, 500.0), rng.uniform(-500.0, 500.0)
        )
        cam.update(controller, rng.uniform(0.0, 0.1))
        assert -SAFE_FRAC_PI_2 <= cam.pitch <= SAFE_FRAC_PI_2


def test_yaw_is_range_reduced(controller):
    cam = Camera(Vector3.zero(), yaw=-math.pi / 2.0, pitch=0.0)
    cam.update(controller, 0.016)
    assert cam.yaw == pytest.approx(1.5 * math.pi)

    for _ in range(100):
        controller.accumulate_rotation(1000.0, 0.0)
        cam.update(controller, 0.1)
        assert 0.0 <= cam.yaw < math.tau


def test_second_update_without_input_changes_nothing(controller):
    cam = Camera((1.0, 2.0, 3.0), yaw=0.3, pitch=0.2)
    controller.accumulate_rotation(10.0, -5.0)
    controller.accumulate_scroll(ScrollDelta(3.0))

    cam.update(controller, 0.05)
    after_first = (cam.position, cam.yaw, cam.pitch)

    cam.update(controller, 0.05)
    assert (cam.position, cam.yaw, cam.pitch) == after_first

import math

import numpy as np
import pytest

from wren.math import (
    CLIP_SPACE_CORRECTION,
    batch_quaternion_to_matrix,
    batch_transform_to_matrix,
    create_look_to_view,
    forward_from_angles,
    normal_matrix_from_model,
)
from wren.types import Quaternion, Vector3


def test_forward_at_zero_angles_is_plus_x():
    f = forward_from_angles(0.0, 0.0)
    assert tuple(f) == pytest.approx((1.0, 0.0, 0.0))


def test_forward_at_minus_half_pi_yaw_is_minus_z():
    f = forward_from_angles(-math.pi / 2.0, 0.0)
    assert tuple(f) == pytest.approx((0.0, 0.0, -1.0), abs=1e-12)


def test_look_to_view_is_rigid():
    eye = Vector3(3.0, -2.0, 7.0)
    view = create_look_to_view(eye, forward_from_angles(0.3, -0.2))

    rot = view[:3, :3]
    np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(rot) == pytest.approx(1.0)

    # The eye maps to the view-space origin
    np.testing.assert_allclose(view @ [*eye, 1.0], [0.0, 0.0, 0.0, 1.0], atol=1e-12)


def test_look_to_view_looks_down_negative_z():
    view = create_look_to_view(Vector3.zero(), Vector3(1.0, 0.0, 0.0))
    ahead = view @ np.array([5.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(ahead, [0.0, 0.0, -5.0, 1.0], atol=1e-12)


def test_clip_space_correction_only_touches_depth():
    clip = np.array([1.0, 2.0, -1.0, 1.0])
    corrected = CLIP_SPACE_CORRECTION @ clip
    assert tuple(corrected) == (1.0, 2.0, 0.0, 1.0)


def test_batch_quaternion_matches_single():
    quats = [
        Quaternion.identity(),
        Quaternion.from_axis_angle(Vector3(0.0, 1.0, 0.0), 0.7),
        Quaternion.from_axis_angle(Vector3(1.0, 1.0, 0.0).normalized(), -1.2),
    ]
    rot = np.array([[q.x, q.y, q.z, q.w] for q in quats])
    batch = batch_quaternion_to_matrix(rot)

    for i, q in enumerate(quats):
        np.testing.assert_allclose(batch[i], q.to_matrix3(), atol=1e-12)


def test_batch_transform_scales_model_but_not_normal():
    pos = np.array([[1.0, 2.0, 3.0]])
    rot = np.array([[0.0, 0.0, 0.0, 1.0]])
    scale = np.array([2.0])

    models, normals = batch_transform_to_matrix(pos, rot, scale)

    np.testing.assert_allclose(models[0][:3, :3], np.eye(3) * 2.0)
    np.testing.assert_allclose(models[0][:3, 3], [1.0, 2.0, 3.0])
    np.testing.assert_allclose(normals[0], np.eye(3))


def test_normal_matrix_handles_non_uniform_scale():
    model = np.diag([2.0, 4.0, 0.5, 1.0])
    np.testing.assert_allclose(
        normal_matrix_from_model(model), np.diag([0.5, 0.25, 2.0])
    )


# wren/math.py
import math
from typing import Tuple

import numpy as np

from wren.types import Vector3

# Remaps OpenGL clip-space depth [-1, 1] to [0, 1]: z' = 0.5 * z + 0.5 * w.
CLIP_SPACE_CORRECTION = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.5, 0.5],
        [0.0, 0.0, 0.0, 1.0],
    ],
    dtype=np.float64,
)

WORLD_UP = Vector3(0.0, 1.0, 0.0)


def forward_from_angles(yaw: float, pitch: float) -> Vector3:
    """Unit view direction for a yaw/pitch pair (radians)."""
    sin_pitch, cos_pitch = math.sin(pitch), math.cos(pitch)
    sin_yaw, cos_yaw = math.sin(yaw), math.cos(yaw)
    return Vector3(cos_pitch * cos_yaw, sin_pitch, cos_pitch * sin_yaw)


def create_perspective_projection(
    fovy: float, aspect: float, near: float, far: float
) -> np.ndarray:
    """
    Creates a standard OpenGL Perspective Projection Matrix.
    fovy: Vertical field of view in radians
    aspect: Width / Height
    near: Distance to near plane
    far: Distance to far plane

    Depth lands in [-1, 1] after the perspective divide.
    """
    f = 1.0 / math.tan(fovy / 2.0)

    mat = np.zeros((4, 4), dtype=np.float64)

    mat[0, 0] = f / aspect
    mat[1, 1] = f

    mat[2, 2] = (far + near) / (near - far)
    mat[2, 3] = (2.0 * far * near) / (near - far)

    # w = -z
    mat[3, 2] = -1.0

    return mat


def create_look_to_view(
    eye: Vector3, direction: Vector3, up: Vector3 = WORLD_UP
) -> np.ndarray:
    """
    Right-handed view matrix looking from `eye` along `direction`.
    The camera looks down its local -Z axis.
    """
    f = direction.normalized()
    s = f.cross(up).normalized()
    u = s.cross(f)

    return np.array(
        [
            [s.x, s.y, s.z, -s.dot(eye)],
            [u.x, u.y, u.z, -u.dot(eye)],
            [-f.x, -f.y, -f.z, f.dot(eye)],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def batch_quaternion_to_matrix(rot: np.ndarray) -> np.ndarray:
    """
    Vectorized quaternion -> rotation matrix.
    rot: (N, 4) - Quaternions (x, y, z, w)
    Returns: (N, 3, 3)
    """
    N = len(rot)
    x, y, z, w = rot[:, 0], rot[:, 1], rot[:, 2], rot[:, 3]

    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z

    R = np.zeros((N, 3, 3), dtype=np.float64)

    R[:, 0, 0] = 1.0 - 2.0 * (yy + zz)
    R[:, 0, 1] = 2.0 * (xy - wz)
    R[:, 0, 2] = 2.0 * (xz + wy)

    R[:, 1, 0] = 2.0 * (xy + wz)
    R[:, 1, 1] = 1.0 - 2.0 * (xx + zz)
    R[:, 1, 2] = 2.0 * (yz - wx)

    R[:, 2, 0] = 2.0 * (xz - wy)
    R[:, 2, 1] = 2.0 * (yz + wx)
    R[:, 2, 2] = 1.0 - 2.0 * (xx + yy)

    return R


def batch_transform_to_matrix(
    pos: np.ndarray, rot: np.ndarray, scale: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized calculation of Model and Normal Matrices.
    pos: (N, 3)
    rot: (N, 4) - Quaternions (x, y, z, w)
    scale: (N,) - uniform scale per instance
    Returns: (N, 4, 4) models, (N, 3, 3) normals
    """
    N = len(pos)

    R = batch_quaternion_to_matrix(rot)

    M = np.eye(4, dtype=np.float64).reshape(1, 4, 4).repeat(N, axis=0)

    # M_3x3 = R * s
    M[:, :3, :3] = R * scale[:, None, None]

    M[:, :3, 3] = pos

    return M, R


def normal_matrix_from_model(model: np.ndarray) -> np.ndarray:
    """
    General normal matrix: inverse-transpose of the model's upper-left 3x3.
    Needed whenever scale is not uniform.
    """
    return np.linalg.inv(model[:3, :3]).T

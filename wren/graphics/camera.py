# wren/graphics/camera.py
import logging
import math
from enum import Enum
from typing import Tuple, Union

import numpy as np

from wren.input.controller import CameraController
from wren.math import (
    CLIP_SPACE_CORRECTION,
    WORLD_UP,
    create_look_to_view,
    create_perspective_projection,
    forward_from_angles,
)
from wren.types import Vector3

logger = logging.getLogger(__name__)

SAFE_FRAC_PI_2 = math.pi / 2.0 - 0.0001


class ClipSpace(str, Enum):
    """Depth range the target backend expects after the perspective divide."""

    OPENGL = "opengl"  # [-1, 1]
    ZERO_TO_ONE = "zero_to_one"  # [0, 1]

    @property
    def correction(self) -> np.ndarray:
        if self is ClipSpace.ZERO_TO_ONE:
            return CLIP_SPACE_CORRECTION
        return np.eye(4, dtype=np.float64)


class Camera:
    """
    Fly camera: a position plus yaw (horizontal) and pitch (vertical) in radians.
    Yaw 0 looks down +X; positive yaw turns towards +Z.
    """

    def __init__(
        self,
        position: Union[Vector3, Tuple[float, float, float]],
        yaw: float,
        pitch: float,
    ):
        self.position = (
            position if isinstance(position, Vector3) else Vector3(*position)
        )
        self.yaw = float(yaw)
        self.pitch = float(pitch)

    def __repr__(self) -> str:
        return (
            f"Camera(position={self.position}, yaw={self.yaw:.4f}, "
            f"pitch={self.pitch:.4f})"
        )

    def forward(self) -> Vector3:
        return forward_from_angles(self.yaw, self.pitch)

    def view_matrix(self) -> np.ndarray:
        return create_look_to_view(self.position, self.forward(), WORLD_UP)

    def update(self, controller: CameraController, dt: float) -> None:
        # Move forward/backward and left/right on the ground plane
        yaw_sin, yaw_cos = math.sin(self.yaw), math.cos(self.yaw)
        forward = Vector3(yaw_cos, 0.0, yaw_sin)
        right = Vector3(-yaw_sin, 0.0, yaw_cos)

        amount_fwd, amount_right = controller.planar_axes
        position = self.position
        position += forward * (amount_fwd * controller.speed * dt)
        position += right * (amount_right * controller.speed * dt)

        # Dolly along the view direction. This moves the camera, the field
        # of view is untouched.
        scrollward = forward_from_angles(self.yaw, self.pitch)
        position += scrollward * (
            controller.scroll * controller.speed * controller.sensitivity * dt
        )

        # No roll, so vertical movement is a plain Y offset
        position = Vector3(
            position.x,
            position.y + controller.vertical_axis * controller.speed * dt,
            position.z,
        )
        self.position = position

        # Rotate. Pointer up (negative dy) looks up.
        self.yaw += controller.rotate_horizontal * controller.sensitivity * dt
        self.pitch += -controller.rotate_vertical * controller.sensitivity * dt

        self.yaw %= math.tau

        if self.pitch < -SAFE_FRAC_PI_2:
            self.pitch = -SAFE_FRAC_PI_2
        elif self.pitch > SAFE_FRAC_PI_2:
            self.pitch = SAFE_FRAC_PI_2

        controller.consume()


class Projection:
    def __init__(
        self,
        width: int,
        height: int,
        fovy: float,
        znear: float,
        zfar: float,
        clip_space: ClipSpace = ClipSpace.ZERO_TO_ONE,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid viewport size {width}x{height}")
        if not 0.0 < fovy < math.pi:
            raise ValueError(f"fovy must be in (0, pi) radians, got {fovy}")
        if znear <= 0.0 or zfar <= znear:
            raise ValueError(f"Invalid clip planes near={znear} far={zfar}")

        self.aspect = width / height
        self.fovy = float(fovy)
        self.znear = float(znear)
        self.zfar = float(zfar)
        self.clip_space = clip_space

    def __repr__(self) -> str:
        return (
            f"Projection(aspect={self.aspect:.4f}, fovy={self.fovy:.4f}, "
            f"znear={self.znear}, zfar={self.zfar}, "
            f"clip_space={self.clip_space.value})"
        )

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            # Minimised windows report a zero size; keep the last aspect.
            logger.debug("Ignoring resize to %dx%d", width, height)
            return
        self.aspect = width / height

    def matrix(self) -> np.ndarray:
        return self.clip_space.correction @ create_perspective_projection(
            self.fovy, self.aspect, self.znear, self.zfar
        )

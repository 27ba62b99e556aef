# wren/graphics/view.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from wren.config import ViewSettings
from wren.graphics.camera import Camera, ClipSpace, Projection
from wren.graphics.resources.buffer import (
    BufferAllocator,
    BufferUsage,
    WritableBuffer,
)
from wren.graphics.utils.uniforms import STD140_ALIGNMENT, pack_mat4, pack_vec4
from wren.input.bindings import InputBindings
from wren.input.controller import CameraController
from wren.types import Vector3

logger = logging.getLogger(__name__)

VIEW_UNIFORM_SIZE = 80


@dataclass(frozen=True, slots=True)
class ViewUniform:
    """
    Per-frame camera record, laid out as:

        struct View {
            view_position: vec4<f32>,   // offset 0
            view_proj: mat4x4<f32>,     // offset 16
        };
    """

    view_position: Tuple[float, float, float, float]
    view_proj: np.ndarray  # 4x4, row-major

    def to_bytes(self) -> bytes:
        data = pack_vec4(*self.view_position) + pack_mat4(self.view_proj)
        assert len(data) % STD140_ALIGNMENT == 0
        return data


@dataclass(slots=True)
class ViewBuilder:
    """
    Collects the parts of a View. `finalize` fails fast if any is missing.

        view = (
            ViewBuilder()
            .camera((0.0, 5.0, 10.0), yaw=-pi / 2, pitch=-0.35)
            .projection(1280, 720, fovy=radians(45), znear=0.1, zfar=100.0)
            .controller(CameraController(speed=4.0, sensitivity=0.4))
            .finalize(allocator)
        )
    """

    _camera: Optional[Camera] = None
    _projection: Optional[Projection] = None
    _controller: Optional[CameraController] = None

    @classmethod
    def from_settings(
        cls, settings: ViewSettings, bindings: InputBindings | None = None
    ) -> ViewBuilder:
        cam = settings.camera
        proj = settings.projection
        ctrl = settings.controller
        return (
            cls()
            .camera(cam.position, cam.yaw, cam.pitch)
            .projection(
                proj.width,
                proj.height,
                proj.fovy,
                proj.znear,
                proj.zfar,
                clip_space=proj.clip_space,
            )
            .controller(
                CameraController(ctrl.speed, ctrl.sensitivity, bindings)
            )
        )

    def camera(
        self,
        position: Union[Vector3, Tuple[float, float, float]],
        yaw: float,
        pitch: float,
    ) -> ViewBuilder:
        self._camera = Camera(position, yaw, pitch)
        return self

    def projection(
        self,
        width: int,
        height: int,
        fovy: float,
        znear: float,
        zfar: float,
        clip_space: ClipSpace = ClipSpace.ZERO_TO_ONE,
    ) -> ViewBuilder:
        self._projection = Projection(
            width, height, fovy, znear, zfar, clip_space=clip_space
        )
        return self

    def controller(self, controller: CameraController) -> ViewBuilder:
        self._controller = controller
        return self

    def finalize(self, allocator: BufferAllocator) -> View:
        missing = [
            name
            for name, part in (
                ("camera", self._camera),
                ("projection", self._projection),
                ("controller", self._controller),
            )
            if part is None
        ]
        if missing:
            raise ValueError(f"ViewBuilder missing: {', '.join(missing)}")

        assert self._camera is not None
        assert self._projection is not None
        assert self._controller is not None

        uniform = build_uniform(self._camera, self._projection)
        buffer = allocator.create_buffer(
            uniform.to_bytes(), BufferUsage.UNIFORM, label="View Buffer"
        )
        logger.debug("View finalized: %r %r", self._camera, self._projection)

        return View(self._camera, self._projection, self._controller, buffer)


def build_uniform(camera: Camera, projection: Projection) -> ViewUniform:
    return ViewUniform(
        view_position=camera.position.to_homogeneous(),
        view_proj=projection.matrix() @ camera.view_matrix(),
    )


class View:
    """
    Owns the camera, its projection and its controller, plus the GPU
    buffer the packed ViewUniform is written into every frame.
    """

    def __init__(
        self,
        camera: Camera,
        projection: Projection,
        controller: CameraController,
        buffer: WritableBuffer,
    ):
        self.camera = camera
        self.projection = projection
        self.controller = controller
        self.buffer = buffer

    @staticmethod
    def build() -> ViewBuilder:
        return ViewBuilder()

    def uniform(self) -> ViewUniform:
        return build_uniform(self.camera, self.projection)

    def uniform_bytes(self) -> bytes:
        return self.uniform().to_bytes()

    def update(self, dt: float) -> None:
        self.camera.update(self.controller, dt)
        self.buffer.write(self.uniform_bytes(), offset=0)

    def resize(self, width: int, height: int) -> None:
        self.projection.resize(width, height)

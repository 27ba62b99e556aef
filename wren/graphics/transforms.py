# wren/graphics/transforms.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from wren.config import FieldSettings
from wren.graphics.resources.buffer import (
    BufferAllocator,
    BufferUsage,
    WritableBuffer,
)
from wren.graphics.utils.uniforms import align_to, pack_mat3, pack_mat4
from wren.math import batch_transform_to_matrix
from wren.types import Quaternion, Vector3

logger = logging.getLogger(__name__)

SPACE_BETWEEN = 4.0
DEFAULT_ANGLE = math.radians(45.0)

MODEL_FLOAT_COUNT = 16
NORMAL_FLOAT_COUNT = 9
RECORD_BYTES = (MODEL_FLOAT_COUNT + NORMAL_FLOAT_COUNT) * 4

# Largest allowed drift of |rotation| from 1
ROTATION_TOLERANCE = 1e-6


@dataclass(frozen=True, slots=True)
class InstanceLayout:
    """
    Describes one instance record for VAO creation.

    The record is a column-major mat4 model matrix followed by a column-major
    mat3 normal matrix (100 bytes), zero padded up to `alignment`.
    """

    attributes: Tuple[str, str] = ("i_model", "i_normal")
    alignment: int = 4

    def __post_init__(self):
        if self.alignment <= 0 or self.alignment % 4 != 0:
            raise ValueError(
                f"alignment must be a positive multiple of 4, got {self.alignment}"
            )

    @property
    def stride_bytes(self) -> int:
        return align_to(RECORD_BYTES, self.alignment)

    @property
    def padding_bytes(self) -> int:
        return self.stride_bytes - RECORD_BYTES

    @property
    def float_count(self) -> int:
        return self.stride_bytes // 4

    @property
    def format(self) -> str:
        """moderngl buffer format string, per-instance."""
        parts = [f"{MODEL_FLOAT_COUNT}f", f"{NORMAL_FLOAT_COUNT}f"]
        if self.padding_bytes:
            parts.append(f"{self.padding_bytes}x")
        parts.append("/i")
        return " ".join(parts)


DEFAULT_LAYOUT = InstanceLayout()


@dataclass(frozen=True, slots=True)
class FlatTransform:
    model: np.ndarray  # 4x4, row-major
    normal: np.ndarray  # 3x3, row-major

    def to_bytes(self, layout: InstanceLayout = DEFAULT_LAYOUT) -> bytes:
        return (
            pack_mat4(self.model)
            + pack_mat3(self.normal)
            + bytes(layout.padding_bytes)
        )


@dataclass(frozen=True, slots=True)
class Transform:
    """
    Rigid placement of one instance. Scale is uniform, which is what lets
    the normal matrix be the bare rotation.
    """

    translation: Vector3 = Vector3(0.0, 0.0, 0.0)
    rotation: Quaternion = Quaternion.identity()
    scale: float = 1.0

    def __post_init__(self):
        if abs(self.rotation.magnitude() - 1.0) > ROTATION_TOLERANCE:
            raise ValueError(
                f"Rotation must be a unit quaternion, got magnitude "
                f"{self.rotation.magnitude()}"
            )
        if self.scale <= 0.0:
            raise ValueError(f"Scale must be positive, got {self.scale}")

    def model_matrix(self) -> np.ndarray:
        T = np.eye(4, dtype=np.float64)
        T[0:3, 3] = [self.translation.x, self.translation.y, self.translation.z]
        R = self.rotation.to_matrix4()

        S = np.eye(4, dtype=np.float64)
        S[0, 0] = S[1, 1] = S[2, 2] = self.scale

        return T @ R @ S

    def flatten(self) -> FlatTransform:
        return FlatTransform(
            model=self.model_matrix(),
            normal=self.rotation.to_matrix3(),
        )


def generate_transforms(
    rows: int,
    cols: int,
    spacing: float = SPACE_BETWEEN,
    angle: float = DEFAULT_ANGLE,
) -> List[Transform]:
    """
    Lay out `rows * cols` instances on the X-Z plane, centred on the origin.

    Every instance is tilted by `angle` about the axis pointing from the origin
    to it. An instance sitting exactly on the origin has no such axis and gets
    the identity rotation; that only happens when both dimensions are even.
    """
    if rows < 0 or cols < 0:
        raise ValueError(f"Grid size must be non-negative, got {rows}x{cols}")

    transforms = []
    for z in range(rows):
        for x in range(cols):
            translation = Vector3(
                spacing * (x - cols / 2.0),
                0.0,
                spacing * (z - rows / 2.0),
            )

            if translation.is_zero():
                rotation = Quaternion.from_axis_angle(Vector3.unit_z(), 0.0)
            else:
                rotation = Quaternion.from_axis_angle(
                    translation.normalized(), angle
                )

            transforms.append(Transform(translation, rotation, 1.0))

    return transforms


def flatten_all(
    transforms: Sequence[Transform],
) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized `Transform.flatten` over a list. Returns (N,4,4), (N,3,3)."""
    count = len(transforms)
    pos = np.empty((count, 3), dtype=np.float64)
    rot = np.empty((count, 4), dtype=np.float64)
    scale = np.empty(count, dtype=np.float64)

    for i, t in enumerate(transforms):
        pos[i] = tuple(t.translation)
        rot[i] = tuple(t.rotation)
        scale[i] = t.scale

    return batch_transform_to_matrix(pos, rot, scale)


def pack_instances(
    transforms: Sequence[Transform], layout: InstanceLayout = DEFAULT_LAYOUT
) -> np.ndarray:
    """Pack instance records into a (N, stride/4) float32 array."""
    models, normals = flatten_all(transforms)
    count = len(transforms)

    data = np.zeros((count, layout.float_count), dtype="f4")
    if count == 0:
        return data

    # Column major, matching the shader's mat4 / mat3 attributes
    data[:, 0:MODEL_FLOAT_COUNT] = models.transpose(0, 2, 1).reshape(count, 16)
    data[:, MODEL_FLOAT_COUNT : MODEL_FLOAT_COUNT + NORMAL_FLOAT_COUNT] = (
        normals.transpose(0, 2, 1).reshape(count, 9)
    )
    return data


class TransformField:
    """
    A fixed-size set of instance transforms and the instance buffer holding
    their flattened records.
    """

    def __init__(
        self,
        transforms: List[Transform],
        buffer: WritableBuffer,
        layout: InstanceLayout = DEFAULT_LAYOUT,
    ):
        self.transforms = transforms
        self.buffer = buffer
        self.layout = layout
        self._dirty = False

    @staticmethod
    def build() -> TransformFieldBuilder:
        return TransformFieldBuilder()

    def instance_count(self) -> int:
        return len(self.transforms)

    def instance_bytes(self) -> bytes:
        return pack_instances(self.transforms, self.layout).tobytes()

    def set_transform(self, index: int, transform: Transform) -> None:
        self.transforms[index] = transform
        self._dirty = True

    def update(self, dt: float) -> None:
        """Re-flatten every transform and rewrite the whole buffer."""
        self.buffer.write(self.instance_bytes(), offset=0)
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty


@dataclass(slots=True)
class TransformFieldBuilder:
    _transforms: Optional[List[Transform]] = None
    _layout: InstanceLayout = field(default_factory=InstanceLayout)

    @classmethod
    def from_settings(cls, settings: FieldSettings) -> TransformFieldBuilder:
        return (
            cls()
            .transform_field(
                settings.rows,
                settings.cols,
                spacing=settings.spacing,
                angle=settings.angle,
            )
            .layout(InstanceLayout(alignment=settings.stride_alignment))
        )

    def transform_field(
        self,
        rows: int,
        cols: int,
        spacing: float = SPACE_BETWEEN,
        angle: float = DEFAULT_ANGLE,
    ) -> TransformFieldBuilder:
        self._transforms = generate_transforms(rows, cols, spacing, angle)
        return self

    def transforms(self, transforms: Sequence[Transform]) -> TransformFieldBuilder:
        self._transforms = list(transforms)
        return self

    def layout(self, layout: InstanceLayout) -> TransformFieldBuilder:
        self._layout = layout
        return self

    def finalize(self, allocator: BufferAllocator) -> TransformField:
        if self._transforms is None:
            raise ValueError("TransformFieldBuilder missing: transforms")

        data = pack_instances(self._transforms, self._layout).tobytes()
        buffer = allocator.create_buffer(
            data, BufferUsage.INSTANCE, label="instance_buffer"
        )
        logger.debug(
            "Transform field finalized: %d instances, stride %d",
            len(self._transforms),
            self._layout.stride_bytes,
        )
        return TransformField(self._transforms, buffer, self._layout)

# wren/types.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, TypeAlias, overload

import numpy as np

Scalar: TypeAlias = float

Color3 = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class Vector3:
    x: Scalar
    y: Scalar
    z: Scalar

    @staticmethod
    def zero() -> Vector3:
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def unit_z() -> Vector3:
        return Vector3(0.0, 0.0, 1.0)

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(
            self.x + other.x,
            self.y + other.y,
            self.z + other.z,
        )

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(
            self.x - other.x,
            self.y - other.y,
            self.z - other.z,
        )

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(
            self.x * scalar,
            self.y * scalar,
            self.z * scalar,
        )

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __truediv__(self, scalar: float) -> Vector3:
        if scalar == 0.0:
            raise ValueError(scalar)
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    @overload
    def __getitem__(self, index: int) -> Scalar: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Scalar, ...]: ...

    def __getitem__(self, index: Any):
        if isinstance(index, int):
            if index == 0:
                return self.x
            if index == 1:
                return self.y
            if index == 2:
                return self.z
            raise IndexError(index)

        if isinstance(index, slice):
            return tuple(self)[index]

        raise TypeError(
            f"indices must be int or slice, not {type(index).__name__}"
        )

    def dot(self, other: Vector3) -> Scalar:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> Scalar:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        mag = self.magnitude()
        if mag == 0.0:
            return self
        return self / mag

    def is_zero(self) -> bool:
        """Exact comparison against the origin, no tolerance."""
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def to_homogeneous(self) -> tuple[Scalar, Scalar, Scalar, Scalar]:
        return (self.x, self.y, self.z, 1.0)


@dataclass(frozen=True, slots=True)
class Quaternion:
    x: Scalar
    y: Scalar
    z: Scalar
    w: Scalar

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    @staticmethod
    def identity() -> Quaternion:
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
        """
        Rotation of `angle` radians about `axis`.
        The axis is expected to be unit length already.
        """
        half = angle * 0.5
        s = math.sin(half)
        return Quaternion(axis.x * s, axis.y * s, axis.z * s, math.cos(half))

    def magnitude(self) -> Scalar:
        return math.sqrt(
            self.x * self.x
            + self.y * self.y
            + self.z * self.z
            + self.w * self.w
        )

    def normalized(self) -> Quaternion:
        n = self.magnitude()
        if n == 0.0:
            return Quaternion(0.0, 0.0, 0.0, 1.0)
        inv = 1.0 / n
        return Quaternion(
            self.x * inv,
            self.y * inv,
            self.z * inv,
            self.w * inv,
        )

    def to_matrix3(self) -> np.ndarray:
        """Convert to a 3x3 rotation matrix (row-major, m[row][col])."""
        x, y, z, w = self.x, self.y, self.z, self.w

        xx = x * x
        yy = y * y
        zz = z * z
        xy = x * y
        xz = x * z
        yz = y * z
        wx = w * x
        wy = w * y
        wz = w * z

        return np.array(
            [
                [1.0 - 2.0 * (yy + zz), 2.0 * (xy - wz), 2.0 * (xz + wy)],
                [2.0 * (xy + wz), 1.0 - 2.0 * (xx + zz), 2.0 * (yz - wx)],
                [2.0 * (xz - wy), 2.0 * (yz + wx), 1.0 - 2.0 * (xx + yy)],
            ],
            dtype=np.float64,
        )

    def to_matrix4(self) -> np.ndarray:
        mat = np.eye(4, dtype=np.float64)
        mat[:3, :3] = self.to_matrix3()
        return mat

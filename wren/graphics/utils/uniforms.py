# wren/graphics/utils/uniforms.py
import struct

import numpy as np

# std140 Alignment Rules:
# Scalar (int, bool, float) = 4 bytes (N=4)
# Vec3 = 16 bytes (4N) - Hardware treats vec3 as vec4
# Vec4 = 16 bytes (4N)
# Mat4 = 64 bytes (Array of 4 Vec4s)

STD140_ALIGNMENT = 16


def pack_vec3_std140(x: float, y: float, z: float) -> bytes:
    """Packs vec3 with 4th float padding (16 bytes total)."""
    return struct.pack("3f4x", x, y, z)


def pack_vec4(x: float, y: float, z: float, w: float) -> bytes:
    return struct.pack("4f", x, y, z, w)


def pack_mat4(mat: np.ndarray) -> bytes:
    """
    Packs a row-major 4x4 numpy matrix as column-major float32,
    the layout GLSL/WGSL mat4 uniforms read.
    """
    if mat.shape != (4, 4):
        raise ValueError("Matrix must be 4x4")
    return np.ascontiguousarray(mat.T, dtype="f4").tobytes()


def pack_mat3(mat: np.ndarray) -> bytes:
    """
    Packs a row-major 3x3 matrix as 9 tightly packed column-major floats.
    This is the vertex-attribute layout (3 x vec3), not the std140 one.
    """
    if mat.shape != (3, 3):
        raise ValueError("Matrix must be 3x3")
    return np.ascontiguousarray(mat.T, dtype="f4").tobytes()


def align_to(size: int, alignment: int) -> int:
    """Round `size` up to the next multiple of `alignment`."""
    if alignment <= 0:
        raise ValueError(f"alignment must be positive, got {alignment}")
    return (size + alignment - 1) // alignment * alignment

# wren/graphics/utils/__init__.py
from wren.graphics.utils.geometry import create_cube, cube_vertices
from wren.graphics.utils.uniforms import (
    align_to,
    pack_mat3,
    pack_mat4,
    pack_vec3_std140,
    pack_vec4,
)

__all__ = [
    "create_cube",
    "cube_vertices",
    "align_to",
    "pack_vec3_std140",
    "pack_vec4",
    "pack_mat3",
    "pack_mat4",
]

# wren/graphics/utils/geometry.py
import moderngl
import numpy as np

CUBE_VERTEX_FORMAT = "3f 3f"
CUBE_VERTEX_ATTRIBUTES = ("in_pos", "in_normal")

# (normal, tangent u, tangent v) per face, u x v == normal so winding is CCW
_FACES = (
    ((1, 0, 0), (0, 0, -1), (0, 1, 0)),
    ((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
    ((0, 1, 0), (1, 0, 0), (0, 0, -1)),
    ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
    ((0, 0, 1), (1, 0, 0), (0, 1, 0)),
    ((0, 0, -1), (-1, 0, 0), (0, 1, 0)),
)


def cube_vertices(size: float = 1.0) -> np.ndarray:
    """
    Non-indexed cube as a (36, 6) float32 array of position + normal,
    two counter-clockwise triangles per face.
    """
    half = size * 0.5
    out = []
    for normal, u, v in _FACES:
        n = np.array(normal, dtype="f4")
        du = np.array(u, dtype="f4") * half
        dv = np.array(v, dtype="f4") * half
        c = n * half

        corners = (c - du - dv, c + du - dv, c + du + dv, c - du + dv)
        for i in (0, 1, 2, 0, 2, 3):
            out.append(np.concatenate([corners[i], n]))

    return np.array(out, dtype="f4")


def create_cube(ctx: moderngl.Context, size: float = 1.0) -> moderngl.Buffer:
    """
    Create a cube vertex buffer (Pos, Normal).
    Format: CUBE_VERTEX_FORMAT
    """
    return ctx.buffer(cube_vertices(size).tobytes())

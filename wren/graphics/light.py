# wren/graphics/light.py
from dataclasses import dataclass

from wren.graphics.utils.uniforms import pack_vec3_std140
from wren.types import Color3, Vector3

LIGHT_UNIFORM_SIZE = 32


@dataclass(frozen=True, slots=True)
class LightUniform:
    """
    Point light record. Each vec3 occupies a full 16-byte slot in std140.
    """

    position: Vector3 = Vector3(2.0, 2.0, 2.0)
    color: Color3 = (1.0, 1.0, 1.0)

    def to_bytes(self) -> bytes:
        return pack_vec3_std140(*self.position) + pack_vec3_std140(*self.color)

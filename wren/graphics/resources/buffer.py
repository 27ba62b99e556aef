# wren/graphics/resources/buffer.py
import logging
from enum import Enum
from typing import Protocol

import moderngl

logger = logging.getLogger(__name__)


class BufferUsage(str, Enum):
    UNIFORM = "uniform"
    INSTANCE = "instance"


class WritableBuffer(Protocol):
    """The part of moderngl.Buffer the camera and instance field rely on."""

    def write(self, data: bytes, offset: int = 0) -> None: ...


class BufferAllocator(Protocol):
    def create_buffer(
        self, data: bytes, usage: BufferUsage, label: str = ""
    ) -> WritableBuffer: ...


class ModernGLAllocator:
    """
    Creates GPU buffers through a moderngl context.
    Uniform buffers are rewritten every frame, so they are created dynamic.
    """

    def __init__(self, ctx: moderngl.Context) -> None:
        self.ctx = ctx
        self._buffers: list[moderngl.Buffer] = []

    def create_buffer(
        self, data: bytes, usage: BufferUsage, label: str = ""
    ) -> moderngl.Buffer:
        dynamic = usage is BufferUsage.UNIFORM
        if data:
            buffer = self.ctx.buffer(data, dynamic=dynamic)
        else:
            # moderngl rejects zero-sized buffers
            buffer = self.ctx.buffer(reserve=16, dynamic=dynamic)
        self._buffers.append(buffer)
        logger.debug(
            "Allocated %s buffer %r (%d bytes)", usage.value, label, len(data)
        )
        return buffer

    def release(self) -> None:
        for buffer in self._buffers:
            buffer.release()
        self._buffers.clear()

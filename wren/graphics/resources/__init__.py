from wren.graphics.resources.buffer import (
    BufferAllocator,
    BufferUsage,
    ModernGLAllocator,
    WritableBuffer,
)

__all__ = [
    "BufferAllocator",
    "BufferUsage",
    "ModernGLAllocator",
    "WritableBuffer",
]

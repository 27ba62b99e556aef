import math
from dataclasses import dataclass, field
from typing import List, Tuple

import pytest

from wren.graphics.camera import Camera, Projection
from wren.graphics.resources.buffer import BufferUsage
from wren.graphics.view import View, ViewBuilder
from wren.input.controller import CameraController


@dataclass
class RecordingBuffer:
    """Stands in for moderngl.Buffer: keeps the bytes and every write."""

    data: bytearray
    usage: BufferUsage
    label: str
    writes: List[Tuple[int, bytes]] = field(default_factory=list)

    def write(self, data: bytes, offset: int = 0) -> None:
        self.writes.append((offset, bytes(data)))
        end = offset + len(data)
        if end > len(self.data):
            self.data.extend(bytes(end - len(self.data)))
        self.data[offset:end] = data


class RecordingAllocator:
    def __init__(self):
        self.buffers: List[RecordingBuffer] = []

    def create_buffer(
        self, data: bytes, usage: BufferUsage, label: str = ""
    ) -> RecordingBuffer:
        buffer = RecordingBuffer(bytearray(data), usage, label)
        self.buffers.append(buffer)
        return buffer


@pytest.fixture
def allocator():
    """Returns a fresh in-memory allocator for each test."""
    return RecordingAllocator()


@pytest.fixture
def controller():
    return CameraController(speed=4.0, sensitivity=0.4)


@pytest.fixture
def camera():
    return Camera((0.0, 5.0, 10.0), yaw=-math.pi / 2.0, pitch=0.0)


@pytest.fixture
def projection():
    return Projection(800, 600, math.radians(45.0), 0.1, 100.0)


@pytest.fixture
def view(allocator, controller) -> View:
    return (
        ViewBuilder()
        .camera((0.0, 5.0, 10.0), -math.pi / 2.0, -math.radians(20.0))
        .projection(800, 600, math.radians(45.0), 0.1, 100.0)
        .controller(controller)
        .finalize(allocator)
    )

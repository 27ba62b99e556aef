import pygame
import pytest

from wren.core.frame import FrameState, tick
from wren.graphics.transforms import Transform, TransformField
from wren.types import Vector3


@pytest.fixture
def field(allocator):
    return TransformField.build().transform_field(2, 2).finalize(allocator)


def test_events_are_ingested_before_update(view, allocator):
    state = FrameState(view=view)
    events = [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE),
        pygame.event.Event(pygame.MOUSEMOTION, rel=(0, 0), pos=(0, 0)),
    ]

    result = tick(state, events, 0.5)

    assert result.consumed == 2
    assert not result.quit_requested
    assert view.camera.position.y == pytest.approx(5.0 + view.controller.speed * 0.5)
    assert len(allocator.buffers[0].writes) == 1


def test_one_shot_input_applies_to_a_single_frame(view):
    state = FrameState(view=view)
    wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1)

    before = view.camera.position
    tick(state, [wheel], 0.1)
    assert view.controller.scroll == 0.0
    after_first = view.camera.position
    assert after_first != before

    tick(state, [], 0.1)
    assert view.camera.position == after_first


def test_resize_event_updates_projection(view):
    state = FrameState(view=view)
    event = pygame.event.Event(pygame.VIDEORESIZE, w=1200, h=400, size=(1200, 400))

    tick(state, [event], 0.0)

    assert view.projection.aspect == pytest.approx(3.0)


@pytest.mark.parametrize(
    "event",
    [
        pygame.event.Event(pygame.QUIT),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE),
    ],
)
def test_quit_requests(view, event):
    result = tick(FrameState(view=view), [event], 0.016)
    assert result.quit_requested


def test_counters_advance(view):
    state = FrameState(view=view)
    tick(state, [], 0.25)
    tick(state, [], 0.25)

    assert state.frame_index == 2
    assert state.elapsed_seconds == pytest.approx(0.5)


def test_negative_dt_is_rejected(view):
    with pytest.raises(ValueError):
        tick(FrameState(view=view), [], -0.1)


def test_transform_field_reuploads_only_when_changed(view, field, allocator):
    state = FrameState(view=view, transforms=field)
    instance_buffer = allocator.buffers[1]

    tick(state, [], 0.016)
    assert instance_buffer.writes == []

    field.set_transform(0, Transform(translation=Vector3(1.0, 0.0, 0.0)))
    tick(state, [], 0.016)
    assert len(instance_buffer.writes) == 1
    assert bytes(instance_buffer.data) == field.instance_bytes()

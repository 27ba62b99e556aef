from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import pygame

from wren.graphics.transforms import TransformField
from wren.graphics.view import View

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FrameState:
    """Everything one frame touches, passed explicitly to `tick`."""

    view: View
    transforms: Optional[TransformField] = None
    frame_index: int = 0
    elapsed_seconds: float = 0.0


@dataclass(frozen=True, slots=True)
class TickResult:
    quit_requested: bool = False
    consumed: int = 0


def tick(
    state: FrameState, events: Iterable[pygame.event.Event], dt: float
) -> TickResult:
    """
    Advance one frame.

    All events are ingested before the camera integrates, and the camera
    update (including the controller reset) finishes before this returns.
    """
    if dt < 0.0:
        raise ValueError(f"dt must be non-negative, got {dt}")

    quit_requested = False
    consumed = 0

    for event in events:
        if event.type == pygame.QUIT:
            quit_requested = True
            continue

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            quit_requested = True
            continue

        if event.type == pygame.VIDEORESIZE:
            logger.debug("Resize to %dx%d", event.w, event.h)
            state.view.resize(event.w, event.h)
            consumed += 1
            continue

        if state.view.controller.process_event(event):
            consumed += 1

    state.view.update(dt)

    if state.transforms is not None and state.transforms.dirty:
        state.transforms.update(dt)

    state.frame_index += 1
    state.elapsed_seconds += dt

    return TickResult(quit_requested=quit_requested, consumed=consumed)

import logging
from dataclasses import dataclass
from enum import Enum

import pygame

from wren.input.bindings import InputBindings, MoveAxis

logger = logging.getLogger(__name__)

# A wheel "line" is treated as roughly this many pixels.
PIXELS_PER_LINE = 100.0


class ScrollUnit(str, Enum):
    LINES = "lines"
    PIXELS = "pixels"


@dataclass(frozen=True, slots=True)
class ScrollDelta:
    amount: float
    unit: ScrollUnit = ScrollUnit.LINES


class CameraController:
    """
    Collects input events between frames for the fly camera.

    Movement amounts mirror the current key state and persist across frames.
    Rotation and scroll are one-shot: they are valid for a single camera
    update and are zeroed by `consume()`.
    """

    def __init__(
        self,
        speed: float,
        sensitivity: float,
        bindings: InputBindings | None = None,
    ):
        self.amount_forward = 0.0
        self.amount_backward = 0.0
        self.amount_left = 0.0
        self.amount_right = 0.0
        self.amount_up = 0.0
        self.amount_down = 0.0

        self.rotate_horizontal = 0.0
        self.rotate_vertical = 0.0
        self.scroll = 0.0

        self.speed = speed
        self.sensitivity = sensitivity

        self.bindings = bindings if bindings is not None else InputBindings()

    def set_movement(self, axis: MoveAxis, pressed: bool) -> None:
        amount = 1.0 if pressed else 0.0

        if axis is MoveAxis.FORWARD:
            self.amount_forward = amount
        elif axis is MoveAxis.BACKWARD:
            self.amount_backward = amount
        elif axis is MoveAxis.LEFT:
            self.amount_left = amount
        elif axis is MoveAxis.RIGHT:
            self.amount_right = amount
        elif axis is MoveAxis.UP:
            self.amount_up = amount
        elif axis is MoveAxis.DOWN:
            self.amount_down = amount

    def accumulate_rotation(self, dx: float, dy: float) -> None:
        """Last write wins: only the most recent pointer delta is kept."""
        self.rotate_horizontal = float(dx)
        self.rotate_vertical = float(dy)

    def accumulate_scroll(self, delta: ScrollDelta) -> None:
        if delta.unit is ScrollUnit.LINES:
            self.scroll = -(delta.amount * PIXELS_PER_LINE)
        else:
            self.scroll = -delta.amount

    def consume(self) -> None:
        self.scroll = 0.0

        # Cleared every frame, otherwise a frame without pointer motion
        # keeps rotating by the last delta.
        self.rotate_horizontal = 0.0
        self.rotate_vertical = 0.0

    def process_keyboard(self, key: int, pressed: bool) -> bool:
        axis = self.bindings.get_axis(key)
        if axis is None:
            return False
        self.set_movement(axis, pressed)
        return True

    def process_event(self, event: pygame.event.Event) -> bool:
        """Feed Pygame events here. Returns True if the event was used."""
        if event.type == pygame.KEYDOWN:
            return self.process_keyboard(event.key, True)

        if event.type == pygame.KEYUP:
            return self.process_keyboard(event.key, False)

        if event.type == pygame.MOUSEMOTION:
            dx, dy = event.rel
            self.accumulate_rotation(dx, dy)
            return True

        if event.type == pygame.MOUSEWHEEL:
            self.accumulate_scroll(ScrollDelta(float(event.y), ScrollUnit.LINES))
            return True

        logger.debug("Controller ignored event type %s", event.type)
        return False

    @property
    def planar_axes(self) -> tuple[float, float]:
        """(forward - backward, right - left)"""
        return (
            self.amount_forward - self.amount_backward,
            self.amount_right - self.amount_left,
        )

    @property
    def vertical_axis(self) -> float:
        return self.amount_up - self.amount_down

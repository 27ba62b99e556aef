from enum import Enum
from typing import Dict, Optional

import pygame


class MoveAxis(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


DEFAULT_BINDINGS: Dict[int, MoveAxis] = {
    pygame.K_w: MoveAxis.FORWARD,
    pygame.K_UP: MoveAxis.FORWARD,
    pygame.K_s: MoveAxis.BACKWARD,
    pygame.K_DOWN: MoveAxis.BACKWARD,
    pygame.K_a: MoveAxis.LEFT,
    pygame.K_LEFT: MoveAxis.LEFT,
    pygame.K_d: MoveAxis.RIGHT,
    pygame.K_RIGHT: MoveAxis.RIGHT,
    pygame.K_SPACE: MoveAxis.UP,
    pygame.K_LSHIFT: MoveAxis.DOWN,
}


class InputBindings:
    """
    Key -> MoveAxis mappings for the fly camera.
    Example:
        bindings = InputBindings({K_w: MoveAxis.FORWARD})
        bindings.bind(K_e, MoveAxis.UP)
    """

    def __init__(self, bindings: Dict[int, MoveAxis] | None = None):
        # Mapping: Pygame Key Code (int) -> MoveAxis
        self.bindings: Dict[int, MoveAxis] = (
            dict(bindings) if bindings is not None else dict(DEFAULT_BINDINGS)
        )

    def bind(self, key: int, axis: MoveAxis):
        """Map a physical key to a movement axis."""
        self.bindings[key] = axis

    def unbind(self, key: int):
        if key in self.bindings:
            del self.bindings[key]

    def get_axis(self, key: int) -> Optional[MoveAxis]:
        return self.bindings.get(key)

# wren/graphics/window.py
import logging

import moderngl
import pygame

logger = logging.getLogger(__name__)


class Window:
    """
    Manages the OS Window and OpenGL Context.
    """

    def __init__(
        self, width: int, height: int, title: str = "wren", vsync: bool = True
    ):
        if not pygame.get_init():
            pygame.init()

        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
        pygame.display.gl_set_attribute(
            pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE
        )
        pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
        pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)

        self._screen = pygame.display.set_mode(
            (width, height),
            pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE,
            vsync=1 if vsync else 0,
        )
        pygame.display.set_caption(title)

        self.ctx = moderngl.create_context()
        self.ctx.enable(moderngl.DEPTH_TEST | moderngl.CULL_FACE)

        version = self.ctx.version_code
        logger.info(
            "OpenGL Context Created: %s.%s", str(version)[0], str(version)[1:]
        )

    @property
    def size(self) -> tuple[int, int]:
        return pygame.display.get_window_size()

    def set_mouse_lock(self, locked: bool) -> None:
        """Lock/hide the mouse for FPS controls."""
        pygame.mouse.set_visible(not locked)
        pygame.event.set_grab(locked)
        if locked:
            # Center the mouse so we don't get a huge delta on first frame
            pygame.mouse.set_pos(self._screen.get_rect().center)

    def present(self) -> None:
        pygame.display.flip()

    def destroy(self) -> None:
        pygame.quit()

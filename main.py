import logging
import sys
from dataclasses import replace

import pygame

from wren.config import load_settings
from wren.core.frame import FrameState, tick
from wren.debug.log import setup_logging
from wren.graphics.camera import ClipSpace
from wren.graphics.light import LightUniform
from wren.graphics.resources.buffer import BufferUsage, ModernGLAllocator
from wren.graphics.shaders import ShaderManager
from wren.graphics.transforms import TransformFieldBuilder
from wren.graphics.utils.geometry import (
    CUBE_VERTEX_ATTRIBUTES,
    CUBE_VERTEX_FORMAT,
    create_cube,
)
from wren.graphics.view import ViewBuilder
from wren.graphics.window import Window
from wren.types import Vector3

logger = logging.getLogger("wren.demo")


def main():
    setup_logging()
    settings = load_settings()

    # moderngl renders through OpenGL, which keeps depth in [-1, 1]
    projection = replace(settings.view.projection, clip_space=ClipSpace.OPENGL)
    settings = replace(settings, view=replace(settings.view, projection=projection))

    window = Window(
        width=projection.width,
        height=projection.height,
        title="wren - instanced field",
        vsync=settings.vsync,
    )
    ctx = window.ctx
    allocator = ModernGLAllocator(ctx)

    view = ViewBuilder.from_settings(settings.view).finalize(allocator)
    field = TransformFieldBuilder.from_settings(settings.grid).finalize(allocator)
    light_buffer = allocator.create_buffer(
        LightUniform(position=Vector3(2.0, 8.0, 2.0)).to_bytes(),
        BufferUsage.UNIFORM,
        label="Light Buffer",
    )

    shaders = ShaderManager(ctx)
    program = shaders.get("instanced")
    program["View"].binding = 0
    program["Light"].binding = 1
    view.buffer.bind_to_uniform_block(0)
    light_buffer.bind_to_uniform_block(1)

    cube = create_cube(ctx)
    vao = ctx.vertex_array(
        program,
        [
            (cube, CUBE_VERTEX_FORMAT, *CUBE_VERTEX_ATTRIBUTES),
            (field.buffer, field.layout.format, *field.layout.attributes),
        ],
    )

    window.set_mouse_lock(True)

    state = FrameState(view=view, transforms=field)
    clock = pygame.time.Clock()

    logger.info("Rendering %d instances", field.instance_count())

    running = True
    while running:
        dt = clock.tick(settings.target_fps) / 1000.0

        result = tick(state, pygame.event.get(), dt)
        if result.quit_requested:
            running = False
            continue

        width, height = window.size
        ctx.viewport = (0, 0, width, height)
        ctx.clear(0.1, 0.2, 0.3, depth=1.0)
        vao.render(instances=field.instance_count())

        window.present()

    vao.release()
    cube.release()
    shaders.release()
    allocator.release()
    window.destroy()
    sys.exit()


if __name__ == "__main__":
    main()

# wren/config.py
"""Settings objects for the camera, projection, controller and instance field.

Defaults match the demo scene. `load_settings()` applies ``WREN_*`` environment
overrides on top of them.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, replace
from typing import Tuple

from wren.graphics.camera import ClipSpace


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class CameraSettings:
    """Initial pose. Angles in radians."""

    position: Tuple[float, float, float] = (0.0, 5.0, 10.0)
    yaw: float = -math.pi / 2.0
    pitch: float = -math.radians(20.0)


@dataclass(frozen=True, slots=True)
class ProjectionSettings:
    width: int = 1280
    height: int = 720
    fovy: float = math.radians(45.0)
    znear: float = 0.1
    zfar: float = 100.0
    clip_space: ClipSpace = ClipSpace.ZERO_TO_ONE


@dataclass(frozen=True, slots=True)
class ControllerSettings:
    speed: float = 4.0
    sensitivity: float = 0.4


@dataclass(frozen=True, slots=True)
class ViewSettings:
    camera: CameraSettings = field(default_factory=CameraSettings)
    projection: ProjectionSettings = field(default_factory=ProjectionSettings)
    controller: ControllerSettings = field(default_factory=ControllerSettings)


@dataclass(frozen=True, slots=True)
class FieldSettings:
    """Instance grid. `angle` is the tilt of every off-centre instance, in radians."""

    rows: int = 10
    cols: int = 10
    spacing: float = 4.0
    angle: float = math.radians(45.0)
    stride_alignment: int = 4


@dataclass(frozen=True, slots=True)
class AppSettings:
    view: ViewSettings = field(default_factory=ViewSettings)
    grid: FieldSettings = field(default_factory=FieldSettings)
    target_fps: int = 60
    vsync: bool = True


def load_settings(base: AppSettings | None = None) -> AppSettings:
    """Apply environment overrides to `base` (or the defaults)."""
    settings = base if base is not None else AppSettings()

    view = settings.view
    projection = replace(
        view.projection,
        width=_int("WREN_WIDTH", view.projection.width),
        height=_int("WREN_HEIGHT", view.projection.height),
        fovy=math.radians(
            _float("WREN_FOV_DEG", math.degrees(view.projection.fovy))
        ),
        znear=_float("WREN_ZNEAR", view.projection.znear),
        zfar=_float("WREN_ZFAR", view.projection.zfar),
    )
    controller = replace(
        view.controller,
        speed=_float("WREN_SPEED", view.controller.speed),
        sensitivity=_float("WREN_SENSITIVITY", view.controller.sensitivity),
    )
    grid = replace(
        settings.grid,
        rows=_int("WREN_ROWS", settings.grid.rows),
        cols=_int("WREN_COLS", settings.grid.cols),
        spacing=_float("WREN_SPACING", settings.grid.spacing),
    )

    return replace(
        settings,
        view=replace(view, projection=projection, controller=controller),
        grid=grid,
        target_fps=_int("WREN_TARGET_FPS", settings.target_fps),
        vsync=_flag("WREN_VSYNC", settings.vsync),
    )

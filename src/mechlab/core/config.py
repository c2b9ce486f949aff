"""Configuration dataclasses for the mechanics explorer."""
from __future__ import annotations

from dataclasses import dataclass

STANDARD_GRAVITY = 9.8


@dataclass(frozen=True)
class PhysicsCfg:
    gravity: float = STANDARD_GRAVITY
    momentum_tolerance: float = 0.1
    balance_tolerance: float = 1.0
    moment_tolerance: float = 0.5
    tilt_scale: float = 100.0
    area_shape_tolerance: float = 0.01


@dataclass(frozen=True)
class AnimationCfg:
    dt: float = 0.1
    fall_start_position: float = 50.0
    fall_floor_position: float = 350.0
    collision_start_positions: tuple[float, float] = (50.0, 450.0)
    collision_speed: float = 2.0
    approach_frames: int = 100
    contact_distance: float = 30.0
    track_width: float = 500.0
    offscreen_margin: float = 50.0
    max_frames: int = 5_000


@dataclass(frozen=True)
class FigureCfg:
    dpi: int = 150
    velocity_color: str = "#3498db"
    area_fill_color: str = "#3498db"
    area_fill_alpha: float = 0.2
    marker_color: str = "#e74c3c"
    weight_color: str = "#e74c3c"
    drag_color: str = "#27ae60"
    terminal_color: str = "#2c3e50"
    body1_color: str = "#e74c3c"
    body2_color: str = "#3498db"
    grid_alpha: float = 0.3


PHYSICS_CFG = PhysicsCfg()
ANIMATION_CFG = AnimationCfg()
FIGURE_CFG = FigureCfg()


__all__ = [
    "ANIMATION_CFG",
    "FIGURE_CFG",
    "PHYSICS_CFG",
    "STANDARD_GRAVITY",
    "AnimationCfg",
    "FigureCfg",
    "PhysicsCfg",
]

"""Animation state for the motion, falling-body and collision demonstrations.

Every animation is an immutable state object and a step function that
returns the state for the next frame. A state with ``animating`` set to
``False`` is finished (or was cancelled) and stepping it is a no-op.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, TypeVar

from mechlab import physics

from .config import ANIMATION_CFG, PHYSICS_CFG, AnimationCfg, PhysicsCfg
from .inputs import FallInputs, MomentumInputs, MotionInputs
from .readouts import collision_velocities


@dataclass(frozen=True)
class MotionSweepState:
    """Time marker sweeping along the velocity-time graph."""

    time: float = 0.0
    animating: bool = False


@dataclass(frozen=True)
class FallState:
    time: float = 0.0
    velocity: float = 0.0
    position: float = 0.0
    air_resistance: float = 0.0
    animating: bool = False


@dataclass(frozen=True)
class CollisionState:
    obj1_pos: float = 0.0
    obj2_pos: float = 0.0
    progress: int = 0
    collided: bool = False
    animating: bool = False
    v1f: float = 0.0
    v2f: float = 0.0


def start_motion_sweep() -> MotionSweepState:
    return MotionSweepState(time=0.0, animating=True)


def step_motion_sweep(
    state: MotionSweepState,
    inputs: MotionInputs,
    cfg: AnimationCfg = ANIMATION_CFG,
) -> MotionSweepState:
    """Advance the marker by one frame; the sweep ends after ``inputs.time``."""

    if not state.animating:
        return state
    time = state.time + cfg.dt
    if time <= inputs.time:
        return replace(state, time=time)
    return MotionSweepState(time=0.0, animating=False)


def motion_sweep_point(state: MotionSweepState, inputs: MotionInputs) -> tuple[float, float]:
    """``(t, v)`` of the marker on the velocity-time graph."""

    velocity = physics.final_velocity(inputs.initial_velocity, inputs.acceleration, state.time)
    return state.time, velocity


def start_fall(cfg: AnimationCfg = ANIMATION_CFG) -> FallState:
    return FallState(position=cfg.fall_start_position, animating=True)


def step_fall(
    state: FallState,
    inputs: FallInputs,
    cfg: AnimationCfg = ANIMATION_CFG,
    physics_cfg: PhysicsCfg = PHYSICS_CFG,
) -> FallState:
    """One explicit Euler step of a body falling against quadratic drag."""

    if not state.animating:
        return state

    dt = cfg.dt
    drag_force = physics.air_resistance(inputs.drag, state.velocity)
    net_force = physics.net_force_falling(
        inputs.mass, state.velocity, inputs.drag, physics_cfg.gravity
    )
    accel = physics.acceleration(net_force, inputs.mass)
    velocity = state.velocity + accel * dt
    position = state.position + velocity * dt

    if position > cfg.fall_floor_position:
        return replace(
            state,
            velocity=velocity,
            position=position,
            air_resistance=drag_force,
            animating=False,
        )
    return replace(
        state,
        time=state.time + dt,
        velocity=velocity,
        position=position,
        air_resistance=drag_force,
    )


def start_collision(cfg: AnimationCfg = ANIMATION_CFG) -> CollisionState:
    obj1_pos, obj2_pos = cfg.collision_start_positions
    return CollisionState(obj1_pos=obj1_pos, obj2_pos=obj2_pos, animating=True)


def _offscreen(position: float, cfg: AnimationCfg) -> bool:
    return position < -cfg.offscreen_margin or position > cfg.track_width + cfg.offscreen_margin


def step_collision(
    state: CollisionState,
    inputs: MomentumInputs,
    cfg: AnimationCfg = ANIMATION_CFG,
) -> CollisionState:
    """Advance the two bodies by one frame.

    Before contact the bodies move with their initial velocities. Contact
    happens when they come within ``cfg.contact_distance`` of each other or
    once ``cfg.approach_frames`` frames have passed. Afterwards they move
    with the post-collision velocities until one leaves the track.
    """

    if not state.animating:
        return state

    speed = cfg.collision_speed
    if not state.collided:
        obj1_pos = state.obj1_pos + inputs.velocity1 * speed
        obj2_pos = state.obj2_pos + inputs.velocity2 * speed
        progress = state.progress + 1
        collided = (
            abs(obj1_pos - obj2_pos) < cfg.contact_distance
            or progress >= cfg.approach_frames
        )
        if not collided:
            return replace(state, obj1_pos=obj1_pos, obj2_pos=obj2_pos, progress=progress)
        after = collision_velocities(inputs)
        return replace(
            state,
            obj1_pos=obj1_pos,
            obj2_pos=obj2_pos,
            progress=max(progress, cfg.approach_frames),
            collided=True,
            v1f=after.v1f,
            v2f=after.v2f,
        )

    obj1_pos = state.obj1_pos + state.v1f * speed
    obj2_pos = state.obj2_pos + state.v2f * speed
    animating = not (_offscreen(obj1_pos, cfg) or _offscreen(obj2_pos, cfg))
    return replace(state, obj1_pos=obj1_pos, obj2_pos=obj2_pos, animating=animating)


StateT = TypeVar("StateT", MotionSweepState, FallState, CollisionState)


def run_animation(
    state: StateT,
    step: Callable[[StateT], StateT],
    max_frames: int = ANIMATION_CFG.max_frames,
) -> list[StateT]:
    """Step ``state`` until it stops animating; returns every frame including the first."""

    if max_frames < 0:
        raise ValueError("max_frames must be non-negative")
    frames = [state]
    for _ in range(max_frames):
        if not state.animating:
            break
        state = step(state)
        frames.append(state)
    return frames


__all__ = [
    "CollisionState",
    "FallState",
    "MotionSweepState",
    "motion_sweep_point",
    "run_animation",
    "start_collision",
    "start_fall",
    "start_motion_sweep",
    "step_collision",
    "step_fall",
    "step_motion_sweep",
]

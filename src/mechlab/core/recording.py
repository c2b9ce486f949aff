"""Headless playback of the topic animations into recorded runs."""
from __future__ import annotations

from dataclasses import asdict
from functools import partial
from pathlib import Path
from typing import Optional

from mechlab import physics

from .config import ANIMATION_CFG, PHYSICS_CFG, AnimationCfg, PhysicsCfg
from .inputs import FallInputs, MomentumInputs, MotionInputs, TopicInputs
from .logging_utils import TIMESERIES_HEADERS, RunLogger
from .model import (
    CollisionState,
    FallState,
    MotionSweepState,
    motion_sweep_point,
    run_animation,
    start_collision,
    start_fall,
    start_motion_sweep,
    step_collision,
    step_fall,
    step_motion_sweep,
)
from .readouts import compute_readout

RECORDABLE_TOPICS: tuple[str, ...] = ("motion", "terminal", "momentum")

_TOPIC_BY_INPUT = {
    MotionInputs: "motion",
    FallInputs: "terminal",
    MomentumInputs: "momentum",
}


def _log_motion(
    logger: RunLogger,
    frames: list[MotionSweepState],
    inputs: MotionInputs,
) -> bool:
    u, a = inputs.initial_velocity, inputs.acceleration
    for state in frames:
        if not state.animating:
            continue
        t, v = motion_sweep_point(state, inputs)
        logger.log_ts([t, v, physics.displacement(u, a, t)])
    finished = not frames[-1].animating
    if finished:
        v = physics.final_velocity(u, a, inputs.time)
        logger.log_event(
            inputs.time,
            "complete",
            {
                "v": v,
                "s": physics.displacement(u, a, inputs.time),
                "area": physics.area_under_graph(u, v, inputs.time),
            },
        )
    return finished


def _log_fall(
    logger: RunLogger,
    frames: list[FallState],
    inputs: FallInputs,
    cfg: AnimationCfg,
    physics_cfg: PhysicsCfg,
) -> bool:
    weight = physics.weight(inputs.mass, physics_cfg.gravity)
    last = frames[-1]
    finished = not last.animating
    # The floor step does not advance state.time.
    impact_time = last.time + cfg.dt
    for state in frames:
        t = state.time if state.animating else impact_time
        net_force = weight - state.air_resistance
        logger.log_ts(
            [
                t,
                state.position,
                state.velocity,
                state.air_resistance,
                net_force,
                physics.acceleration(net_force, inputs.mass),
            ]
        )
    if finished:
        logger.log_event(
            impact_time,
            "floor",
            {
                "v": last.velocity,
                "y": last.position,
                "terminal_velocity": physics.terminal_velocity(
                    inputs.mass, inputs.drag, physics_cfg.gravity
                ),
            },
        )
    return finished


def _log_collision(
    logger: RunLogger,
    frames: list[CollisionState],
    inputs: MomentumInputs,
    physics_cfg: PhysicsCfg,
) -> bool:
    m1, m2 = inputs.mass1, inputs.mass2
    initial = physics.total_momentum(m1, inputs.velocity1, m2, inputs.velocity2)
    contact_logged = False
    for frame, state in enumerate(frames):
        if state.collided:
            v1, v2 = state.v1f, state.v2f
        else:
            v1, v2 = inputs.velocity1, inputs.velocity2
        total = physics.total_momentum(m1, v1, m2, v2)
        kinetic = physics.kinetic_energy(m1, v1) + physics.kinetic_energy(m2, v2)
        logger.log_ts([frame, state.obj1_pos, state.obj2_pos, v1, v2, total, kinetic])
        if state.collided and not contact_logged:
            contact_logged = True
            logger.log_event(
                frame,
                "contact",
                {
                    "x": 0.5 * (state.obj1_pos + state.obj2_pos),
                    "v1f": state.v1f,
                    "v2f": state.v2f,
                    "conserved": physics.is_momentum_conserved(
                        initial, total, physics_cfg.momentum_tolerance
                    ),
                },
            )
    finished = not frames[-1].animating
    if finished:
        logger.log_event(len(frames) - 1, "complete", None)
    return finished


def record_run(
    inputs: TopicInputs,
    *,
    root_dir: str | Path = "data/runs",
    run_id: Optional[str] = None,
    max_frames: Optional[int] = None,
    cfg: AnimationCfg = ANIMATION_CFG,
    physics_cfg: PhysicsCfg = PHYSICS_CFG,
) -> Path:
    """Play the animation for ``inputs`` to completion and record it.

    Returns the run directory. Only the motion, terminal velocity and
    momentum topics have an animation.
    """

    topic = _TOPIC_BY_INPUT.get(type(inputs))
    if topic is None:
        raise ValueError(
            f"{type(inputs).__name__} has no animation; "
            f"recordable topics are {', '.join(RECORDABLE_TOPICS)}"
        )
    frame_limit = cfg.max_frames if max_frames is None else max_frames

    with RunLogger(root_dir, TIMESERIES_HEADERS[topic], run_id) as logger:
        logger.log_event(0.0, "start", None)
        if isinstance(inputs, MotionInputs):
            frames = run_animation(
                start_motion_sweep(), partial(step_motion_sweep, inputs=inputs, cfg=cfg), frame_limit
            )
            finished = _log_motion(logger, frames, inputs)
        elif isinstance(inputs, FallInputs):
            frames = run_animation(
                start_fall(cfg),
                partial(step_fall, inputs=inputs, cfg=cfg, physics_cfg=physics_cfg),
                frame_limit,
            )
            finished = _log_fall(logger, frames, inputs, cfg, physics_cfg)
        else:
            frames = run_animation(
                start_collision(cfg), partial(step_collision, inputs=inputs, cfg=cfg), frame_limit
            )
            finished = _log_collision(logger, frames, inputs, physics_cfg)

        if not finished:
            logger.log_event(len(frames) - 1, "frame_limit", {"max_frames": frame_limit})

        logger.write_meta(
            {
                "topic": topic,
                "inputs": asdict(inputs),
                "readout": asdict(compute_readout(inputs, physics_cfg)),
                "animation": asdict(cfg),
                "gravity": physics_cfg.gravity,
                "frames": len(frames),
                "completed": finished,
            }
        )
        return logger.run_dir


__all__ = ["RECORDABLE_TOPICS", "record_run"]

from functools import partial

import pytest

from mechlab.core.config import ANIMATION_CFG
from mechlab.core.inputs import FallInputs, MomentumInputs, MotionInputs, parse_inputs
from mechlab.core.model import (
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
from mechlab.physics import air_resistance, terminal_velocity, total_momentum


def test_motion_sweep_runs_to_the_end_and_resets():
    inputs = MotionInputs(initial_velocity=0.0, acceleration=2.0, time=10.0)
    frames = run_animation(start_motion_sweep(), partial(step_motion_sweep, inputs=inputs))
    assert frames[0] == MotionSweepState(time=0.0, animating=True)
    assert frames[-1] == MotionSweepState(time=0.0, animating=False)
    assert 100 <= len(frames) <= 102
    animated = [state for state in frames if state.animating]
    assert all(state.time <= inputs.time for state in animated)
    assert all(a.time < b.time for a, b in zip(animated, animated[1:]))


def test_motion_sweep_point():
    inputs = MotionInputs(initial_velocity=0.0, acceleration=2.0, time=10.0)
    assert motion_sweep_point(MotionSweepState(time=5.0, animating=True), inputs) == (5.0, 10.0)


def test_stepping_a_stopped_state_is_a_no_op():
    inputs = parse_inputs("motion")
    stopped = MotionSweepState()
    assert step_motion_sweep(stopped, inputs) is stopped
    fall = FallState()
    assert step_fall(fall, parse_inputs("terminal")) is fall
    collision = CollisionState()
    assert step_collision(collision, parse_inputs("momentum")) is collision


@pytest.mark.parametrize("preset", ["default", "skydiver", "feather"])
def test_fall_approaches_terminal_velocity_from_below(preset):
    inputs = parse_inputs("terminal", preset_key=preset)
    vt = terminal_velocity(inputs.mass, inputs.drag)
    frames = run_animation(start_fall(), partial(step_fall, inputs=inputs))

    assert frames[0].position == ANIMATION_CFG.fall_start_position
    last = frames[-1]
    assert not last.animating
    assert last.position > ANIMATION_CFG.fall_floor_position
    velocities = [state.velocity for state in frames]
    assert all(a <= b + 1e-12 for a, b in zip(velocities, velocities[1:]))
    assert max(velocities) <= vt * (1 + 1e-12)
    positions = [state.position for state in frames]
    assert all(a <= b for a, b in zip(positions, positions[1:]))


def test_fall_stops_advancing_time_at_the_floor():
    inputs = parse_inputs("terminal")
    frames = run_animation(start_fall(), partial(step_fall, inputs=inputs))
    assert frames[-1].time == frames[-2].time
    assert frames[-2].time == pytest.approx((len(frames) - 2) * ANIMATION_CFG.dt)


def test_massless_body_never_falls():
    inputs = FallInputs(mass=0.0, drag=0.1)
    frames = run_animation(start_fall(), partial(step_fall, inputs=inputs), max_frames=20)
    assert len(frames) == 21
    assert frames[-1].animating
    assert frames[-1].velocity == 0
    assert frames[-1].position == ANIMATION_CFG.fall_start_position


def _collision_frames(inputs, max_frames=ANIMATION_CFG.max_frames):
    return run_animation(start_collision(), partial(step_collision, inputs=inputs), max_frames)


def test_head_on_collision():
    inputs = parse_inputs("momentum")
    frames = _collision_frames(inputs)

    contact = next(i for i, state in enumerate(frames) if state.collided)
    assert contact == 16
    assert frames[contact - 1].obj2_pos - frames[contact - 1].obj1_pos >= ANIMATION_CFG.contact_distance
    assert abs(frames[contact].obj2_pos - frames[contact].obj1_pos) < ANIMATION_CFG.contact_distance
    assert frames[contact].v1f == pytest.approx(-1)
    assert frames[contact].v2f == pytest.approx(11)
    assert frames[contact].progress == ANIMATION_CFG.approach_frames

    last = frames[-1]
    assert not last.animating
    assert last.obj2_pos > ANIMATION_CFG.track_width + ANIMATION_CFG.offscreen_margin
    assert len(frames) == 28
    assert total_momentum(
        inputs.mass1, last.v1f, inputs.mass2, last.v2f
    ) == pytest.approx(total_momentum(inputs.mass1, inputs.velocity1, inputs.mass2, inputs.velocity2))


def test_inelastic_collision_moves_together():
    inputs = parse_inputs("momentum", preset_key="car_crash")
    frames = _collision_frames(inputs)
    contact = next(i for i, state in enumerate(frames) if state.collided)
    assert contact == 10
    after = frames[contact:]
    assert all(state.v1f == state.v2f for state in after)
    assert after[0].v1f == pytest.approx(11.11, abs=0.01)
    assert not frames[-1].animating


def test_stationary_bodies_meet_after_the_approach_frames():
    inputs = MomentumInputs(mass1=5, velocity1=0, mass2=3, velocity2=0, elastic=True)
    frames = _collision_frames(inputs, max_frames=150)
    contact = next(i for i, state in enumerate(frames) if state.collided)
    assert contact == ANIMATION_CFG.approach_frames
    assert frames[-1].animating
    assert len(frames) == 151


def test_run_animation_limits():
    inputs = parse_inputs("motion")
    assert run_animation(start_motion_sweep(), partial(step_motion_sweep, inputs=inputs), 0) == [
        start_motion_sweep()
    ]
    with pytest.raises(ValueError):
        run_animation(start_motion_sweep(), partial(step_motion_sweep, inputs=inputs), -1)


def test_fall_records_the_air_resistance_of_each_step():
    inputs = parse_inputs("terminal")
    frames = run_animation(start_fall(), partial(step_fall, inputs=inputs))
    assert frames[0].air_resistance == 0
    assert frames[1].air_resistance == air_resistance(inputs.drag, frames[0].velocity)
    for before, after in zip(frames, frames[1:]):
        assert after.air_resistance == air_resistance(inputs.drag, before.velocity)
    assert frames[2].air_resistance == pytest.approx(0.09604)

"""Quantities displayed by each topic panel."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from mechlab import physics
from mechlab.physics import AreaBreakdown, CollisionResult

from .config import PHYSICS_CFG, PhysicsCfg
from .inputs import (
    CentreOfMassInputs,
    FallInputs,
    ForceInputs,
    MomentInputs,
    MomentumInputs,
    MotionInputs,
    TopicInputs,
)


def format_value(value: float, digits: int = 2) -> str:
    """Fixed-point text that tolerates ``nan`` and ``±inf``."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    return f"{value:.{digits}f}"


@dataclass(frozen=True)
class MotionReadout:
    final_velocity: float
    displacement: float
    distance: float
    area: AreaBreakdown

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Final velocity v", f"{format_value(self.final_velocity)} m/s"),
            ("Displacement s", f"{format_value(self.displacement)} m"),
            ("Distance travelled", f"{format_value(self.distance)} m"),
            ("Graph shape", self.area.shape),
            ("Rectangle area", f"{format_value(self.area.rectangle_area)} m"),
            ("Triangle area", f"{format_value(self.area.triangle_area)} m"),
            ("Area under graph", f"{format_value(self.area.total_area)} m"),
        ]


@dataclass(frozen=True)
class ForceReadout:
    resultant: float
    angle: float
    acceleration: float
    weight: float

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Resultant force", f"{format_value(self.resultant)} N"),
            ("Direction", f"{format_value(self.angle)} deg"),
            ("Acceleration", f"{format_value(self.acceleration)} m/s²"),
            ("Weight", f"{format_value(self.weight)} N"),
        ]


@dataclass(frozen=True)
class MomentumReadout:
    elastic: bool
    initial_momentum: float
    final_velocities: CollisionResult
    final_momentum: float
    conserved: bool
    initial_kinetic_energy: float
    final_kinetic_energy: float

    @property
    def energy_lost(self) -> float:
        return self.initial_kinetic_energy - self.final_kinetic_energy

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Collision", "elastic" if self.elastic else "inelastic"),
            ("Initial momentum", f"{format_value(self.initial_momentum)} kg·m/s"),
            ("v1 after", f"{format_value(self.final_velocities.v1f)} m/s"),
            ("v2 after", f"{format_value(self.final_velocities.v2f)} m/s"),
            ("Final momentum", f"{format_value(self.final_momentum)} kg·m/s"),
            ("Momentum conserved", "Yes" if self.conserved else "No"),
            ("Kinetic energy lost", f"{format_value(self.energy_lost)} J"),
        ]


@dataclass(frozen=True)
class FallReadout:
    weight: float
    terminal_velocity: float
    initial_acceleration: float

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Weight", f"{format_value(self.weight)} N"),
            ("Terminal velocity", f"{format_value(self.terminal_velocity)} m/s"),
            ("Acceleration at release", f"{format_value(self.initial_acceleration)} m/s²"),
        ]


@dataclass(frozen=True)
class CentreOfMassReadout:
    total_mass: float
    centre_of_mass: float
    balanced: bool

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Total mass", f"{format_value(self.total_mass)} kg"),
            ("Centre of mass", format_value(self.centre_of_mass)),
            ("Balanced on pivot", "BALANCED" if self.balanced else "UNBALANCED"),
        ]


@dataclass(frozen=True)
class MomentReadout:
    anticlockwise: float
    clockwise: float
    net: float
    balanced: bool
    tilt: float
    direction: str

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Anticlockwise moment", f"{format_value(self.anticlockwise)} N·m"),
            ("Clockwise moment", f"{format_value(self.clockwise)} N·m"),
            ("Net moment", f"{format_value(self.net)} N·m"),
            ("Status", "BALANCED" if self.balanced else "UNBALANCED"),
            ("Lever tilt", f"{format_value(math.degrees(self.tilt), 1)} deg"),
            ("Rotation", self.direction),
        ]


Readout = Union[
    MotionReadout,
    ForceReadout,
    MomentumReadout,
    FallReadout,
    CentreOfMassReadout,
    MomentReadout,
]


def motion_readout(inputs: MotionInputs, cfg: PhysicsCfg = PHYSICS_CFG) -> MotionReadout:
    u, a, t = inputs.initial_velocity, inputs.acceleration, inputs.time
    v = physics.final_velocity(u, a, t)
    s = physics.displacement(u, a, t)
    return MotionReadout(
        final_velocity=v,
        displacement=s,
        distance=abs(s),
        area=physics.area_breakdown(u, v, t, cfg.area_shape_tolerance),
    )


def force_readout(inputs: ForceInputs, cfg: PhysicsCfg = PHYSICS_CFG) -> ForceReadout:
    resultant = physics.resultant_perpendicular(inputs.force1, inputs.force2)
    return ForceReadout(
        resultant=resultant,
        angle=physics.force_angle(inputs.force1, inputs.force2),
        acceleration=physics.acceleration(resultant, inputs.mass),
        weight=physics.weight(inputs.mass, cfg.gravity),
    )


def collision_velocities(inputs: MomentumInputs) -> CollisionResult:
    """Post-impact velocities for the collision type selected in ``inputs``."""

    if inputs.elastic:
        return physics.elastic_collision(
            inputs.mass1, inputs.velocity1, inputs.mass2, inputs.velocity2
        )
    shared = physics.inelastic_collision(
        inputs.mass1, inputs.velocity1, inputs.mass2, inputs.velocity2
    )
    return CollisionResult(v1f=shared, v2f=shared)


def momentum_readout(inputs: MomentumInputs, cfg: PhysicsCfg = PHYSICS_CFG) -> MomentumReadout:
    m1, v1, m2, v2 = inputs.mass1, inputs.velocity1, inputs.mass2, inputs.velocity2
    after = collision_velocities(inputs)
    initial = physics.total_momentum(m1, v1, m2, v2)
    final = physics.total_momentum(m1, after.v1f, m2, after.v2f)
    return MomentumReadout(
        elastic=inputs.elastic,
        initial_momentum=initial,
        final_velocities=after,
        final_momentum=final,
        conserved=physics.is_momentum_conserved(initial, final, cfg.momentum_tolerance),
        initial_kinetic_energy=physics.kinetic_energy(m1, v1) + physics.kinetic_energy(m2, v2),
        final_kinetic_energy=physics.kinetic_energy(m1, after.v1f)
        + physics.kinetic_energy(m2, after.v2f),
    )


def fall_readout(inputs: FallInputs, cfg: PhysicsCfg = PHYSICS_CFG) -> FallReadout:
    net_force = physics.net_force_falling(inputs.mass, 0.0, inputs.drag, cfg.gravity)
    return FallReadout(
        weight=physics.weight(inputs.mass, cfg.gravity),
        terminal_velocity=physics.terminal_velocity(inputs.mass, inputs.drag, cfg.gravity),
        initial_acceleration=physics.acceleration(net_force, inputs.mass),
    )


def centre_of_mass_readout(
    inputs: CentreOfMassInputs, cfg: PhysicsCfg = PHYSICS_CFG
) -> CentreOfMassReadout:
    m1, x1, m2, x2 = inputs.mass1, inputs.position1, inputs.mass2, inputs.position2
    cm = physics.centre_of_mass(m1, x1, m2, x2)
    return CentreOfMassReadout(
        total_mass=m1 + m2,
        centre_of_mass=cm,
        balanced=physics.is_balanced(m1, x1, m2, x2, cm, cfg.balance_tolerance),
    )


def moment_readout(inputs: MomentInputs, cfg: PhysicsCfg = PHYSICS_CFG) -> MomentReadout:
    anticlockwise = physics.moment(inputs.left_force, inputs.left_distance)
    clockwise = physics.moment(inputs.right_force, inputs.right_distance)
    net = physics.net_moment(anticlockwise, clockwise)
    return MomentReadout(
        anticlockwise=anticlockwise,
        clockwise=clockwise,
        net=net,
        balanced=physics.are_moments_balanced(anticlockwise, clockwise, cfg.moment_tolerance),
        tilt=physics.tilt_angle(net, cfg.tilt_scale),
        direction=physics.rotation_direction(net, cfg.moment_tolerance),
    )


_READOUT_BUILDERS = {
    MotionInputs: motion_readout,
    ForceInputs: force_readout,
    MomentumInputs: momentum_readout,
    FallInputs: fall_readout,
    CentreOfMassInputs: centre_of_mass_readout,
    MomentInputs: moment_readout,
}


def compute_readout(inputs: TopicInputs, cfg: PhysicsCfg = PHYSICS_CFG) -> Readout:
    try:
        builder = _READOUT_BUILDERS[type(inputs)]
    except KeyError:
        raise TypeError(f"No readout for {type(inputs).__name__}") from None
    return builder(inputs, cfg)


__all__ = [
    "CentreOfMassReadout",
    "FallReadout",
    "ForceReadout",
    "MomentReadout",
    "MomentumReadout",
    "MotionReadout",
    "Readout",
    "centre_of_mass_readout",
    "collision_velocities",
    "compute_readout",
    "fall_readout",
    "force_readout",
    "format_value",
    "moment_readout",
    "momentum_readout",
    "motion_readout",
]

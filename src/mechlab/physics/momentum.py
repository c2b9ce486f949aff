"""Momentum and one-dimensional two-body collisions."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CollisionResult:
    v1f: float
    v2f: float


def _usable_total_mass(m1: float, m2: float) -> float | None:
    total_mass = m1 + m2
    if total_mass == 0 or not math.isfinite(total_mass):
        return None
    return total_mass


def momentum(mass: float, velocity: float) -> float:
    return mass * velocity


def total_momentum(m1: float, v1: float, m2: float, v2: float) -> float:
    return m1 * v1 + m2 * v2


def kinetic_energy(mass: float, velocity: float) -> float:
    return 0.5 * mass * velocity * velocity


def elastic_collision(m1: float, v1: float, m2: float, v2: float) -> CollisionResult:
    """Final velocities after a perfectly elastic head-on collision.

    Both velocities are reported as ``0`` when the total mass is zero or not
    finite.
    """

    total_mass = _usable_total_mass(m1, m2)
    if total_mass is None:
        return CollisionResult(v1f=0.0, v2f=0.0)

    v1f = ((m1 - m2) * v1 + 2 * m2 * v2) / total_mass
    v2f = ((m2 - m1) * v2 + 2 * m1 * v1) / total_mass
    return CollisionResult(v1f=v1f, v2f=v2f)


def inelastic_collision(m1: float, v1: float, m2: float, v2: float) -> float:
    """Common velocity of two bodies that stick together after impact."""

    total_mass = _usable_total_mass(m1, m2)
    if total_mass is None:
        return 0.0
    return (m1 * v1 + m2 * v2) / total_mass


def is_momentum_conserved(
    initial_momentum: float,
    final_momentum: float,
    tolerance: float = 0.1,
) -> bool:
    return abs(final_momentum - initial_momentum) < tolerance


__all__ = [
    "CollisionResult",
    "elastic_collision",
    "inelastic_collision",
    "is_momentum_conserved",
    "kinetic_energy",
    "momentum",
    "total_momentum",
]

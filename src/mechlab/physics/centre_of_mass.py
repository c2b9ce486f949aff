"""Centre of mass of two point masses on a line."""
from __future__ import annotations

import math


def centre_of_mass(m1: float, x1: float, m2: float, x2: float) -> float:
    """Mass-weighted mean position; ``0`` when the total mass is zero or not finite."""

    total_mass = m1 + m2
    if total_mass == 0 or not math.isfinite(total_mass):
        return 0.0
    return (m1 * x1 + m2 * x2) / total_mass


def is_balanced(
    m1: float,
    x1: float,
    m2: float,
    x2: float,
    pivot: float,
    tolerance: float = 1.0,
) -> bool:
    """Compare the turning effects of both masses about ``pivot``."""

    moment1 = m1 * abs(x1 - pivot)
    moment2 = m2 * abs(x2 - pivot)
    return abs(moment1 - moment2) < tolerance


__all__ = ["centre_of_mass", "is_balanced"]

"""Equations of uniformly accelerated motion."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class AreaBreakdown:
    """Decomposition of the area under a straight velocity-time line."""

    shape: str
    rectangle_area: float
    triangle_area: float
    total_area: float


def final_velocity(u: float, a: float, t: float) -> float:
    """Return ``v = u + at``."""

    return u + a * t


def displacement(u: float, a: float, t: float) -> float:
    """Return ``s = ut + at²/2``."""

    return u * t + 0.5 * a * t * t


def area_under_graph(u: float, v: float, t: float) -> float:
    """Trapezoid area under a linear v-t graph running from ``u`` to ``v``."""

    return 0.5 * (u + v) * t


def final_velocity_from_displacement(u: float, a: float, s: float) -> float:
    """Speed after covering ``s`` from ``v² = u² + 2as``.

    A negative ``v²`` means the body stops before reaching ``s``; the speed is
    reported as ``0`` in that case.
    """

    v_squared = u * u + 2 * a * s
    if v_squared >= 0:
        return math.sqrt(v_squared)
    return 0.0


def area_breakdown(u: float, v: float, t: float, tolerance: float = 0.01) -> AreaBreakdown:
    """Split the v-t area into the rectangle ``u·t`` and the triangle on top."""

    if u == 0:
        shape = "triangle"
    elif abs(v - u) < tolerance:
        shape = "rectangle"
    else:
        shape = "trapezoid"
    return AreaBreakdown(
        shape=shape,
        rectangle_area=u * t,
        triangle_area=0.5 * t * (v - u),
        total_area=area_under_graph(u, v, t),
    )


__all__ = [
    "AreaBreakdown",
    "area_breakdown",
    "area_under_graph",
    "displacement",
    "final_velocity",
    "final_velocity_from_displacement",
]

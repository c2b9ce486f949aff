"""Falling bodies with quadratic air resistance."""
from __future__ import annotations

import math

from mechlab.core.config import STANDARD_GRAVITY


def air_resistance(drag: float, velocity: float) -> float:
    """Drag force ``k·v²``; independent of the direction of motion."""

    return drag * velocity * velocity


def terminal_velocity(mass: float, drag: float, g: float = STANDARD_GRAVITY) -> float:
    """Speed at which drag balances weight, ``sqrt(m·g / k)``.

    Without drag (``k == 0`` or not finite) the speed is unbounded and
    ``inf`` is returned. A negative radicand, e.g. from a negative drag
    coefficient, gives ``nan``.
    """

    if drag == 0 or not math.isfinite(drag):
        return math.inf

    radicand = mass * g / drag
    if radicand < 0:
        return math.nan
    return math.sqrt(radicand)


def net_force_falling(
    mass: float,
    velocity: float,
    drag: float,
    g: float = STANDARD_GRAVITY,
) -> float:
    """Weight minus air resistance for a body falling at ``velocity``."""

    return mass * g - air_resistance(drag, velocity)


__all__ = ["air_resistance", "net_force_falling", "terminal_velocity"]

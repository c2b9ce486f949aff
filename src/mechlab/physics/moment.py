"""Moments (torques) about a pivot and the tilt of a loaded lever."""
from __future__ import annotations

import numpy as np


def moment(force: float, distance: float) -> float:
    """Turning effect ``F·d`` of a force at perpendicular distance ``d``."""

    return force * distance


def net_moment(anticlockwise_moment: float, clockwise_moment: float) -> float:
    return anticlockwise_moment - clockwise_moment


def are_moments_balanced(
    anticlockwise_moment: float,
    clockwise_moment: float,
    tolerance: float = 0.5,
) -> bool:
    return abs(anticlockwise_moment - clockwise_moment) < tolerance


def tilt_angle(net_moment: float, scale: float = 100.0) -> float:
    """Lever tilt in radians, ``atan(net_moment / scale)``.

    The division follows IEEE rules so a zero ``scale`` saturates at ±π/2.
    """

    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = np.divide(np.float64(net_moment), np.float64(scale))
    return float(np.arctan(ratio))


def rotation_direction(net_moment: float, tolerance: float = 0.5) -> str:
    """Which way an unbalanced lever turns: anticlockwise for a positive net moment."""

    if abs(net_moment) < tolerance:
        return "balanced"
    return "anticlockwise" if net_moment > 0 else "clockwise"


__all__ = [
    "are_moments_balanced",
    "moment",
    "net_moment",
    "rotation_direction",
    "tilt_angle",
]

"""Force composition and Newton's second law."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from mechlab.core.config import STANDARD_GRAVITY


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)


@dataclass(frozen=True)
class ResultantForce:
    """Vector sum of two forces; ``angle`` is in degrees from the +x axis."""

    magnitude: float
    angle: float
    components: Vector2


def force_components(magnitude: float, angle_degrees: float) -> Vector2:
    """Resolve a force into horizontal and vertical components.

    A non-finite angle has no direction; both components are ``nan``.
    """

    if not math.isfinite(angle_degrees):
        return Vector2(x=math.nan, y=math.nan)
    angle = math.radians(angle_degrees)
    return Vector2(x=magnitude * math.cos(angle), y=magnitude * math.sin(angle))


def resultant_from_angles(
    f1_mag: float,
    f1_angle: float,
    f2_mag: float,
    f2_angle: float,
) -> ResultantForce:
    """Add two forces given as magnitude and direction (degrees)."""

    total = force_components(f1_mag, f1_angle).as_array() + force_components(
        f2_mag, f2_angle
    ).as_array()
    rx, ry = float(total[0]), float(total[1])
    return ResultantForce(
        magnitude=math.sqrt(rx * rx + ry * ry),
        angle=math.degrees(math.atan2(ry, rx)),
        components=Vector2(x=rx, y=ry),
    )


def resultant_perpendicular(f1: float, f2: float) -> float:
    """Magnitude of two perpendicular forces."""

    return math.sqrt(f1 * f1 + f2 * f2)


def force_angle(f1: float, f2: float) -> float:
    """Direction of the resultant of horizontal ``f1`` and vertical ``f2``, in degrees."""

    return math.degrees(math.atan2(f2, f1))


def resultant_same_direction(f1: float, f2: float) -> float:
    return f1 + f2


def resultant_opposite_direction(f1: float, f2: float) -> float:
    return abs(f1 - f2)


def acceleration(force: float, mass: float) -> float:
    """Return ``F / m``, or ``0`` when the mass is zero or not finite."""

    if mass == 0 or not math.isfinite(mass):
        return 0.0
    return force / mass


def weight(mass: float, g: float = STANDARD_GRAVITY) -> float:
    return mass * g


__all__ = [
    "ResultantForce",
    "Vector2",
    "acceleration",
    "force_angle",
    "force_components",
    "resultant_from_angles",
    "resultant_opposite_direction",
    "resultant_perpendicular",
    "resultant_same_direction",
    "weight",
]

"""Closed-form mechanics formulas grouped by topic."""

from .motion import (
    AreaBreakdown,
    area_breakdown,
    area_under_graph,
    displacement,
    final_velocity,
    final_velocity_from_displacement,
)
from .force import (
    ResultantForce,
    Vector2,
    acceleration,
    force_angle,
    force_components,
    resultant_from_angles,
    resultant_opposite_direction,
    resultant_perpendicular,
    resultant_same_direction,
    weight,
)
from .momentum import (
    CollisionResult,
    elastic_collision,
    inelastic_collision,
    is_momentum_conserved,
    kinetic_energy,
    momentum,
    total_momentum,
)
from .terminal_velocity import (
    air_resistance,
    net_force_falling,
    terminal_velocity,
)
from .centre_of_mass import centre_of_mass, is_balanced
from .moment import (
    are_moments_balanced,
    moment,
    net_moment,
    rotation_direction,
    tilt_angle,
)

__all__ = [
    "AreaBreakdown",
    "CollisionResult",
    "ResultantForce",
    "Vector2",
    "acceleration",
    "air_resistance",
    "are_moments_balanced",
    "area_breakdown",
    "area_under_graph",
    "centre_of_mass",
    "displacement",
    "elastic_collision",
    "final_velocity",
    "final_velocity_from_displacement",
    "force_angle",
    "force_components",
    "inelastic_collision",
    "is_balanced",
    "is_momentum_conserved",
    "kinetic_energy",
    "moment",
    "momentum",
    "net_force_falling",
    "net_moment",
    "resultant_from_angles",
    "resultant_opposite_direction",
    "resultant_perpendicular",
    "resultant_same_direction",
    "rotation_direction",
    "terminal_velocity",
    "tilt_angle",
    "total_momentum",
    "weight",
]

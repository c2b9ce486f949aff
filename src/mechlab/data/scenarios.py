"""Preset starting values for each topic panel."""
from __future__ import annotations

from dataclasses import dataclass

TOPICS: tuple[str, ...] = (
    "motion",
    "force",
    "momentum",
    "terminal",
    "centre_of_mass",
    "moment",
)


@dataclass(frozen=True)
class Preset:
    topic: str
    key: str
    name: str
    values: tuple[tuple[str, float], ...]
    description: str

    def as_dict(self) -> dict[str, float]:
        return dict(self.values)


PRESET_DEFINITIONS: tuple[Preset, ...] = (
    Preset(
        topic="motion",
        key="default",
        name="From rest",
        values=(("initial_velocity", 0.0), ("acceleration", 2.0), ("time", 10.0)),
        description="Uniform acceleration from rest – the v-t area is a triangle.",
    ),
    Preset(
        topic="motion",
        key="cruise",
        name="Constant velocity",
        values=(("initial_velocity", 15.0), ("acceleration", 0.0), ("time", 10.0)),
        description="No acceleration – the v-t area is a rectangle.",
    ),
    Preset(
        topic="motion",
        key="braking",
        name="Braking",
        values=(("initial_velocity", 20.0), ("acceleration", -2.0), ("time", 5.0)),
        description="Decelerating car (20 m/s, -2 m/s² for 5 s covers 75 m).",
    ),
    Preset(
        topic="force",
        key="default",
        name="Two perpendicular forces",
        values=(("force1", 50.0), ("force2", 30.0), ("mass", 10.0)),
        description="50 N east and 30 N north acting on a 10 kg box.",
    ),
    Preset(
        topic="force",
        key="three_four_five",
        name="3-4-5 triangle",
        values=(("force1", 30.0), ("force2", 40.0), ("mass", 5.0)),
        description="Resultant of exactly 50 N at 53.13°.",
    ),
    Preset(
        topic="momentum",
        key="default",
        name="Head-on",
        values=(
            ("mass1", 5.0),
            ("velocity1", 8.0),
            ("mass2", 3.0),
            ("velocity2", -4.0),
            ("elastic", 1.0),
        ),
        description="Two trolleys approaching each other.",
    ),
    Preset(
        topic="momentum",
        key="newtons_cradle",
        name="Newton's cradle",
        values=(
            ("mass1", 5.0),
            ("velocity1", 10.0),
            ("mass2", 5.0),
            ("velocity2", 0.0),
            ("elastic", 1.0),
        ),
        description="Equal masses swap velocities in an elastic collision.",
    ),
    Preset(
        topic="momentum",
        key="car_crash",
        name="Car crash",
        values=(
            ("mass1", 1000.0),
            ("velocity1", 20.0),
            ("mass2", 800.0),
            ("velocity2", 0.0),
            ("elastic", 0.0),
        ),
        description="A 1000 kg car hits a parked 800 kg car and they lock together.",
    ),
    Preset(
        topic="terminal",
        key="default",
        name="Ball",
        values=(("mass", 2.0), ("drag", 0.1)),
        description="2 kg ball, terminal velocity 14 m/s.",
    ),
    Preset(
        topic="terminal",
        key="skydiver",
        name="Skydiver",
        values=(("mass", 80.0), ("drag", 0.25)),
        description="80 kg skydiver, terminal velocity 56 m/s.",
    ),
    Preset(
        topic="terminal",
        key="feather",
        name="Feather",
        values=(("mass", 0.05), ("drag", 0.05)),
        description="Light body that settles at a slow terminal velocity (about 3.1 m/s).",
    ),
    Preset(
        topic="centre_of_mass",
        key="default",
        name="Uneven rod",
        values=(("mass1", 5.0), ("position1", 100.0), ("mass2", 3.0), ("position2", 400.0)),
        description="Balance point at 212.5, closer to the heavier mass.",
    ),
    Preset(
        topic="centre_of_mass",
        key="equal",
        name="Equal masses",
        values=(("mass1", 5.0), ("position1", 100.0), ("mass2", 5.0), ("position2", 200.0)),
        description="Equal masses balance at the midpoint.",
    ),
    Preset(
        topic="moment",
        key="default",
        name="Balanced lever",
        values=(
            ("left_force", 30.0),
            ("left_distance", 2.0),
            ("right_force", 20.0),
            ("right_distance", 3.0),
        ),
        description="60 N·m each side – the principle of moments.",
    ),
    Preset(
        topic="moment",
        key="seesaw",
        name="Uneven seesaw",
        values=(
            ("left_force", 400.0),
            ("left_distance", 2.0),
            ("right_force", 600.0),
            ("right_distance", 1.0),
        ),
        description="Heavier child close to the pivot loses: net moment 200 N·m anticlockwise.",
    ),
)

DEFAULT_PRESET_KEY = "default"

PRESETS: dict[tuple[str, str], Preset] = {
    (preset.topic, preset.key): preset for preset in PRESET_DEFINITIONS
}


def presets_for(topic: str) -> list[Preset]:
    if topic not in TOPICS:
        raise ValueError(f"Unknown topic: {topic!r}")
    return [preset for preset in PRESET_DEFINITIONS if preset.topic == topic]


def get_preset(topic: str, key: str = DEFAULT_PRESET_KEY) -> Preset:
    if topic not in TOPICS:
        raise ValueError(f"Unknown topic: {topic!r}")
    try:
        return PRESETS[(topic, key)]
    except KeyError:
        raise KeyError(f"No preset {key!r} for topic {topic!r}") from None


__all__ = [
    "DEFAULT_PRESET_KEY",
    "PRESETS",
    "PRESET_DEFINITIONS",
    "TOPICS",
    "Preset",
    "get_preset",
    "presets_for",
]

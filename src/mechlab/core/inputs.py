"""Parsing of raw control values into per-topic numeric inputs.

Values arrive as strings or numbers (slider positions, text fields, command
line assignments). They are parsed once here; the calculation functions in
:mod:`mechlab.physics` never apply defaults of their own.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping, Union

from mechlab.data.scenarios import DEFAULT_PRESET_KEY, get_preset

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class MotionInputs:
    initial_velocity: float
    acceleration: float
    time: float


@dataclass(frozen=True)
class ForceInputs:
    force1: float
    force2: float
    mass: float


@dataclass(frozen=True)
class MomentumInputs:
    mass1: float
    velocity1: float
    mass2: float
    velocity2: float
    elastic: bool


@dataclass(frozen=True)
class FallInputs:
    mass: float
    drag: float


@dataclass(frozen=True)
class CentreOfMassInputs:
    mass1: float
    position1: float
    mass2: float
    position2: float


@dataclass(frozen=True)
class MomentInputs:
    left_force: float
    left_distance: float
    right_force: float
    right_distance: float


TopicInputs = Union[
    MotionInputs,
    ForceInputs,
    MomentumInputs,
    FallInputs,
    CentreOfMassInputs,
    MomentInputs,
]

INPUT_TYPES: dict[str, type] = {
    "motion": MotionInputs,
    "force": ForceInputs,
    "momentum": MomentumInputs,
    "terminal": FallInputs,
    "centre_of_mass": CentreOfMassInputs,
    "moment": MomentInputs,
}


def _is_blank(raw: object) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def parse_number(raw: object, default: float, *, name: str = "value") -> float:
    """Convert ``raw`` to ``float``; blank values fall back to ``default``."""

    if _is_blank(raw):
        return float(default)
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError:
            raise ValueError(f"{name}: expected a number, got {raw!r}") from None
    raise ValueError(f"{name}: unsupported value {raw!r}")


def parse_flag(raw: object, default: bool, *, name: str = "flag") -> bool:
    if _is_blank(raw):
        return bool(default)
    if isinstance(raw, (bool, int, float)):
        return bool(raw)
    if isinstance(raw, str):
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{name}: expected a yes/no value, got {raw!r}")


def parse_inputs(
    topic: str,
    raw: Mapping[str, object] | None = None,
    *,
    preset_key: str = DEFAULT_PRESET_KEY,
) -> TopicInputs:
    """Build the input struct for ``topic`` from ``raw`` control values.

    Missing fields take their value from the preset ``preset_key``.
    """

    try:
        input_type = INPUT_TYPES[topic]
    except KeyError:
        raise ValueError(f"Unknown topic: {topic!r}") from None

    raw = dict(raw or {})
    defaults = get_preset(topic, preset_key).as_dict()
    known = {field.name for field in fields(input_type)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(
            f"Unknown {topic} input(s): {', '.join(unknown)} "
            f"(expected {', '.join(sorted(known))})"
        )

    values: dict[str, object] = {}
    for field in fields(input_type):
        default = defaults[field.name]
        value = raw.get(field.name)
        if field.type in ("bool", bool):
            values[field.name] = parse_flag(value, bool(default), name=field.name)
        else:
            values[field.name] = parse_number(value, default, name=field.name)
    return input_type(**values)


__all__ = [
    "INPUT_TYPES",
    "CentreOfMassInputs",
    "FallInputs",
    "ForceInputs",
    "MomentInputs",
    "MomentumInputs",
    "MotionInputs",
    "TopicInputs",
    "parse_flag",
    "parse_inputs",
    "parse_number",
]

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple


WIND_DIRECTIONS: Tuple[str, ...] = ("0", "45", "90", "135", "180", "225", "270", "315")

SHOT_DEFAULTS: Dict[str, float] = {
    "bullet_weight": 147.0,
    "muzzle_velocity": 900.0,
    "ballistic_coefficient": 0.168,
    "wind_speed": 0.0,
    "temperature": 59.0,
    "humidity": 50.0,
    "barometric_pressure": 29.92,
}

# (minimum, maximum, unit) per numeric field, inclusive on both ends.
SHOT_LIMITS: Dict[str, Tuple[float, float, str]] = {
    "distance": (0.0, 2000.0, "yd"),
    "bullet_weight": (1.0, 1000.0, "gr"),
    "muzzle_velocity": (300.0, 5000.0, "fps"),
    "ballistic_coefficient": (0.01, 1.0, ""),
    "wind_speed": (0.0, 100.0, "mph"),
    "temperature": (-40.0, 140.0, "°F"),
    "humidity": (0.0, 100.0, "%"),
    "barometric_pressure": (20.0, 35.0, "inHg"),
}


@dataclass(frozen=True)
class ShotParameters:
    distance: float
    bullet_weight: float
    muzzle_velocity: float
    ballistic_coefficient: float
    wind_speed: float
    wind_direction: Optional[str]
    temperature: float
    humidity: float
    barometric_pressure: float


@dataclass(frozen=True)
class ValidationIssue:
    """A single violated constraint on a shot parameter."""

    field: str
    message: str


class ShotValidationError(ValueError):
    """Raised when shot parameters fall outside their accepted ranges."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{i.field}: {i.message}" for i in self.issues)
        super().__init__(f"Invalid shot parameters ({summary})")


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def _with_defaults(raw: Mapping[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(SHOT_DEFAULTS)
    for key, value in raw.items():
        if value is not None:
            merged[key] = value
    return merged


def validate_shot(raw: Mapping[str, Any]) -> List[ValidationIssue]:
    """Check raw shot fields (defaults applied) against ``SHOT_LIMITS``.

    Returns an empty list when everything is in range.
    """
    values = _with_defaults(raw)
    issues: List[ValidationIssue] = []

    for name, (low, high, unit) in SHOT_LIMITS.items():
        if name not in values:
            issues.append(ValidationIssue(field=name, message="Field required"))
            continue
        number = _as_float(values[name])
        if number is None:
            issues.append(ValidationIssue(field=name, message="Must be a finite number"))
        elif not low <= number <= high:
            suffix = f" {unit}" if unit else ""
            issues.append(
                ValidationIssue(field=name, message=f"Must be between {low:g} and {high:g}{suffix}")
            )

    direction = values.get("wind_direction")
    if direction is not None and str(direction) not in WIND_DIRECTIONS:
        issues.append(
            ValidationIssue(
                field="wind_direction",
                message=f"Must be one of {', '.join(WIND_DIRECTIONS)}",
            )
        )
    return issues


def normalize_shot(raw: Mapping[str, Any]) -> ShotParameters:
    """Apply standard defaults to missing fields and return validated parameters.

    Out-of-range values are rejected with :class:`ShotValidationError`, never clamped.
    """
    issues = validate_shot(raw)
    if issues:
        raise ShotValidationError(issues)

    values = _with_defaults(raw)
    direction = values.get("wind_direction")
    return ShotParameters(
        distance=float(values["distance"]),
        bullet_weight=float(values["bullet_weight"]),
        muzzle_velocity=float(values["muzzle_velocity"]),
        ballistic_coefficient=float(values["ballistic_coefficient"]),
        wind_speed=float(values["wind_speed"]),
        wind_direction=None if direction is None else str(direction),
        temperature=float(values["temperature"]),
        humidity=float(values["humidity"]),
        barometric_pressure=float(values["barometric_pressure"]),
    )

"""Trajectory calculation strategies.

Two approximations share one interface (``Strategy``):

- ``siacci_solution``: the primary model served by the API. Density-corrected
  ballistic coefficient, reduced Siacci-style velocity decay, average-velocity
  time of flight and lag-time wind drift.
- ``offline_solution``: the cruder approximation callers use when the API is
  unreachable. Exponential velocity decay and a linear time-of-flight drop model.

Both take validated :class:`ShotParameters` and return a rounded
:class:`TrajectoryResult`. Neither performs I/O nor keeps state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Optional

from ballistics.params import ShotParameters


STANDARD_TEMPERATURE_F = 59.0
STANDARD_PRESSURE_INHG = 29.92
RANKINE_OFFSET = 459.67
GRAVITY_IN_S2 = 386.09
ENERGY_DIVISOR = 450240.0  # grains * fps^2 -> ft-lbs
MPH_TO_IN_S = 17.6
FEET_PER_YARD = 3.0
CROSSWIND_ANGLE_DEG = 90.0


@dataclass(frozen=True)
class TrajectoryResult:
    distance: float
    drop_inches: float
    wind_drift_inches: float
    time_of_flight: float
    velocity_at_distance: float
    energy_at_muzzle: float
    energy_at_distance: float
    velocity_retention: float
    bullet_weight: float
    muzzle_velocity: float
    ballistic_coefficient: float


@dataclass(frozen=True)
class TrajectoryPoint:
    distance: float
    drop: float
    velocity: float
    energy: float
    wind_drift: Optional[float] = None


Strategy = Callable[[ShotParameters], TrajectoryResult]


def round_half_up(value: float, ndigits: int = 0) -> float:
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def air_density_ratio(temperature: float, pressure: float, humidity: float) -> float:
    """Air density relative to standard conditions (59°F, 29.92 inHg)."""
    temp_factor = (STANDARD_TEMPERATURE_F + RANKINE_OFFSET) / (temperature + RANKINE_OFFSET)
    pressure_factor = pressure / STANDARD_PRESSURE_INHG
    humidity_factor = 1 - humidity * 0.0002
    return pressure_factor * temp_factor * humidity_factor


def kinetic_energy(bullet_weight: float, velocity: float) -> float:
    return bullet_weight * velocity ** 2 / ENERGY_DIVISOR


def _build_result(
    shot: ShotParameters,
    *,
    velocity: float,
    time_of_flight: float,
    drop: float,
    wind_drift: float,
) -> TrajectoryResult:
    return TrajectoryResult(
        distance=shot.distance,
        drop_inches=round_half_up(drop, 2),
        wind_drift_inches=round_half_up(wind_drift, 2),
        time_of_flight=round_half_up(time_of_flight, 3),
        velocity_at_distance=round_half_up(velocity),
        energy_at_muzzle=round_half_up(kinetic_energy(shot.bullet_weight, shot.muzzle_velocity)),
        energy_at_distance=round_half_up(kinetic_energy(shot.bullet_weight, velocity)),
        velocity_retention=round_half_up(velocity / shot.muzzle_velocity * 100),
        bullet_weight=shot.bullet_weight,
        muzzle_velocity=round_half_up(shot.muzzle_velocity),
        ballistic_coefficient=shot.ballistic_coefficient,
    )


def siacci_solution(shot: ShotParameters) -> TrajectoryResult:
    mv = shot.muzzle_velocity
    density = air_density_ratio(shot.temperature, shot.barometric_pressure, shot.humidity)
    adjusted_bc = shot.ballistic_coefficient / density

    retard_coeff = 1 / (adjusted_bc * 1000)
    velocity = mv / (1 + retard_coeff * shot.distance)

    avg_velocity = (mv + velocity) / 2
    distance_feet = shot.distance * FEET_PER_YARD
    time_of_flight = distance_feet / avg_velocity

    drop = 0.5 * GRAVITY_IN_S2 * time_of_flight ** 2

    # Full-value crosswind; wind_direction is not applied.
    crosswind = shot.wind_speed * math.sin(math.radians(CROSSWIND_ANGLE_DEG))
    lag_time = time_of_flight - distance_feet / mv
    wind_drift = crosswind * MPH_TO_IN_S * lag_time

    return _build_result(
        shot,
        velocity=velocity,
        time_of_flight=time_of_flight,
        drop=drop,
        wind_drift=wind_drift,
    )


def offline_solution(shot: ShotParameters) -> TrajectoryResult:
    mv = shot.muzzle_velocity
    decay_rate = 1 - shot.ballistic_coefficient * 0.001
    velocity = mv * decay_rate ** (shot.distance / 100)

    time_of_flight = shot.distance * FEET_PER_YARD / mv
    drop = 0.5 * GRAVITY_IN_S2 * time_of_flight ** 2
    wind_drift = shot.wind_speed * time_of_flight * 1.5

    return _build_result(
        shot,
        velocity=velocity,
        time_of_flight=time_of_flight,
        drop=drop,
        wind_drift=wind_drift,
    )


STRATEGIES: Dict[str, Strategy] = {
    "siacci": siacci_solution,
    "offline": offline_solution,
}
DEFAULT_STRATEGY = "siacci"


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown strategy {name!r}; expected one of {', '.join(STRATEGIES)}") from None


def calculate(shot: ShotParameters, strategy: str = DEFAULT_STRATEGY) -> TrajectoryResult:
    return get_strategy(strategy)(shot)

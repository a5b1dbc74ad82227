from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ballistics.params import SHOT_LIMITS


WindDirection = Literal["0", "45", "90", "135", "180", "225", "270", "315"]


def _bounded(name: str) -> Any:
    low, high, _unit = SHOT_LIMITS[name]
    return Annotated[float, Field(ge=low, le=high, strict=True)]


DistanceYd = _bounded("distance")
BulletWeight = _bounded("bullet_weight")
MuzzleVelocity = _bounded("muzzle_velocity")
BallisticCoefficient = _bounded("ballistic_coefficient")
WindSpeed = _bounded("wind_speed")
Temperature = _bounded("temperature")
Humidity = _bounded("humidity")
BarometricPressure = _bounded("barometric_pressure")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShotParametersModel(CamelModel):
    """Request body for a shot. Omitted optional fields take the standard defaults."""

    distance: DistanceYd
    bullet_weight: Optional[BulletWeight] = None
    muzzle_velocity: Optional[MuzzleVelocity] = None
    ballistic_coefficient: Optional[BallisticCoefficient] = None
    wind_speed: Optional[WindSpeed] = None
    wind_direction: Optional[WindDirection] = None
    temperature: Optional[Temperature] = None
    humidity: Optional[Humidity] = None
    barometric_pressure: Optional[BarometricPressure] = None


class TrajectoryResultModel(CamelModel):
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


class TrajectoryPointModel(CamelModel):
    distance: float
    drop: float
    velocity: float
    energy: float
    wind_drift: Optional[float] = None


class ErrorDetail(BaseModel):
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: Optional[List[ErrorDetail]] = None


class PresetModel(CamelModel):
    id: str
    name: str
    caliber: str
    bullet_weight: float
    muzzle_velocity: float
    ballistic_coefficient: float


class DefaultsResponse(CamelModel):
    defaults: Dict[str, float]
    limits: Dict[str, Dict[str, Any]]
    wind_directions: List[str]

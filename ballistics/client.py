"""HTTP client for the calculate endpoint with a local offline fallback.

When the API cannot be reached, answers with an HTTP error, returns something
that is not JSON, or reports ``success: false``, the shot is solved locally
with :func:`ballistics.calculator.offline_solution` instead of failing.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ballistics.calculator import DEFAULT_STRATEGY, TrajectoryPoint, TrajectoryResult, offline_solution
from ballistics.config import API_BASE_URL, API_TIMEOUT_S, CALCULATE_PATH
from ballistics.params import ShotParameters, normalize_shot
from ballistics.trajectory import sample_trajectory

logger = logging.getLogger(__name__)

SOURCE_SERVER = "server"
SOURCE_OFFLINE = "offline"

# snake_case field -> camelCase wire name
_WIRE_NAMES = {
    "distance": "distance",
    "bullet_weight": "bulletWeight",
    "muzzle_velocity": "muzzleVelocity",
    "ballistic_coefficient": "ballisticCoefficient",
    "wind_speed": "windSpeed",
    "wind_direction": "windDirection",
    "temperature": "temperature",
    "humidity": "humidity",
    "barometric_pressure": "barometricPressure",
    "drop_inches": "dropInches",
    "wind_drift_inches": "windDriftInches",
    "time_of_flight": "timeOfFlight",
    "velocity_at_distance": "velocityAtDistance",
    "energy_at_muzzle": "energyAtMuzzle",
    "energy_at_distance": "energyAtDistance",
    "velocity_retention": "velocityRetention",
}


class TransportError(RuntimeError):
    """The calculate endpoint could not produce a usable answer."""


@dataclass(frozen=True)
class Solution:
    result: TrajectoryResult
    source: str
    points: List[TrajectoryPoint] = field(default_factory=list)

    @property
    def is_offline(self) -> bool:
        return self.source == SOURCE_OFFLINE


def shot_to_wire(shot: ShotParameters) -> Dict[str, Any]:
    payload = {_WIRE_NAMES[k]: v for k, v in asdict(shot).items()}
    if payload.get("windDirection") is None:
        payload.pop("windDirection", None)
    return payload


def result_from_wire(data: Mapping[str, Any]) -> TrajectoryResult:
    try:
        return TrajectoryResult(**{name: float(data[_WIRE_NAMES.get(name, name)]) for name in TrajectoryResult.__dataclass_fields__})
    except (KeyError, TypeError, ValueError) as exc:
        raise TransportError(f"malformed trajectory payload: {exc}") from exc


def request_solution(
    shot: ShotParameters,
    *,
    base_url: str = API_BASE_URL,
    timeout: float = API_TIMEOUT_S,
) -> TrajectoryResult:
    """POST the shot to the API and decode the result, raising :class:`TransportError` on any failure."""
    body = json.dumps(shot_to_wire(shot)).encode("utf-8")
    req = Request(
        f"{base_url.rstrip('/')}{CALCULATE_PATH}",
        data=body,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urlopen(req, timeout=timeout) as response:
            payload = json.loads(response.read().decode("utf-8"))
    except HTTPError as exc:
        raise TransportError(f"server responded with status {exc.code}") from exc
    except (URLError, OSError) as exc:
        raise TransportError(str(exc)) from exc
    except ValueError as exc:
        raise TransportError(f"response was not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or not payload.get("success"):
        error = payload.get("error") if isinstance(payload, dict) else None
        raise TransportError(error or "server reported an unsuccessful calculation")
    return result_from_wire(payload.get("data") or {})


def solve(
    raw: Mapping[str, Any],
    *,
    base_url: str = API_BASE_URL,
    timeout: float = API_TIMEOUT_S,
    samples: Optional[int] = None,
) -> Solution:
    """Solve a shot through the API, falling back to the offline approximation.

    ``raw`` uses snake_case field names; missing fields take the standard defaults.
    Invalid input raises :class:`ballistics.params.ShotValidationError` before any request.
    """
    shot = normalize_shot(raw)
    sample_kwargs = {} if samples is None else {"samples": samples}
    try:
        result = request_solution(shot, base_url=base_url, timeout=timeout)
    except TransportError as exc:
        logger.warning("Ballistics API unavailable (%s); using offline approximation", exc)
        return Solution(
            result=offline_solution(shot),
            source=SOURCE_OFFLINE,
            points=sample_trajectory(shot, strategy="offline", **sample_kwargs),
        )
    return Solution(
        result=result,
        source=SOURCE_SERVER,
        points=sample_trajectory(shot, strategy=DEFAULT_STRATEGY, **sample_kwargs),
    )

from __future__ import annotations

from dataclasses import asdict, replace
from typing import Any, Dict, List

import numpy as np

from ballistics.calculator import DEFAULT_STRATEGY, TrajectoryPoint, get_strategy
from ballistics.charts import trajectory_charts
from ballistics.config import MIN_SAMPLE_STEP_YD, TRAJECTORY_SAMPLES
from ballistics.params import ShotParameters


def sample_distances(distance: float, samples: int = TRAJECTORY_SAMPLES) -> List[float]:
    """Evenly spaced ranges from the muzzle out to ``distance`` (inclusive).

    The step is ``distance / samples`` but never shorter than ``MIN_SAMPLE_STEP_YD``;
    the target distance is always the last entry.
    """
    distance = float(distance)
    if distance <= 0:
        return [0.0]
    step = max(distance / max(1, int(samples)), MIN_SAMPLE_STEP_YD)
    count = int(np.floor(distance / step + 1e-9))
    grid = [float(d) for d in np.round(np.arange(count + 1) * step, 6)]
    if distance - grid[-1] > 1e-6:
        grid.append(distance)
    else:
        grid[-1] = distance
    return grid


def sample_trajectory(
    shot: ShotParameters,
    strategy: str = DEFAULT_STRATEGY,
    samples: int = TRAJECTORY_SAMPLES,
) -> List[TrajectoryPoint]:
    solve = get_strategy(strategy)
    points: List[TrajectoryPoint] = []
    for d in sample_distances(shot.distance, samples):
        res = solve(replace(shot, distance=d))
        points.append(
            TrajectoryPoint(
                distance=d,
                drop=-res.drop_inches if res.drop_inches else 0.0,
                velocity=res.velocity_at_distance,
                energy=res.energy_at_distance,
                wind_drift=res.wind_drift_inches if shot.wind_speed > 0 else None,
            )
        )
    return points


def compute_trajectory(
    shot: ShotParameters,
    *,
    strategy: str = DEFAULT_STRATEGY,
    samples: int = TRAJECTORY_SAMPLES,
) -> Dict[str, Any]:
    solve = get_strategy(strategy)
    result = solve(shot)
    points = sample_trajectory(shot, strategy=strategy, samples=samples)
    return {
        "shot": asdict(shot),
        "strategy": strategy,
        "result": asdict(result),
        "points": [asdict(p) for p in points],
        "charts": trajectory_charts(points),
    }

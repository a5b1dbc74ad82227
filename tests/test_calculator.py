"""Tests for the trajectory calculation strategies."""

from __future__ import annotations

import math
from dataclasses import asdict, replace

import pytest

from ballistics.calculator import (
    STRATEGIES,
    air_density_ratio,
    calculate,
    get_strategy,
    offline_solution,
    round_half_up,
    siacci_solution,
)
from ballistics.params import normalize_shot


def standard_shot(**overrides):
    raw = {
        "bullet_weight": 147,
        "muzzle_velocity": 900,
        "ballistic_coefficient": 0.168,
        "distance": 100,
        "wind_speed": 0,
        "temperature": 59,
        "humidity": 50,
        "barometric_pressure": 29.92,
    }
    raw.update(overrides)
    return normalize_shot(raw)


def test_air_density_ratio_at_standard_conditions():
    assert air_density_ratio(59, 29.92, 0) == pytest.approx(1.0)
    assert air_density_ratio(59, 29.92, 50) == pytest.approx(0.99)


def test_air_density_ratio_follows_temperature_and_pressure():
    assert air_density_ratio(20, 29.92, 50) > air_density_ratio(59, 29.92, 50)
    assert air_density_ratio(59, 25.0, 50) < air_density_ratio(59, 29.92, 50)


def test_siacci_standard_scenario():
    result = siacci_solution(standard_shot())
    assert 0 < result.velocity_at_distance < 900
    assert result.velocity_at_distance == 566
    assert result.time_of_flight == pytest.approx(0.409, abs=0.001)
    assert result.drop_inches == pytest.approx(32.32, abs=0.05)
    assert result.drop_inches > 0
    assert result.wind_drift_inches == 0
    assert result.bullet_weight == 147
    assert result.muzzle_velocity == 900
    assert result.ballistic_coefficient == 0.168


@pytest.mark.parametrize("solve", [siacci_solution, offline_solution])
def test_zero_distance(solve):
    result = solve(standard_shot(distance=0))
    assert result.drop_inches == 0
    assert result.time_of_flight == 0
    assert result.wind_drift_inches == 0
    assert result.velocity_at_distance == 900
    assert result.velocity_retention == 100
    assert result.energy_at_distance == result.energy_at_muzzle


@pytest.mark.parametrize("solve", [siacci_solution, offline_solution])
def test_muzzle_energy_closed_form(solve):
    shot = standard_shot(bullet_weight=168, muzzle_velocity=2650)
    result = solve(shot)
    assert result.energy_at_muzzle == round_half_up(168 * 2650 ** 2 / 450240)
    assert result.energy_at_muzzle == 2620


@pytest.mark.parametrize("solve", [siacci_solution, offline_solution])
def test_velocity_decays_and_drop_grows_with_distance(solve):
    shot = standard_shot(muzzle_velocity=2650, ballistic_coefficient=0.462)
    results = [solve(replace(shot, distance=d)) for d in range(0, 2001, 100)]
    for nearer, farther in zip(results, results[1:]):
        assert farther.velocity_at_distance <= nearer.velocity_at_distance
        assert farther.drop_inches >= nearer.drop_inches
        assert farther.time_of_flight >= nearer.time_of_flight
    for res in results:
        assert 0 < res.velocity_at_distance <= 2650
        assert 0 < res.velocity_retention <= 100


@pytest.mark.parametrize("solve", [siacci_solution, offline_solution])
def test_extreme_boundary_stays_finite(solve):
    result = solve(standard_shot(distance=2000, ballistic_coefficient=0.01))
    for value in asdict(result).values():
        assert math.isfinite(value)
    assert result.velocity_at_distance > 0


def test_siacci_wind_drift_uses_lag_time():
    shot = standard_shot(wind_speed=10)
    result = siacci_solution(shot)
    velocity = 900 / (1 + 300 * 0.99 / (0.168 * 1000) / 3)
    tof = 300 / ((900 + velocity) / 2)
    expected = 10 * 17.6 * (tof - 300 / 900)
    assert result.wind_drift_inches == pytest.approx(expected, abs=0.01)


def test_siacci_ignores_wind_direction():
    base = siacci_solution(standard_shot(wind_speed=10))
    for direction in ("0", "90", "180", "270"):
        assert siacci_solution(standard_shot(wind_speed=10, wind_direction=direction)) == base


def test_offline_is_a_distinct_approximation():
    shot = standard_shot(distance=300)
    offline = offline_solution(shot)
    assert offline != siacci_solution(shot)
    assert offline.velocity_at_distance == round_half_up(900 * (1 - 0.168 * 0.001) ** 3)
    assert offline.time_of_flight == 1.0
    assert offline.drop_inches == pytest.approx(0.5 * 386.09, abs=0.01)


def test_offline_wind_drift():
    result = offline_solution(standard_shot(distance=300, wind_speed=10))
    assert result.wind_drift_inches == 15.0


def test_calculation_is_deterministic():
    shot = standard_shot(distance=437, wind_speed=7, temperature=31, humidity=80)
    assert siacci_solution(shot) == siacci_solution(shot)
    assert offline_solution(shot) == offline_solution(shot)


def test_strategy_registry():
    assert set(STRATEGIES) == {"siacci", "offline"}
    assert get_strategy("offline") is offline_solution
    assert calculate(standard_shot()) == siacci_solution(standard_shot())
    with pytest.raises(ValueError):
        get_strategy("g7")


def test_round_half_up():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(1.0005, 3) == 1.001


@pytest.mark.parametrize("solve", [siacci_solution, offline_solution])
@pytest.mark.parametrize("muzzle_velocity", [900.6, 1150.5, 2649.5])
def test_fractional_muzzle_velocity_never_exceeded(solve, muzzle_velocity):
    for distance in (0, 1, 100):
        result = solve(standard_shot(distance=distance, muzzle_velocity=muzzle_velocity))
        assert result.velocity_at_distance <= result.muzzle_velocity
        assert result.muzzle_velocity == round_half_up(muzzle_velocity)
    at_muzzle = solve(standard_shot(distance=0, muzzle_velocity=muzzle_velocity))
    assert at_muzzle.velocity_at_distance == at_muzzle.muzzle_velocity
    assert at_muzzle.velocity_retention == 100

"""Tests for ammunition presets."""

from __future__ import annotations

import pytest

from ballistics.calculator import siacci_solution
from ballistics.params import normalize_shot
from ballistics.presets import AMMO_PRESETS, get_preset, list_presets


def test_preset_ids_are_unique():
    ids = [p.id for p in AMMO_PRESETS]
    assert len(ids) == len(set(ids)) == 6


def test_get_preset():
    preset = get_preset("308win")
    assert preset.name == ".308 Win 168gr Match"
    assert preset.ballistic_coefficient == 0.462
    with pytest.raises(KeyError):
        get_preset("7mm-rem-mag")


@pytest.mark.parametrize("preset", AMMO_PRESETS, ids=lambda p: p.id)
def test_every_preset_solves_at_long_range(preset):
    shot = normalize_shot({**preset.shot_fields(), "distance": 1000})
    result = siacci_solution(shot)
    assert result.muzzle_velocity == preset.muzzle_velocity
    assert 0 < result.velocity_at_distance < preset.muzzle_velocity


def test_list_presets_is_serializable():
    first = list_presets()[0]
    assert first == {
        "id": "9mm-fmj",
        "name": "9mm 115gr FMJ",
        "caliber": "9mm",
        "bullet_weight": 115,
        "muzzle_velocity": 1150,
        "ballistic_coefficient": 0.145,
    }

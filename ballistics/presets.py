"""Common factory ammunition loads offered as starting points for a shot."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class AmmoPreset:
    id: str
    name: str
    caliber: str
    bullet_weight: float  # grains
    muzzle_velocity: float  # fps
    ballistic_coefficient: float

    def shot_fields(self) -> Dict[str, float]:
        """Fields to merge into a raw shot payload before normalization."""
        return {
            "bullet_weight": self.bullet_weight,
            "muzzle_velocity": self.muzzle_velocity,
            "ballistic_coefficient": self.ballistic_coefficient,
        }


AMMO_PRESETS: List[AmmoPreset] = [
    AmmoPreset("9mm-fmj", "9mm 115gr FMJ", "9mm", 115, 1150, 0.145),
    AmmoPreset("9mm-hp", "9mm 147gr JHP", "9mm", 147, 990, 0.168),
    AmmoPreset("45acp", ".45 ACP 230gr FMJ", ".45 ACP", 230, 830, 0.195),
    AmmoPreset("556nato", "5.56 NATO 55gr M193", "5.56x45mm", 55, 3165, 0.243),
    AmmoPreset("308win", ".308 Win 168gr Match", ".308 Win", 168, 2650, 0.462),
    AmmoPreset("300blk-sub", ".300 BLK 220gr Subsonic", ".300 BLK", 220, 1010, 0.297),
]

_BY_ID: Dict[str, AmmoPreset] = {p.id: p for p in AMMO_PRESETS}


def get_preset(preset_id: str) -> AmmoPreset:
    try:
        return _BY_ID[preset_id]
    except KeyError:
        raise KeyError(f"Unknown ammunition preset {preset_id!r}") from None


def list_presets() -> List[Dict[str, Any]]:
    return [asdict(p) for p in AMMO_PRESETS]

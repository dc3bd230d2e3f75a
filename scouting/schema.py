from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

import pandas as pd

from constants import DEDUP_KEY_FIELDS


class Alliance(str, Enum):
    RED = "Red"
    BLUE = "Blue"

    def serialize(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: object) -> "Alliance":
        if isinstance(raw, cls):
            return raw
        if raw is None:
            raise ValueError("alliance is missing")

        token = str(raw).strip()
        if not token:
            raise ValueError("alliance is empty")

        if token.startswith("Alliance."):
            token = token.split(".", 1)[1]

        member = cls.__members__.get(token.upper())
        if member is not None:
            return member

        try:
            return cls(token.title())
        except ValueError as exc:
            raise ValueError(f"unknown alliance: {raw}") from exc


@dataclass(frozen=True)
class TableContract:
    name: str
    columns: Mapping[str, str]

    def empty(self) -> pd.DataFrame:
        return pd.DataFrame({col: pd.Series(dtype=dtype) for col, dtype in self.columns.items()})

    def conform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Canonical columns first (added as NA when missing), extras after."""
        out = df.copy()
        for col in self.columns:
            if col not in out.columns:
                out[col] = pd.NA
        extras = [col for col in out.columns if col not in self.columns]
        return out[list(self.columns) + extras]


# Records are stored as loosely typed JSON, so only the intake-owned
# attribution columns carry a concrete dtype.
MATCH_RECORD_CONTRACT = TableContract(
    name="match_record",
    columns={
        "teamNumber": "object",
        "matchNumber": "object",
        "alliance": "object",
        "position": "object",
        "autoFuelScored": "object",
        "autoCycleTime": "object",
        "autoTowerClimb": "object",
        "chassisType": "object",
        "teleopFuelScored": "object",
        "teleopCycleTime": "object",
        "teleopFuelRate": "object",
        "fuelCapacity": "object",
        "shooterMechanism": "object",
        "hoodAdjustable": "object",
        "climb": "object",
        "defense": "object",
        "notes": "object",
        "scoutTeam": "string",
        "timestamp": "string",
    },
)


def freeze_record(record: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only view over a private copy of *record*."""
    return MappingProxyType(dict(record))


def _key_part(value: object) -> object:
    # Exact-value identity: True must not collide with 1, nested JSON must hash.
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (list, dict)):
        return ("json", json.dumps(value, sort_keys=True))
    return value


def record_key(record: Mapping[str, Any]) -> tuple:
    """Composite identity used to detect duplicate observations on import."""
    return tuple(_key_part(record.get(field)) for field in DEDUP_KEY_FIELDS)


def _parse_int(raw: object) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        try:
            return int(float(str(raw).strip()))
        except (ValueError, OverflowError):
            return None


def _parse_float(raw: object) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _text(raw: object) -> str:
    return "" if raw is None else str(raw).strip()


def build_observation(
    *,
    team_number: object,
    match_number: object,
    alliance: object,
    position: object,
    auto_fuel_scored: object,
    auto_cycle_time: object = None,
    auto_tower_climb: object = "0",
    chassis_type: object = "",
    teleop_fuel_scored: object = 0,
    teleop_cycle_time: object = None,
    teleop_fuel_rate: object = None,
    fuel_capacity: object = 0,
    shooter_mechanism: object = "",
    hood_adjustable: object = "",
    climb: object = "0",
    defense: object = "1",
    notes: object = "",
) -> dict[str, Any]:
    """Convert raw form input into the observation intake shape.

    Counts, capacity and team number are integer-parsed, times and rate are
    float-parsed (unparseable -> None), climb levels and defense stay as the
    selected option text. Aggregation re-coerces everything later.
    """
    return {
        "teamNumber": _parse_int(team_number),
        "matchNumber": _text(match_number),
        "alliance": Alliance.parse(alliance).serialize(),
        "position": _text(position),
        "autoFuelScored": _parse_int(auto_fuel_scored),
        "autoCycleTime": _parse_float(auto_cycle_time),
        "autoTowerClimb": _text(auto_tower_climb),
        "chassisType": _text(chassis_type),
        "teleopFuelScored": _parse_int(teleop_fuel_scored),
        "teleopCycleTime": _parse_float(teleop_cycle_time),
        "teleopFuelRate": _parse_float(teleop_fuel_rate),
        "fuelCapacity": _parse_int(fuel_capacity),
        "shooterMechanism": _text(shooter_mechanism),
        "hoodAdjustable": _text(hood_adjustable),
        "climb": _text(climb),
        "defense": _text(defense),
        "notes": _text(notes),
    }

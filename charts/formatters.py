"""Centralized display formatting for scouting metrics."""

from __future__ import annotations

import re
from typing import Any, Mapping

import pandas as pd

from scouting.team_stats import display_precision
from utils import format_fixed

# Display metric -> unit suffix shown next to the value
_UNIT_SUFFIX = {
    "avgAutoCycleTime": "s",
    "avgTeleopCycleTime": "s",
    "avgTeleopFuelRate": "/s",
    "avgDefense": "/5",
}


def title_case_label(label: str) -> str:
    """Split camelCase metric keys into title-cased words ("avgTeleopFuel" -> "Avg Teleop Fuel")."""
    if not label:
        return ""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", str(label).replace("_", " ")).strip()
    return " ".join(token[:1].upper() + token[1:] for token in spaced.split())


def unit_suffix(metric_name: str) -> str:
    return _UNIT_SUFFIX.get(metric_name, "")


def format_metric_value(value: Any, metric_name: str, include_unit: bool = True) -> str:
    numeric = pd.to_numeric(pd.Series([value]), errors="coerce").iloc[0]
    if pd.isna(numeric):
        return "N/A"

    text = format_fixed(float(numeric), display_precision(metric_name))
    if include_unit:
        return text + unit_suffix(metric_name)
    return text


def match_summary_lines(record: Mapping[str, Any]) -> list[str]:
    """Plain-text lines describing one observation for match history lists."""
    return [
        f"Auto: {record.get('autoFuelScored')} fuel ({record.get('autoCycleTime') or 0}s), Climb {record.get('autoTowerClimb')}",
        f"Teleop: {record.get('teleopFuelScored')} fuel ({record.get('teleopCycleTime') or 0}s, {record.get('teleopFuelRate') or 0}/s)",
        f"{record.get('chassisType')} Chassis, Cap {record.get('fuelCapacity')}, Shooter: {record.get('shooterMechanism')}",
        f"Endgame Climb: {record.get('climb')}",
        f"Defense: {record.get('defense')}/5",
    ]

"""Per-team statistics derived from match records.

Means
-----
Every numeric field is read through one coercion helper per field type
(``utils.to_count_or_zero``, ``to_rate_or_zero``, ``to_level_or_zero``), so a
missing or unparseable value contributes 0 to the sum and the team's mean
stays defined. Means keep full precision; rounding only happens in
:meth:`TeamStatistics.display`.

Points
------
``points = autoFuel * 1 + autoTowerClimb * 3 + teleopFuel * 1 + climb * 5``
per match, averaged over the team's matches.

Categoricals
------------
Frequencies count present, non-blank labels in first-seen order. The primary
label has the strictly greatest count; on a tie the label seen first wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import pandas as pd

from constants import (
    AUTO_CLIMB_POINTS,
    AUTO_FUEL_POINTS,
    AVERAGE_METRICS,
    CATEGORICAL_FIELDS,
    COUNT_FIELDS,
    DEFAULT_PRECISION,
    ENDGAME_CLIMB_POINTS,
    LEVEL_FIELDS,
    NOT_APPLICABLE,
    RATE_FIELDS,
    TELEOP_FUEL_POINTS,
)
from utils import format_fixed, to_count_or_zero, to_level_or_zero, to_rate_or_zero

FIELD_COERCERS = {
    **{name: to_count_or_zero for name in COUNT_FIELDS},
    **{name: to_rate_or_zero for name in RATE_FIELDS},
    **{name: to_level_or_zero for name in LEVEL_FIELDS},
}

METRIC_PRECISION = MappingProxyType({
    **{metric: precision for metric, (_, precision) in AVERAGE_METRICS.items()},
    "avgPoints": DEFAULT_PRECISION,
})


def display_precision(metric: str) -> int:
    return METRIC_PRECISION.get(metric, DEFAULT_PRECISION)


@dataclass(frozen=True)
class TeamStatistics:
    team_number: Any
    match_count: int
    averages: Mapping[str, float]
    total_points: float
    avg_points: float
    shooter_mechanisms: Mapping[str, int] = field(default_factory=dict)
    hood_adjustable: Mapping[str, int] = field(default_factory=dict)
    chassis_types: Mapping[str, int] = field(default_factory=dict)
    primary_shooter: str = NOT_APPLICABLE
    primary_hood_adjustable: str = NOT_APPLICABLE
    primary_chassis: str = NOT_APPLICABLE

    @property
    def avg_teleop_fuel(self) -> float:
        return self.averages["avgTeleopFuel"]

    @property
    def avg_endgame_climb(self) -> float:
        return self.averages["avgEndgameClimb"]

    @property
    def avg_defense(self) -> float:
        return self.averages["avgDefense"]

    def metric(self, name: str) -> float:
        """Full-precision value of a display metric such as ``avgPoints``."""
        if name == "avgPoints":
            return self.avg_points
        return self.averages[name]

    def display(self) -> dict[str, Any]:
        """Presentation values: means as fixed-precision strings."""
        out: dict[str, Any] = {
            "teamNumber": self.team_number,
            "matchCount": self.match_count,
        }
        for metric, value in self.averages.items():
            out[metric] = format_fixed(value, display_precision(metric))
        out["totalPoints"] = self.total_points
        out["avgPoints"] = format_fixed(self.avg_points, display_precision("avgPoints"))
        out["shooterMechanisms"] = dict(self.shooter_mechanisms)
        out["hoodAdjustable"] = dict(self.hood_adjustable)
        out["chassisTypes"] = dict(self.chassis_types)
        out["primaryShooter"] = self.primary_shooter
        out["primaryHoodAdjustable"] = self.primary_hood_adjustable
        out["primaryChassis"] = self.primary_chassis
        return out


def category_counts(records: Iterable[Mapping[str, Any]], field_name: str) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        value = record.get(field_name)
        if value is None or isinstance(value, bool):
            continue
        label = str(value).strip()
        if not label:
            continue
        counts[label] = counts.get(label, 0) + 1
    return counts


def primary_category(counts: Mapping[str, int]) -> str:
    if not counts:
        return NOT_APPLICABLE
    # max() keeps the first maximal key, i.e. the earliest-seen label on ties.
    return max(counts, key=counts.get)


def coerce_numeric_fields(records: list[Mapping[str, Any]]) -> pd.DataFrame:
    """One row per record, one float column per numeric field."""
    return pd.DataFrame(
        {name: [coerce(record.get(name)) for record in records] for name, coerce in FIELD_COERCERS.items()},
        dtype=float,
    )


def match_points(numeric: pd.DataFrame) -> pd.Series:
    return (
        numeric["autoFuelScored"] * AUTO_FUEL_POINTS
        + numeric["autoTowerClimb"] * AUTO_CLIMB_POINTS
        + numeric["teleopFuelScored"] * TELEOP_FUEL_POINTS
        + numeric["climb"] * ENDGAME_CLIMB_POINTS
    )


def compute_team_statistics(records: Iterable[Mapping[str, Any]], team_number: Any = None) -> TeamStatistics | None:
    """Aggregate one team's records. Returns None when there are none."""
    records = list(records)
    if not records:
        return None

    count = len(records)
    if team_number is None:
        team_number = records[0].get("teamNumber")

    numeric = coerce_numeric_fields(records)
    sums = numeric.sum()
    averages = {metric: float(sums[source]) / count for metric, (source, _) in AVERAGE_METRICS.items()}
    total_points = float(match_points(numeric).sum())

    counts = {name: category_counts(records, name) for name in CATEGORICAL_FIELDS}
    shooters = counts["shooterMechanism"]
    hoods = counts["hoodAdjustable"]
    chassis = counts["chassisType"]

    return TeamStatistics(
        team_number=team_number,
        match_count=count,
        averages=MappingProxyType(averages),
        total_points=total_points,
        avg_points=total_points / count,
        shooter_mechanisms=MappingProxyType(shooters),
        hood_adjustable=MappingProxyType(hoods),
        chassis_types=MappingProxyType(chassis),
        primary_shooter=primary_category(shooters),
        primary_hood_adjustable=primary_category(hoods),
        primary_chassis=primary_category(chassis),
    )


def team_statistics(store, team_number: Any) -> TeamStatistics | None:
    return compute_team_statistics(store.records_for_team(team_number), team_number)

"""Event-wide rankings and overview built from per-team statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import pandas as pd

from constants import RANKING_LIMIT, RANKINGS
from scouting.team_stats import METRIC_PRECISION, TeamStatistics, compute_team_statistics, display_precision, team_statistics
from utils import format_fixed, round_display, team_sort_key

RANKING_COLUMNS = ["Rank", "teamNumber", "value", "display"]


def build_team_stats_table(team_index: Mapping[Any, Sequence[Mapping[str, Any]]]) -> pd.DataFrame:
    """One row per team, ascending team number.

    Each metric appears at full precision and as ``<metric>_Display``, the
    rounded value shown to users.
    """
    metric_cols = []
    for metric in METRIC_PRECISION:
        metric_cols.extend([metric, f"{metric}_Display"])
    columns = ["teamNumber", "matchCount", *metric_cols, "primaryShooter", "primaryChassis"]

    rows = []
    for team in sorted(team_index, key=team_sort_key):
        stats = compute_team_statistics(team_index[team], team)
        if stats is None:
            continue
        row: dict[str, Any] = {"teamNumber": team, "matchCount": stats.match_count}
        for metric in METRIC_PRECISION:
            value = stats.metric(metric)
            row[metric] = value
            row[f"{metric}_Display"] = round_display(value, display_precision(metric))
        row["primaryShooter"] = stats.primary_shooter
        row["primaryChassis"] = stats.primary_chassis
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)


def rank_teams(table: pd.DataFrame, metric: str, *, limit: int = RANKING_LIMIT) -> pd.DataFrame:
    """Top teams by the displayed value of *metric*.

    The table arrives in team-number order and the sort is stable, so equal
    displayed values stay in ascending team order.
    """
    if table is None or table.empty:
        return pd.DataFrame(columns=RANKING_COLUMNS)

    display_col = f"{metric}_Display"
    ranked = table.sort_values(display_col, ascending=False, kind="mergesort").head(int(limit)).reset_index(drop=True)
    out = pd.DataFrame({
        "Rank": range(1, len(ranked) + 1),
        "teamNumber": ranked["teamNumber"],
        "value": ranked[display_col].astype(float),
    })
    out["display"] = [format_fixed(value, display_precision(metric)) for value in out["value"]]
    return out


def compute_event_rankings(
    team_index: Mapping[Any, Sequence[Mapping[str, Any]]],
    *,
    limit: int = RANKING_LIMIT,
) -> dict[str, pd.DataFrame]:
    """Top scorers, fuel scorers, climbers and defenders for the event."""
    table = build_team_stats_table(team_index)
    return {name: rank_teams(table, metric, limit=limit) for name, (metric, _) in RANKINGS.items()}


def event_overview(store) -> dict[str, Any]:
    total_matches = len(store)
    total_teams = len(store.team_index())
    per_team = total_matches / total_teams if total_teams else 0.0
    return {
        "totalTeams": total_teams,
        "totalMatches": total_matches,
        "avgMatchesPerTeam": format_fixed(per_team),
    }


@dataclass(frozen=True)
class MyTeamSummary:
    team_number: Any
    total_matches_scouted: int
    scouted_by_team: int
    history: tuple
    stats: TeamStatistics | None


def my_team_summary(store, team_number: Any) -> MyTeamSummary:
    """Scouting contribution and own-team performance for a logged-in scout."""
    scout_label = str(team_number)
    history = tuple(store.history())
    return MyTeamSummary(
        team_number=team_number,
        total_matches_scouted=len(history),
        scouted_by_team=sum(1 for record in history if str(record.get("scoutTeam")) == scout_label),
        history=history,
        stats=team_statistics(store, team_number),
    )

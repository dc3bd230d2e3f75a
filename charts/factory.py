"""Reusable chart factories for event rankings and team detail."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import pandas as pd
import plotly.graph_objects as go

from charts.formatters import title_case_label
from charts.theme import apply_chart_theme, semantic_color
from constants import ALLIANCE_COLORS, RANKINGS
from scouting.team_stats import coerce_numeric_fields, match_points

_STEM_COLOR = "rgba(165, 171, 184, 0.35)"


def ranking_lollipop(ranking_df: pd.DataFrame, ranking_name: str):
    """Render one event ranking as a lollipop chart, best team on top.

    Expects the frame produced by ``rank_teams`` (Rank, teamNumber, value, display).
    """
    metric, title = RANKINGS[ranking_name]
    accent = semantic_color("ranking", ranking_name)
    fig = go.Figure()

    if ranking_df is None or ranking_df.empty:
        fig.update_layout(title=title)
        return apply_chart_theme(fig, tier="support", intent="ranking", variant=ranking_name)

    rank_df = ranking_df.reset_index(drop=True)
    for i, row in rank_df.iterrows():
        val = float(row["value"])
        fig.add_shape(type="line", x0=0, x1=val, y0=i, y1=i, line=dict(color=_STEM_COLOR, width=2))
        fig.add_trace(
            go.Scatter(
                x=[val],
                y=[i],
                mode="markers+text",
                marker=dict(size=11, color="rgba(255,255,255,0.9)", line=dict(color=accent, width=2.5)),
                text=[row["display"]],
                textposition="middle right",
                textfont=dict(color=accent, size=11),
                hovertemplate=f"<b>#{int(row['Rank'])} Team {row['teamNumber']}</b><br>{title_case_label(metric)}: {row['display']}<extra></extra>",
                showlegend=False,
            )
        )

    fig.update_yaxes(
        tickmode="array",
        tickvals=list(range(len(rank_df))),
        ticktext=[f"#{int(r)} Team {t}" for r, t in zip(rank_df["Rank"], rank_df["teamNumber"])],
        autorange="reversed",
        title=None,
    )
    fig.update_xaxes(title=title_case_label(metric), rangemode="tozero")
    fig.update_layout(title=title)
    return apply_chart_theme(fig, tier="support", intent="ranking", variant=ranking_name)


def team_points_trend(records: Sequence[Mapping[str, Any]], team_number: Any = None):
    """Per-match estimated points for one team, in scouting order."""
    fig = go.Figure()
    title = "Points by Match" if team_number is None else f"Team {team_number}: Points by Match"
    records = list(records)
    if not records:
        fig.update_layout(title=title)
        return apply_chart_theme(fig, tier="detail")

    points = match_points(coerce_numeric_fields(records))
    labels = [str(record.get("matchNumber", i + 1)) for i, record in enumerate(records)]
    colors = [ALLIANCE_COLORS.get(str(record.get("alliance")), semantic_color("neutral")) for record in records]

    fig.add_trace(
        go.Scatter(
            x=list(range(1, len(records) + 1)),
            y=points.tolist(),
            mode="lines+markers",
            line=dict(color=semantic_color("emphasis"), width=2.4),
            marker=dict(size=9, color=colors),
            customdata=labels,
            hovertemplate="Match %{customdata}<br>Points: %{y:.0f}<extra></extra>",
            showlegend=False,
        )
    )
    mean_points = float(points.mean())
    fig.add_hline(y=mean_points, line_dash="dot", line_color=semantic_color("neutral"))
    fig.update_xaxes(title="Match (scouting order)", tickmode="array", tickvals=list(range(1, len(records) + 1)), ticktext=labels)
    fig.update_yaxes(title="Points", rangemode="tozero")
    fig.update_layout(title=title)
    return apply_chart_theme(fig, tier="detail")

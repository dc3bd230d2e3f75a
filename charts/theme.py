"""Centralized Plotly chart theme helpers."""

from __future__ import annotations

from typing import Any

from .tokens import (
    ACCENTS,
    BACKGROUNDS,
    EMPHASIS_ACCENT,
    GRID_OPACITY,
    RANKING_ACCENTS,
    SPACING,
    TEXT,
    TYPOGRAPHY,
)


def semantic_color(intent: str, variant: str = "default") -> str:
    """Resolve semantic chart colors by intent/variant names."""
    key = (intent or "").lower()
    var = (variant or "default").lower()

    if key == "ranking":
        return RANKING_ACCENTS.get(var, TEXT.primary)
    if key == "alliance":
        return ACCENTS.get(var, ACCENTS["neutral"])
    if key == "emphasis":
        return EMPHASIS_ACCENT

    return ACCENTS.get(key, TEXT.primary)


PRESETS = {
    "hero": {
        "height": 520,
        "margin": dict(l=SPACING.lg, r=SPACING.lg, t=SPACING.xl, b=SPACING.lg),
        "title_size": TYPOGRAPHY.title,
    },
    "support": {
        "height": 340,
        "margin": dict(l=SPACING.md, r=SPACING.md, t=SPACING.lg, b=SPACING.md),
        "title_size": TYPOGRAPHY.subtitle,
    },
    "detail": {
        "height": 260,
        "margin": dict(l=SPACING.sm, r=SPACING.sm, t=SPACING.md, b=SPACING.sm),
        "title_size": TYPOGRAPHY.body,
    },
}


def apply_chart_theme(fig: Any, tier: str = "support", intent: str | None = None, variant: str = "default"):
    """Apply app-wide defaults for Plotly figures."""
    preset = PRESETS.get(tier, PRESETS["support"])
    accent = semantic_color((intent or ""), variant=variant)

    fig.update_layout(
        font=dict(family=TYPOGRAPHY.family, size=TYPOGRAPHY.body, color=TEXT.primary),
        title=dict(font=dict(size=preset["title_size"], color=accent), x=0.01, xanchor="left"),
        margin=preset["margin"],
        height=preset["height"],
        plot_bgcolor=BACKGROUNDS.panel,
        paper_bgcolor=BACKGROUNDS.canvas,
        hoverlabel=dict(
            bgcolor=BACKGROUNDS.elevated,
            bordercolor=BACKGROUNDS.elevated,
            font=dict(color=TEXT.primary, size=TYPOGRAPHY.annotation, family=TYPOGRAPHY.family),
        ),
    )

    for update_axes in (fig.update_xaxes, fig.update_yaxes):
        update_axes(
            showline=False,
            zeroline=False,
            gridcolor=f"rgba(255,255,255,{GRID_OPACITY})",
            ticks="outside",
            tickfont=dict(color=TEXT.secondary, size=TYPOGRAPHY.annotation),
        )

    return fig

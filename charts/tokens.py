"""Immutable design tokens for chart theming."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from constants import ALLIANCE_COLORS


@dataclass(frozen=True)
class TypographyScale:
    family: str = "Inter, Segoe UI, Roboto, Helvetica, Arial, sans-serif"
    title: int = 20
    subtitle: int = 16
    body: int = 13
    annotation: int = 11


@dataclass(frozen=True)
class SpacingScale:
    xs: int = 8
    sm: int = 12
    md: int = 16
    lg: int = 24
    xl: int = 32


@dataclass(frozen=True)
class PanelBackgrounds:
    canvas: str = "rgba(0,0,0,0)"
    panel: str = "#1e1e1e"
    elevated: str = "#252525"


@dataclass(frozen=True)
class NeutralTextColors:
    primary: str = "#f3f4f6"
    secondary: str = "#c9d1d9"
    muted: str = "#94a3b8"


TYPOGRAPHY = TypographyScale()
SPACING = SpacingScale()
BACKGROUNDS = PanelBackgrounds()
TEXT = NeutralTextColors()
GRID_OPACITY = 0.14

EMPHASIS_ACCENT: str = "#a78bfa"

_ACCENTS: Mapping[str, str] = {
    "red": ALLIANCE_COLORS["Red"],
    "blue": ALLIANCE_COLORS["Blue"],
    "positive": "#22c55e",
    "negative": "#ef4444",
    "neutral": "#94a3b8",
}
ACCENTS = MappingProxyType(dict(_ACCENTS))

# One accent per ranking card
RANKING_ACCENTS = MappingProxyType(
    {
        "top_scorers": "#ffcc00",
        "top_fuel": ACCENTS["positive"],
        "top_climbers": EMPHASIS_ACCENT,
        "top_defense": ACCENTS["blue"],
    }
)

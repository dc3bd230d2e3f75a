"""FRC Scouting — shared utility functions.

Numeric coercion for loosely typed scouting records. Every aggregation reads
record values through these helpers so the "missing or garbage means 0" rule
lives in exactly one place.
"""
import re
from numbers import Real

import numpy as np

from constants import DEFAULT_PRECISION

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


# ── Coercion ────────────────────────────────────────────────────────────

def _finite_float(value):
    """Float of *value*, or None when it overflows or is NaN/inf."""
    try:
        numeric = float(value)
    except (OverflowError, ValueError):
        return None
    return numeric if np.isfinite(numeric) else None


def to_rate_or_zero(value) -> float:
    """Coerce a time/rate field to float.

    Numbers pass through; strings are parsed from their leading numeric text
    ("3.5s" -> 3.5). Anything else, including NaN/inf and values too large
    for a float, becomes 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, Real):
        numeric = _finite_float(value)
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        numeric = _finite_float(match.group(1)) if match else None
    else:
        numeric = None
    return numeric if numeric is not None else 0.0


def to_count_or_zero(value):
    """Coerce a count field. Numbers are used as-is, strings parse like rates."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, Real):
        return value if _finite_float(value) is not None else 0
    return to_rate_or_zero(value)


def to_level_or_zero(value) -> int:
    """Coerce a climb level or defense rating to int.

    Numbers truncate toward zero; strings use their leading integer ("2" -> 2,
    "3 (high)" -> 3). Missing, unparseable or float-overflowing values become 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, Real):
        numeric = _finite_float(value)
    elif isinstance(value, str):
        match = _INT_PREFIX.match(value)
        numeric = _finite_float(match.group(1)) if match else None
    else:
        numeric = None
    return int(numeric) if numeric is not None else 0


# ── Display Helpers ─────────────────────────────────────────────────────

def format_fixed(value, precision=DEFAULT_PRECISION) -> str:
    """Fixed-point text for a statistic, e.g. 5 -> "5.0"."""
    return f"{float(value):.{int(precision)}f}"


def round_display(value, precision=DEFAULT_PRECISION) -> float:
    """Numeric value of what :func:`format_fixed` would show."""
    return float(format_fixed(value, precision))


def team_sort_key(team_number):
    """Sort team numbers numerically, with non-numeric labels after them."""
    try:
        return (0, int(team_number), "")
    except (TypeError, ValueError):
        return (1, 0, str(team_number))

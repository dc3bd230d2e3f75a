"""FRC Scouting — shared constants.

Single source of truth for storage slots, scoring weights, and display rules.
"""
import os

# ── Persistence ─────────────────────────────────────────────────────────
MATCHES_STORAGE_KEY = "frc-scouting-data-2026"
SCOUT_TEAM_STORAGE_KEY = "frc-scout-team"
DEFAULT_SCOUT_TEAM = "Unknown"
DEFAULT_DATA_DIR = "scouting_data"
DATA_DIR_ENV_VAR = "SCOUTING_DATA_DIR"

EXPORT_FILE_PREFIX = "frc_scouting_data"
EXPORT_INDENT = 2


def data_dir() -> str:
    """Directory holding the blob store slots (overridable via environment)."""
    return os.environ.get(DATA_DIR_ENV_VAR) or DEFAULT_DATA_DIR


# ── Record fields (wire names) ──────────────────────────────────────────
COUNT_FIELDS = ("autoFuelScored", "teleopFuelScored", "fuelCapacity")
RATE_FIELDS = ("autoCycleTime", "teleopCycleTime", "teleopFuelRate")
LEVEL_FIELDS = ("autoTowerClimb", "climb", "defense")
CATEGORICAL_FIELDS = ("shooterMechanism", "chassisType", "hoodAdjustable")

# Composite identity used to drop duplicates on import
DEDUP_KEY_FIELDS = ("matchNumber", "teamNumber", "scoutTeam")

ALLIANCES = ("Red", "Blue")
DEFENSE_SCALE = (1, 5)

# ── Scoring (2026 season, approximate) ──────────────────────────────────
AUTO_FUEL_POINTS = 1
AUTO_CLIMB_POINTS = 3
TELEOP_FUEL_POINTS = 1
ENDGAME_CLIMB_POINTS = 5

# ── Display ─────────────────────────────────────────────────────────────
NOT_APPLICABLE = "N/A"
DEFAULT_PRECISION = 1
RATE_PRECISION = 2
RANKING_LIMIT = 10

# Display key -> (record field feeding the mean, decimals)
AVERAGE_METRICS = {
    "avgAutoFuel": ("autoFuelScored", DEFAULT_PRECISION),
    "avgAutoCycleTime": ("autoCycleTime", DEFAULT_PRECISION),
    "avgTeleopFuel": ("teleopFuelScored", DEFAULT_PRECISION),
    "avgTeleopCycleTime": ("teleopCycleTime", DEFAULT_PRECISION),
    "avgTeleopFuelRate": ("teleopFuelRate", RATE_PRECISION),
    "avgFuelCapacity": ("fuelCapacity", DEFAULT_PRECISION),
    "avgAutoClimb": ("autoTowerClimb", DEFAULT_PRECISION),
    "avgEndgameClimb": ("climb", DEFAULT_PRECISION),
    "avgDefense": ("defense", DEFAULT_PRECISION),
}

# Ranking name -> (display metric, card title)
RANKINGS = {
    "top_scorers": ("avgPoints", "Top Scorers"),
    "top_fuel": ("avgTeleopFuel", "Best Fuel Scorers"),
    "top_climbers": ("avgEndgameClimb", "Best Climbers"),
    "top_defense": ("avgDefense", "Best Defense"),
}

# ── Alliance colors ─────────────────────────────────────────────────────
ALLIANCE_COLORS = {
    "Red": "#ef4444",
    "Blue": "#3b82f6",
}

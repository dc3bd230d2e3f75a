"""Match scouting store and statistics package."""

from scouting.blob_store import BlobStore, FileBlobStore, MemoryBlobStore
from scouting.errors import FormatError, ParseError, ScoutingDataError
from scouting.identity import ScoutIdentity
from scouting.store import MatchRecordStore
from scouting.team_stats import TeamStatistics, compute_team_statistics, team_statistics

__all__ = [
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "FormatError",
    "ParseError",
    "ScoutingDataError",
    "ScoutIdentity",
    "MatchRecordStore",
    "TeamStatistics",
    "compute_team_statistics",
    "team_statistics",
]

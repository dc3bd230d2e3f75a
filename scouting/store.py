"""Append-only match record store persisted to a single blob slot."""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable, Iterator, Mapping

import pandas as pd

from constants import MATCHES_STORAGE_KEY
from scouting.blob_store import BlobStore
from scouting.errors import FormatError, ScoutingDataError
from scouting.exchange import dumps_records, export_filename, export_records, parse_record_list, read_import_file
from scouting.identity import ScoutIdentity
from scouting.schema import MATCH_RECORD_CONTRACT, freeze_record, record_key
from utils import team_sort_key

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current instant as ISO-8601 UTC with millisecond precision."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MatchRecordStore:
    """Owns the ordered record list and keeps its persisted copy in sync.

    Every mutation persists before returning. Records handed out are
    read-only views; the list itself only ever grows, or is cleared whole.
    """

    def __init__(
        self,
        blobs: BlobStore,
        identity: ScoutIdentity | None = None,
        *,
        key: str = MATCHES_STORAGE_KEY,
        clock: Callable[[], str] = utc_timestamp,
    ):
        self._blobs = blobs
        self.identity = identity or ScoutIdentity(blobs)
        self._key = key
        self._clock = clock
        self._matches: list[Mapping[str, Any]] = self.load()
        logger.info("%d matches in database", len(self._matches))

    # --- persistence ---

    def load(self) -> list[Mapping[str, Any]]:
        """Read the persisted collection; corrupt or unreadable data loads as empty."""
        try:
            raw = self._blobs.get(self._key)
        except OSError as e:
            logger.warning("Failed to read slot %s: %s", self._key, e)
            return []
        if raw is None:
            return []
        try:
            records = parse_record_list(raw)
        except ScoutingDataError as e:
            logger.warning("Ignoring corrupt data in slot %s: %s", self._key, e)
            return []
        return [freeze_record(record) for record in records]

    def save(self) -> None:
        self._blobs.set(self._key, dumps_records(self._matches))

    # --- mutations ---

    def add_match(self, observation: Mapping[str, Any]) -> Mapping[str, Any]:
        """Append an observation with scout attribution and timestamp."""
        if not isinstance(observation, Mapping):
            raise FormatError("Invalid match data: expected an object of fields")
        record = dict(observation)
        record["scoutTeam"] = self.identity.current()
        record["timestamp"] = self._clock()
        frozen = freeze_record(record)
        self._matches.append(frozen)
        self.save()
        logger.info("Saved match %s for team %s", record.get("matchNumber"), record.get("teamNumber"))
        return frozen

    def import_matches(self, raw: Any) -> int:
        """Merge an exported collection, skipping records already present.

        Identity is (matchNumber, teamNumber, scoutTeam), checked against stored
        records and against records accepted earlier in the same batch.
        Returns the number of records added.
        """
        candidates = parse_record_list(raw)

        seen = {record_key(record) for record in self._matches}
        added = 0
        for candidate in candidates:
            key = record_key(candidate)
            if key in seen:
                continue
            seen.add(key)
            self._matches.append(freeze_record(candidate))
            added += 1

        self.save()
        skipped = len(candidates) - added
        if skipped:
            logger.info("Imported %d matches, skipped %d duplicates", added, skipped)
        else:
            logger.info("Imported %d matches", added)
        return added

    def import_file(self, path: str) -> int:
        return self.import_matches(read_import_file(path))

    def clear_all(self) -> None:
        """Drop every record. Callers own any confirmation step."""
        count = len(self._matches)
        self._matches = []
        self.save()
        logger.info("Cleared %d matches", count)

    # --- queries ---

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(list(self._matches))

    @property
    def records(self) -> tuple[Mapping[str, Any], ...]:
        return tuple(self._matches)

    def records_for_team(self, team_number: object) -> list[Mapping[str, Any]]:
        return [record for record in self._matches if record.get("teamNumber") == team_number]

    def team_index(self) -> dict[Any, list[Mapping[str, Any]]]:
        """Team number -> that team's records, teams in first-seen order."""
        teams: dict[Any, list[Mapping[str, Any]]] = {}
        for record in self._matches:
            team = record.get("teamNumber")
            try:
                teams.setdefault(team, []).append(record)
            except TypeError:
                logger.warning("Skipping record with unusable teamNumber %r", team)
        return teams

    def team_numbers(self) -> list[Any]:
        return sorted(self.team_index(), key=team_sort_key)

    def history(self) -> list[Mapping[str, Any]]:
        """All records, newest first."""
        return list(reversed(self._matches))

    def to_frame(self) -> pd.DataFrame:
        if not self._matches:
            return MATCH_RECORD_CONTRACT.empty()
        return MATCH_RECORD_CONTRACT.conform(pd.DataFrame([dict(record) for record in self._matches]))

    # --- exchange ---

    def export_json(self) -> str:
        return export_records(self._matches)

    @staticmethod
    def export_filename(today: datetime.date | None = None) -> str:
        return export_filename(today)

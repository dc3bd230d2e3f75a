#!/usr/bin/env python3
"""Print event rankings for the local store or an exported JSON file."""

from __future__ import annotations

import argparse
import logging

from constants import RANKING_LIMIT, RANKINGS, data_dir
from scouting.aggregations.event_rankings import compute_event_rankings, event_overview
from scouting.blob_store import FileBlobStore, MemoryBlobStore
from scouting.errors import ScoutingDataError
from scouting.identity import ScoutIdentity
from scouting.store import MatchRecordStore


def load_store(export_path: str | None, root: str | None) -> MatchRecordStore:
    if export_path:
        store = MatchRecordStore(MemoryBlobStore())
        store.import_file(export_path)
        return store
    blobs = FileBlobStore(root or data_dir())
    return MatchRecordStore(blobs, ScoutIdentity(blobs))


def main() -> None:
    parser = argparse.ArgumentParser(description="Event rankings from scouting data")
    parser.add_argument("--file", help="Exported frc_scouting_data_*.json to report on instead of the local store")
    parser.add_argument("--data-dir", help="Blob store directory (defaults to $SCOUTING_DATA_DIR or ./scouting_data)")
    parser.add_argument("--limit", type=int, default=RANKING_LIMIT)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        store = load_store(args.file, args.data_dir)
    except (OSError, ScoutingDataError) as e:
        raise SystemExit(f"Could not load scouting data: {e}")

    overview = event_overview(store)
    print(
        f"teams={overview['totalTeams']} "
        f"matches={overview['totalMatches']} "
        f"avg_matches_per_team={overview['avgMatchesPerTeam']}"
    )
    if not overview["totalTeams"]:
        return

    rankings = compute_event_rankings(store.team_index(), limit=args.limit)
    for name, (_, title) in RANKINGS.items():
        print(f"\n{title}")
        for _, row in rankings[name].iterrows():
            print(f"  #{int(row['Rank']):<3} Team {str(row['teamNumber']):<8} {row['display']}")


if __name__ == "__main__":
    main()

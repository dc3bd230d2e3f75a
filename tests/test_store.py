import json
import os
import tempfile
import unittest

from constants import MATCHES_STORAGE_KEY, SCOUT_TEAM_STORAGE_KEY
from scouting.blob_store import BLOB_SUFFIX, FileBlobStore, MemoryBlobStore
from scouting.errors import FormatError, ParseError
from scouting.identity import ScoutIdentity
from scouting.store import MatchRecordStore, utc_timestamp

FIXED_TIME = "2026-03-14T15:09:26.535Z"


def _observation(team=254, match="12", **fields):
    obs = {
        "teamNumber": team,
        "matchNumber": match,
        "alliance": "Blue",
        "position": "2",
        "autoFuelScored": 3,
        "autoCycleTime": 4.5,
        "autoTowerClimb": "1",
        "chassisType": "Swerve",
        "teleopFuelScored": 12,
        "teleopCycleTime": None,
        "teleopFuelRate": 1.25,
        "fuelCapacity": 8,
        "shooterMechanism": "Turret",
        "hoodAdjustable": "Yes",
        "climb": "2",
        "defense": "3",
        "notes": "",
    }
    obs.update(fields)
    return obs


class MatchRecordStoreTests(unittest.TestCase):
    def _store(self, blobs=None, scout="1234"):
        blobs = blobs if blobs is not None else MemoryBlobStore()
        identity = ScoutIdentity(blobs)
        if scout:
            identity.set(scout)
        return MatchRecordStore(blobs, identity, clock=lambda: FIXED_TIME), blobs

    def test_add_match_attaches_attribution_and_persists(self):
        store, blobs = self._store()
        record = store.add_match(_observation(scoutTeam="spoofed"))

        self.assertEqual(record["scoutTeam"], "1234")
        self.assertEqual(record["timestamp"], FIXED_TIME)
        self.assertEqual(len(store), 1)
        persisted = json.loads(blobs.get(MATCHES_STORAGE_KEY))
        self.assertEqual(persisted, [dict(record)])

    def test_add_match_defaults_scout_to_unknown(self):
        store, _ = self._store(scout=None)
        self.assertEqual(store.add_match(_observation())["scoutTeam"], "Unknown")

    def test_add_match_rejects_non_objects(self):
        store, _ = self._store()
        with self.assertRaises(FormatError):
            store.add_match(["not", "an", "object"])
        self.assertEqual(len(store), 0)

    def test_records_are_read_only(self):
        store, _ = self._store()
        record = store.add_match(_observation())
        with self.assertRaises(TypeError):
            record["teamNumber"] = 1

    def test_import_skips_existing_key(self):
        store, _ = self._store()
        store.add_match(_observation(team=254, match="12"))
        payload = [
            _observation(team=254, match="12", scoutTeam="1234", teleopFuelScored=99, timestamp="x"),
            _observation(team=1678, match="12", scoutTeam="1234", timestamp="y"),
        ]

        added = store.import_matches(payload)

        self.assertEqual(added, 1)
        self.assertEqual(len(store), 2)
        self.assertEqual(store.records[0]["teleopFuelScored"], 12)
        self.assertEqual(store.records[1]["teamNumber"], 1678)

    def test_import_dedups_within_batch(self):
        store, _ = self._store()
        dup = _observation(scoutTeam="971", timestamp="t")
        self.assertEqual(store.import_matches(json.dumps([dup, dict(dup, notes="second copy")])), 1)

    def test_import_persists_merged_records(self):
        store, blobs = self._store()
        store.add_match(_observation(team=254, match="1"))
        store.import_matches([
            _observation(team=254, match="1", scoutTeam="1234", timestamp="dup"),
            _observation(team=1678, match="1", scoutTeam="971", timestamp="t1"),
            _observation(team=971, match="2", scoutTeam="971", timestamp="t2"),
        ])

        persisted = json.loads(blobs.get(MATCHES_STORAGE_KEY))
        self.assertEqual(persisted, [dict(r) for r in store.records])
        self.assertEqual([r["teamNumber"] for r in persisted], [254, 1678, 971])

    def test_import_accepts_tuple_of_records(self):
        store, _ = self._store()
        batch = (_observation(scoutTeam="971", timestamp="t"), _observation(team=1, scoutTeam="971", timestamp="t"))
        self.assertEqual(store.import_matches(batch), 2)
        self.assertEqual([r["teamNumber"] for r in store.records], [254, 1])

    def test_import_key_uses_exact_values(self):
        store, _ = self._store()
        store.add_match(_observation(match="3"))
        self.assertEqual(store.import_matches([_observation(match=3, scoutTeam="1234")]), 1)

    def test_import_rejects_single_object(self):
        store, blobs = self._store()
        store.add_match(_observation())
        before = blobs.get(MATCHES_STORAGE_KEY)

        for payload in [_observation(), json.dumps(_observation()), "42", [1, 2]]:
            with self.assertRaises(FormatError):
                store.import_matches(payload)

        self.assertEqual(len(store), 1)
        self.assertEqual(blobs.get(MATCHES_STORAGE_KEY), before)

    def test_import_rejects_malformed_json(self):
        store, _ = self._store()
        with self.assertRaises(ParseError):
            store.import_matches("[{'teamNumber': 254")
        with self.assertRaises(ParseError):
            store.import_matches(b"\xff\xfe")
        self.assertEqual(len(store), 0)

    def test_export_then_import_round_trips(self):
        source, _ = self._store()
        source.add_match(_observation(team=254, match="1"))
        source.add_match(_observation(team=1678, match="1", notes="fast cycler", hoodAdjustable=""))
        exported = source.export_json()

        target = MatchRecordStore(MemoryBlobStore())
        self.assertEqual(target.import_matches(exported), 2)
        self.assertEqual([dict(r) for r in target.records], [dict(r) for r in source.records])

    def test_corrupt_blob_loads_empty(self):
        for raw in ["{not json", '{"teamNumber": 254}', "[1, 2]"]:
            blobs = MemoryBlobStore({MATCHES_STORAGE_KEY: raw})
            with self.assertLogs("scouting.store", level="WARNING"):
                store = MatchRecordStore(blobs)
            self.assertEqual(len(store), 0)

    def test_clear_all_empties_and_persists(self):
        store, blobs = self._store()
        store.add_match(_observation())
        store.clear_all()
        self.assertEqual(len(store), 0)
        self.assertEqual(json.loads(blobs.get(MATCHES_STORAGE_KEY)), [])

    def test_team_queries_preserve_insertion_order(self):
        store, _ = self._store()
        store.add_match(_observation(team=1678, match="1"))
        store.add_match(_observation(team=254, match="1"))
        store.add_match(_observation(team=1678, match="2"))

        self.assertEqual([r["matchNumber"] for r in store.records_for_team(1678)], ["1", "2"])
        self.assertEqual(store.records_for_team("1678"), [])
        index = store.team_index()
        self.assertEqual(list(index), [1678, 254])
        self.assertEqual(len(index[1678]), 2)
        self.assertEqual(store.team_numbers(), [254, 1678])
        self.assertEqual([r["matchNumber"] for r in store.history()], ["2", "1", "1"])

    def test_to_frame_has_canonical_columns(self):
        store, _ = self._store()
        self.assertIn("teamNumber", store.to_frame().columns)
        store.add_match(_observation(extraField="kept"))
        frame = store.to_frame()
        self.assertEqual(list(frame.columns[:2]), ["teamNumber", "matchNumber"])
        self.assertEqual(frame.columns[-1], "extraField")
        self.assertEqual(len(frame), 1)


class FileBlobStoreTests(unittest.TestCase):
    def test_store_survives_restart(self):
        with tempfile.TemporaryDirectory() as tmp:
            blobs = FileBlobStore(tmp)
            ScoutIdentity(blobs).set("1234")
            MatchRecordStore(blobs).add_match(_observation())

            self.assertTrue(os.path.exists(os.path.join(tmp, MATCHES_STORAGE_KEY + BLOB_SUFFIX)))
            reopened = MatchRecordStore(FileBlobStore(tmp))
            self.assertEqual(len(reopened), 1)
            self.assertEqual(reopened.records[0]["scoutTeam"], "1234")
            self.assertEqual(reopened.identity.get(), "1234")

    def test_import_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "export.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([_observation(scoutTeam="971"), _observation(team=1, scoutTeam="971")], f)
            store = MatchRecordStore(FileBlobStore(os.path.join(tmp, "data")))
            self.assertEqual(store.import_file(path), 2)

    def test_imported_records_survive_restart(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = MatchRecordStore(FileBlobStore(tmp))
            store.import_matches([
                _observation(team=254, scoutTeam="971", timestamp="t1"),
                _observation(team=1678, scoutTeam="971", timestamp="t2"),
            ])

            reopened = MatchRecordStore(FileBlobStore(tmp))
            self.assertEqual([dict(r) for r in reopened.records], [dict(r) for r in store.records])
            self.assertEqual(reopened.team_numbers(), [254, 1678])

    def test_rejects_path_like_keys(self):
        blobs = FileBlobStore(tempfile.gettempdir())
        with self.assertRaises(ValueError):
            blobs.get(os.path.join("..", "escape"))

    def test_missing_slot_reads_none(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(FileBlobStore(tmp).get(SCOUT_TEAM_STORAGE_KEY))


def test_utc_timestamp_is_iso_utc():
    stamp = utc_timestamp()
    assert stamp.endswith("Z")
    assert "T" in stamp

import datetime
import unittest

from scouting.errors import FormatError, ParseError
from scouting.exchange import decode_payload, export_filename, export_records, parse_record_list
from scouting.schema import Alliance, build_observation, record_key


class ExchangeTests(unittest.TestCase):
    def test_export_filename_embeds_date(self):
        self.assertEqual(export_filename(datetime.date(2026, 3, 14)), "frc_scouting_data_2026-03-14.json")
        self.assertTrue(export_filename().startswith("frc_scouting_data_"))

    def test_export_is_indented_json_array(self):
        text = export_records([{"teamNumber": 254, "notes": "über fast"}])
        self.assertTrue(text.startswith("[\n  {"))
        self.assertIn("über fast", text)

    def test_parse_accepts_bytes_with_bom(self):
        records = parse_record_list(b'\xef\xbb\xbf[{"teamNumber": 254}]')
        self.assertEqual(records, [{"teamNumber": 254}])

    def test_parse_rejects_non_lists(self):
        for payload in ['{"teamNumber": 254}', "null", '"text"', [["nested"]]]:
            with self.assertRaises(FormatError):
                parse_record_list(payload)

    def test_parse_errors_are_value_errors(self):
        with self.assertRaises(ParseError):
            decode_payload("[")
        with self.assertRaises(ValueError):
            parse_record_list("")


class SchemaTests(unittest.TestCase):
    def test_build_observation_converts_form_text(self):
        obs = build_observation(
            team_number="254",
            match_number=" 12 ",
            alliance="red",
            position="2",
            auto_fuel_scored="3",
            auto_cycle_time="",
            auto_tower_climb="1",
            teleop_fuel_scored=7,
            teleop_fuel_rate="1.5",
            fuel_capacity="8",
            climb="2",
            defense=4,
        )
        self.assertEqual(obs["teamNumber"], 254)
        self.assertEqual(obs["matchNumber"], "12")
        self.assertEqual(obs["alliance"], "Red")
        self.assertEqual(obs["autoFuelScored"], 3)
        self.assertIsNone(obs["autoCycleTime"])
        self.assertEqual(obs["teleopFuelRate"], 1.5)
        self.assertEqual(obs["climb"], "2")
        self.assertEqual(obs["defense"], "4")
        self.assertNotIn("scoutTeam", obs)

    def test_build_observation_blank_team_is_none(self):
        obs = build_observation(team_number="", match_number="1", alliance="Blue", position="1", auto_fuel_scored="")
        self.assertIsNone(obs["teamNumber"])
        self.assertIsNone(obs["autoFuelScored"])

    def test_alliance_parse(self):
        self.assertIs(Alliance.parse("BLUE"), Alliance.BLUE)
        self.assertIs(Alliance.parse("Alliance.RED"), Alliance.RED)
        with self.assertRaises(ValueError):
            Alliance.parse("Purple")
        with self.assertRaises(ValueError):
            Alliance.parse(None)


def test_record_key_distinguishes_types():
    base = {"matchNumber": "3", "teamNumber": 254, "scoutTeam": "1234"}
    assert record_key(base) == record_key(dict(base, notes="other"))
    assert record_key(base) != record_key(dict(base, matchNumber=3))
    assert record_key({"teamNumber": 1}) != record_key({"teamNumber": True})
    assert isinstance(hash(record_key({"matchNumber": [1, 2]})), int)

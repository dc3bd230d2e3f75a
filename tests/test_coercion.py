import unittest

import numpy as np

from utils import format_fixed, round_display, team_sort_key, to_count_or_zero, to_level_or_zero, to_rate_or_zero


class CoercionTests(unittest.TestCase):
    def test_rate_passes_numbers_and_parses_leading_text(self):
        self.assertEqual(to_rate_or_zero(2.5), 2.5)
        self.assertEqual(to_rate_or_zero(3), 3.0)
        self.assertEqual(to_rate_or_zero("3.5s"), 3.5)
        self.assertEqual(to_rate_or_zero(" .5"), 0.5)
        self.assertEqual(to_rate_or_zero("1e2"), 100.0)

    def test_rate_defaults_to_zero(self):
        for raw in [None, "", "fast", True, float("nan"), np.nan, float("inf"), [1.0], {"v": 1}]:
            self.assertEqual(to_rate_or_zero(raw), 0.0, raw)

    def test_count_keeps_numbers_as_is(self):
        self.assertEqual(to_count_or_zero(7), 7)
        self.assertIsInstance(to_count_or_zero(7), int)
        self.assertEqual(to_count_or_zero(2.5), 2.5)
        self.assertEqual(to_count_or_zero("6"), 6.0)
        self.assertEqual(to_count_or_zero(None), 0)
        self.assertEqual(to_count_or_zero(float("nan")), 0)
        self.assertEqual(to_count_or_zero(False), 0)

    def test_level_parses_integer_prefix(self):
        self.assertEqual(to_level_or_zero("2"), 2)
        self.assertEqual(to_level_or_zero(" 3 (high)"), 3)
        self.assertEqual(to_level_or_zero("-1"), -1)
        self.assertEqual(to_level_or_zero(2.9), 2)
        self.assertEqual(to_level_or_zero("2.9"), 2)

    def test_level_defaults_to_zero(self):
        for raw in [None, "", "none", "L2", True, float("nan"), float("inf")]:
            self.assertEqual(to_level_or_zero(raw), 0, raw)

    def test_values_too_large_for_float_become_zero(self):
        huge = 10 ** 400
        self.assertEqual(to_count_or_zero(huge), 0)
        self.assertEqual(to_rate_or_zero(huge), 0.0)
        self.assertEqual(to_level_or_zero(huge), 0)
        self.assertEqual(to_level_or_zero("9" * 400), 0)
        self.assertEqual(to_count_or_zero("9" * 400), 0.0)
        self.assertEqual(to_rate_or_zero("1e400"), 0.0)
        self.assertEqual(to_count_or_zero(10 ** 300), 10 ** 300)


def test_format_fixed_matches_display_precision():
    assert format_fixed(5) == "5.0"
    assert format_fixed(1.617, 2) == "1.62"
    assert round_display(10.04) == 10.0


def test_team_sort_key_orders_numerically():
    teams = [1678, "frc-x", "254", 33]
    assert sorted(teams, key=team_sort_key) == [33, "254", 1678, "frc-x"]

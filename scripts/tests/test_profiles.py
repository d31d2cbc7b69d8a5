"""Tests for species profiles."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.species_counterpoint.model import Species
from scripts.species_counterpoint.profiles import (
    DEFAULT_WEIGHTS,
    all_profiles,
    get_species_profile,
)
from scripts.species_counterpoint.rule_book import SPECIES_RULES, rules_for


class TestProfiles(unittest.TestCase):
    def test_every_species(self):
        profiles = all_profiles()
        self.assertEqual(set(profiles), set(Species))
        for species, profile in profiles.items():
            self.assertEqual(profile.species, species)

    def test_lookup_by_int(self):
        self.assertEqual(get_species_profile(2).description, "two against one (2:1)")

    def test_defaults(self):
        profile = get_species_profile(Species.FIRST)
        self.assertEqual(profile.beats_per_measure, 4)
        self.assertEqual(profile.max_imperfect_run, 3)
        self.assertAlmostEqual(profile.min_contrary_ratio, 0.4)

    def test_frozen(self):
        profile = get_species_profile(Species.THIRD)
        with self.assertRaises(AttributeError):
            profile.min_stepwise_ratio = 0.1

    def test_weights(self):
        self.assertEqual(
            (DEFAULT_WEIGHTS.error_penalty, DEFAULT_WEIGHTS.warning_penalty,
             DEFAULT_WEIGHTS.suggestion_penalty),
            (20, 10, 5),
        )


class TestRuleBook(unittest.TestCase):
    def test_every_species(self):
        self.assertEqual(set(SPECIES_RULES), set(Species))

    def test_copy(self):
        rules = rules_for(Species.FIRST)
        rules.clear()
        self.assertTrue(rules_for(Species.FIRST))


if __name__ == "__main__":
    unittest.main()

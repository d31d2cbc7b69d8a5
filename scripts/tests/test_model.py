"""Tests for the unified data model."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.species_counterpoint.model import (
    CONSONANCES,
    IMPERFECT_CONSONANCES,
    MAJOR_3RD,
    MINOR_3RD,
    PERFECT_5TH,
    PERFECT_CONSONANCES,
    UNISON,
    Analysis,
    Feedback,
    FeedbackType,
    Note,
    Severity,
    Species,
    ValidationResult,
    Violation,
    format_beat,
    paired_note,
    sort_voice,
)


def _n(pitch, beat, dur=4, nid=None):
    return Note(id=nid or f"n{beat}", pitch=pitch, beat=beat, duration=dur)


class TestConstants(unittest.TestCase):
    def test_interval_sets(self):
        self.assertEqual(PERFECT_CONSONANCES, {UNISON, PERFECT_5TH})
        self.assertIn(MINOR_3RD, IMPERFECT_CONSONANCES)
        self.assertIn(MAJOR_3RD, IMPERFECT_CONSONANCES)
        self.assertEqual(CONSONANCES, {0, 3, 4, 7, 8, 9})

    def test_species_values(self):
        self.assertEqual([int(s) for s in Species], [1, 2, 3, 4, 5])


class TestNote(unittest.TestCase):
    def test_end_beat(self):
        self.assertEqual(_n(60, 4, dur=2).end_beat, 6)

    def test_sounds_at_is_half_open(self):
        n = _n(60, 4, dur=4)
        self.assertTrue(n.sounds_at(4))
        self.assertTrue(n.sounds_at(7.5))
        self.assertFalse(n.sounds_at(8))
        self.assertFalse(n.sounds_at(3))


class TestVoiceHelpers(unittest.TestCase):
    def test_sort_voice_returns_new_list(self):
        notes = [_n(64, 8), _n(60, 0), _n(62, 4)]
        original = list(notes)
        result = sort_voice(notes)
        self.assertEqual([n.beat for n in result], [0, 4, 8])
        self.assertEqual(notes, original)

    def test_sort_voice_is_stable(self):
        a = _n(60, 0, nid="a")
        b = _n(64, 0, nid="b")
        self.assertEqual([n.id for n in sort_voice([a, b])], ["a", "b"])

    def test_paired_note_contains_beat(self):
        cf = [_n(60, 0), _n(62, 4)]
        self.assertEqual(paired_note(cf, 2).pitch, 60)
        self.assertEqual(paired_note(cf, 4).pitch, 62)

    def test_paired_note_absent(self):
        cf = [_n(60, 0)]
        self.assertIsNone(paired_note(cf, 4))
        self.assertIsNone(paired_note([], 0))

    def test_format_beat(self):
        self.assertEqual(format_beat(4), "4")
        self.assertEqual(format_beat(4.0), "4")
        self.assertEqual(format_beat(2.5), "2.5")


class TestResultTypes(unittest.TestCase):
    def test_violation_to_dict(self):
        v = Violation(rule=4, message="m", beat=4, note_id="x", severity=Severity.ERROR)
        self.assertEqual(
            v.to_dict(),
            {"rule": 4, "message": "m", "beat": 4, "noteId": "x", "severity": "error"},
        )

    def test_feedback_to_dict(self):
        f = Feedback(type=FeedbackType.ANALYSIS, message="m")
        self.assertEqual(f.to_dict(), {"type": "analysis", "message": "m"})

    def test_analysis_keys(self):
        self.assertEqual(
            sorted(Analysis().to_dict()),
            sorted([
                "totalNotes", "consonantIntervals", "contraryMotionPercentage",
                "errorCount", "warningCount", "suggestionCount",
            ]),
        )

    def test_passed(self):
        warn = Violation(rule=5, message="m", beat=0, note_id="x", severity=Severity.WARNING)
        err = Violation(rule=1, message="m", beat=0, note_id="x", severity=Severity.ERROR)
        self.assertTrue(ValidationResult(violations=[warn]).passed)
        self.assertFalse(ValidationResult(violations=[warn, err]).passed)


if __name__ == "__main__":
    unittest.main()

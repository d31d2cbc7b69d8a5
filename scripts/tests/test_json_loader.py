"""Tests for the JSON request loader."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.species_counterpoint.loaders.json_loader import (
    InputError,
    load_request,
    parse_note,
    parse_request,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseNote(unittest.TestCase):
    def test_full(self):
        note = parse_note({"id": "a", "note": 64, "beat": 2, "duration": 2})
        self.assertEqual((note.id, note.pitch, note.beat, note.duration), ("a", 64, 2, 2))

    def test_defaults(self):
        note = parse_note({"note": 60, "beat": 8}, index=3)
        self.assertEqual(note.id, "n3")
        self.assertEqual(note.duration, 4)

    def test_numeric_id(self):
        self.assertEqual(parse_note({"id": 7, "note": 60, "beat": 0}).id, "7")

    def test_fractional_beat(self):
        self.assertEqual(parse_note({"note": 60, "beat": 1.5, "duration": 0.5}).beat, 1.5)

    def test_missing_pitch(self):
        with self.assertRaises(InputError):
            parse_note({"beat": 0})

    def test_bad_values(self):
        for data in (
            {"note": "C4", "beat": 0},
            {"note": True, "beat": 0},
            {"note": 60.5, "beat": 0},
            {"note": 128, "beat": 0},
            {"note": 60, "beat": -1},
            {"note": 60, "beat": 0, "duration": 0},
        ):
            with self.assertRaises(InputError):
                parse_note(data)

    def test_non_finite_values(self):
        for data in (
            {"note": float("nan"), "beat": 0},
            {"note": float("inf"), "beat": 0},
            {"note": 60, "beat": float("nan")},
            {"note": 60, "beat": 0, "duration": float("inf")},
        ):
            with self.assertRaises(InputError):
                parse_note(data)

    def test_not_an_object(self):
        with self.assertRaises(InputError):
            parse_note([60, 0])


class TestParseRequest(unittest.TestCase):
    def test_default_species(self):
        request = parse_request({"cantusFirmus": [], "userNotes": []})
        self.assertEqual(request.species_type, 1)

    def test_species_passed_through(self):
        request = parse_request({"cantusFirmus": [], "userNotes": [], "speciesType": 9})
        self.assertEqual(request.species_type, 9)

    def test_missing_voice(self):
        for data in ({"cantusFirmus": []}, {"userNotes": []},
                     {"cantusFirmus": None, "userNotes": []}):
            with self.assertRaises(InputError) as ctx:
                parse_request(data)
            self.assertEqual(str(ctx.exception), "Missing cantus firmus or user notes")

    def test_voice_not_a_list(self):
        with self.assertRaises(InputError):
            parse_request({"cantusFirmus": {}, "userNotes": []})


class TestLoadRequest(unittest.TestCase):
    def test_fixture(self):
        request = load_request(FIXTURES / "first_species_request.json")
        self.assertEqual(len(request.cantus_firmus), 2)
        self.assertEqual([n.pitch for n in request.user_notes], [67, 69])

    def test_tempfile(self):
        data = {
            "cantusFirmus": [{"id": "c", "note": 55, "beat": 0}],
            "userNotes": [{"id": "u", "note": 62, "beat": 0}],
            "speciesType": 5,
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "request.json"
            path.write_text(json.dumps(data))
            request = load_request(str(path))
        self.assertEqual(request.species_type, 5)
        self.assertEqual(request.user_notes[0].id, "u")

    def test_infinity_literal(self):
        text = (
            '{"cantusFirmus": [{"note": Infinity, "beat": 0}], '
            '"userNotes": []}'
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "request.json"
            path.write_text(text)
            with self.assertRaises(InputError):
                load_request(path)

    def test_not_utf8(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "request.json"
            path.write_bytes(b'{"cantusFirmus": "\xff"}')
            with self.assertRaises(InputError):
                load_request(path)

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "request.json"
            path.write_text("{not json")
            with self.assertRaises(InputError):
                load_request(path)

    def test_dict(self):
        request = load_request({"cantusFirmus": [], "userNotes": []})
        self.assertEqual(request.user_notes, [])


if __name__ == "__main__":
    unittest.main()

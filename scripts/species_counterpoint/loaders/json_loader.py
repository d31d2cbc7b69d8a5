"""Load validation requests from a JSON file or a pre-parsed dict."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from ..model import BEATS_PER_MEASURE, MAX_PITCH, MIN_PITCH, Note


class InputError(ValueError):
    """Request rejected before any species logic runs."""


MISSING_VOICES = "Missing cantus firmus or user notes"
UNSUPPORTED_SPECIES = "Unsupported species type"


@dataclass(frozen=True)
class ValidationRequest:
    """A parsed request body."""
    cantus_firmus: List[Note]
    user_notes: List[Note]
    species_type: Any = 1


def _number(value: Any, field_name: str, note_id: str) -> Union[int, float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputError(f"Note {note_id}: '{field_name}' must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise InputError(f"Note {note_id}: '{field_name}' must be finite")
    return value


def parse_note(note_data: Dict[str, Any], index: int = 0) -> Note:
    """Parse a single wire note ``{id, note, beat, duration}``."""
    if not isinstance(note_data, dict):
        raise InputError(f"Note #{index} must be an object")
    note_id = str(note_data.get("id", f"n{index}"))
    for key in ("note", "beat"):
        if key not in note_data:
            raise InputError(f"Note {note_id}: missing '{key}'")
    pitch = _number(note_data["note"], "note", note_id)
    beat = _number(note_data["beat"], "beat", note_id)
    duration = _number(note_data.get("duration", BEATS_PER_MEASURE), "duration", note_id)
    if pitch != int(pitch) or not MIN_PITCH <= pitch <= MAX_PITCH:
        raise InputError(f"Note {note_id}: pitch {pitch} outside MIDI range")
    if beat < 0:
        raise InputError(f"Note {note_id}: beat must be >= 0")
    if duration <= 0:
        raise InputError(f"Note {note_id}: duration must be > 0")
    return Note(id=note_id, pitch=int(pitch), beat=beat, duration=duration)


def parse_notes(notes_data: Any) -> List[Note]:
    if not isinstance(notes_data, list):
        raise InputError(MISSING_VOICES)
    return [parse_note(nd, idx) for idx, nd in enumerate(notes_data)]


def parse_request(data: Dict[str, Any]) -> ValidationRequest:
    """Parse a request body; the species is checked by the runner."""
    if not isinstance(data, dict):
        raise InputError(MISSING_VOICES)
    cantus_firmus = data.get("cantusFirmus")
    user_notes = data.get("userNotes")
    if cantus_firmus is None or user_notes is None:
        raise InputError(MISSING_VOICES)
    return ValidationRequest(
        cantus_firmus=parse_notes(cantus_firmus),
        user_notes=parse_notes(user_notes),
        species_type=data.get("speciesType", 1),
    )


def load_request(source: Union[str, Path, dict]) -> ValidationRequest:
    """Load a request from a JSON file path or a pre-parsed dict."""
    if isinstance(source, dict):
        data = source
    else:
        path = Path(source)
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InputError(f"Request file {path} is not valid JSON: {exc}") from exc
    return parse_request(data)

"""Unified data model for species counterpoint validation.

Notes are placed on a quarter-beat grid: one measure spans four beats, the
strong half of a measure starts at beat 0 and the weak half at beat 2.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

Beat = Union[int, float]

# ---------------------------------------------------------------------------
# Time constants
# ---------------------------------------------------------------------------

BEATS_PER_MEASURE = 4
WEAK_HALF_OFFSET = 2

# ---------------------------------------------------------------------------
# Interval constants
# ---------------------------------------------------------------------------

UNISON = 0
MINOR_2ND = 1
MAJOR_2ND = 2
MINOR_3RD = 3
MAJOR_3RD = 4
PERFECT_4TH = 5
TRITONE = 6
PERFECT_5TH = 7
MINOR_6TH = 8
MAJOR_6TH = 9
MINOR_7TH = 10
MAJOR_7TH = 11
OCTAVE = 12

PERFECT_CONSONANCES = frozenset({UNISON, PERFECT_5TH})
IMPERFECT_CONSONANCES = frozenset({MINOR_3RD, MAJOR_3RD, MINOR_6TH, MAJOR_6TH})
CONSONANCES = PERFECT_CONSONANCES | IMPERFECT_CONSONANCES
THIRDS = frozenset({MINOR_3RD, MAJOR_3RD})
SIXTHS = frozenset({MINOR_6TH, MAJOR_6TH})

MIN_PITCH = 0
MAX_PITCH = 127


class Species(IntEnum):
    """The five Fux species."""
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5


class Motion(Enum):
    """Relative motion of two voices between consecutive time steps."""
    STATIC = "static"
    OBLIQUE = "oblique"
    SIMILAR = "similar"
    CONTRARY = "contrary"


# ---------------------------------------------------------------------------
# Note
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Note:
    """A single sounded pitch on the beat grid."""
    id: str
    pitch: int
    beat: Beat
    duration: Beat = BEATS_PER_MEASURE

    @property
    def end_beat(self) -> Beat:
        return self.beat + self.duration

    def sounds_at(self, beat: Beat) -> bool:
        return self.beat <= beat < self.end_beat


def sort_voice(notes: List[Note]) -> List[Note]:
    """Return a new list of notes sorted by beat (stable)."""
    return sorted(notes, key=lambda n: n.beat)


def paired_note(cantus_firmus: List[Note], beat: Beat) -> Optional[Note]:
    """Return the first cantus firmus note whose span contains *beat*, or None."""
    for cf in cantus_firmus:
        if cf.sounds_at(beat):
            return cf
    return None


def format_beat(beat: Beat) -> str:
    """Render a beat without a trailing '.0' for whole numbers."""
    return f"{beat:g}"


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


class Severity(Enum):
    """Violation severity level."""
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class FeedbackType(Enum):
    """Kind of non-numbered commentary."""
    WARNING = "warning"
    SUGGESTION = "suggestion"
    ANALYSIS = "analysis"


@dataclass(frozen=True)
class Violation:
    """A single numbered rule violation."""
    rule: int
    message: str
    beat: Beat
    note_id: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule,
            "message": self.message,
            "beat": self.beat,
            "noteId": self.note_id,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class Feedback:
    """Stylistic commentary that does not affect the score."""
    type: FeedbackType
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "message": self.message}


@dataclass(frozen=True)
class Analysis:
    """Summary statistics of one validation."""
    total_notes: int = 0
    consonant_intervals: int = 0
    contrary_motion_percentage: int = 0
    error_count: int = 0
    warning_count: int = 0
    suggestion_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalNotes": self.total_notes,
            "consonantIntervals": self.consonant_intervals,
            "contraryMotionPercentage": self.contrary_motion_percentage,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "suggestionCount": self.suggestion_count,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Complete report for one counterpoint submission."""
    violations: List[Violation] = field(default_factory=list)
    feedback: List[Feedback] = field(default_factory=list)
    score: int = 100
    analysis: Analysis = field(default_factory=Analysis)

    @property
    def passed(self) -> bool:
        """True if no ERROR violations were found."""
        return not any(v.severity == Severity.ERROR for v in self.violations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "violations": [v.to_dict() for v in self.violations],
            "feedback": [f.to_dict() for f in self.feedback],
            "score": self.score,
            "analysis": self.analysis.to_dict(),
        }

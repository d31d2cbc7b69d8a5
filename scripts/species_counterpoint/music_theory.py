"""Pure music theory functions: interval classification and voice motion.

No I/O. Every function is total over integers; interval classes are
normalised modulo 12.
"""

from __future__ import annotations

from .model import (
    CONSONANCES,
    IMPERFECT_CONSONANCES,
    MAJOR_7TH,
    MINOR_7TH,
    OCTAVE,
    PERFECT_CONSONANCES,
    TRITONE,
    Motion,
)

# ---------------------------------------------------------------------------
# Interval names
# ---------------------------------------------------------------------------

INTERVAL_NAMES: list[str] = [
    "unison", "minor 2nd", "major 2nd", "minor 3rd", "major 3rd", "perfect 4th",
    "tritone", "perfect 5th", "minor 6th", "major 6th", "minor 7th", "major 7th",
]

STEP_MAX_SEMITONES = 2

# ---------------------------------------------------------------------------
# Interval classification
# ---------------------------------------------------------------------------


def harmonic_class(a: int, b: int) -> int:
    """Absolute pitch difference reduced to 0-11."""
    return abs(a - b) % 12


def raw_distance(a: int, b: int) -> int:
    """Absolute pitch difference, not octave-reduced."""
    return abs(a - b)


def is_consonant(interval: int) -> bool:
    """Unison/octave, thirds, fifth, sixths."""
    return interval % 12 in CONSONANCES


def is_perfect_consonance(interval: int) -> bool:
    return interval % 12 in PERFECT_CONSONANCES


def is_imperfect_consonance(interval: int) -> bool:
    return interval % 12 in IMPERFECT_CONSONANCES


def interval_name(interval: int) -> str:
    """Human label for an interval class, e.g. 'perfect 5th'."""
    return INTERVAL_NAMES[interval % 12]


# ---------------------------------------------------------------------------
# Motion
# ---------------------------------------------------------------------------


def motion(cf1: int, cf2: int, cp1: int, cp2: int) -> Motion:
    """Classify the motion of the counterpoint against the cantus firmus."""
    cf_dir = cf2 - cf1
    cp_dir = cp2 - cp1
    if cf_dir == 0 and cp_dir == 0:
        return Motion.STATIC
    if cf_dir == 0 or cp_dir == 0:
        return Motion.OBLIQUE
    if (cf_dir > 0) == (cp_dir > 0):
        return Motion.SIMILAR
    return Motion.CONTRARY


def is_step(a: int, b: int) -> bool:
    """True for a repetition or a motion of at most a whole tone."""
    return raw_distance(a, b) <= STEP_MAX_SEMITONES


def is_leap(a: int, b: int) -> bool:
    return raw_distance(a, b) > STEP_MAX_SEMITONES


def is_forbidden_melodic_interval(a: int, b: int) -> bool:
    """Tritones, sevenths, and dissonant compound intervals.

    The compound clause overlaps with the tritone/seventh test and must stay a
    separate condition.
    """
    distance = raw_distance(a, b)
    semitones = distance % 12
    tritone = semitones == TRITONE
    seventh = semitones in (MINOR_7TH, MAJOR_7TH)
    return tritone or seventh or (distance > OCTAVE and not is_consonant(semitones))

"""Melodic rules for a single voice: climax, leap recovery, motion ratios."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..model import Feedback, FeedbackType, Note, Severity, Violation
from ..music_theory import interval_name, is_leap, is_step, raw_distance
from .base import RULE_LEAP_RECOVERY


@dataclass(frozen=True)
class Climax:
    """Highest pitch of a voice, its first occurrence and how often it appears."""
    note: Note
    count: int


def find_climax(notes: List[Note]) -> Optional[Climax]:
    """Return the melodic climax of *notes*, or None for an empty voice."""
    if not notes:
        return None
    highest = notes[0]
    count = 0
    for n in notes:
        if n.pitch > highest.pitch:
            highest = n
            count = 1
        elif n.pitch == highest.pitch:
            count += 1
    return Climax(note=highest, count=count)


def climax_feedback(notes: List[Note]) -> Optional[Feedback]:
    """Ask for a single climax placed away from the phrase boundaries."""
    climax = find_climax(notes)
    if climax is None:
        return None
    if climax.count > 1:
        return Feedback(
            type=FeedbackType.WARNING,
            message=(
                "Multiple melodic high points detected. "
                "Counterpoint should have a single climax."
            ),
        )
    if climax.note is notes[0] or climax.note is notes[-1]:
        return Feedback(
            type=FeedbackType.SUGGESTION,
            message=(
                "Consider placing the melodic climax in the middle of the phrase "
                "rather than at the beginning or end."
            ),
        )
    return None


def leap_recovery(notes: List[Note], large_leap: int = 7) -> List[Violation]:
    """Flag leaps followed by further motion in the same direction.

    A leap larger than *large_leap* semitones yields a warning, smaller leaps a
    suggestion. The violation is reported on the note after the leap's target.
    """
    violations: List[Violation] = []
    for k in range(2, len(notes)):
        n1, n2, n3 = notes[k - 2], notes[k - 1], notes[k]
        if not is_leap(n1.pitch, n2.pitch):
            continue
        leap = n2.pitch - n1.pitch
        recovery = n3.pitch - n2.pitch
        if (leap > 0 and recovery > 0) or (leap < 0 and recovery < 0):
            size = raw_distance(n1.pitch, n2.pitch)
            large = size > large_leap
            label = "Large leap" if large else "Leap"
            violations.append(
                Violation(
                    rule=RULE_LEAP_RECOVERY,
                    message=f"{label} ({interval_name(size)}) should be followed by contrary motion",
                    beat=n3.beat,
                    note_id=n3.id,
                    severity=Severity.WARNING if large else Severity.SUGGESTION,
                )
            )
    return violations


def contrary_motion_feedback(contrary: int, total: int,
                             min_ratio: float = 0.4) -> Optional[Feedback]:
    """Suggest more contrary motion when its share is below *min_ratio*."""
    percentage = contrary / total * 100 if total > 0 else 0.0
    if percentage < min_ratio * 100:
        return Feedback(
            type=FeedbackType.SUGGESTION,
            message=(
                "Use more contrary motion for voice independence "
                f"(currently {round_half_up(percentage)}%)"
            ),
        )
    return None


def stepwise_ratio(notes: List[Note]) -> float:
    """Fraction of consecutive note pairs moving by step (0.0 below two notes)."""
    if len(notes) < 2:
        return 0.0
    steps = sum(
        1
        for k in range(1, len(notes))
        if is_step(notes[k - 1].pitch, notes[k].pitch)
    )
    return steps / (len(notes) - 1)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values."""
    return int(value + 0.5)

"""Two-voice motion rules: parallel and hidden perfect consonances."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..model import (
    PERFECT_5TH,
    Motion,
    Note,
    Severity,
    Violation,
    format_beat,
)
from ..music_theory import harmonic_class, is_perfect_consonance, is_step, motion
from .base import RULE_PARALLELS


@dataclass(frozen=True)
class Transition:
    """Two consecutive cantus firmus / counterpoint pairs."""
    cf_prev: Note
    cf_curr: Note
    cp_prev: Note
    cp_curr: Note

    @property
    def prev_interval(self) -> int:
        return harmonic_class(self.cf_prev.pitch, self.cp_prev.pitch)

    @property
    def curr_interval(self) -> int:
        return harmonic_class(self.cf_curr.pitch, self.cp_curr.pitch)

    @property
    def motion(self) -> Motion:
        return motion(self.cf_prev.pitch, self.cf_curr.pitch,
                      self.cp_prev.pitch, self.cp_curr.pitch)


def aligned_transitions(cantus_firmus: List[Note], counterpoint: List[Note]) -> Iterator[Transition]:
    """Yield transitions between index-aligned note pairs (note against note)."""
    for i in range(1, min(len(cantus_firmus), len(counterpoint))):
        yield Transition(
            cf_prev=cantus_firmus[i - 1],
            cf_curr=cantus_firmus[i],
            cp_prev=counterpoint[i - 1],
            cp_curr=counterpoint[i],
        )


def parallel_perfect(t: Transition) -> Optional[Violation]:
    """Same perfect consonance reached by similar motion."""
    prev_iv = t.prev_interval
    if not is_perfect_consonance(prev_iv) or prev_iv != t.curr_interval:
        return None
    if t.motion != Motion.SIMILAR:
        return None
    label = "fifths" if prev_iv == PERFECT_5TH else "unisons/octaves"
    return Violation(
        rule=RULE_PARALLELS,
        message=f"Parallel {label} at beat {format_beat(t.cp_curr.beat)}",
        beat=t.cp_curr.beat,
        note_id=t.cp_curr.id,
        severity=Severity.ERROR,
    )


def hidden_perfect(t: Transition) -> Optional[Violation]:
    """Similar motion into a perfect consonance without a step in the counterpoint."""
    curr_iv = t.curr_interval
    if not is_perfect_consonance(curr_iv) or t.motion != Motion.SIMILAR:
        return None
    if is_step(t.cp_prev.pitch, t.cp_curr.pitch):
        return None
    label = "fifth" if curr_iv == PERFECT_5TH else "octave"
    return Violation(
        rule=RULE_PARALLELS,
        message=f"Hidden {label} - avoid similar motion to perfect consonances",
        beat=t.cp_curr.beat,
        note_id=t.cp_curr.id,
        severity=Severity.WARNING,
    )

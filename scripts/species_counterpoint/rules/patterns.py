"""Multi-note figures: nota cambiata and suspensions.

Detection works on fixed-size sliding windows so the figures can be tested
without running a whole species rule set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Sequence, Tuple

from ..model import Note, paired_note
from ..music_theory import harmonic_class, is_consonant

CAMBIATA_LENGTH = 5


def sliding_windows(notes: Sequence[Note], size: int) -> Iterator[Tuple[int, Sequence[Note]]]:
    """Yield ``(start, window)`` for every full window of *size* notes."""
    for start in range(len(notes) - size + 1):
        yield start, notes[start:start + size]


# ---------------------------------------------------------------------------
# Nota cambiata
# ---------------------------------------------------------------------------


def _is_step_down(delta: int) -> bool:
    return -2 <= delta <= -1


def _is_step_up(delta: int) -> bool:
    return 1 <= delta <= 2


def cambiata_contour(deltas: Sequence[int]) -> bool:
    """Melodic shape test for a five-note cambiata.

    Intended shape: step down, third down, step up, step up. A minor third
    down only needs the opening step; a major third down only needs the two
    closing steps.
    TODO: confirm with curriculum owners whether both thirds should require
    the full four-interval shape.
    """
    d0, d1, d2, d3 = deltas
    return (
        (_is_step_down(d0) and d1 == -3)
        or (d1 == -4 and _is_step_up(d2) and _is_step_up(d3))
    )


def is_nota_cambiata(window: Sequence[Note], cantus_firmus: List[Note]) -> bool:
    """True if *window* is a nota cambiata against the cantus firmus.

    The second note must be dissonant and the third consonant, both measured
    against the cantus firmus note sounding under the second note.
    """
    if len(window) != CAMBIATA_LENGTH:
        return False
    deltas = [window[k].pitch - window[k - 1].pitch for k in range(1, CAMBIATA_LENGTH)]
    if not cambiata_contour(deltas):
        return False
    cf = paired_note(cantus_firmus, window[1].beat)
    if cf is None:
        return False
    second = harmonic_class(cf.pitch, window[1].pitch)
    third = harmonic_class(cf.pitch, window[2].pitch)
    return not is_consonant(second) and is_consonant(third)


def in_cambiata_context(counterpoint: List[Note], index: int,
                        cantus_firmus: List[Note]) -> bool:
    """True if any cambiata window containing *index* matches."""
    first = max(0, index - (CAMBIATA_LENGTH - 1))
    last = min(len(counterpoint) - CAMBIATA_LENGTH, index)
    for start in range(first, last + 1):
        if is_nota_cambiata(counterpoint[start:start + CAMBIATA_LENGTH], cantus_firmus):
            return True
    return False


def find_cambiatas(counterpoint: List[Note], cantus_firmus: List[Note]) -> List[int]:
    """Start indices of every nota cambiata in the counterpoint."""
    return [
        start
        for start, window in sliding_windows(counterpoint, CAMBIATA_LENGTH)
        if is_nota_cambiata(window, cantus_firmus)
    ]


# ---------------------------------------------------------------------------
# Suspensions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SuspensionFigure:
    """Preparation, dissonant suspension, and resolution."""
    preparation: Note
    suspension: Note
    resolution: Note
    suspension_cf: Note

    @property
    def is_tied(self) -> bool:
        return self.preparation.pitch == self.suspension.pitch

    @property
    def resolution_drop(self) -> int:
        """Semitones from suspension down to resolution (negative if upward)."""
        return self.suspension.pitch - self.resolution.pitch

    @property
    def resolves_down_by_step(self) -> bool:
        return self.resolution_drop in (1, 2)


def suspension_figures(counterpoint: List[Note], cantus_firmus: List[Note],
                       is_strong: Callable[[Note], bool]) -> Iterator[SuspensionFigure]:
    """Yield every prepare/dissonate/resolve triple around a strong-beat dissonance."""
    for _, (prep, susp, res) in sliding_windows(counterpoint, 3):
        if not is_strong(susp):
            continue
        cf = paired_note(cantus_firmus, susp.beat)
        if cf is None or is_consonant(harmonic_class(cf.pitch, susp.pitch)):
            continue
        yield SuspensionFigure(
            preparation=prep,
            suspension=susp,
            resolution=res,
            suspension_cf=cf,
        )

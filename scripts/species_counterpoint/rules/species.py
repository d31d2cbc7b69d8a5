"""Species rule sets, one validator per Fux species.

Every validator receives both voices sorted by beat and never mutates them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

from ..model import (
    SIXTHS,
    THIRDS,
    Feedback,
    FeedbackType,
    Motion,
    Note,
    Severity,
    Species,
    Violation,
    format_beat,
    paired_note,
)
from ..music_theory import (
    harmonic_class,
    interval_name,
    is_consonant,
    is_forbidden_melodic_interval,
    is_perfect_consonance,
    is_step,
    raw_distance,
)
from ..profiles import SpeciesProfile, get_species_profile
from .base import (
    RULE_HARMONIC,
    RULE_IMPERFECT_RUN,
    RULE_MELODIC,
    RULE_PERFECT_BOUNDARY,
    RULE_WEAK_BEAT_DISSONANCE,
    SpeciesResult,
    SpeciesValidator,
)
from .melodic import (
    climax_feedback,
    contrary_motion_feedback,
    leap_recovery,
    round_half_up,
    stepwise_ratio,
)
from .motion import aligned_transitions, hidden_perfect, parallel_perfect
from .patterns import in_cambiata_context, suspension_figures

logger = logging.getLogger(__name__)


def _harmonic_interval(cantus_firmus: List[Note], note: Note) -> Optional[int]:
    """Interval class against the sounding cantus firmus note, None if unpaired."""
    cf = paired_note(cantus_firmus, note.beat)
    if cf is None:
        return None
    return harmonic_class(cf.pitch, note.pitch)


def _is_paired_dissonance(cantus_firmus: List[Note], note: Note) -> bool:
    iv = _harmonic_interval(cantus_firmus, note)
    return iv is not None and not is_consonant(iv)


def _same_imperfect_class(prev_iv: int, curr_iv: int) -> bool:
    """Both thirds or both sixths."""
    return (
        (prev_iv in THIRDS and curr_iv in THIRDS)
        or (prev_iv in SIXTHS and curr_iv in SIXTHS)
    )


class _SpeciesRules:
    """Shared plumbing for the species validators."""

    species: Species

    def __init__(self, profile: Optional[SpeciesProfile] = None):
        self.profile = profile or get_species_profile(self.species)

    def _is_downbeat(self, note: Note) -> bool:
        return note.beat % self.profile.beats_per_measure == 0

    def _is_weak_half(self, note: Note) -> bool:
        return note.beat % self.profile.beats_per_measure == self.profile.weak_half_offset

    def _strong_beat_consonance(self, cantus_firmus: List[Note],
                                counterpoint: List[Note]) -> List[Violation]:
        violations: List[Violation] = []
        for note in counterpoint:
            if self._is_downbeat(note) and _is_paired_dissonance(cantus_firmus, note):
                violations.append(
                    Violation(
                        rule=RULE_HARMONIC,
                        message=f"Strong beat must be consonant at beat {format_beat(note.beat)}",
                        beat=note.beat,
                        note_id=note.id,
                        severity=Severity.ERROR,
                    )
                )
        return violations


# ---------------------------------------------------------------------------
# FirstSpecies
# ---------------------------------------------------------------------------


class FirstSpecies(_SpeciesRules):
    """Note against note: consonance, perfect boundaries, melodic and motion rules."""

    species = Species.FIRST

    def check(self, cantus_firmus: List[Note], counterpoint: List[Note]) -> SpeciesResult:
        result = SpeciesResult(species=self.species)
        result.violations.extend(self._consonance(cantus_firmus, counterpoint))
        result.violations.extend(self._boundaries(cantus_firmus, counterpoint))
        result.violations.extend(self._melodic_intervals(counterpoint))
        self._motion(cantus_firmus, counterpoint, result)

        climax = climax_feedback(counterpoint)
        if climax is not None:
            result.feedback.append(climax)

        result.violations.extend(
            leap_recovery(counterpoint, large_leap=self.profile.large_leap_threshold)
        )

        contrary = contrary_motion_feedback(
            result.contrary_motion_count,
            result.total_motions,
            min_ratio=self.profile.min_contrary_ratio,
        )
        if contrary is not None:
            result.feedback.append(contrary)
        return result

    def _consonance(self, cantus_firmus: List[Note],
                    counterpoint: List[Note]) -> List[Violation]:
        violations: List[Violation] = []
        for note in counterpoint:
            iv = _harmonic_interval(cantus_firmus, note)
            if iv is not None and not is_consonant(iv):
                violations.append(
                    Violation(
                        rule=RULE_HARMONIC,
                        message=(
                            f"Dissonant interval ({interval_name(iv)}) "
                            f"at beat {format_beat(note.beat)}"
                        ),
                        beat=note.beat,
                        note_id=note.id,
                        severity=Severity.ERROR,
                    )
                )
        return violations

    def _boundaries(self, cantus_firmus: List[Note],
                    counterpoint: List[Note]) -> List[Violation]:
        violations: List[Violation] = []
        if not counterpoint or not cantus_firmus:
            return violations
        for where, cf, cp in (
            ("begin", cantus_firmus[0], counterpoint[0]),
            ("end", cantus_firmus[-1], counterpoint[-1]),
        ):
            if cp.beat != cf.beat:
                continue
            if not is_perfect_consonance(harmonic_class(cf.pitch, cp.pitch)):
                violations.append(
                    Violation(
                        rule=RULE_PERFECT_BOUNDARY,
                        message=f"Must {where} with perfect consonance (unison, 5th, or octave)",
                        beat=cp.beat,
                        note_id=cp.id,
                        severity=Severity.ERROR,
                    )
                )
        return violations

    def _melodic_intervals(self, counterpoint: List[Note]) -> List[Violation]:
        violations: List[Violation] = []
        for k in range(1, len(counterpoint)):
            prev, curr = counterpoint[k - 1], counterpoint[k]
            distance = raw_distance(prev.pitch, curr.pitch)
            if is_forbidden_melodic_interval(prev.pitch, curr.pitch):
                violations.append(
                    Violation(
                        rule=RULE_MELODIC,
                        message=(
                            f"Forbidden melodic interval ({distance} semitones) "
                            f"at beat {format_beat(curr.beat)}"
                        ),
                        beat=curr.beat,
                        note_id=curr.id,
                        severity=Severity.ERROR,
                    )
                )
            if distance > self.profile.max_melodic_leap:
                violations.append(
                    Violation(
                        rule=RULE_MELODIC,
                        message=(
                            f"Excessive leap ({distance} semitones) "
                            f"at beat {format_beat(curr.beat)}"
                        ),
                        beat=curr.beat,
                        note_id=curr.id,
                        severity=Severity.ERROR,
                    )
                )
        return violations

    def _motion(self, cantus_firmus: List[Note], counterpoint: List[Note],
                result: SpeciesResult) -> None:
        """Parallels, hidden perfects, motion counts and imperfect runs."""
        run = 0
        for t in aligned_transitions(cantus_firmus, counterpoint):
            for finding in (parallel_perfect(t), hidden_perfect(t)):
                if finding is not None:
                    result.violations.append(finding)

            result.total_motions += 1
            if t.motion == Motion.CONTRARY:
                result.contrary_motion_count += 1

            if _same_imperfect_class(t.prev_interval, t.curr_interval):
                run += 1
                continue
            if run > self.profile.max_imperfect_run:
                result.violations.append(
                    Violation(
                        rule=RULE_IMPERFECT_RUN,
                        message=f"Too many consecutive thirds or sixths ({run})",
                        beat=t.cp_curr.beat,
                        note_id=t.cp_curr.id,
                        severity=Severity.WARNING,
                    )
                )
            run = 0


# ---------------------------------------------------------------------------
# SecondSpecies
# ---------------------------------------------------------------------------


class SecondSpecies(_SpeciesRules):
    """Two against one: consonant downbeats, passing tones on the weak half."""

    species = Species.SECOND

    def check(self, cantus_firmus: List[Note], counterpoint: List[Note]) -> SpeciesResult:
        result = SpeciesResult(species=self.species)
        result.violations.extend(self._strong_beat_consonance(cantus_firmus, counterpoint))
        result.violations.extend(self._passing_tones(cantus_firmus, counterpoint))

        if counterpoint and counterpoint[0].beat not in (0, self.profile.weak_half_offset):
            result.feedback.append(
                Feedback(
                    type=FeedbackType.SUGGESTION,
                    message="Species 2 typically begins with a half rest or on the downbeat",
                )
            )
        return result

    def _passing_tones(self, cantus_firmus: List[Note],
                       counterpoint: List[Note]) -> List[Violation]:
        violations: List[Violation] = []
        for k in range(1, len(counterpoint) - 1):
            prev, curr, nxt = counterpoint[k - 1], counterpoint[k], counterpoint[k + 1]
            if not self._is_weak_half(curr):
                continue
            if not _is_paired_dissonance(cantus_firmus, curr):
                continue
            approach = curr.pitch - prev.pitch
            departure = nxt.pitch - curr.pitch
            if not is_step(prev.pitch, curr.pitch) or not is_step(curr.pitch, nxt.pitch):
                message = (
                    "Dissonance must be approached and left by step "
                    f"at beat {format_beat(curr.beat)}"
                )
            elif approach * departure <= 0:
                message = f"Passing tone must move in same direction at beat {format_beat(curr.beat)}"
            else:
                continue
            violations.append(
                Violation(
                    rule=RULE_WEAK_BEAT_DISSONANCE,
                    message=message,
                    beat=curr.beat,
                    note_id=curr.id,
                    severity=Severity.ERROR,
                )
            )
        return violations


# ---------------------------------------------------------------------------
# ThirdSpecies
# ---------------------------------------------------------------------------


class ThirdSpecies(_SpeciesRules):
    """Four against one: consonant downbeats, stepwise dissonance, nota cambiata."""

    species = Species.THIRD

    def check(self, cantus_firmus: List[Note], counterpoint: List[Note]) -> SpeciesResult:
        result = SpeciesResult(species=self.species)
        result.violations.extend(self._strong_beat_consonance(cantus_firmus, counterpoint))
        result.violations.extend(self._weak_beat_dissonance(cantus_firmus, counterpoint))

        ratio = stepwise_ratio(counterpoint)
        if ratio < self.profile.min_stepwise_ratio:
            result.feedback.append(
                Feedback(
                    type=FeedbackType.SUGGESTION,
                    message=(
                        "Use more stepwise motion in Species 3 "
                        f"(currently {round_half_up(ratio * 100)}%)"
                    ),
                )
            )
        return result

    def _weak_beat_dissonance(self, cantus_firmus: List[Note],
                              counterpoint: List[Note]) -> List[Violation]:
        violations: List[Violation] = []
        for k in range(1, len(counterpoint) - 1):
            prev, curr, nxt = counterpoint[k - 1], counterpoint[k], counterpoint[k + 1]
            if self._is_downbeat(curr):
                continue
            if not _is_paired_dissonance(cantus_firmus, curr):
                continue
            if is_step(prev.pitch, curr.pitch) and is_step(curr.pitch, nxt.pitch):
                continue
            if in_cambiata_context(counterpoint, k, cantus_firmus):
                logger.debug("nota cambiata exempts note %s at beat %s", curr.id, curr.beat)
                continue
            violations.append(
                Violation(
                    rule=RULE_WEAK_BEAT_DISSONANCE,
                    message=(
                        "Dissonance must be approached and left by step "
                        f"at beat {format_beat(curr.beat)}"
                    ),
                    beat=curr.beat,
                    note_id=curr.id,
                    severity=Severity.ERROR,
                )
            )
        return violations


# ---------------------------------------------------------------------------
# FourthSpecies
# ---------------------------------------------------------------------------


class FourthSpecies(_SpeciesRules):
    """Syncopation: prepared, tied suspensions resolving down by step."""

    species = Species.FOURTH

    def check(self, cantus_firmus: List[Note], counterpoint: List[Note]) -> SpeciesResult:
        result = SpeciesResult(species=self.species)
        for fig in suspension_figures(counterpoint, cantus_firmus, self._is_downbeat):
            susp, res = fig.suspension, fig.resolution
            prep_iv = _harmonic_interval(cantus_firmus, fig.preparation)
            if prep_iv is not None:
                if not is_consonant(prep_iv):
                    result.violations.append(
                        Violation(
                            rule=RULE_HARMONIC,
                            message=(
                                "Suspension must be prepared by consonance "
                                f"at beat {format_beat(fig.preparation.beat)}"
                            ),
                            beat=susp.beat,
                            note_id=susp.id,
                            severity=Severity.ERROR,
                        )
                    )
                if not fig.is_tied:
                    result.violations.append(
                        Violation(
                            rule=RULE_HARMONIC,
                            message=(
                                "Suspension must be tied from same note "
                                f"at beat {format_beat(susp.beat)}"
                            ),
                            beat=susp.beat,
                            note_id=susp.id,
                            severity=Severity.ERROR,
                        )
                    )

            if not fig.resolves_down_by_step:
                result.violations.append(
                    Violation(
                        rule=RULE_HARMONIC,
                        message=(
                            "Suspension must resolve downward by step "
                            f"at beat {format_beat(res.beat)}"
                        ),
                        beat=res.beat,
                        note_id=res.id,
                        severity=Severity.ERROR,
                    )
                )
            if _is_paired_dissonance(cantus_firmus, res):
                result.violations.append(
                    Violation(
                        rule=RULE_HARMONIC,
                        message=(
                            "Suspension must resolve to consonance "
                            f"at beat {format_beat(res.beat)}"
                        ),
                        beat=res.beat,
                        note_id=res.id,
                        severity=Severity.ERROR,
                    )
                )

        syncopated = sum(1 for n in counterpoint if n.beat % 2 == 1)
        if syncopated < len(counterpoint) * self.profile.min_syncopation_ratio:
            result.feedback.append(
                Feedback(
                    type=FeedbackType.SUGGESTION,
                    message=(
                        "Species 4 should emphasize syncopation - "
                        "use more tied notes across bar lines"
                    ),
                )
            )
        return result


# ---------------------------------------------------------------------------
# FifthSpecies
# ---------------------------------------------------------------------------


class FifthSpecies(_SpeciesRules):
    """Florid counterpoint: strong beats consonant unless a prepared suspension."""

    species = Species.FIFTH

    def check(self, cantus_firmus: List[Note], counterpoint: List[Note]) -> SpeciesResult:
        result = SpeciesResult(species=self.species)
        for k, note in enumerate(counterpoint):
            if not self._is_downbeat(note) or not _is_paired_dissonance(cantus_firmus, note):
                continue
            prep = counterpoint[k - 1] if k > 0 else None
            if prep is not None and prep.pitch == note.pitch:
                prep_iv = _harmonic_interval(cantus_firmus, prep)
                if prep_iv is not None and not is_consonant(prep_iv):
                    result.violations.append(
                        Violation(
                            rule=RULE_HARMONIC,
                            message=(
                                "Suspension preparation must be consonant "
                                f"at beat {format_beat(note.beat)}"
                            ),
                            beat=note.beat,
                            note_id=note.id,
                            severity=Severity.ERROR,
                        )
                    )
                continue
            result.violations.append(
                Violation(
                    rule=RULE_HARMONIC,
                    message=(
                        "Strong beat should be consonant or prepared suspension "
                        f"at beat {format_beat(note.beat)}"
                    ),
                    beat=note.beat,
                    note_id=note.id,
                    severity=Severity.WARNING,
                )
            )

        result.feedback.append(self._mixture(counterpoint))
        return result

    def _mixture(self, counterpoint: List[Note]) -> Feedback:
        p = self.profile
        whole = sum(1 for n in counterpoint if n.duration >= p.whole_note_min)
        half = sum(1 for n in counterpoint if n.duration == p.half_note)
        quarter = sum(1 for n in counterpoint if n.duration == p.quarter_note)
        return Feedback(
            type=FeedbackType.ANALYSIS,
            message=(
                f"Species 5 mixture: {whole} whole notes, "
                f"{half} half notes, {quarter} quarter notes"
            ),
        )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

VALIDATORS: Dict[Species, Type[_SpeciesRules]] = {
    Species.FIRST: FirstSpecies,
    Species.SECOND: SecondSpecies,
    Species.THIRD: ThirdSpecies,
    Species.FOURTH: FourthSpecies,
    Species.FIFTH: FifthSpecies,
}

if set(VALIDATORS) != set(Species):
    raise RuntimeError("every species needs exactly one validator")


def get_validator(species: Species) -> SpeciesValidator:
    """Instantiate the validator for *species*."""
    return VALIDATORS[Species(species)]()

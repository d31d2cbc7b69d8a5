"""Score and summary statistics for a validated submission.

Each finding costs a fixed number of points; the total is clamped to
``[floor, ceiling]`` (0-100 by default). Feedback never affects the score.
"""

from __future__ import annotations

from typing import List

from .model import Analysis, Severity, ValidationResult, Violation
from .profiles import DEFAULT_WEIGHTS, ScoringWeights
from .rules.base import RULE_HARMONIC, SpeciesResult
from .rules.melodic import round_half_up


def compute_score(
    error_count: int,
    warning_count: int,
    suggestion_count: int,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Penalty-based score, clamped to the weights' bounds."""
    raw = (
        weights.ceiling
        - weights.error_penalty * error_count
        - weights.warning_penalty * warning_count
        - weights.suggestion_penalty * suggestion_count
    )
    return max(weights.floor, min(weights.ceiling, raw))


def contrary_motion_percentage(contrary: int, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up(contrary / total * 100)


def _harmonic_error_count(violations: List[Violation]) -> int:
    return sum(
        1 for v in violations
        if v.rule == RULE_HARMONIC and v.severity == Severity.ERROR
    )


def build_result(
    species_result: SpeciesResult,
    total_notes: int,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ValidationResult:
    """Aggregate a species result into the final report."""
    errors = species_result.error_count
    warnings = species_result.warning_count
    suggestions = species_result.suggestion_count
    analysis = Analysis(
        total_notes=total_notes,
        consonant_intervals=total_notes - _harmonic_error_count(species_result.violations),
        contrary_motion_percentage=contrary_motion_percentage(
            species_result.contrary_motion_count, species_result.total_motions
        ),
        error_count=errors,
        warning_count=warnings,
        suggestion_count=suggestions,
    )
    return ValidationResult(
        violations=list(species_result.violations),
        feedback=list(species_result.feedback),
        score=compute_score(errors, warnings, suggestions, weights),
        analysis=analysis,
    )

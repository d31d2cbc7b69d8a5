"""Validator protocol and per-species result type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, runtime_checkable

from ..model import Feedback, Note, Severity, Species, Violation
from ..profiles import SpeciesProfile

# Rule numbers as reported to the student.
RULE_HARMONIC = 1
RULE_PERFECT_BOUNDARY = 2
RULE_WEAK_BEAT_DISSONANCE = 2
RULE_MELODIC = 3
RULE_PARALLELS = 4
RULE_IMPERFECT_RUN = 5
RULE_LEAP_RECOVERY = 6


@dataclass
class SpeciesResult:
    """Result of applying one species rule set."""
    species: Species
    violations: List[Violation] = field(default_factory=list)
    feedback: List[Feedback] = field(default_factory=list)
    contrary_motion_count: int = 0
    total_motions: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.WARNING)

    @property
    def suggestion_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.SUGGESTION)


@runtime_checkable
class SpeciesValidator(Protocol):
    """Protocol for a species rule set.

    Both voices must already be sorted by beat.
    """

    profile: SpeciesProfile

    @property
    def species(self) -> Species: ...

    def check(self, cantus_firmus: List[Note], counterpoint: List[Note]) -> SpeciesResult: ...

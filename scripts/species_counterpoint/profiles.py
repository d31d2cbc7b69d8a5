"""Species-specific validation profiles.

Each species enforces a different rule set with its own thresholds. Profiles
are frozen so they can be shared between concurrent validations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .model import BEATS_PER_MEASURE, OCTAVE, PERFECT_5TH, WEAK_HALF_OFFSET, Species


@dataclass(frozen=True)
class SpeciesProfile:
    """Validation profile for one species."""

    species: Species
    description: str

    # Meter
    beats_per_measure: int = BEATS_PER_MEASURE
    weak_half_offset: int = WEAK_HALF_OFFSET

    # Melodic limits
    max_melodic_leap: int = OCTAVE
    large_leap_threshold: int = PERFECT_5TH

    # Run of parallel thirds or sixths tolerated before a warning.
    max_imperfect_run: int = 3

    # Feedback thresholds (ratios in [0, 1]).
    min_contrary_ratio: float = 0.4
    min_stepwise_ratio: float = 0.7
    min_syncopation_ratio: float = 0.5

    # Duration classes for the florid mixture summary (beats).
    whole_note_min: int = 4
    half_note: int = 2
    quarter_note: int = 1


@dataclass(frozen=True)
class ScoringWeights:
    """Penalty per finding and the score bounds."""
    error_penalty: int = 20
    warning_penalty: int = 10
    suggestion_penalty: int = 5
    floor: int = 0
    ceiling: int = 100


DEFAULT_WEIGHTS = ScoringWeights()

# ---------------------------------------------------------------------------
# Profile registry
# ---------------------------------------------------------------------------

_PROFILES: Dict[Species, SpeciesProfile] = {
    Species.FIRST: SpeciesProfile(
        species=Species.FIRST,
        description="note against note (1:1)",
    ),
    Species.SECOND: SpeciesProfile(
        species=Species.SECOND,
        description="two against one (2:1)",
    ),
    Species.THIRD: SpeciesProfile(
        species=Species.THIRD,
        description="four against one (4:1)",
    ),
    Species.FOURTH: SpeciesProfile(
        species=Species.FOURTH,
        description="syncopation and suspension",
    ),
    Species.FIFTH: SpeciesProfile(
        species=Species.FIFTH,
        description="florid counterpoint",
    ),
}


def get_species_profile(species: Species) -> SpeciesProfile:
    """Return the profile for *species*."""
    return _PROFILES[Species(species)]


def all_profiles() -> Dict[Species, SpeciesProfile]:
    return dict(_PROFILES)

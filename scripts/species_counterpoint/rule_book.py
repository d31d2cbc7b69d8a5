"""Student-facing rule descriptions per species.

Plain reference text shown alongside exercises; the validators in
``rules/species.py`` enforce the checkable subset.
"""

from __future__ import annotations

from typing import Dict, List

from .model import Species

SPECIES_RULES: Dict[Species, List[str]] = {
    Species.FIRST: [
        "All intervals must be consonant (unisons, 3rds, 5ths, 6ths, octaves)",
        "Begin and end with perfect consonances (unison, 5th, or octave)",
        "Avoid parallel perfect consonances (no consecutive 5ths or octaves)",
        "Avoid hidden parallels (similar motion to perfect consonances)",
        "Limit consecutive imperfect consonances (max 3 thirds or sixths in a row)",
        "Use primarily stepwise motion with strategic leaps",
        "After large leaps, prefer contrary motion for recovery",
        "Maintain single melodic climax, not at beginning or end",
        "Prefer contrary motion for voice independence (aim for 40%+)",
    ],
    Species.SECOND: [
        "Strong beats (downbeats) must always be consonant",
        "Weak beats may use dissonance only as passing tones",
        "Passing tones must be approached and left by step in same direction",
        "No leaps to or from dissonant intervals",
        "Begin with half rest or on downbeat",
        "End with proper cadential approach (6-8 or 3-8 motion)",
        "All Species 1 rules apply to strong beat progressions",
    ],
    Species.THIRD: [
        "Strong beats (beat 1 of measure) must be consonant",
        "Weak beat dissonances must move by step (passing tones)",
        "Nota cambiata allowed: step down, leap down 3rd, step up twice",
        "Use predominantly stepwise motion (70%+ recommended)",
        "Beat 3 should preferably be consonant (moderately strong)",
        "No direction changes on dissonant beats (except nota cambiata)",
        "Maintain rhythmic flow with quarter note patterns",
    ],
    Species.FOURTH: [
        "Suspensions must be prepared by consonant note of same pitch",
        "Dissonant suspensions occur on strong beats (tied from weak beat)",
        "Suspensions must resolve downward by step to consonance",
        "Resolution occurs on weak beat following suspension",
        "Common patterns: 7-6, 4-3, 9-8 suspensions",
        "Emphasize syncopation with tied notes across bar lines",
        "Chain suspensions for expressive effect",
    ],
    Species.FIFTH: [
        "Combines techniques from all previous species",
        "May use whole notes, half notes, quarter notes, paired eighth notes",
        "Strong beats should be consonant unless prepared suspensions",
        "Dissonances follow species-appropriate treatment based on context",
        "Eighth notes only in pairs, typically on weak beats",
        "May include rests for variety and expression",
        "Suspension resolution may be delayed by one note",
        "Most elaborate cadential approaches possible",
    ],
}


def rules_for(species: Species) -> List[str]:
    """Return a copy of the rule list for *species*."""
    return list(SPECIES_RULES[Species(species)])

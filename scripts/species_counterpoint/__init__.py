"""Species Counterpoint Checker - Fux species validation engine.

Usage:
    python -m species_counterpoint validate request.json
    python -m species_counterpoint validate request.json --species 3 --json
    python -m species_counterpoint rules --species 4
"""

from .loaders import InputError
from .model import Feedback, Note, Severity, Species, ValidationResult, Violation
from .runner import overall_passed, validate, validate_request
from .scoring import compute_score

__all__ = [
    "Feedback",
    "InputError",
    "Note",
    "Severity",
    "Species",
    "ValidationResult",
    "Violation",
    "compute_score",
    "overall_passed",
    "validate",
    "validate_request",
]

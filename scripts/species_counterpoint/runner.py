"""Validation orchestrator: one submission, one species, one report."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Union

from .loaders.json_loader import (
    UNSUPPORTED_SPECIES,
    InputError,
    load_request,
)
from .model import Note, Species, ValidationResult, sort_voice
from .rules.species import get_validator
from .scoring import build_result

logger = logging.getLogger(__name__)


def resolve_species(value: Any) -> Species:
    """Map a request's species selector onto the closed Species enum."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputError(UNSUPPORTED_SPECIES)
    try:
        return Species(value)
    except ValueError:
        raise InputError(UNSUPPORTED_SPECIES) from None


def validate(
    cantus_firmus: List[Note],
    user_notes: List[Note],
    species: Union[Species, int] = Species.FIRST,
) -> ValidationResult:
    """Check a counterpoint line against a cantus firmus.

    Args:
        cantus_firmus: Reference melody, in any order.
        user_notes: The submitted counterpoint, in any order.
        species: Species number 1-5.

    Returns:
        The full report. Neither input list is modified.

    Raises:
        InputError: if a voice is missing or the species is unsupported.
    """
    if cantus_firmus is None or user_notes is None:
        raise InputError("Missing cantus firmus or user notes")
    resolved = resolve_species(species)
    cf_sorted = sort_voice(cantus_firmus)
    cp_sorted = sort_voice(user_notes)

    species_result = get_validator(resolved).check(cf_sorted, cp_sorted)
    result = build_result(species_result, total_notes=len(cp_sorted))
    logger.debug(
        "species %d: %d notes, %d errors, %d warnings, %d suggestions, score %d",
        resolved, len(cp_sorted), result.analysis.error_count,
        result.analysis.warning_count, result.analysis.suggestion_count, result.score,
    )
    return result


def to_response(result: ValidationResult) -> Dict[str, Any]:
    """Wire form of a successful validation."""
    response: Dict[str, Any] = {"success": True}
    response.update(result.to_dict())
    return response


def error_response(error: InputError) -> Dict[str, Any]:
    return {"success": False, "error": str(error)}


def validate_request(payload: Union[Dict[str, Any], str]) -> Dict[str, Any]:
    """Validate a request body (dict or JSON file path) into a wire response.

    Input errors become ``{"success": False, "error": ...}``; anything else
    propagates to the caller.
    """
    try:
        request = load_request(payload)
        result = validate(request.cantus_firmus, request.user_notes,
                          request.species_type)
    except InputError as exc:
        logger.info("rejected request: %s", exc)
        return error_response(exc)
    return to_response(result)


def overall_passed(result: ValidationResult) -> bool:
    """True if the report has no ERROR violations."""
    return result.passed

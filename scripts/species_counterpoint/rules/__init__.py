"""Counterpoint rules and species validators."""

from .base import SpeciesResult, SpeciesValidator
from .species import VALIDATORS, get_validator

__all__ = ["SpeciesResult", "SpeciesValidator", "VALIDATORS", "get_validator"]

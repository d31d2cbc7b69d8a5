"""Request loaders."""

from .json_loader import InputError, ValidationRequest, load_request, parse_note, parse_request

__all__ = ["InputError", "ValidationRequest", "load_request", "parse_note", "parse_request"]

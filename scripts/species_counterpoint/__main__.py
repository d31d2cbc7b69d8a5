"""CLI entry point: python -m species_counterpoint validate/rules."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .loaders import InputError, load_request
from .model import Species
from .report import format_json, format_rules_text, format_text
from .runner import resolve_species, validate

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INPUT_ERROR = 2


def _write(output: str, path: str | None) -> None:
    if path:
        Path(path).write_text(output)
    else:
        print(output)


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a request file."""
    try:
        request = load_request(args.input)
        species = resolve_species(
            args.species if args.species is not None else request.species_type
        )
        result = validate(request.cantus_firmus, request.user_notes, species)
    except (InputError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.json:
        output = format_json(result)
    else:
        output = format_text(result, species)
    _write(output, args.output)

    return EXIT_OK if result.passed else EXIT_FAILED


def cmd_rules(args: argparse.Namespace) -> int:
    """Print the rule descriptions for one or all species."""
    if args.species is None:
        species_list = list(Species)
    else:
        try:
            species_list = [resolve_species(args.species)]
        except InputError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_INPUT_ERROR
    print("\n\n".join(format_rules_text(s) for s in species_list))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="species_counterpoint",
        description="Species counterpoint checker",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # validate
    p_val = subparsers.add_parser("validate", help="Validate a request file")
    p_val.add_argument("input", help="Path to request JSON")
    p_val.add_argument("--species", type=int, help="Override speciesType (1-5)")
    p_val.add_argument("--json", action="store_true", help="JSON output")
    p_val.add_argument("-o", "--output", help="Output file path")

    # rules
    p_rules = subparsers.add_parser("rules", help="Show species rule descriptions")
    p_rules.add_argument("--species", type=int, help="Species number (default: all)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "rules":
        return cmd_rules(args)
    else:
        parser.print_help()
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Species counterpoint MCP server: validate exercises over MCP tools.

Exposes the validation engine and the per-species rule tables. Every tool
returns a JSON string; input problems come back as
``{"success": false, "error": ...}`` rather than raising.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from .loaders import InputError
from .model import Species
from .profiles import all_profiles
from .rule_book import rules_for
from .runner import resolve_species, validate_request

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------

server = FastMCP(
    "species-counterpoint",
    instructions=(
        "Check species counterpoint exercises against a cantus firmus. "
        "Use list_species to see the five species, get_species_rules for the "
        "rules of one species, then validate_counterpoint to score a line."
    ),
)


@server.tool()
def validate_counterpoint(
    cantus_firmus: list[dict[str, Any]],
    user_notes: list[dict[str, Any]],
    species_type: int = 1,
) -> str:
    """Validate a counterpoint line against a cantus firmus.

    Args:
        cantus_firmus: Reference melody as notes {id, note, beat, duration}
        user_notes: Counterpoint line in the same note format
        species_type: Species number 1-5 (default 1)
    """
    response = validate_request({
        "cantusFirmus": cantus_firmus,
        "userNotes": user_notes,
        "speciesType": species_type,
    })
    return json.dumps(response, indent=2)


@server.tool()
def get_species_rules(species: Optional[int] = None) -> str:
    """Get the rule descriptions for one species, or all when omitted.

    Args:
        species: Species number 1-5
    """
    if species is None:
        selected = list(Species)
    else:
        try:
            selected = [resolve_species(species)]
        except InputError as exc:
            logger.info("rules lookup rejected: %s", exc)
            return json.dumps({"success": False, "error": str(exc)})
    return json.dumps(
        {str(int(s)): rules_for(s) for s in selected},
        indent=2,
    )


@server.tool()
def list_species() -> str:
    """List the five species with their descriptions and feedback thresholds."""
    compact = [
        {
            "species": int(p.species),
            "description": p.description,
            "max_imperfect_run": p.max_imperfect_run,
            "min_contrary_ratio": p.min_contrary_ratio,
            "min_stepwise_ratio": p.min_stepwise_ratio,
            "min_syncopation_ratio": p.min_syncopation_ratio,
        }
        for p in all_profiles().values()
    ]
    return json.dumps({"count": len(compact), "species": compact}, indent=2)


def main() -> None:
    server.run()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()

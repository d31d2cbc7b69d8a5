"""Report generation: text and JSON output."""

from __future__ import annotations

import json
from typing import List

from .model import FeedbackType, Severity, Species, ValidationResult, format_beat
from .profiles import get_species_profile
from .rule_book import rules_for


def _severity_prefix(severity: Severity) -> str:
    return {
        Severity.ERROR: "[ERROR]     ",
        Severity.WARNING: "[WARNING]   ",
        Severity.SUGGESTION: "[SUGGESTION]",
    }[severity]


def _feedback_prefix(kind: FeedbackType) -> str:
    return {
        FeedbackType.WARNING: "  ! ",
        FeedbackType.SUGGESTION: "  * ",
        FeedbackType.ANALYSIS: "  - ",
    }[kind]


def format_text(result: ValidationResult, species: Species) -> str:
    """Format a validation report as human-readable text."""
    profile = get_species_profile(species)
    lines = [f"=== Species {int(species)}: {profile.description} ===", ""]

    if result.violations:
        for v in result.violations:
            lines.append(
                f"{_severity_prefix(v.severity)} rule {v.rule} "
                f"beat {format_beat(v.beat)} ({v.note_id}): {v.message}"
            )
    else:
        lines.append("[PASS]       no rule violations")
    lines.append("")

    if result.feedback:
        lines.append("Feedback:")
        for f in result.feedback:
            lines.append(f"{_feedback_prefix(f.type)}{f.message}")
        lines.append("")

    a = result.analysis
    lines.append("Summary:")
    lines.append(f"  notes:            {a.total_notes}")
    lines.append(f"  consonant:        {a.consonant_intervals}")
    lines.append(f"  contrary motion:  {a.contrary_motion_percentage}%")
    lines.append(
        f"  findings:         {a.error_count} error, {a.warning_count} warning, "
        f"{a.suggestion_count} suggestion"
    )
    lines.append(f"  SCORE: {result.score}/100  {'PASS' if result.passed else 'FAIL'}")
    lines.append("")
    return "\n".join(lines)


def format_json(result: ValidationResult) -> str:
    """Format a validation report as the JSON wire response."""
    data = {"success": True}
    data.update(result.to_dict())
    return json.dumps(data, indent=2)


def format_rules_text(species: Species) -> str:
    """Numbered rule list for one species."""
    lines: List[str] = [f"Species {int(species)} rules:"]
    for idx, text in enumerate(rules_for(species), start=1):
        lines.append(f"  {idx}. {text}")
    return "\n".join(lines)

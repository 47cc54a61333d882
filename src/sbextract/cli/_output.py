"""Shared output formatting for CLI commands."""

from __future__ import annotations

import json
from dataclasses import asdict

from sbextract.models import ExtractedResult

_POLICY_COLUMNS = ("name", "table_name", "command", "definition")


def _section(title: str, count: int) -> str:
    return f"== {title} ({count}) =="


def _policy_table(result: ExtractedResult) -> list[str]:
    rows = [asdict(p) for p in result.policies]
    widths = {
        c: max([len(c), *(len(str(r[c])) for r in rows)]) for c in _POLICY_COLUMNS[:-1]
    }
    lines = [
        " | ".join(c.ljust(widths[c]) for c in _POLICY_COLUMNS[:-1]) + " | definition",
        "-+-".join("-" * widths[c] for c in _POLICY_COLUMNS[:-1]) + "-+-" + "-" * 10,
    ]
    for r in rows:
        cells = [str(r[c]).ljust(widths[c]) for c in _POLICY_COLUMNS[:-1]]
        lines.append(" | ".join(cells) + f" | {r['definition']}")
    return lines


def format_extraction(result: ExtractedResult, *, output_format: str = "text") -> str:
    if output_format == "json":
        data = {
            "counts": result.counts(),
            "policies": [asdict(p) for p in result.policies],
            "functions": [asdict(f) for f in result.functions],
            "triggers": [asdict(t) for t in result.triggers],
        }
        return json.dumps(data, indent=2)

    lines = [_section("Policies", len(result.policies))]
    if result.policies:
        lines.extend(_policy_table(result))

    lines.append("")
    lines.append(_section("Functions", len(result.functions)))
    for func in result.functions:
        lines.append(f"-- {func.name} ({func.schema})")
        lines.append(func.definition.rstrip())
        lines.append("")

    lines.append("")
    lines.append(_section("Triggers", len(result.triggers)))
    for trigger in result.triggers:
        lines.append(f"-- {trigger.name} ({trigger.table_name})")
        lines.append(trigger.definition.rstrip())
        lines.append("")

    return "\n".join(lines).rstrip()

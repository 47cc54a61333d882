"""Export script: rebuild extracted policies, functions, and triggers as SQL."""

from __future__ import annotations

from sbextract.models import ExtractedResult, FunctionDef, Policy, TriggerDef

DEFAULT_SUBJECT = "supabase"


def export_filename(subject: str = DEFAULT_SUBJECT) -> str:
    return f"{subject}_export.sql"


def _terminated(definition: str) -> str:
    # Text is kept as returned; only a missing final ";" is added.
    return definition if definition.rstrip().endswith(";") else f"{definition};"


def _drop_policy(policy: Policy) -> str:
    return f'DROP POLICY IF EXISTS "{policy.name}" ON {policy.table_name};\n'


def _create_policy(policy: Policy) -> str:
    return (
        f'CREATE POLICY "{policy.name}" ON {policy.table_name}\n'
        f"  FOR {policy.command}\n"
        f"  USING ({policy.definition});\n\n"
    )


def _function_block(func: FunctionDef) -> str:
    return f"{_terminated(func.definition)}\n\n"


def _trigger_statement(trigger: TriggerDef) -> str:
    return f"{_terminated(trigger.definition)}\n\n"


def build_export_script(result: ExtractedResult, include_drop_statements: bool = False) -> str:
    """Render an extraction as one SQL document.

    Sections, in order: drop policies (optional), policies, functions,
    triggers. Items keep the order the backend returned them in; nothing is
    re-sorted or validated.
    """
    script = "-- Supabase export\n\n"

    if include_drop_statements:
        script += "-- Drop existing policies\n"
        script += "".join(_drop_policy(p) for p in result.policies)
        script += "\n"

    script += "-- Policies\n"
    script += "".join(_create_policy(p) for p in result.policies)

    script += "-- Functions\n"
    script += "".join(_function_block(f) for f in result.functions)

    script += "-- Triggers\n"
    script += "".join(_trigger_statement(t) for t in result.triggers)

    return script

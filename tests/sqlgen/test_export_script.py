"""Tests for the export script builder."""

from __future__ import annotations

import re

from sbextract.models import ExtractedResult, FunctionDef, Policy, TriggerDef
from sbextract.sqlgen.export import build_export_script, export_filename

_DROP_RE = re.compile(r"^DROP POLICY", re.MULTILINE)


def _result() -> ExtractedResult:
    return ExtractedResult(
        policies=[
            Policy("b policy", "public.todos", "INSERT", "(auth.uid() = user_id)"),
            Policy("a policy", "public.todos", "SELECT", "true"),
        ],
        functions=[
            FunctionDef(
                "touch", "public", "plpgsql",
                "CREATE OR REPLACE FUNCTION public.touch()\n RETURNS trigger\n"
                " LANGUAGE plpgsql\nAS $function$\nbegin\n  return new;\nend;\n$function$\n",
            ),
            FunctionDef("one", "public", "sql", "CREATE FUNCTION public.one() RETURNS int AS 'select 1' LANGUAGE sql;"),
        ],
        triggers=[
            TriggerDef(
                "todos_touch", "public.todos", "ROW", "BEFORE",
                "CREATE TRIGGER todos_touch BEFORE UPDATE ON public.todos "
                "FOR EACH ROW EXECUTE FUNCTION touch()",
            ),
        ],
    )


def test_single_policy_with_drop() -> None:
    result = ExtractedResult(
        policies=[Policy(name="p1", table_name="t1", command="SELECT", definition="true")],
    )
    script = build_export_script(result, include_drop_statements=True)
    drop = script.index('DROP POLICY IF EXISTS "p1" ON t1;')
    create = script.index('CREATE POLICY "p1" ON t1\n  FOR SELECT\n  USING (true);')
    assert drop < create


def test_drop_section_has_one_line_per_policy() -> None:
    result = _result()
    script = build_export_script(result, include_drop_statements=True)
    drops = [line for line in script.splitlines() if line.startswith("DROP POLICY")]
    assert drops == [
        'DROP POLICY IF EXISTS "b policy" ON public.todos;',
        'DROP POLICY IF EXISTS "a policy" ON public.todos;',
    ]


def test_no_drop_statements_by_default() -> None:
    script = build_export_script(_result())
    assert not _DROP_RE.search(script)
    assert "Drop existing policies" not in script


def test_sections_in_order() -> None:
    script = build_export_script(_result(), include_drop_statements=True)
    headers = [line for line in script.splitlines() if line.startswith("-- ")]
    assert headers == [
        "-- Supabase export",
        "-- Drop existing policies",
        "-- Policies",
        "-- Functions",
        "-- Triggers",
    ]


def test_items_keep_result_order() -> None:
    script = build_export_script(_result())
    assert script.index('"b policy"') < script.index('"a policy"')
    assert script.index("public.touch()") < script.index("public.one()")


def test_function_definitions_verbatim() -> None:
    result = _result()
    script = build_export_script(result)
    assert result.functions[0].definition + ";\n" in script
    # Already terminated: no second semicolon.
    assert "LANGUAGE sql;\n" in script
    assert "LANGUAGE sql;;" not in script


def test_triggers_terminated() -> None:
    script = build_export_script(_result())
    assert "EXECUTE FUNCTION touch();\n" in script


def test_empty_result() -> None:
    script = build_export_script(ExtractedResult(), include_drop_statements=True)
    assert "CREATE" not in script
    assert not _DROP_RE.search(script)
    assert script.startswith("-- Supabase export\n")


def test_deterministic() -> None:
    assert build_export_script(_result(), True) == build_export_script(_result(), True)


def test_export_filename() -> None:
    assert export_filename() == "supabase_export.sql"
    assert export_filename("staging") == "staging_export.sql"


def test_trailing_whitespace_is_kept() -> None:
    definition = "CREATE FUNCTION public.two() RETURNS int AS 'select 2' LANGUAGE sql;\n  \n"
    result = ExtractedResult(functions=[FunctionDef("two", "public", "sql", definition)])
    script = build_export_script(result)
    assert definition + "\n\n" in script
    assert "LANGUAGE sql;;" not in script

"""Setup script: installs the procedures the extractor calls.

The script is plain text built from fixed templates plus the two schema
exclusion lists. Schema names are rendered as SQL string literals through
sqlglot so embedded quotes are escaped.
"""

from __future__ import annotations

from sqlglot import exp

from sbextract.models import ExclusionConfig

GRANT_ROLE = "authenticated"

_HEADER = """\
-- sbextract setup
-- Safe to re-run: every function is created with CREATE OR REPLACE.
-- Remove these functions once you are done extracting.
"""

_GET_POLICIES = """\
-- Row level security policies
-- Policies without USING (INSERT) report their WITH CHECK expression as the
-- definition. The export renders it as USING, so re-create those by hand.
CREATE OR REPLACE FUNCTION public.get_policies()
RETURNS TABLE (name text, table_name text, command text, definition text)
LANGUAGE sql
SECURITY DEFINER
SET search_path = pg_catalog
AS $$
  SELECT
    p.policyname::text AS name,
    format('%I.%I', p.schemaname, p.tablename) AS table_name,
    p.cmd::text AS command,
    COALESCE(p.qual, p.with_check, 'true')::text AS definition
  FROM pg_policies p
  ORDER BY p.schemaname, p.tablename, p.policyname;
$$;
"""

_GET_FUNCTIONS = """\
-- Functions owned by the current role
CREATE OR REPLACE FUNCTION public.get_functions()
RETURNS TABLE (name text, schema text, language text, definition text, arguments text)
LANGUAGE sql
SECURITY DEFINER
SET search_path = pg_catalog
AS $$
  SELECT
    p.proname::text AS name,
    n.nspname::text AS schema,
    l.lanname::text AS language,
    pg_get_functiondef(p.oid)::text AS definition,
    pg_get_function_arguments(p.oid)::text AS arguments
  FROM pg_proc p
  JOIN pg_namespace n ON n.oid = p.pronamespace
  JOIN pg_language l ON l.oid = p.prolang
  WHERE p.prokind = 'f'
    AND p.proowner = (SELECT oid FROM pg_roles WHERE rolname = current_user)
{schema_filter}  ORDER BY n.nspname, p.proname;
$$;
"""

_GET_TRIGGERS = """\
-- User triggers
CREATE OR REPLACE FUNCTION public.get_triggers()
RETURNS TABLE (name text, table_name text, event text, timing text, definition text)
LANGUAGE sql
SECURITY DEFINER
SET search_path = pg_catalog
AS $$
  SELECT
    t.tgname::text AS name,
    format('%I.%I', n.nspname, c.relname) AS table_name,
    CASE WHEN (t.tgtype & 1) = 1 THEN 'ROW' ELSE 'STATEMENT' END AS event,
    CASE
      WHEN (t.tgtype & 2) = 2 THEN 'BEFORE'
      WHEN (t.tgtype & 64) = 64 THEN 'INSTEAD OF'
      ELSE 'AFTER'
    END AS timing,
    pg_get_triggerdef(t.oid, true)::text AS definition
  FROM pg_trigger t
  JOIN pg_class c ON c.oid = t.tgrelid
  JOIN pg_namespace n ON n.oid = c.relnamespace
  WHERE NOT t.tgisinternal
{schema_filter}  ORDER BY n.nspname, c.relname, t.tgname;
$$;
"""

_EXEC_SQL = """\
-- Generic statement execution, used to run this script remotely
CREATE OR REPLACE FUNCTION public.exec_sql(sql text)
RETURNS void
LANGUAGE plpgsql
SECURITY DEFINER
AS $$
BEGIN
  EXECUTE sql;
END;
$$;
"""

_SIGNATURES = (
    "public.get_policies()",
    "public.get_functions()",
    "public.get_triggers()",
    "public.exec_sql(text)",
)


def quote_literal(value: str) -> str:
    """Render a Postgres string literal, e.g. o'brien -> 'o''brien'."""
    return exp.Literal.string(value).sql(dialect="postgres")


def schema_filter(column: str, schemas: tuple[str, ...]) -> str:
    """AND-clause excluding the given schemas, or "" when there are none.

    An empty list must not produce `NOT IN ()`, which Postgres rejects.
    """
    if not schemas:
        return ""
    names = ", ".join(quote_literal(s) for s in schemas)
    return f"    AND {column} NOT IN ({names})\n"


def _grants(role: str) -> str:
    lines = ["-- Permissions"]
    lines.extend(f"GRANT EXECUTE ON FUNCTION {sig} TO {role};" for sig in _SIGNATURES)
    return "\n".join(lines) + "\n"


def build_setup_script(config: ExclusionConfig, *, role: str = GRANT_ROLE) -> str:
    """Build the setup script for the given exclusion lists.

    Deterministic: the same config always yields the same text.
    """
    parts = [
        _HEADER,
        _GET_POLICIES,
        _GET_FUNCTIONS.format(
            schema_filter=schema_filter("n.nspname", config.function_schemas)
        ),
        _GET_TRIGGERS.format(
            schema_filter=schema_filter("n.nspname", config.trigger_schemas)
        ),
        _EXEC_SQL,
        _grants(role),
    ]
    return "\n".join(parts)

"""The `export` command: extract, then write the SQL export script."""

from __future__ import annotations

from pathlib import Path

import click

from sbextract.cli._shared import (
    connection_options,
    emit_error,
    open_session,
    run_extract,
)
from sbextract.runlog import cleanup_old_logs
from sbextract.sqlgen.export import DEFAULT_SUBJECT, export_filename


@click.command("export")
@connection_options
@click.option(
    "--drop-policies",
    is_flag=True,
    help="Prefix the script with DROP POLICY IF EXISTS for every policy.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    help="File to write, or '-' for stdout. Defaults to <subject>_export.sql.",
)
@click.option("--subject", default=DEFAULT_SUBJECT, show_default=True,
              help="Name used for the default output file.")
def export(
    url: str,
    key: str,
    client_name: str,
    timeout: float,
    drop_policies: bool,
    output: str | None,
    subject: str,
) -> None:
    """Extract a project and write its policies, functions, and triggers as SQL."""
    cleanup_old_logs()
    session = open_session(timeout)
    outcome = run_extract(session, url, key, client_name)

    if outcome.error is not None:
        emit_error(outcome.error, "text")
        raise SystemExit(1)

    script = session.export_script(include_drop_statements=drop_policies)

    if output == "-":
        click.echo(script, nl=False)
        return

    path = Path(output or export_filename(subject))
    path.write_text(script, encoding="utf-8")
    counts = outcome.result.counts() if outcome.result else {}
    summary = ", ".join(f"{n} {section}" for section, n in counts.items())
    click.echo(f"Wrote {path} ({summary})")

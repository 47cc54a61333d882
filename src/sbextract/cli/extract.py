"""The `extract` command: fetch policies, functions, and triggers and print them."""

from __future__ import annotations

import click

from sbextract.cli._output import format_extraction
from sbextract.cli._shared import (
    connection_options,
    emit_error,
    open_session,
    run_extract,
)
from sbextract.runlog import cleanup_old_logs


@click.command("extract")
@connection_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format.",
)
def extract(url: str, key: str, client_name: str, timeout: float, output_format: str) -> None:
    """Extract RLS policies, functions, and triggers from a project.

    Requires the setup functions (see `sbextract setup`).
    """
    cleanup_old_logs()
    session = open_session(timeout)
    outcome = run_extract(session, url, key, client_name)

    if outcome.error is not None:
        emit_error(outcome.error, output_format)
        raise SystemExit(1)

    assert outcome.result is not None
    click.echo(format_extraction(outcome.result, output_format=output_format))

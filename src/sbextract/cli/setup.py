"""The `setup` command: print or install the procedures the extractor needs."""

from __future__ import annotations

import json

import click

from sbextract.cli._shared import connection_options, emit_error, open_session, run_setup
from sbextract.config import config_path


@click.command("setup")
@connection_options
@click.option("--run", "run_remote", is_flag=True,
              help="Install through exec_sql instead of printing the script.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["sql", "json"]),
    default="sql",
    help="Output format when printing.",
)
def setup(
    url: str,
    key: str,
    client_name: str,
    timeout: float,
    run_remote: bool,
    output_format: str,
) -> None:
    """Print the setup SQL, or run it remotely with --run.

    \b
    The first install must be done by hand (exec_sql does not exist yet):
      sbextract setup > setup.sql   # paste into the Supabase SQL editor
    Later runs, e.g. after editing exclusions, can use:
      sbextract setup --run --url https://xyz.supabase.co --key <service key>
    """
    session = open_session(timeout)

    if not run_remote:
        script = session.setup_script()
        if output_format == "json":
            click.echo(json.dumps({
                "config": str(config_path()),
                "function_schemas": list(session.exclusions.function_schemas),
                "trigger_schemas": list(session.exclusions.trigger_schemas),
                "sql": script,
            }, indent=2))
        else:
            click.echo(script, nl=False)
        return

    error = run_setup(session, url, key, client_name)
    if error is not None:
        emit_error(error, "json" if output_format == "json" else "text")
        raise SystemExit(1)

    click.echo("Setup complete: get_policies, get_functions, get_triggers, exec_sql installed.")
    click.echo("Remember to remove these functions once you are done extracting.")

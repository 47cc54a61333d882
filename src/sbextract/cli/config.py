"""The `config` command group: edit schema exclusion lists (~/.sbextract/config.toml)."""

from __future__ import annotations

import json
import sys

import click

from sbextract.config import config_path, load_exclusions, reset_exclusions, save_exclusions
from sbextract.models import ExclusionConfig, parse_schema_list

_LISTS = ("functions", "triggers")


def _read_list_text(file: str | None) -> str:
    if file is not None:
        with click.open_file(file, encoding="utf-8") as f:
            return f.read()
    if sys.stdin.isatty():
        raise click.UsageError("Provide --from-file or pipe newline-delimited schema names.")
    return sys.stdin.read()


@click.group()
def config() -> None:
    """Manage schema exclusion lists used by the setup script."""


@config.command("show")
@click.option("--format", "output_format", type=click.Choice(["json", "text"]), default="text")
def config_show(output_format: str) -> None:
    """Show the exclusion lists currently in effect."""
    current = load_exclusions()
    if output_format == "json":
        click.echo(json.dumps({
            "path": str(config_path()),
            "function_schemas": list(current.function_schemas),
            "trigger_schemas": list(current.trigger_schemas),
        }, indent=2))
        return

    click.echo("Excluded function schemas:")
    for name in current.function_schemas:
        click.echo(f"  {name}")
    click.echo("Excluded trigger schemas:")
    for name in current.trigger_schemas:
        click.echo(f"  {name}")


@config.command("set")
@click.argument("which", type=click.Choice(_LISTS))
@click.option("--from-file", "from_file", default=None,
              help="File with one schema per line ('-' for stdin).")
def config_set(which: str, from_file: str | None) -> None:
    """Replace one exclusion list with newline-delimited schema names.

    \b
    Examples:
      printf 'pg_catalog\\ninformation_schema\\n' | sbextract config set functions
      sbextract config set triggers --from-file triggers.txt
    """
    names = parse_schema_list(_read_list_text(from_file))
    current = load_exclusions()
    if which == "functions":
        updated = ExclusionConfig(function_schemas=names, trigger_schemas=current.trigger_schemas)
    else:
        updated = ExclusionConfig(function_schemas=current.function_schemas, trigger_schemas=names)

    path = save_exclusions(updated)
    click.echo(f"Saved {len(names)} excluded {which[:-1]} schemas to {path}")
    if not names:
        click.echo(f"note: no schemas excluded; get_{which} will scan every schema")


@config.command("reset")
@click.argument("which", type=click.Choice([*_LISTS, "all"]), default="all")
def config_reset(which: str) -> None:
    """Restore default exclusion lists."""
    if which == "all":
        if reset_exclusions():
            click.echo("Restored default exclusion lists.")
        else:
            click.echo("Already using default exclusion lists.")
        return

    current = load_exclusions()
    defaults = ExclusionConfig.default()
    if which == "functions":
        updated = ExclusionConfig(defaults.function_schemas, current.trigger_schemas)
    else:
        updated = ExclusionConfig(current.function_schemas, defaults.trigger_schemas)
    save_exclusions(updated)
    click.echo(f"Restored default {which[:-1]} schema exclusions.")

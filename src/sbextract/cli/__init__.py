"""CLI entry point for `sbextract`."""

from __future__ import annotations

import click

from sbextract.cli.config import config
from sbextract.cli.export import export
from sbextract.cli.extract import extract
from sbextract.cli.setup import setup


@click.group()
@click.version_option(package_name="sbextract")
def main() -> None:
    """sbextract: export Supabase RLS policies, functions, and triggers as SQL."""


main.add_command(setup)
main.add_command(extract)
main.add_command(export)
main.add_command(config)

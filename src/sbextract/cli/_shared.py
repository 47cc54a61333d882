"""Shared helpers for the extract, export, and setup commands."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Callable
from typing import Any

import click

from sbextract.clients._base import ClientType, Credentials, RemoteCallError, RemoteClient
from sbextract.clients._registry import get_client
from sbextract.config import load_exclusions
from sbextract.diagnostics import ExtractionError, render_json, render_text
from sbextract.extract import DEFAULT_CALL_TIMEOUT, ExtractionOutcome
from sbextract.runlog import log_run
from sbextract.session import ExtractionSession


def connection_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Attach --url/--key/--client/--timeout to a command."""
    f = click.option(
        "--timeout",
        type=float,
        default=DEFAULT_CALL_TIMEOUT,
        show_default=True,
        help="Seconds allowed per remote call (0 to disable).",
    )(f)
    f = click.option(
        "--client",
        "client_name",
        type=click.Choice([t.value for t in ClientType]),
        default=ClientType.REST.value,
        show_default=True,
        help="rest: Supabase API URL + key. postgres: DSN + password.",
    )(f)
    f = click.option(
        "--key",
        default="",
        envvar="SBEXTRACT_KEY",
        help="API key (or database password for --client postgres).",
    )(f)
    f = click.option(
        "--url",
        default="",
        envvar="SBEXTRACT_URL",
        help="Project URL, e.g. https://your-project.supabase.co",
    )(f)
    return f


def make_client(client_name: str) -> RemoteClient:
    """Instantiate a client, exiting with an install hint if its driver is missing."""
    try:
        client_cls = get_client(ClientType(client_name))
    except RemoteCallError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1) from e
    return client_cls()


def open_session(timeout: float) -> ExtractionSession:
    return ExtractionSession(load_exclusions(), timeout=timeout if timeout > 0 else None)


def emit_error(error: ExtractionError, output_format: str) -> None:
    """Emit an error document (JSON on stdout, text on stderr)."""
    if output_format == "json":
        click.echo(json.dumps({"error": render_json(error)}, indent=2))
    else:
        click.echo(render_text(error), err=True)


def run_extract(
    session: ExtractionSession,
    url: str,
    key: str,
    client_name: str,
) -> ExtractionOutcome:
    """Run one extraction through the session and log it."""
    client = make_client(client_name)
    t0 = time.monotonic()
    outcome = asyncio.run(session.extract(client, Credentials(url=url, key=key)))
    duration_ms = (time.monotonic() - t0) * 1000

    log_run(
        action="extract",
        target=url,
        client=client_name,
        ok=outcome.ok,
        error_code=str(outcome.error.code) if outcome.error else None,
        procedure=outcome.error.procedure if outcome.error else None,
        counts=outcome.result.counts() if outcome.result else None,
        duration_ms=duration_ms,
    )
    return outcome


def run_setup(
    session: ExtractionSession,
    url: str,
    key: str,
    client_name: str,
) -> ExtractionError | None:
    """Install the setup script through exec_sql and log it."""
    client = make_client(client_name)
    t0 = time.monotonic()
    error = asyncio.run(session.run_setup(client, Credentials(url=url, key=key)))
    duration_ms = (time.monotonic() - t0) * 1000

    log_run(
        action="setup",
        target=url,
        client=client_name,
        ok=error is None,
        error_code=str(error.code) if error else None,
        procedure=error.procedure if error else None,
        duration_ms=duration_ms,
    )
    return error

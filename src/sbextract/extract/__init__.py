"""Extraction pipeline: validate credentials, call procedures, classify, assemble."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from sbextract.clients._base import READ_PROCEDURES, Credentials, RemoteCallError, RemoteClient
from sbextract.diagnostics.types import ExtractionError
from sbextract.extract.classify import classify
from sbextract.extract.validate import rows_from_response
from sbextract.models import ExtractedResult, FunctionDef, Policy, TriggerDef

DEFAULT_CALL_TIMEOUT = 30.0  # seconds, per procedure call

_STEPS = tuple(zip(READ_PROCEDURES, (Policy.from_row, FunctionDef.from_row, TriggerDef.from_row)))


@dataclass
class ExtractionOutcome:
    """Exactly one of result/error is set."""

    result: ExtractedResult | None = None
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def call_with_budget(
    client: RemoteClient,
    procedure: str,
    args: dict[str, object] | None,
    timeout: float | None,
) -> object | ExtractionError:
    """Call one procedure, returning its payload or the classified failure."""
    try:
        return await asyncio.wait_for(client.call_procedure(procedure, args), timeout)
    except TimeoutError as e:
        if timeout is None:
            # Raised by the client itself, not by the budget.
            detail = str(e) or f"{procedure}() timed out"
            return ExtractionError.timeout_error(detail, procedure)
        return ExtractionError.timeout_error(
            f"{procedure}() did not answer within {timeout:g}s", procedure
        )
    except RemoteCallError as e:
        return classify(e, procedure)


async def run_extraction(
    client: RemoteClient,
    credentials: Credentials,
    *,
    timeout: float | None = DEFAULT_CALL_TIMEOUT,
) -> ExtractionOutcome:
    """Run the full extraction against one backend.

    Steps:
        1. Reject empty URL or key before touching the client
        2. Connect
        3. get_policies, get_functions, get_triggers, in that order; the
           first failure stops the run
        4. Check each payload is a list of rows with the expected keys
        5. Assemble the ExtractedResult only once all three succeeded

    Args:
        client: An unconnected RemoteClient. Always closed on return.
        credentials: Backend URL and API key.
        timeout: Seconds allowed per procedure call. None disables the budget.
    """
    if not credentials.is_complete:
        return ExtractionOutcome(error=ExtractionError.missing_credentials())

    try:
        await client.connect(credentials)
    except RemoteCallError as e:
        await client.close()
        return ExtractionOutcome(error=classify(e))

    sections: list[list] = []
    try:
        for procedure, build in _STEPS:
            payload = await call_with_budget(client, procedure, None, timeout)
            if isinstance(payload, ExtractionError):
                return ExtractionOutcome(error=payload)
            rows = rows_from_response(procedure, payload, build)
            if isinstance(rows, ExtractionError):
                return ExtractionOutcome(error=rows)
            sections.append(rows)
    finally:
        await client.close()

    policies, functions, triggers = sections
    return ExtractionOutcome(
        result=ExtractedResult(policies=policies, functions=functions, triggers=triggers)
    )

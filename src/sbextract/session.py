"""Session state: the exclusion config and the last successful extraction."""

from __future__ import annotations

from sbextract.clients._base import EXEC_PROCEDURE, Credentials, RemoteCallError, RemoteClient
from sbextract.diagnostics.types import ExtractionError
from sbextract.extract import (
    DEFAULT_CALL_TIMEOUT,
    ExtractionOutcome,
    call_with_budget,
    run_extraction,
)
from sbextract.extract.classify import classify
from sbextract.models import ExclusionConfig, ExtractedResult, parse_schema_list
from sbextract.sqlgen import build_export_script, build_setup_script


class NoResultError(Exception):
    """Raised when exporting before anything has been extracted."""


class ExtractionInProgress(Exception):
    """Raised when a session is asked to extract while a call is outstanding."""


class ExtractionSession:
    """One user's working state.

    Holds at most one ExtractedResult. A failed extraction clears it, so an
    error is never shown next to data from an earlier run.
    """

    def __init__(
        self,
        exclusions: ExclusionConfig | None = None,
        *,
        timeout: float | None = DEFAULT_CALL_TIMEOUT,
    ) -> None:
        self.exclusions = exclusions or ExclusionConfig.default()
        self.timeout = timeout
        self.result: ExtractedResult | None = None
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def extract(self, client: RemoteClient, credentials: Credentials) -> ExtractionOutcome:
        if self._busy:
            raise ExtractionInProgress("an extraction is already running")
        self._busy = True
        self.result = None
        try:
            outcome = await run_extraction(client, credentials, timeout=self.timeout)
        finally:
            self._busy = False
        self.result = outcome.result
        return outcome

    def setup_script(self) -> str:
        return build_setup_script(self.exclusions)

    async def run_setup(
        self, client: RemoteClient, credentials: Credentials
    ) -> ExtractionError | None:
        """Install the procedures through exec_sql. Returns the failure, if any."""
        if not credentials.is_complete:
            return ExtractionError.missing_credentials()
        if self._busy:
            raise ExtractionInProgress("an extraction is already running")

        self._busy = True
        try:
            try:
                await client.connect(credentials)
            except RemoteCallError as e:
                return classify(e)
            outcome = await call_with_budget(
                client, EXEC_PROCEDURE, {"sql": self.setup_script()}, self.timeout
            )
        finally:
            await client.close()
            self._busy = False

        return outcome if isinstance(outcome, ExtractionError) else None

    def export_script(self, include_drop_statements: bool = False) -> str:
        if self.result is None:
            raise NoResultError("nothing extracted yet")
        return build_export_script(self.result, include_drop_statements)

    # -- Exclusion edits --------------------------------------------------------

    def set_function_schemas(self, text: str) -> None:
        self.exclusions = ExclusionConfig(
            function_schemas=parse_schema_list(text),
            trigger_schemas=self.exclusions.trigger_schemas,
        )

    def set_trigger_schemas(self, text: str) -> None:
        self.exclusions = ExclusionConfig(
            function_schemas=self.exclusions.function_schemas,
            trigger_schemas=parse_schema_list(text),
        )

    def reset_exclusions(self) -> None:
        self.exclusions = ExclusionConfig.default()

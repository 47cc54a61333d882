"""Extraction error taxonomy.

Every failed extraction or setup run produces exactly one ExtractionError.
Its title/message pair is what the user sees; kind and code are stable
for scripts and agents reading JSON output.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from sbextract.diagnostics import codes
from sbextract.diagnostics.codes import ErrorCode


class ErrorKind(enum.Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    SETUP_REQUIRED = "setup_required"
    PERMISSION_DENIED = "permission_denied"
    INVALID_SHAPE = "invalid_shape"
    CONNECTION_ERROR = "connection_error"
    AUTHENTICATION_ERROR = "authentication_error"
    TIMEOUT_ERROR = "timeout_error"
    REMOTE_ERROR = "remote_error"


_CODES: dict[ErrorKind, ErrorCode] = {
    ErrorKind.MISSING_CREDENTIALS: codes.MISSING_CREDENTIALS,
    ErrorKind.SETUP_REQUIRED: codes.SETUP_REQUIRED,
    ErrorKind.PERMISSION_DENIED: codes.PERMISSION_DENIED,
    ErrorKind.INVALID_SHAPE: codes.INVALID_SHAPE,
    ErrorKind.CONNECTION_ERROR: codes.CONNECTION_FAILED,
    ErrorKind.AUTHENTICATION_ERROR: codes.AUTHENTICATION_FAILED,
    ErrorKind.TIMEOUT_ERROR: codes.CALL_TIMEOUT,
    ErrorKind.REMOTE_ERROR: codes.REMOTE_ERROR,
}


@dataclass(frozen=True)
class ExtractionError:
    kind: ErrorKind
    title: str
    message: str
    procedure: str | None = None

    @property
    def code(self) -> ErrorCode:
        return _CODES[self.kind]

    # -- Builder classmethods ---------------------------------------------------

    @classmethod
    def missing_credentials(cls) -> ExtractionError:
        return cls(
            ErrorKind.MISSING_CREDENTIALS,
            "Missing credentials",
            "Please provide both URL and API key",
        )

    @classmethod
    def setup_required(cls, procedure: str | None) -> ExtractionError:
        name = f"{procedure}()" if procedure else "A required function"
        return cls(
            ErrorKind.SETUP_REQUIRED,
            "Setup required",
            f"{name} does not exist on the backend. "
            "Run the setup SQL first (sbextract setup).",
            procedure,
        )

    @classmethod
    def permission_denied(cls, procedure: str) -> ExtractionError:
        return cls(
            ErrorKind.PERMISSION_DENIED,
            "Permission denied",
            f"{procedure}() returned no data. Check that the API key is "
            "allowed to execute it.",
            procedure,
        )

    @classmethod
    def invalid_shape(cls, procedure: str, detail: str) -> ExtractionError:
        return cls(
            ErrorKind.INVALID_SHAPE,
            "Unexpected response",
            f"{procedure}() returned {detail}",
            procedure,
        )

    @classmethod
    def connection_error(cls, detail: str, procedure: str | None = None) -> ExtractionError:
        return cls(
            ErrorKind.CONNECTION_ERROR,
            "Connection error",
            f"Could not reach the backend. Check the URL. ({detail})",
            procedure,
        )

    @classmethod
    def authentication_error(
        cls, detail: str, procedure: str | None = None
    ) -> ExtractionError:
        return cls(
            ErrorKind.AUTHENTICATION_ERROR,
            "Authentication error",
            f"The API key was rejected. ({detail})",
            procedure,
        )

    @classmethod
    def timeout_error(cls, detail: str, procedure: str | None = None) -> ExtractionError:
        return cls(ErrorKind.TIMEOUT_ERROR, "Request timed out", detail, procedure)

    @classmethod
    def remote_error(cls, detail: str, procedure: str | None = None) -> ExtractionError:
        return cls(ErrorKind.REMOTE_ERROR, "Error", detail, procedure)

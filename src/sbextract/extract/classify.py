"""Classify remote call failures into the extraction error taxonomy."""

from __future__ import annotations

from sbextract.clients._base import CallFailure, RemoteCallError
from sbextract.diagnostics.types import ExtractionError

_MISSING_MARKERS = ("does not exist", "could not find the function")

_CONNECTION_MARKERS = (
    "invalid url",
    "failed to fetch",
    "fetch failed",
    "could not connect",
    "connection refused",
    "connection failed",
    "name or service not known",
    "nodename nor servname",
    "unsupported protocol",
    "network is unreachable",
)

_AUTH_MARKERS = (
    "invalid api key",
    "jwt expired",
    "invalid jwt",
    "jwt malformed",
    "jwserror",
    "password authentication failed",
    "invalid authorization",
    "unauthorized",
    "no api key found",
)

_TIMEOUT_MARKERS = (
    "timed out",
    "timeout",
    "canceling statement",
)


def _mentions(message: str, markers: tuple[str, ...]) -> bool:
    return any(m in message for m in markers)


def is_missing_procedure(message: str, procedure: str | None) -> bool:
    """True when the message says the named procedure does not exist."""
    lowered = message.lower()
    if procedure is not None and procedure.lower() not in lowered:
        return False
    return _mentions(lowered, _MISSING_MARKERS)


def classify(error: RemoteCallError, procedure: str | None = None) -> ExtractionError:
    """Map a client error onto an ExtractionError.

    Priority: missing procedure, connection, authentication, timeout, then
    the fallback RemoteError carrying the original message. Structured tags
    from the client win over message sniffing at each step, but a later
    tag never outranks an earlier message match.
    """
    message = error.message
    lowered = message.lower()

    if error.kind == CallFailure.MISSING_PROCEDURE or (
        procedure is not None and is_missing_procedure(message, procedure)
    ):
        return ExtractionError.setup_required(procedure)
    if error.kind == CallFailure.CONNECTION or _mentions(lowered, _CONNECTION_MARKERS):
        return ExtractionError.connection_error(message, procedure)
    if error.kind == CallFailure.AUTHENTICATION or _mentions(lowered, _AUTH_MARKERS):
        return ExtractionError.authentication_error(message, procedure)
    if error.kind == CallFailure.TIMEOUT or _mentions(lowered, _TIMEOUT_MARKERS):
        return ExtractionError.timeout_error(message, procedure)
    return ExtractionError.remote_error(message, procedure)

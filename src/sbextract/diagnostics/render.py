"""Render extraction errors for terminal (text) and agent (JSON) output."""

from __future__ import annotations

from sbextract.diagnostics.types import ExtractionError


def render_json(error: ExtractionError) -> dict:
    """Render an ExtractionError as a JSON-serializable dict."""
    d: dict = {
        "code": str(error.code),
        "kind": error.kind.value,
        "title": error.title,
        "message": error.message,
    }
    if error.procedure is not None:
        d["procedure"] = error.procedure
    return d


def render_text(error: ExtractionError) -> str:
    """Render an ExtractionError as a single human-readable line."""
    return f"error[{error.code}]: {error.title}: {error.message}"

"""Error taxonomy: codes, the ExtractionError type, and rendering."""

from sbextract.diagnostics.codes import ErrorCode
from sbextract.diagnostics.render import render_json, render_text
from sbextract.diagnostics.types import ErrorKind, ExtractionError

__all__ = [
    "ErrorCode",
    "ErrorKind",
    "ExtractionError",
    "render_json",
    "render_text",
]

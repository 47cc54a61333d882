"""Shape checks for procedure results."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from sbextract.diagnostics.types import ExtractionError

T = TypeVar("T")


def rows_from_response(
    procedure: str,
    payload: object,
    build: Callable[[Mapping[str, object]], T],
) -> list[T] | ExtractionError:
    """Turn a raw procedure result into records, or the error describing why not.

    None means the call went through but nothing came back, which is what a
    caller without EXECUTE rights sees through the API.
    """
    if payload is None:
        return ExtractionError.permission_denied(procedure)
    if not isinstance(payload, list):
        return ExtractionError.invalid_shape(
            procedure, f"a {type(payload).__name__} instead of a list of rows"
        )

    records: list[T] = []
    for i, row in enumerate(payload):
        if not isinstance(row, Mapping):
            return ExtractionError.invalid_shape(
                procedure, f"a {type(row).__name__} at row {i} instead of an object"
            )
        try:
            records.append(build(row))
        except KeyError as e:
            return ExtractionError.invalid_shape(procedure, f"a row without {e} at row {i}")
    return records

"""Extracted metadata records and the schema exclusion config."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

DEFAULT_FUNCTION_SCHEMAS: tuple[str, ...] = (
    "pg_catalog",
    "information_schema",
    "extensions",
    "pgsodium",
    "storage",
    "realtime",
    "vault",
)

DEFAULT_TRIGGER_SCHEMAS: tuple[str, ...] = (
    "pgsodium",
    "storage",
    "realtime",
    "vault",
)


def _text(row: Mapping[str, object], key: str) -> str:
    value = row[key]
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Policy:
    name: str
    table_name: str
    command: str
    definition: str

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> Policy:
        return cls(
            name=_text(row, "name"),
            table_name=_text(row, "table_name"),
            command=_text(row, "command"),
            definition=_text(row, "definition"),
        )


@dataclass(frozen=True)
class FunctionDef:
    name: str
    schema: str
    language: str
    definition: str
    arguments: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> FunctionDef:
        return cls(
            name=_text(row, "name"),
            schema=_text(row, "schema"),
            language=_text(row, "language"),
            definition=_text(row, "definition"),
            arguments=str(row.get("arguments") or ""),
        )


@dataclass(frozen=True)
class TriggerDef:
    name: str
    table_name: str
    event: str  # ROW | STATEMENT
    timing: str  # BEFORE | AFTER | INSTEAD OF
    definition: str

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> TriggerDef:
        return cls(
            name=_text(row, "name"),
            table_name=_text(row, "table_name"),
            event=_text(row, "event"),
            timing=_text(row, "timing"),
            definition=_text(row, "definition"),
        )


@dataclass
class ExtractedResult:
    """Snapshot of one complete extraction."""

    policies: list[Policy] = field(default_factory=list)
    functions: list[FunctionDef] = field(default_factory=list)
    triggers: list[TriggerDef] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "policies": len(self.policies),
            "functions": len(self.functions),
            "triggers": len(self.triggers),
        }


def _dedupe(names: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return tuple(seen)


def parse_schema_list(text: str) -> tuple[str, ...]:
    """Parse newline-delimited schema names, dropping blanks and duplicates."""
    return _dedupe(text.splitlines())


@dataclass(frozen=True)
class ExclusionConfig:
    """Schemas left out of the generated get_functions/get_triggers procedures."""

    function_schemas: tuple[str, ...] = DEFAULT_FUNCTION_SCHEMAS
    trigger_schemas: tuple[str, ...] = DEFAULT_TRIGGER_SCHEMAS

    def __post_init__(self) -> None:
        object.__setattr__(self, "function_schemas", _dedupe(self.function_schemas))
        object.__setattr__(self, "trigger_schemas", _dedupe(self.trigger_schemas))

    @classmethod
    def default(cls) -> ExclusionConfig:
        return cls()

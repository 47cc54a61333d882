"""Remote client protocol — the boundary between the extractor and the backend."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

READ_PROCEDURES: tuple[str, ...] = ("get_policies", "get_functions", "get_triggers")
EXEC_PROCEDURE = "exec_sql"


class ClientType(enum.Enum):
    REST = "rest"
    POSTGRES = "postgres"


class CallFailure(enum.Enum):
    """Failure category a client can determine from structured error data."""

    MISSING_PROCEDURE = "missing_procedure"
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class Credentials:
    url: str
    key: str

    @property
    def is_complete(self) -> bool:
        return bool(self.url.strip()) and bool(self.key.strip())


class RemoteCallError(Exception):
    """Raised by clients for connection/call failures."""

    def __init__(self, message: str, *, kind: CallFailure | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


@runtime_checkable
class RemoteClient(Protocol):
    async def connect(self, credentials: Credentials) -> None: ...
    async def close(self) -> None: ...
    async def call_procedure(
        self, name: str, args: dict[str, object] | None = None
    ) -> object:
        """Invoke a remote procedure and return its decoded result.

        Returns None when the backend sends back no body at all.
        """
        ...
    def client_type(self) -> ClientType: ...

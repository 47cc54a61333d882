"""Remote clients — implementations of the RemoteClient protocol."""

from sbextract.clients._base import (
    EXEC_PROCEDURE,
    READ_PROCEDURES,
    CallFailure,
    ClientType,
    Credentials,
    RemoteCallError,
    RemoteClient,
)

__all__ = [
    "EXEC_PROCEDURE",
    "READ_PROCEDURES",
    "CallFailure",
    "ClientType",
    "Credentials",
    "RemoteCallError",
    "RemoteClient",
]

"""Lazy client loading — imports driver modules only when needed."""

from __future__ import annotations

import importlib

from sbextract.clients._base import ClientType, RemoteCallError, RemoteClient

_CLIENT_MAP: dict[ClientType, tuple[str, str]] = {
    ClientType.REST: ("sbextract.clients.rest", "RestClient"),
    ClientType.POSTGRES: ("sbextract.clients.postgres", "PostgresClient"),
}

_EXTRAS: dict[ClientType, str] = {
    ClientType.POSTGRES: "postgres",
}


def get_client(client_type: ClientType) -> type[RemoteClient]:
    """Lazy-load a client class by type.

    Raises RemoteCallError with install hint if the driver package is missing.
    """
    entry = _CLIENT_MAP.get(client_type)
    if entry is None:
        raise RemoteCallError(f"No client registered for {client_type.value}")

    module_path, class_name = entry
    try:
        mod = importlib.import_module(module_path)
    except ImportError as e:
        extra = _EXTRAS.get(client_type, "all")
        raise RemoteCallError(
            f"Missing driver for {client_type.value}. "
            f"Install with: pip install 'sbextract[{extra}]'"
        ) from e

    return getattr(mod, class_name)

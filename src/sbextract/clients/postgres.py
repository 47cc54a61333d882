"""Direct PostgreSQL client — procedures are called with SELECT over psycopg."""

from __future__ import annotations

import psycopg
from psycopg import sql

from sbextract.clients._base import (
    CallFailure,
    ClientType,
    Credentials,
    RemoteCallError,
)

# SQLSTATE classes we can tag without reading the message.
_SQLSTATE_FAILURES: dict[str, CallFailure] = {
    "42883": CallFailure.MISSING_PROCEDURE,  # undefined_function
    "28P01": CallFailure.AUTHENTICATION,  # invalid_password
    "28000": CallFailure.AUTHENTICATION,  # invalid_authorization_specification
    "57014": CallFailure.TIMEOUT,  # query_canceled (statement_timeout)
}


def _connect_failure(e: Exception) -> CallFailure:
    if "password authentication failed" in str(e).lower():
        return CallFailure.AUTHENTICATION
    return CallFailure.CONNECTION


def _procedure_query(name: str, args: dict[str, object]) -> sql.Composed:
    named_args = sql.SQL(", ").join(
        sql.SQL("{} => {}").format(sql.Identifier(k), sql.Placeholder(k)) for k in args
    )
    return sql.SQL("SELECT * FROM {}({})").format(sql.Identifier(name), named_args)


class PostgresClient:
    """PostgreSQL client using psycopg (async). The URL is a libpq DSN."""

    def __init__(self) -> None:
        self._conn: psycopg.AsyncConnection | None = None

    async def connect(self, credentials: Credentials) -> None:
        try:
            self._conn = await psycopg.AsyncConnection.connect(
                credentials.url.strip(),
                password=credentials.key,
                autocommit=True,
                application_name="sbextract",
            )
        except psycopg.ProgrammingError as e:
            # Malformed DSN.
            raise RemoteCallError(
                f"Invalid connection string: {e}", kind=CallFailure.CONNECTION
            ) from e
        except Exception as e:
            raise RemoteCallError(
                f"PostgreSQL connection failed: {e}", kind=_connect_failure(e)
            ) from e

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    def _ensure_conn(self) -> psycopg.AsyncConnection:
        if self._conn is None:
            raise RemoteCallError("Not connected. Call connect() first.")
        return self._conn

    async def call_procedure(
        self, name: str, args: dict[str, object] | None = None
    ) -> object:
        conn = self._ensure_conn()
        args = args or {}
        try:
            async with conn.cursor() as cur:
                await cur.execute(_procedure_query(name, args), args)
                if cur.description is None:
                    return None
                columns = [desc.name for desc in cur.description]
                rows = await cur.fetchall()
        except psycopg.Error as e:
            kind = _SQLSTATE_FAILURES.get(e.sqlstate or "")
            raise RemoteCallError(f"{name} failed: {e}", kind=kind) from e
        except Exception as e:
            raise RemoteCallError(f"{name} failed: {e}") from e

        return [dict(zip(columns, row, strict=True)) for row in rows]

    def client_type(self) -> ClientType:
        return ClientType.POSTGRES

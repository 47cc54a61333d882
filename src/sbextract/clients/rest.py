"""PostgREST client — procedures are called as RPC endpoints over HTTPS."""

from __future__ import annotations

import logging

import httpx

from sbextract.clients._base import (
    CallFailure,
    ClientType,
    Credentials,
    RemoteCallError,
)

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 60.0  # seconds

_RPC_PATH = "/rest/v1/rpc/"

# PostgREST codes: PGRST202 = function not in schema cache,
# PGRST30x = JWT missing/invalid/expired.
_MISSING_FUNCTION_CODES = {"PGRST202", "42883"}
_JWT_CODE_PREFIX = "PGRST30"


def _error_message(response: httpx.Response) -> tuple[str, str | None]:
    """Pull the message and error code out of a PostgREST error body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip() or response.reason_phrase
        return f"HTTP {response.status_code}: {text}", None

    if not isinstance(body, dict):
        return f"HTTP {response.status_code}: {body}", None

    message = str(body.get("message") or f"HTTP {response.status_code}")
    for extra in ("hint", "details"):
        if body.get(extra):
            message += f" ({extra}: {body[extra]})"
    code = body.get("code")
    return message, str(code) if code is not None else None


def _failure_for(status_code: int, code: str | None) -> CallFailure | None:
    if code in _MISSING_FUNCTION_CODES:
        return CallFailure.MISSING_PROCEDURE
    if status_code == 401 or (code and code.startswith(_JWT_CODE_PREFIX)):
        return CallFailure.AUTHENTICATION
    return None


class RestClient:
    """Supabase/PostgREST RPC client using httpx (async)."""

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._transport = transport
        self._timeout = timeout
        self._http: httpx.AsyncClient | None = None

    async def connect(self, credentials: Credentials) -> None:
        try:
            base_url = httpx.URL(credentials.url.strip().rstrip("/"))
        except httpx.InvalidURL as e:
            raise RemoteCallError(
                f"Invalid URL '{credentials.url}': {e}", kind=CallFailure.CONNECTION
            ) from e
        if base_url.scheme not in ("http", "https") or not base_url.host:
            raise RemoteCallError(
                f"Invalid URL '{credentials.url}': expected http(s)://host",
                kind=CallFailure.CONNECTION,
            )

        key = credentials.key.strip()
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _ensure_http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RemoteCallError("Not connected. Call connect() first.")
        return self._http

    async def call_procedure(
        self, name: str, args: dict[str, object] | None = None
    ) -> object:
        http = self._ensure_http()
        logger.debug("POST %s%s", _RPC_PATH, name)

        try:
            response = await http.post(f"{_RPC_PATH}{name}", json=args or {})
        except httpx.TimeoutException as e:
            raise RemoteCallError(
                f"Request to {name} timed out: {e}", kind=CallFailure.TIMEOUT
            ) from e
        except (httpx.ConnectError, httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise RemoteCallError(
                f"Could not connect to {http.base_url}: {e}",
                kind=CallFailure.CONNECTION,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteCallError(f"Request to {name} failed: {e}") from e

        if response.is_error:
            message, code = _error_message(response)
            logger.debug("%s failed: status=%s code=%s", name, response.status_code, code)
            raise RemoteCallError(message, kind=_failure_for(response.status_code, code))

        if response.status_code == 204 or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteCallError(f"{name} returned a non-JSON body: {e}") from e

    def client_type(self) -> ClientType:
        return ClientType.REST

"""Tests for the PostgREST client using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from sbextract.clients._base import CallFailure, Credentials, RemoteCallError
from sbextract.clients.rest import RestClient

CREDS = Credentials(url="https://abc.supabase.co/", key="anon-key")


def _call(handler, name: str, args: dict | None = None, creds: Credentials = CREDS):
    async def run():
        client = RestClient(transport=httpx.MockTransport(handler))
        await client.connect(creds)
        try:
            return await client.call_procedure(name, args)
        finally:
            await client.close()

    return asyncio.run(run())


def test_posts_to_rpc_endpoint_with_key_headers():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"name": "p1"}])

    assert _call(handler, "get_policies") == [{"name": "p1"}]
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://abc.supabase.co/rest/v1/rpc/get_policies"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["authorization"] == "Bearer anon-key"
    assert json.loads(request.content) == {}


def test_sends_args_as_json_body():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(204)

    assert _call(handler, "exec_sql", {"sql": "SELECT 1"}) is None
    assert bodies == [{"sql": "SELECT 1"}]


def test_null_body_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"null")

    assert _call(handler, "get_functions") is None


def test_missing_function_is_tagged():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={
            "code": "PGRST202",
            "message": "Could not find the function public.get_triggers without "
                       "parameters in the schema cache",
            "hint": None,
            "details": "Searched for the function public.get_triggers without parameters",
        })

    with pytest.raises(RemoteCallError) as exc:
        _call(handler, "get_triggers")
    assert exc.value.kind == CallFailure.MISSING_PROCEDURE
    assert "get_triggers" in exc.value.message
    assert "details:" in exc.value.message


def test_unauthorized_is_tagged():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Invalid API key"})

    with pytest.raises(RemoteCallError) as exc:
        _call(handler, "get_policies")
    assert exc.value.kind == CallFailure.AUTHENTICATION
    assert exc.value.message == "Invalid API key"


def test_other_errors_untagged():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "42501", "message": "permission denied for table x"})

    with pytest.raises(RemoteCallError) as exc:
        _call(handler, "get_policies")
    assert exc.value.kind is None
    assert exc.value.message == "permission denied for table x"


def test_non_json_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(RemoteCallError, match="HTTP 502: Bad Gateway"):
        _call(handler, "get_policies")


def test_connect_error_is_tagged():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(RemoteCallError) as exc:
        _call(handler, "get_policies")
    assert exc.value.kind == CallFailure.CONNECTION


def test_timeout_is_tagged():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(RemoteCallError) as exc:
        _call(handler, "get_policies")
    assert exc.value.kind == CallFailure.TIMEOUT


@pytest.mark.parametrize("url", ["not a url", "ftp://abc.supabase.co", "https://"])
def test_malformed_url_rejected_on_connect(url):
    client = RestClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with pytest.raises(RemoteCallError) as exc:
        asyncio.run(client.connect(Credentials(url=url, key="k")))
    assert exc.value.kind == CallFailure.CONNECTION


def test_call_before_connect():
    with pytest.raises(RemoteCallError, match="Not connected"):
        asyncio.run(RestClient().call_procedure("get_policies"))

"""Tests for the asynchronous httpx transport."""

from __future__ import annotations

import asyncio
import inspect

import httpx
import pytest

from derivekit.exceptions import AuthError, ConnectionError_, ServerError
from derivekit.generator import create_api
from derivekit.models import RequestConfig
from derivekit.output import OutputManager, set_output
from derivekit.transport import AsyncHttpxTransport, AsyncTransport, is_async_transport


def _make_transport(handler, **config) -> AsyncHttpxTransport:
    config.setdefault("max_retries", 0)
    return AsyncHttpxTransport(
        RequestConfig(**config), http_transport=httpx.MockTransport(handler)
    )


@pytest.fixture(autouse=True)
def _quiet() -> None:
    set_output(OutputManager(no_color=True, quiet=True))


@pytest.fixture
def delays(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    recorded: list[float] = []

    async def fake_sleep(delay: float) -> None:
        recorded.append(delay)

    monkeypatch.setattr("derivekit.transport.async_transport.asyncio.sleep", fake_sleep)
    return recorded


class TestAsyncTransport:
    def test_is_async_transport(self) -> None:
        transport = AsyncHttpxTransport()
        assert isinstance(transport, AsyncTransport)
        assert is_async_transport(transport)

    def test_send(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": 1})

        async def run() -> httpx.Response:
            async with _make_transport(handler, base_url="https://myapp.de") as transport:
                return await transport.send("/api/posts", "GET", {"params": {"page": 1}})

        response = asyncio.run(run())

        assert response.json() == {"id": 1}
        assert str(seen[0].url) == "https://myapp.de/api/posts?page=1"

    def test_error_mapping(self) -> None:
        async def run() -> None:
            async with _make_transport(lambda request: httpx.Response(401)) as transport:
                await transport.send("https://a.example/x", "GET")

        with pytest.raises(AuthError):
            asyncio.run(run())

    def test_retry_then_give_up(self, delays: list[float]) -> None:
        async def run() -> None:
            transport = _make_transport(lambda request: httpx.Response(503), max_retries=2)
            try:
                await transport.send("https://a.example/x", "GET")
            finally:
                await transport.aclose()

        with pytest.raises(ServerError):
            asyncio.run(run())
        assert delays == [1, 2]

    def test_connection_error(self, delays: list[float]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("slow", request=request)

        async def run() -> None:
            async with _make_transport(handler, max_retries=1) as transport:
                await transport.send("https://a.example/x", "GET")

        with pytest.raises(ConnectionError_):
            asyncio.run(run())
        assert delays == [1]

    def test_dry_run(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("request must not be sent")

        transport = AsyncHttpxTransport(
            dry_run=True, http_transport=httpx.MockTransport(handler)
        )
        response = asyncio.run(transport.send("https://a.example/x", "POST", {"json": {}}))
        assert response.json()["dry_run"] is True


class TestWithApiBuilder:
    def test_derives_coroutine_queries(self, endpoints) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.method)
            return httpx.Response(200, json={"ok": True})

        async def run() -> httpx.Response:
            async with _make_transport(handler) as transport:
                api = create_api(endpoints, transport)
                assert inspect.iscoroutinefunction(api.useUpdateUserQuery)
                return await api.useUpdateUserQuery({"json": {"name": "Ada"}})

        response = asyncio.run(run())

        assert response.json() == {"ok": True}
        assert seen == ["POST"]

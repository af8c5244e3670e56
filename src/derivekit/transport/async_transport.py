"""Asynchronous transport -- mirrors :class:`~derivekit.transport.sync_transport.HttpxTransport`.

Because :meth:`AsyncHttpxTransport.send` is a coroutine function,
:class:`~derivekit.generator.ApiBuilder` derives coroutine query callables
from it::

    async with AsyncHttpxTransport(config) as transport:
        api = create_api(endpoints, transport)
        response = await api.useGetPostQuery()
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional

import httpx

from derivekit.exceptions import ConnectionError_
from derivekit.models import RequestConfig
from derivekit.output import get_output
from derivekit.transport._shared import (
    RETRY_ERRORS,
    build_request_kwargs,
    dry_run_response,
    map_response_error,
)


class AsyncHttpxTransport:
    """Non-blocking transport backed by :class:`httpx.AsyncClient`.

    Same behaviour as :class:`~derivekit.transport.sync_transport.HttpxTransport`
    (dry-run, retry with backoff, error mapping) using :func:`asyncio.sleep`
    between attempts.

    Args:
        config: Base URL, timeout, retry and TLS settings.
        dry_run: When ``True``, requests are printed and not sent.
        http_transport: Optional low-level async httpx transport.
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        dry_run: bool = False,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._dry_run = dry_run
        self._http_transport = http_transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> AsyncHttpxTransport:
        self._open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _open(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url or "",
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
                transport=self._http_transport,
            )
        return self._client

    async def send(
        self,
        url: str,
        method: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        """Send one request; see :meth:`HttpxTransport.send <derivekit.transport.sync_transport.HttpxTransport.send>`."""
        kwargs = build_request_kwargs(method, url, options, self._config.headers)
        if self._dry_run:
            return dry_run_response(kwargs, self._config.base_url)

        response = await self._execute_with_retry(kwargs)
        map_response_error(response)
        return response

    async def _execute_with_retry(self, kwargs: dict[str, Any]) -> httpx.Response:
        client = self._open()
        max_retries = self._config.max_retries
        output = get_output()

        for attempt in range(max_retries + 1):
            try:
                response = await client.request(**kwargs)
            except RETRY_ERRORS as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    output.debug(
                        f"Connection error: {exc}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(delay)
                    continue
                raise ConnectionError_(
                    f"Connection failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            if response.status_code >= 500 and attempt < max_retries:
                delay = 2 ** attempt
                output.debug(
                    f"Server error {response.status_code}, retrying in {delay}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                await asyncio.sleep(delay)
                continue
            return response

        raise AssertionError("unreachable")  # pragma: no cover

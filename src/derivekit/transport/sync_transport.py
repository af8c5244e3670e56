"""Blocking transport backed by :class:`httpx.Client`.

:class:`HttpxTransport` implements the :class:`~derivekit.transport.base.Transport`
protocol, so it can be handed straight to
:class:`~derivekit.generator.ApiBuilder`.  On top of plain httpx it adds:

- **Default headers and base URL** from :class:`~derivekit.models.RequestConfig`.
- **Dry-run mode** -- prints the request to stderr and returns a synthetic
  200 response without sending traffic.
- **Retry with backoff** -- retries on 5xx and network errors with
  exponential delay (1 s, 2 s, 4 s, ...).
- **Error mapping** -- 401/403, 404 and other error statuses become
  :class:`~derivekit.exceptions.AuthError`,
  :class:`~derivekit.exceptions.NotFoundError` and
  :class:`~derivekit.exceptions.ServerError`.

See Also:
    :class:`~derivekit.transport.async_transport.AsyncHttpxTransport` for the
    non-blocking equivalent.
"""

from __future__ import annotations

import time
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


class HttpxTransport:
    """Synchronous transport for derived query callables.

    The underlying :class:`httpx.Client` is opened on first use or on
    entering the context manager, and closed by :meth:`close` / on exit.

    Args:
        config: Base URL, timeout, retry and TLS settings.
        dry_run: When ``True``, requests are printed to stderr and a
            synthetic 200 response is returned without network I/O.
        http_transport: Optional low-level httpx transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        with HttpxTransport(RequestConfig(base_url="https://myapp.de")) as transport:
            api = create_api(endpoints, transport)
            response = api.useGetPostQuery({"params": {"page": 2}})
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        dry_run: bool = False,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._dry_run = dry_run
        self._http_transport = http_transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def __enter__(self) -> HttpxTransport:
        self._open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _open(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._config.base_url or "",
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
                transport=self._http_transport,
            )
        return self._client

    # ------------------------------------------------------------------ #
    # Transport protocol
    # ------------------------------------------------------------------ #

    def send(
        self,
        url: str,
        method: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        """Send one request for a derived query callable.

        Args:
            url: Absolute URL, or a path resolved against ``config.base_url``.
            method: ``GET`` or ``POST``.
            options: Per-call options: ``params``, ``headers``, ``json``,
                ``content``, ``data`` and ``timeout``.

        Returns:
            The :class:`httpx.Response` from the server.

        Raises:
            InvalidUsageError: On unsupported option keys.
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On other error statuses, after retries for 5xx.
            ConnectionError_: On network / timeout errors after all retries.
        """
        kwargs = build_request_kwargs(method, url, options, self._config.headers)
        if self._dry_run:
            return dry_run_response(kwargs, self._config.base_url)

        response = self._execute_with_retry(kwargs)
        map_response_error(response)
        return response

    def _execute_with_retry(self, kwargs: dict[str, Any]) -> httpx.Response:
        client = self._open()
        max_retries = self._config.max_retries
        output = get_output()

        for attempt in range(max_retries + 1):
            try:
                response = client.request(**kwargs)
            except RETRY_ERRORS as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    output.debug(
                        f"Connection error: {exc}, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(delay)
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
                time.sleep(delay)
                continue
            return response

        raise AssertionError("unreachable")  # pragma: no cover

"""Transports that derived query callables send their requests through.

:mod:`~derivekit.transport.base` defines the contract; the httpx-backed
implementations are ready-made collaborators for real HTTP APIs.

Classes:
    :class:`Transport` / :class:`AsyncTransport` -- the ``send`` protocols.
    :class:`HttpxTransport` -- blocking, backed by :class:`httpx.Client`.
    :class:`AsyncHttpxTransport` -- non-blocking, backed by :class:`httpx.AsyncClient`.
"""

from derivekit.transport.async_transport import AsyncHttpxTransport
from derivekit.transport.base import AsyncTransport, Transport, is_async_transport
from derivekit.transport.sync_transport import HttpxTransport

__all__ = [
    "AsyncHttpxTransport",
    "AsyncTransport",
    "HttpxTransport",
    "Transport",
    "is_async_transport",
]

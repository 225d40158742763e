"""Shared HTTP plumbing for the catalog client and poster fetcher.

:class:`BaseClient` owns the :class:`httpx.AsyncClient` lifecycle and
performs the single GET each operation is allowed.  It does not retry and
does not translate errors into the movieservice taxonomy; the catalog
client and poster fetcher map failures differently, so each catches
:class:`httpx.HTTPError` itself.

A client can either open its own :class:`httpx.AsyncClient` (when used as
an async context manager) or borrow one passed in as ``http_client``.
Borrowed clients are never closed here.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from movieservice.models import RequestConfig
from movieservice.urls import redact

logger = logging.getLogger(__name__)


class BaseClient:
    """Async context manager around an :class:`httpx.AsyncClient`.

    Args:
        request: Timeout and SSL settings for the owned client.
        transport: Optional transport for the owned client (for example
            :class:`httpx.MockTransport` in tests).
        http_client: An already-open client to borrow instead of opening
            one.
    """

    def __init__(
        self,
        request: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._request_config = request or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self):
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._request_config.timeout,
                verify=self._request_config.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )
            self._owns_client = True
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this object opened it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    async def _get(self, url: httpx.URL) -> httpx.Response:
        """Send one GET request and return the response with a 2xx status.

        Raises:
            httpx.HTTPError: Any transport failure, or
                :class:`httpx.HTTPStatusError` for a non-2xx status.
            RuntimeError: If no client is open.
        """
        if self._client is None:
            raise RuntimeError("Client not initialised -- use as async context manager")

        logger.debug("GET %s", redact(str(url)))
        response = await self._client.get(url)
        logger.debug("GET %s -> %s", redact(str(url)), response.status_code)
        response.raise_for_status()
        return response

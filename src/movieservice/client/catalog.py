"""Catalog client -- popular listings and movie search.

:class:`CatalogClient` builds request URLs by concatenating its fixed
configuration with the caller's input, issues exactly one GET per call and
decodes the body into a :class:`~movieservice.models.ListingPage`.
Failures are translated into the movieservice taxonomy:

* malformed URL -- :class:`~movieservice.exceptions.InvalidURLError`
  (raised before any network access)
* network failure or HTTP error status --
  :class:`~movieservice.exceptions.TransportError`
* body that is not a listing page --
  :class:`~movieservice.exceptions.DecodingError`

Listing pages are never cached.
"""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError

from movieservice.client.base import BaseClient
from movieservice.exceptions import DecodingError, EmptyQueryError, TransportError
from movieservice.models import (
    DEFAULT_POPULAR_ENDPOINT,
    DEFAULT_SEARCH_ENDPOINT,
    ListingPage,
    RequestConfig,
    ServiceConfig,
)
from movieservice.urls import build_url, encode_query, redact


class CatalogClient(BaseClient):
    """Async client for the catalog's listing endpoints.

    Args:
        base_url: API root, e.g. ``https://api.themoviedb.org/3/``.
        api_key: Static credential appended after each endpoint template.
        popular_endpoint: Template for the popular listing, ending where
            the credential goes (``movie/popular?api_key=``).
        search_endpoint: Template for search, same convention.
        request: Timeout and SSL settings.
        transport: Optional :mod:`httpx` transport for the owned client.
        http_client: Optional already-open client to borrow.

    Example::

        async with CatalogClient(base_url, api_key) as catalog:
            page = await catalog.search("batman")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        popular_endpoint: str = DEFAULT_POPULAR_ENDPOINT,
        search_endpoint: str = DEFAULT_SEARCH_ENDPOINT,
        request: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(request=request, transport=transport, http_client=http_client)
        self._base_url = base_url
        self._api_key = api_key
        self._popular_endpoint = popular_endpoint
        self._search_endpoint = search_endpoint

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> CatalogClient:
        """Build a client from a :class:`~movieservice.models.ServiceConfig`."""
        return cls(
            base_url=config.base_url,
            api_key=config.api_key,
            popular_endpoint=config.popular_endpoint,
            search_endpoint=config.search_endpoint,
            request=config.request,
            transport=transport,
            http_client=http_client,
        )

    # ------------------------------------------------------------------ #
    # URL construction
    # ------------------------------------------------------------------ #

    def popular_url(self) -> httpx.URL:
        """Return the popular-listing URL.

        Raises:
            InvalidURLError: If the configuration does not form a valid URL.
        """
        return build_url(f"{self._base_url}{self._popular_endpoint}{self._api_key}")

    def search_url(self, query: str) -> httpx.URL:
        """Return the search URL for *query*, percent-encoding the query.

        Raises:
            InvalidURLError: If the configuration does not form a valid URL.
        """
        return build_url(
            f"{self._base_url}{self._search_endpoint}{self._api_key}"
            f"&query={encode_query(query)}"
        )

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    async def fetch_popular(self) -> ListingPage:
        """Fetch the first page of popular movies.

        Raises:
            InvalidURLError: Malformed configuration; no request is sent.
            TransportError: The request failed or returned an error status.
            DecodingError: The body is not a listing page.
        """
        return await self._fetch_page(self.popular_url())

    async def search(self, query: str) -> ListingPage:
        """Search movies by free text and return the page the server returns.

        Whitespace-only queries are sent as-is; only the empty string is
        rejected.

        Raises:
            EmptyQueryError: *query* is ``""``; no request is sent.
            InvalidURLError: Malformed configuration; no request is sent.
            TransportError: The request failed or returned an error status.
            DecodingError: The body is not a listing page.
        """
        if query == "":
            raise EmptyQueryError("Search query must not be empty")
        return await self._fetch_page(self.search_url(query))

    async def _fetch_page(self, url: httpx.URL) -> ListingPage:
        try:
            response = await self._get(url)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to {redact(str(url))} failed ({type(exc).__name__})", cause=exc
            ) from exc

        try:
            return ListingPage.from_json(response.content)
        except ValidationError as exc:
            raise DecodingError(
                f"Unexpected listing response from {redact(str(url))}: {exc}", cause=exc
            ) from exc

"""One-object facade over the catalog client and poster fetcher.

:class:`MovieService` opens a single :class:`httpx.AsyncClient` and lends
it to a :class:`~movieservice.client.CatalogClient` and a
:class:`~movieservice.client.PosterFetcher`, so callers that want all
three operations manage one context.  It adds no behaviour of its own.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

import httpx
from PIL import Image

from movieservice.cache import ResponseStore, open_store
from movieservice.client import CatalogClient, PosterFetcher
from movieservice.config import load_service_config
from movieservice.models import ListingItem, ListingPage, ServiceConfig

T = TypeVar("T")


class MovieService:
    """Popular listings, search and poster loading behind one async context.

    Args:
        config: Service configuration.
        cache: Poster byte store.  When ``None`` a store is opened from
            ``config.cache`` and closed again on exit.
        transport: Optional :mod:`httpx` transport (tests use
            :class:`httpx.MockTransport`).

    Example::

        async with MovieService(config) as service:
            page = await service.get_movies()
            posters = await asyncio.gather(
                *(service.load_image(item) for item in page.results)
            )
    """

    def __init__(
        self,
        config: ServiceConfig,
        cache: Optional[ResponseStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._cache = cache
        self._owns_cache = cache is None
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None
        self._catalog: Optional[CatalogClient] = None
        self._posters: Optional[PosterFetcher] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> MovieService:
        """Build a service from :func:`~movieservice.config.load_service_config`."""
        return cls(load_service_config(**overrides))

    @property
    def config(self) -> ServiceConfig:
        return self._config

    async def __aenter__(self) -> MovieService:
        if self._cache is None:
            self._cache = open_store(self._config.cache)
        self._http = httpx.AsyncClient(
            timeout=self._config.request.timeout,
            verify=self._config.request.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        self._catalog = CatalogClient.from_config(self._config, http_client=self._http)
        self._posters = PosterFetcher.from_config(
            self._config, self._cache, http_client=self._http
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
        self._catalog = None
        self._posters = None
        if self._owns_cache and self._cache is not None:
            close = getattr(self._cache, "close", None)
            if close is not None:
                close()
            self._cache = None

    def _require(self, component: Optional[T]) -> T:
        if component is None:
            raise RuntimeError("MovieService not initialised -- use as async context manager")
        return component

    async def get_movies(self) -> ListingPage:
        """Popular movies; see :meth:`CatalogClient.fetch_popular`."""
        return await self._require(self._catalog).fetch_popular()

    async def search_movies(self, query: str) -> ListingPage:
        """Search results; see :meth:`CatalogClient.search`."""
        return await self._require(self._catalog).search(query)

    async def load_image(self, item: ListingItem) -> Optional[Image.Image]:
        """Poster for *item*; see :meth:`PosterFetcher.load_image`."""
        return await self._require(self._posters).load_image(item)

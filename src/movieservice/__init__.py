"""movieservice -- async client for a movie catalog API and its poster images.

The package fetches popular-movie listings and search results from a
TMDB-style catalog API, decodes them into typed Pydantic records, and loads
poster images through a read-through byte cache.

Typical use::

    from movieservice import MovieService, ServiceConfig

    config = ServiceConfig(base_url="https://api.themoviedb.org/3/", api_key=key)
    async with MovieService(config) as service:
        page = await service.search_movies("batman")
        poster = await service.load_image(page.results[0])

Modules:
    models: Pydantic listing and configuration models.
    exceptions: The error taxonomy.
    config: XDG-aware configuration and credential resolution.
    cache: Poster byte stores.
    client: Catalog client and poster fetcher.
    service: The :class:`MovieService` facade.
"""

from movieservice.cache import CachedResponse, DiskResponseStore, MemoryResponseStore, ResponseStore
from movieservice.client import CatalogClient, PosterFetcher
from movieservice.exceptions import (
    ConfigError,
    DecodingError,
    EmptyQueryError,
    ErrorKind,
    ImageLoadingError,
    InvalidImageDataError,
    InvalidURLError,
    MovieServiceError,
    TransportError,
)
from movieservice.models import CacheConfig, ListingItem, ListingPage, RequestConfig, ServiceConfig
from movieservice.service import MovieService

__version__ = "0.1.0"

__all__ = [
    "CacheConfig",
    "CachedResponse",
    "CatalogClient",
    "ConfigError",
    "DecodingError",
    "DiskResponseStore",
    "EmptyQueryError",
    "ErrorKind",
    "ImageLoadingError",
    "InvalidImageDataError",
    "InvalidURLError",
    "ListingItem",
    "ListingPage",
    "MemoryResponseStore",
    "MovieService",
    "MovieServiceError",
    "PosterFetcher",
    "RequestConfig",
    "ResponseStore",
    "ServiceConfig",
    "TransportError",
]

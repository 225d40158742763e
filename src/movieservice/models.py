"""Canonical Pydantic models shared across all movieservice modules.

The models fall into two groups:

**Wire models** -- decoded from catalog API responses:
    :class:`ListingItem` and :class:`ListingPage`.  Field names match the
    wire's snake_case keys (``poster_path``, ``total_pages``,
    ``total_results``) so no aliasing is needed in either direction.

**Configuration models** -- built from values, environment variables or
the optional ``config.json`` file (see :mod:`movieservice.config`):
    :class:`RequestConfig`, :class:`CacheConfig` and :class:`ServiceConfig`.

All models are frozen: a listing page never changes once decoded, and a
client's configuration is fixed at construction.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_POPULAR_ENDPOINT = "movie/popular?api_key="
DEFAULT_SEARCH_ENDPOINT = "search/movie?api_key="
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500/"


# --- Listing wire models ---


class ListingItem(BaseModel):
    """A single movie in a listing page.

    Only :attr:`poster_path` has behaviour attached to it (it drives
    :meth:`~movieservice.client.images.PosterFetcher.load_image`).  The
    remaining fields are passthrough data; keys the model does not declare
    are preserved in ``model_extra`` and written back by :meth:`to_wire`.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    poster_path: Optional[str] = Field(
        default=None, description="Relative poster path, e.g. /abc123.jpg"
    )
    id: Optional[int] = None
    title: Optional[str] = None
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[str] = None
    backdrop_path: Optional[str] = None
    genre_ids: list[int] = Field(default_factory=list)
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    adult: Optional[bool] = None
    video: Optional[bool] = None

    def to_wire(self) -> dict[str, Any]:
        """Return the item as a JSON-compatible dict in wire format."""
        return self.model_dump(mode="json")


class ListingPage(BaseModel):
    """One page of listing results with pagination metadata.

    The server is trusted: the client does not check that ``page`` is
    positive or that ``results`` fits within ``total_results``.

    Example::

        page = ListingPage.from_json(b'{"page": 1, "results": [], '
                                     b'"total_pages": 1, "total_results": 0}')
        assert page.total_pages == 1
    """

    model_config = ConfigDict(frozen=True)

    page: int
    results: list[ListingItem]
    total_pages: int
    total_results: int

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> ListingPage:
        """Decode a listing response body.

        Raises:
            pydantic.ValidationError: If the body is not JSON or does not
                match the listing shape.
        """
        return cls.model_validate_json(data)

    def to_wire(self) -> dict[str, Any]:
        """Return the page as a JSON-compatible dict with the wire's key names."""
        return {
            "page": self.page,
            "results": [item.to_wire() for item in self.results],
            "total_pages": self.total_pages,
            "total_results": self.total_results,
        }


# --- Configuration models ---


class RequestConfig(BaseModel):
    """HTTP request settings shared by the catalog client and poster fetcher."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """Poster byte-cache settings.

    When ``enabled`` is false an in-process memory store is used instead of
    the disk store.  ``directory`` defaults to the XDG cache directory.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=True, description="Persist poster bytes on disk")
    directory: Optional[str] = Field(
        default=None, description="Cache root; defaults to the XDG cache directory"
    )
    size_limit: int = Field(
        default=256 * 1024 * 1024, description="Disk cache size limit in bytes"
    )


class ServiceConfig(BaseModel):
    """Fixed configuration for the catalog client and poster fetcher.

    ``base_url`` and ``api_key`` are required.  Endpoint templates are
    concatenated verbatim: ``base_url + popular_endpoint + api_key``.

    Example::

        ServiceConfig(
            base_url="https://api.themoviedb.org/3/",
            api_key="0123456789abcdef",
        )
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Catalog API base URL, including trailing slash")
    api_key: str = Field(description="Static API credential appended to each endpoint")
    popular_endpoint: str = Field(default=DEFAULT_POPULAR_ENDPOINT)
    search_endpoint: str = Field(default=DEFAULT_SEARCH_ENDPOINT)
    image_base_url: str = Field(default=DEFAULT_IMAGE_BASE_URL)
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

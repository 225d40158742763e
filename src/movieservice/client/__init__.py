"""HTTP clients for movieservice.

Both clients wrap :class:`httpx.AsyncClient`, send exactly one GET per
operation and map failures into :mod:`movieservice.exceptions`.

Classes:
    :class:`CatalogClient` -- popular listings and search.
    :class:`PosterFetcher` -- poster images through a read-through byte cache.

Both are async context managers and can also borrow an already-open
:class:`httpx.AsyncClient`.

Example::

    from movieservice.client import CatalogClient

    async with CatalogClient(base_url, api_key) as catalog:
        page = await catalog.fetch_popular()
"""

from movieservice.client.catalog import CatalogClient
from movieservice.client.images import PosterFetcher

__all__ = ["CatalogClient", "PosterFetcher"]

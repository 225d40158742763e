"""Poster fetcher -- a read-through cache in front of the image CDN.

:meth:`PosterFetcher.load_image` turns a listing item's ``poster_path``
into a decoded :class:`PIL.Image.Image`:

1. No poster path, or a path that does not form a valid URL -- ``None``.
2. Cached bytes for the URL that decode -- the decoded image, no request.
3. Otherwise one GET; the raw bytes are stored under the URL (tagged
   ``image/jpeg``) once they decode, and the image is returned.

Store reads and writes and image decoding run in worker threads through
:func:`asyncio.to_thread`, so a disk-backed store or a large JPEG does not
block the event loop.  A cached entry that fails to decode is treated as a
miss.  Concurrent calls for the same uncached poster may both fetch and
both store; the last write wins.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional

import httpx
from PIL import Image

from movieservice.cache.base import CachedResponse, ResponseStore
from movieservice.client.base import BaseClient
from movieservice.exceptions import ImageLoadingError, InvalidImageDataError, InvalidURLError
from movieservice.models import DEFAULT_IMAGE_BASE_URL, ListingItem, RequestConfig, ServiceConfig
from movieservice.urls import build_url

logger = logging.getLogger(__name__)

POSTER_MIME_TYPE = "image/jpeg"


def decode_image(data: bytes) -> Image.Image:
    """Decode *data* into a fully loaded image.

    Raises:
        InvalidImageDataError: If Pillow cannot read the bytes.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Exception as exc:
        raise InvalidImageDataError("Poster bytes are not a readable image", cause=exc) from exc
    return image


class PosterFetcher(BaseClient):
    """Loads poster images through a :class:`~movieservice.cache.base.ResponseStore`.

    Args:
        cache: Byte store shared with other fetchers; never owned here.
        image_base_url: Prefix joined verbatim with each ``poster_path``.
        request: Timeout and SSL settings.
        transport: Optional :mod:`httpx` transport for the owned client.
        http_client: Optional already-open client to borrow.
    """

    def __init__(
        self,
        cache: ResponseStore,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        request: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(request=request, transport=transport, http_client=http_client)
        self._cache = cache
        self._image_base_url = image_base_url

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig,
        cache: ResponseStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> PosterFetcher:
        """Build a fetcher from a :class:`~movieservice.models.ServiceConfig`."""
        return cls(
            cache=cache,
            image_base_url=config.image_base_url,
            request=config.request,
            transport=transport,
            http_client=http_client,
        )

    def poster_url(self, item: ListingItem) -> Optional[httpx.URL]:
        """Return the poster URL for *item*, or ``None`` if it has none or it is malformed."""
        if item.poster_path is None:
            return None
        try:
            return build_url(f"{self._image_base_url}{item.poster_path}")
        except InvalidURLError:
            logger.debug("Skipping malformed poster path %r", item.poster_path)
            return None

    async def load_image(self, item: ListingItem) -> Optional[Image.Image]:
        """Return the poster image for *item*.

        Returns:
            The decoded image, or ``None`` when the item has no usable
            poster path.

        Raises:
            ImageLoadingError: The fetch failed or returned an error status.
            InvalidImageDataError: The fetched bytes are not an image.
        """
        url = self.poster_url(item)
        if url is None:
            return None
        key = str(url)

        cached = await asyncio.to_thread(self._cache.get, key)
        if cached is not None:
            try:
                image = await asyncio.to_thread(decode_image, cached.data)
            except InvalidImageDataError:
                logger.warning("Cached poster for %s is corrupt, refetching", key)
            else:
                logger.debug("Poster cache hit: %s", key)
                return image
        else:
            logger.debug("Poster cache miss: %s", key)

        try:
            response = await self._get(url)
        except httpx.HTTPError as exc:
            raise ImageLoadingError(
                f"Poster request to {key} failed ({type(exc).__name__})", cause=exc
            ) from exc

        data = response.content
        image = await asyncio.to_thread(decode_image, data)
        await asyncio.to_thread(
            self._cache.put, key, CachedResponse(data=data, mime_type=POSTER_MIME_TYPE)
        )
        logger.debug("Stored poster %s (%d bytes)", key, len(data))
        return image

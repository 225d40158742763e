"""Disk-based poster byte store.

Uses :mod:`diskcache` to persist poster response bytes on the filesystem.
Entries are keyed by the exact request URL and stored as plain dicts
(``data``, ``mime_type``) so the on-disk format does not depend on the
Pydantic model's pickling.  The cache is size-limited; when the limit is
reached diskcache evicts entries on its own schedule.

See Also:
    :class:`~movieservice.models.CacheConfig` -- the Pydantic model that
    controls ``enabled``, ``directory`` and ``size_limit``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

import diskcache
from pydantic import ValidationError

from movieservice.cache.base import CachedResponse, ResponseStore
from movieservice.cache.memory import MemoryResponseStore
from movieservice.models import CacheConfig

logger = logging.getLogger(__name__)


class DiskResponseStore:
    """Disk-backed :class:`~movieservice.cache.base.ResponseStore`.

    Args:
        cache_dir: Root directory for the cache.  An ``images/``
            subdirectory is created inside it.
        config: Cache configuration; only ``size_limit`` is read here.

    Example::

        store = DiskResponseStore("/tmp/movie-cache", CacheConfig())
        store.put(url, CachedResponse(data=jpeg_bytes, mime_type="image/jpeg"))
        hit = store.get(url)
    """

    def __init__(self, cache_dir: Union[str, Path], config: CacheConfig) -> None:
        self._config = config
        self._cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(
            str(self._cache_dir / "images"), size_limit=config.size_limit
        )

    def get(self, key: str) -> Optional[CachedResponse]:
        """Look up the bytes stored under *key*.

        Entries that do not have the expected shape are reported as misses.
        """
        raw = self._cache.get(key)
        if raw is None:
            return None
        try:
            return CachedResponse.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring malformed cache entry for %s", key)
            return None

    def put(self, key: str, response: CachedResponse) -> None:
        self._cache.set(key, {"data": response.data, "mime_type": response.mime_type})

    def clear(self) -> None:
        """Remove all entries from the cache."""
        self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``size`` (number of entries), ``volume`` (bytes
            on disk), ``directory`` (str path) and ``size_limit`` (int).
        """
        return {
            "size": len(self._cache),
            "volume": self._cache.volume(),
            "directory": str(self._cache_dir / "images"),
            "size_limit": self._config.size_limit,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()


def open_store(config: CacheConfig) -> ResponseStore:
    """Create the store described by *config*.

    Returns a :class:`DiskResponseStore` rooted at ``config.directory`` (or
    the XDG cache directory) when caching is enabled, otherwise a
    :class:`~movieservice.cache.memory.MemoryResponseStore`.
    """
    if not config.enabled:
        return MemoryResponseStore()

    from movieservice.config import get_cache_dir

    cache_dir = Path(config.directory).expanduser() if config.directory else get_cache_dir()
    return DiskResponseStore(cache_dir, config)

"""Poster byte stores for movieservice.

This package provides the :class:`ResponseStore` protocol consumed by
:class:`~movieservice.client.images.PosterFetcher` and two
implementations: :class:`MemoryResponseStore` (process local) and
:class:`DiskResponseStore` (persisted with :mod:`diskcache`).  Entries are
keyed by the exact poster request URL.
"""

from movieservice.cache.base import CachedResponse, ResponseStore
from movieservice.cache.disk import DiskResponseStore, open_store
from movieservice.cache.memory import MemoryResponseStore

__all__ = [
    "CachedResponse",
    "DiskResponseStore",
    "MemoryResponseStore",
    "ResponseStore",
    "open_store",
]

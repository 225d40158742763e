"""In-process response store.

Used when disk caching is disabled and as the test double for
:class:`~movieservice.cache.base.ResponseStore`.  Entries live as long as
the store object does.
"""

from __future__ import annotations

from typing import Optional

from movieservice.cache.base import CachedResponse


class MemoryResponseStore:
    """Dict-backed :class:`~movieservice.cache.base.ResponseStore`."""

    def __init__(self) -> None:
        self._entries: dict[str, CachedResponse] = {}

    def get(self, key: str) -> Optional[CachedResponse]:
        return self._entries.get(key)

    def put(self, key: str, response: CachedResponse) -> None:
        self._entries[key] = response

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

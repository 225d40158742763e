"""The byte-response store interface used by the poster fetcher.

A store maps a request URL string to the raw response bytes and their MIME
type.  The poster fetcher only ever reads and writes entries; eviction is
entirely up to the store implementation.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class CachedResponse(BaseModel):
    """Raw response bytes kept by a :class:`ResponseStore`."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str


@runtime_checkable
class ResponseStore(Protocol):
    """Keyed store for response bytes.

    Keys are canonical request URL strings (scheme, host, path and query).
    """

    def get(self, key: str) -> Optional[CachedResponse]:
        """Return the entry stored under *key*, or ``None`` on a miss."""
        ...

    def put(self, key: str, response: CachedResponse) -> None:
        """Store *response* under *key*, replacing any previous entry."""
        ...

"""Exception hierarchy for movieservice.

All exceptions inherit from :class:`MovieServiceError`, which carries a
``kind`` attribute taken from :class:`ErrorKind`.  Callers that want to
branch on the failure class without importing every subclass can compare
``exc.kind`` instead.

Subclass hierarchy::

    MovieServiceError          (unknown)
    +-- EmptyQueryError        (empty_query)
    +-- InvalidURLError        (invalid_url)
    +-- TransportError         (transport)
    +-- DecodingError          (decoding)
    +-- InvalidImageDataError  (invalid_image_data)
    +-- ImageLoadingError      (image_loading_failed)
    +-- ConfigError            (config)

Only ``ConfigError`` lives outside the client's closed taxonomy; it is
raised while loading configuration, never by a client operation.
"""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Stable identifiers for every failure the package can raise."""

    EMPTY_QUERY = "empty_query"
    INVALID_URL = "invalid_url"
    TRANSPORT = "transport"
    DECODING = "decoding"
    INVALID_IMAGE_DATA = "invalid_image_data"
    IMAGE_LOADING_FAILED = "image_loading_failed"
    CONFIG = "config"
    UNKNOWN = "unknown"


class MovieServiceError(Exception):
    """Base exception for all movieservice errors.

    Every subclass sets a class-level ``kind``.  When the failure was
    caused by a lower-level exception (an :mod:`httpx` error, a Pydantic
    validation error, ...) it is kept on :attr:`cause` in addition to the
    usual ``__cause__`` chaining.

    Args:
        message: Human-readable error description.
        cause: The underlying exception, if any.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class EmptyQueryError(MovieServiceError):
    """Raised when :meth:`search` is called with an empty query string."""

    kind = ErrorKind.EMPTY_QUERY


class InvalidURLError(MovieServiceError):
    """Raised when a request URL built from configuration is not well formed."""

    kind = ErrorKind.INVALID_URL


class TransportError(MovieServiceError):
    """Raised on network-level failures (DNS, connection, timeout) or an HTTP error status."""

    kind = ErrorKind.TRANSPORT


class DecodingError(MovieServiceError):
    """Raised when a listing response body does not match the expected JSON shape."""

    kind = ErrorKind.DECODING


class InvalidImageDataError(MovieServiceError):
    """Raised when fetched poster bytes cannot be decoded into an image."""

    kind = ErrorKind.INVALID_IMAGE_DATA


class ImageLoadingError(MovieServiceError):
    """Raised when the network fetch for a poster image fails."""

    kind = ErrorKind.IMAGE_LOADING_FAILED


class ConfigError(MovieServiceError):
    """Raised for configuration problems (invalid JSON, missing credential, bad credential source)."""

    kind = ErrorKind.CONFIG

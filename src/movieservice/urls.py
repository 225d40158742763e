"""URL construction helpers for the catalog client and poster fetcher.

Request URLs are built by plain string concatenation of configuration
values and user input, so they are validated before any request goes out.
A URL is considered well formed when it parses with :class:`httpx.URL`,
contains no whitespace or control characters, uses ``http`` or ``https``
and names a host.
"""

from __future__ import annotations

import re
from urllib.parse import quote

import httpx

from movieservice.exceptions import InvalidURLError

_ALLOWED_SCHEMES = ("http", "https")
_FORBIDDEN_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")
_API_KEY_PARAM = re.compile(r"(api_key=)[^&]*")


def build_url(raw: str) -> httpx.URL:
    """Parse and validate a concatenated request URL.

    Args:
        raw: The full URL string.

    Returns:
        The parsed :class:`httpx.URL`.

    Raises:
        InvalidURLError: If *raw* is not a well-formed absolute http(s) URL.
    """
    if not raw or _FORBIDDEN_CHARS.search(raw):
        raise InvalidURLError(f"Invalid URL: {redact(raw)!r}")
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(f"Invalid URL: {redact(raw)!r}", cause=exc) from exc
    if url.scheme not in _ALLOWED_SCHEMES or not url.host:
        raise InvalidURLError(f"Invalid URL: {redact(raw)!r}")
    return url


def encode_query(query: str) -> str:
    """Percent-encode a free-text query for use as a query-string value.

    Spaces become ``%20`` and every reserved character (``&``, ``=``,
    ``/``, ``?``, ``#``, ...) is escaped.
    """
    return quote(query, safe="")


def redact(url: str) -> str:
    """Mask the ``api_key`` query value so URLs can be logged."""
    return _API_KEY_PARAM.sub(r"\1***", url)

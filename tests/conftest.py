"""Shared test fixtures for movieservice.

Provides listing payloads, generated JPEG bytes, a call-recording mock
transport, and an isolated XDG config environment.  These fixtures are
automatically discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from PIL import Image

from movieservice.cache import MemoryResponseStore
from movieservice.models import CacheConfig, ServiceConfig

BASE_URL = "https://api.example.com/3/"
IMAGE_BASE_URL = "https://image.example.com/t/p/w500"
API_KEY = "test-key-123"


# ---------------------------------------------------------------------------
# Mock transport
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    """Factory for :class:`RecordingTransport` instances."""
    return RecordingTransport


# ---------------------------------------------------------------------------
# Payload fixtures
# ---------------------------------------------------------------------------


def make_jpeg(color: tuple[int, int, int] = (200, 30, 30), size: tuple[int, int] = (4, 6)) -> bytes:
    """Encode a solid-colour JPEG."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()


@pytest.fixture
def listing_payload() -> dict[str, Any]:
    """A two-item popular listing in wire format."""
    return {
        "page": 1,
        "results": [
            {
                "id": 550,
                "title": "Fight Club",
                "overview": "An insomniac office worker...",
                "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
                "release_date": "1999-10-15",
                "vote_average": 8.4,
                "genre_ids": [18],
            },
            {
                "id": 13,
                "title": "Forrest Gump",
                "poster_path": None,
                "vote_average": 8.5,
            },
        ],
        "total_pages": 500,
        "total_results": 10000,
    }


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def service_config() -> ServiceConfig:
    """Service configuration with disk caching disabled."""
    return ServiceConfig(
        base_url=BASE_URL,
        api_key=API_KEY,
        image_base_url=IMAGE_BASE_URL,
        cache=CacheConfig(enabled=False),
    )


@pytest.fixture
def memory_store() -> MemoryResponseStore:
    return MemoryResponseStore()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_CACHE_HOME to subdirectories of tmp_path
    and clears all MOVIESERVICE_* environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("movieservice.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in [
        "MOVIESERVICE_BASE_URL",
        "MOVIESERVICE_API_KEY",
        "MOVIESERVICE_IMAGE_BASE_URL",
    ]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path

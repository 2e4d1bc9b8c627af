"""Shared fakes for the metadata provider, image loader, encoder and document."""
from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from tentcard.config import CardConfig
from tentcard.core.images import ImageLoadError
from tentcard.errors import MetadataProviderError

FIXTURES = Path(__file__).parent / "fixtures"


class FakeProvider:
    """In-memory Spotify stand-in; records every lookup."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[tuple[str, str]] = []

    def _check(self, kind: str, id_: str) -> None:
        self.calls.append((kind, id_))
        if self.fail_on == id_:
            raise MetadataProviderError(f"lookup failed for {id_}")

    def lookup_album(self, id_):
        self._check("album", id_)
        return {
            "name": f"Album {id_}",
            "artists": [{"name": "First Artist"}, {"name": "Second Artist"}],
            "images": [{"url": f"https://img.example/{id_}.jpg"}],
        }

    def lookup_track(self, id_):
        self._check("track", id_)
        return {
            "name": f"Track {id_}",
            "artists": [{"name": "Track Artist"}],
            "album": {"images": [{"url": f"https://img.example/album-of-{id_}.jpg"}]},
        }

    def lookup_playlist(self, id_):
        self._check("playlist", id_)
        return {
            "name": f"Playlist {id_}",
            "description": "Songs for a rainy day",
            "cover_images": [{"url": f"https://img.example/pl-{id_}.jpg"}],
        }


class FakeImageLoader:
    """Serves a small image for known paths and every URL."""

    def __init__(self, existing_paths=()) -> None:
        self.existing_paths = set(existing_paths)
        self.paths: list[str] = []
        self.urls: list[str] = []

    def load_from_path(self, path):
        self.paths.append(path)
        if path in self.existing_paths:
            return Image.new("RGB", (60, 60), "blue")
        return None

    def load_from_url(self, url):
        self.urls.append(url)
        return Image.new("RGB", (64, 64), "red")


class FailingImageLoader(FakeImageLoader):
    """Every download fails the way ImageLoader reports it."""

    def load_from_url(self, url):
        self.urls.append(url)
        raise ImageLoadError(f"Could not fetch image {url}: 503")


class NoImageProvider(FakeProvider):
    """Spotify answers without any artwork."""

    def lookup_album(self, id_):
        album = super().lookup_album(id_)
        album["images"] = []
        return album


class FakeEncoder:
    def __init__(self) -> None:
        self.payloads: list[str] = []

    def encode(self, payload):
        self.payloads.append(payload)
        return Image.new("RGB", (21, 21), "white")


class RecordingDocument:
    def __init__(self) -> None:
        self.grids = []

    def add_grid(self, grid) -> None:
        self.grids.append(grid)


@pytest.fixture
def config() -> CardConfig:
    return CardConfig(share_path="/srv/share")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def image_loader() -> FakeImageLoader:
    return FakeImageLoader()


@pytest.fixture
def encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def sample_links() -> Path:
    return FIXTURES / "links.txt"

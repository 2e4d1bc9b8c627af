"""Spotify metadata lookups via Spotipy; client-credentials token kept by the auth manager."""
import logging
from typing import Optional

import requests
from spotipy import Spotify, SpotifyException
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from tentcard.config import CardConfig
from tentcard.errors import MetadataProviderError

logger = logging.getLogger(__name__)

_PROVIDER_ERRORS = (SpotifyException, SpotifyOauthError, requests.RequestException)


class SpotifyMetadataProvider:
    """Album, track and playlist lookups by Spotify id.

    Every lookup returns the plain dict shapes the resolver reads and raises
    MetadataProviderError on any failure.
    """

    def __init__(self, client: Spotify) -> None:
        self._sp = client

    @classmethod
    def from_credentials(cls, client_id: str, client_secret: str) -> "SpotifyMetadataProvider":
        """Fetch a first access token and build a provider.

        The auth manager keeps the token in memory and renews it when it expires.
        """
        if not client_id or not client_secret:
            raise MetadataProviderError("Spotify client id/secret not configured")
        auth = SpotifyClientCredentials(
            client_id=client_id,
            client_secret=client_secret,
            cache_handler=MemoryCacheHandler(),
        )
        try:
            auth.get_access_token(as_dict=False)
        except _PROVIDER_ERRORS as e:
            raise MetadataProviderError(f"Spotify authentication failed: {e}") from e
        logger.info("Spotify access token acquired")
        return cls(Spotify(auth_manager=auth))

    def lookup_album(self, id_: str) -> dict:
        """{"name", "artists": [{"name"}], "images": [{"url"}]}"""
        album = self._call("album", id_)
        return {
            "name": album.get("name") or "",
            "artists": album.get("artists") or [],
            "images": album.get("images") or [],
        }

    def lookup_track(self, id_: str) -> dict:
        """{"name", "artists": [{"name"}], "album": {"images": [{"url"}]}}"""
        track = self._call("track", id_)
        album = track.get("album") or {}
        return {
            "name": track.get("name") or "",
            "artists": track.get("artists") or [],
            "album": {"images": album.get("images") or []},
        }

    def lookup_playlist(self, id_: str) -> dict:
        """{"name", "description", "cover_images": [{"url"}]}"""
        playlist = self._call("playlist", id_, fields="name,description")
        cover_images = self._call("playlist_cover_image", id_)
        return {
            "name": playlist.get("name") or "",
            "description": playlist.get("description") or "",
            "cover_images": cover_images or [],
        }

    def _call(self, method: str, id_: str, **kwargs):
        try:
            result = getattr(self._sp, method)(id_, **kwargs)
        except _PROVIDER_ERRORS as e:
            raise MetadataProviderError(f"Spotify {method} lookup failed for {id_}: {e}") from e
        if result is None:
            raise MetadataProviderError(f"Spotify {method} lookup returned nothing for {id_}")
        return result


def build_provider(config: CardConfig) -> Optional[SpotifyMetadataProvider]:
    """Return a provider when credentials are configured, else None."""
    if not config.has_spotify_credentials:
        logger.info("No Spotify credentials configured; streaming references will fail")
        return None
    return SpotifyMetadataProvider.from_credentials(
        config.spotify_client_id, config.spotify_client_secret
    )

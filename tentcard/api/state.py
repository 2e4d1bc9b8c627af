"""Shared application state (injected into routes)."""
import logging
from typing import Optional

from tentcard.config import CARD_CONFIG_PATH, CardConfig, load_card_config
from tentcard.core.spotify_client import SpotifyMetadataProvider, build_provider
from tentcard.errors import ConfigError

logger = logging.getLogger(__name__)


class AppState:
    def __init__(
        self,
        config: Optional[CardConfig] = None,
        provider: Optional[SpotifyMetadataProvider] = None,
    ) -> None:
        self._config = config
        self._provider = provider

    @property
    def config(self) -> CardConfig:
        if self._config is None:
            try:
                self._config = load_card_config(CARD_CONFIG_PATH)
            except ConfigError as e:
                logger.warning("%s; using default card settings", e)
                self._config = CardConfig()
        return self._config

    def get_provider(self) -> Optional[SpotifyMetadataProvider]:
        """Spotify provider, built on first use (token fetched once)."""
        if self._provider is None:
            self._provider = build_provider(self.config)
        return self._provider


_state = AppState()


def get_state() -> AppState:
    return _state

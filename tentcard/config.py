"""Configuration: env, Spotify credentials, and the card layout settings."""
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values, load_dotenv

from tentcard.errors import ConfigError

# Base paths (project root = parent of tentcard package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SPOTIFY_CLIENT_ID etc. are set
load_dotenv(BASE_DIR / ".env")

CARD_CONFIG_PATH = Path(os.getenv("TENTCARD_CONFIG", "config.properties"))
LOG_LEVEL = os.getenv("TENTCARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

# API
API_HOST = os.getenv("TENTCARD_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("TENTCARD_API_PORT", "8000"))

# Spotify (client credentials; no user login needed for catalogue lookups)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")

# Streaming references and the prefix lengths the classifier slices off
STREAM_ALBUM_PREFIX = "spotify:album:"
STREAM_TRACK_PREFIX = "spotify:track:"
STREAM_PLAYLIST_PREFIX = "spotify:playlist:"
STREAM_PREFIX = "spotify:"

# Preferred character set of the QR payload
QR_CHARACTER_SET = "ISO-8859-15"

# Brand mark geometry (mm)
BRAND_MARK_HEIGHT = 6.0
BRAND_MARK_MARGIN = 3.0
BRAND_MARK_PADDING_BOTTOM = -12.0


@dataclass(frozen=True)
class CardConfig:
    """Card and page settings; lengths in mm, font sizes in pt.

    Built once at startup and passed to the resolver, the layout engine and
    the pipeline.
    """
    page_width: float = 297
    page_height: float = 210
    cards_per_row: int = 6
    card_width: float = 40
    border_width: float = 1
    qr_size: float = 22
    top_margin: float = 11
    cover_size: float = 30
    cover_padding_top: float = 5
    artist_padding_top: float = 5
    artist_font_size: float = 8
    title_padding_top: float = 3
    title_font_size: float = 9
    title_max_height: float = 22
    destination_file: str = "cards.pdf"
    cards_file: str = "links.txt"
    share_path: str = ""
    cover_file_name: str = "cover.jpg"
    brand_logo_file: str = ""
    spotify_client_id: str = ""
    spotify_client_secret: str = ""

    def __post_init__(self) -> None:
        if self.cards_per_row <= 0:
            raise ConfigError(f"cardsPerPage must be positive, got {self.cards_per_row}")

    @property
    def has_spotify_credentials(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @property
    def row_width(self) -> float:
        return self.card_width * self.cards_per_row

    @property
    def side_margin(self) -> float:
        """Left/right page margin that centres the row."""
        return (self.page_width - self.row_width) / 2


# Property-file keys (as used in config.properties) -> CardConfig field
PROPERTY_KEYS = {
    "pageWidth": "page_width",
    "pageHeight": "page_height",
    "cardsPerPage": "cards_per_row",
    "cardWidth": "card_width",
    "borderWidth": "border_width",
    "qrSize": "qr_size",
    "topMargin": "top_margin",
    "coverSize": "cover_size",
    "coverPaddingTop": "cover_padding_top",
    "artistPaddingTop": "artist_padding_top",
    "artistFontSize": "artist_font_size",
    "titlePaddingTop": "title_padding_top",
    "titleFontSize": "title_font_size",
    "titleMaxHeight": "title_max_height",
    "destinationFile": "destination_file",
    "cardsFile": "cards_file",
    "sharePath": "share_path",
    "coverFileName": "cover_file_name",
    "brandLogoFile": "brand_logo_file",
    "spotifyClientId": "spotify_client_id",
    "spotifyClientSecret": "spotify_client_secret",
}


def card_config_from_mapping(values: Mapping[str, Optional[str]]) -> CardConfig:
    """Build a CardConfig from property-style keys. Unknown keys are ignored."""
    types = {f.name: f.type for f in fields(CardConfig)}
    kwargs = {}
    for key, raw in values.items():
        name = PROPERTY_KEYS.get(key)
        if name is None or raw is None:
            continue
        raw = raw.strip()
        type_ = types[name]
        try:
            if type_ in (int, "int"):
                kwargs[name] = int(raw)
            elif type_ in (float, "float"):
                kwargs[name] = float(raw)
            else:
                kwargs[name] = raw
        except ValueError as e:
            raise ConfigError(f"Invalid value for {key}: {raw!r}") from e
    if not kwargs.get("spotify_client_id"):
        kwargs["spotify_client_id"] = SPOTIFY_CLIENT_ID
    if not kwargs.get("spotify_client_secret"):
        kwargs["spotify_client_secret"] = SPOTIFY_CLIENT_SECRET
    return CardConfig(**kwargs)


def load_card_config(path: Path = CARD_CONFIG_PATH) -> CardConfig:
    """Read a key=value properties file into a CardConfig."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    return card_config_from_mapping(dotenv_values(path))

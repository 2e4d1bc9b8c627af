"""Load cover images from disk or over HTTP into Pillow images."""
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT_SEC = 20


class ImageLoadError(Exception):
    """Image could not be fetched or decoded."""


class ImageLoader:
    """Image loader used by the resolver; tests substitute their own."""

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session or requests.Session()

    def load_from_path(self, path: str) -> Optional[Image.Image]:
        """Return the image at path, or None if there is no such file."""
        if not path or not Path(path).is_file():
            return None
        try:
            with Image.open(path) as img:
                img.load()
                return img.copy()
        except (OSError, UnidentifiedImageError) as e:
            raise ImageLoadError(f"Could not read image {path}: {e}") from e

    def load_from_url(self, url: str) -> Image.Image:
        try:
            resp = self._session.get(url, timeout=DOWNLOAD_TIMEOUT_SEC)
            resp.raise_for_status()
            img = Image.open(BytesIO(resp.content))
            img.load()
        except (requests.RequestException, OSError, UnidentifiedImageError) as e:
            raise ImageLoadError(f"Could not fetch image {url}: {e}") from e
        return img

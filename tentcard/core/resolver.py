"""Resolve typed references into cards: Spotify metadata, cover art, titles."""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol

from PIL import Image

from tentcard.config import CardConfig
from tentcard.core.classifier import target_kind
from tentcard.core.images import ImageLoader, ImageLoadError
from tentcard.errors import MetadataProviderError
from tentcard.models.card import ResolvedCard
from tentcard.models.reference import ReferenceKind, TypedReference

logger = logging.getLogger(__name__)


class MetadataProvider(Protocol):
    def lookup_album(self, id_: str) -> dict: ...

    def lookup_track(self, id_: str) -> dict: ...

    def lookup_playlist(self, id_: str) -> dict: ...


@dataclass
class ResolveWarning:
    """Recoverable problem with one reference; the card is still produced."""
    reference: str
    message: str


@dataclass
class ResolutionResult:
    cards: List[ResolvedCard] = field(default_factory=list)
    warnings: List[ResolveWarning] = field(default_factory=list)


def share_cover_path(share_root: str, target: str, cover_file_name: str = "cover.jpg") -> Optional[str]:
    """Guess the cover file of a local-share target.

    Drops the target up to the first "/" at or after index 4 (the mount
    prefix, e.g. "/mnt"), prepends share_root and appends the cover file name.
    Returns None if the target has no such "/" or no share root is set.
    """
    if not share_root:
        return None
    cut = target.find("/", 4)
    if cut < 0:
        return None
    return share_root + target[cut:] + "/" + cover_file_name


def _first_name(artists: list) -> str:
    return (artists[0].get("name") or "") if artists else ""


def _first_url(images: list) -> Optional[str]:
    return images[0].get("url") if images else None


class MetadataResolver:
    """Turns TypedReferences into ResolvedCards.

    Provider failures raise MetadataProviderError. Missing cover art only
    adds a ResolveWarning to the list passed in.
    """

    def __init__(
        self,
        config: CardConfig,
        provider: Optional[MetadataProvider] = None,
        image_loader: Optional[ImageLoader] = None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._images = image_loader or ImageLoader()

    def resolve(self, ref: TypedReference, warnings: Optional[List[ResolveWarning]] = None) -> ResolvedCard:
        if warnings is None:
            warnings = []
        card = ResolvedCard(title="", artist="", code_payload=ref.raw_text, source_kind=ref.kind)
        if ref.kind is ReferenceKind.STREAM_ALBUM:
            self._resolve_album(ref, card, warnings)
        elif ref.kind is ReferenceKind.STREAM_TRACK:
            self._resolve_track(ref, card, warnings)
        elif ref.kind is ReferenceKind.STREAM_PLAYLIST:
            self._resolve_playlist(ref, card, warnings)
        elif ref.kind in (
            ReferenceKind.COVER_TAGGED_TARGET,
            ReferenceKind.WEB_URL,
            ReferenceKind.LOCAL_PATH,
        ):
            if ref.kind is ReferenceKind.COVER_TAGGED_TARGET:
                card.cover = self._resolve_cover_hint(ref, warnings)
            self._resolve_target(ref, card)
        else:
            raise ValueError(f"Unknown reference kind: {ref.kind}")
        return card

    def resolve_all(self, refs: Iterable[TypedReference]) -> ResolutionResult:
        """Resolve in order; the first provider error propagates."""
        result = ResolutionResult()
        for ref in refs:
            logger.info("Resolving %s", ref.raw_text)
            result.cards.append(self.resolve(ref, result.warnings))
        return result

    # Streaming references

    def _require_provider(self) -> MetadataProvider:
        if self._provider is None:
            raise MetadataProviderError("Spotify reference found but no Spotify credentials configured")
        return self._provider

    def _resolve_album(self, ref, card, warnings) -> None:
        album = self._require_provider().lookup_album(ref.id)
        card.title = album["name"]
        card.artist = _first_name(album["artists"])
        card.cover = self._stream_cover(ref, _first_url(album["images"]), warnings)

    def _resolve_track(self, ref, card, warnings) -> None:
        track = self._require_provider().lookup_track(ref.id)
        card.title = track["name"]
        card.artist = _first_name(track["artists"])
        card.cover = self._stream_cover(ref, _first_url(track["album"]["images"]), warnings)

    def _resolve_playlist(self, ref, card, warnings) -> None:
        playlist = self._require_provider().lookup_playlist(ref.id)
        card.title = playlist["name"]
        # The description takes the artist line on playlist cards
        card.artist = playlist["description"]
        card.cover = self._stream_cover(ref, _first_url(playlist["cover_images"]), warnings)

    def _stream_cover(self, ref, url: Optional[str], warnings) -> Optional[Image.Image]:
        if not url:
            self._warn(warnings, ref, "Spotify returned no cover image")
            return None
        try:
            return self._images.load_from_url(url)
        except ImageLoadError as e:
            raise MetadataProviderError(str(e)) from e

    # Cover hints, URLs and local paths

    def _resolve_cover_hint(self, ref, warnings) -> Optional[Image.Image]:
        hint = ref.cover_hint or ""
        if not hint:
            self._warn(warnings, ref, "Empty cover hint")
            return None
        try:
            if hint.startswith(("http://", "https://")):
                return self._images.load_from_url(hint)
            cover = self._images.load_from_path(hint)
        except ImageLoadError as e:
            self._warn(warnings, ref, str(e))
            return None
        if cover is None:
            self._warn(warnings, ref, f"Could not find file {hint}")
        return cover

    def _resolve_target(self, ref, card) -> None:
        target = ref.target
        card.artist = ""
        if target_kind(ref) is ReferenceKind.WEB_URL:
            card.title = target
            return
        if card.cover is None:
            path = share_cover_path(self._config.share_path, target, self._config.cover_file_name)
            if path is not None:
                logger.debug("Share cover candidate %s", path)
                try:
                    card.cover = self._images.load_from_path(path)
                except ImageLoadError as e:
                    logger.debug("Ignoring unreadable share cover: %s", e)
        card.title = target[target.rfind("/") + 1:]

    @staticmethod
    def _warn(warnings: List[ResolveWarning], ref: TypedReference, message: str) -> None:
        logger.warning("%s (%s)", message, ref.raw_text)
        warnings.append(ResolveWarning(reference=ref.raw_text, message=message))

"""End-to-end run: link list -> references -> cards -> rows -> PDF."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from tentcard.config import CardConfig
from tentcard.core.classifier import classify
from tentcard.core.fold_layout import CodeEncoder, FoldLayoutEngine
from tentcard.core.images import ImageLoader
from tentcard.core.link_list import clean_lines, read_link_list
from tentcard.core.paginator import paginate
from tentcard.core.pdf_document import open_document
from tentcard.core.qr_code import QrEncoder
from tentcard.core.resolver import MetadataProvider, MetadataResolver, ResolutionResult
from tentcard.core.spotify_client import build_provider
from tentcard.models.card import Deck
from tentcard.models.reference import TypedReference

logger = logging.getLogger(__name__)


def classify_lines(lines: Iterable[str]) -> List[TypedReference]:
    """Pre-filter raw lines and classify the rest."""
    return [classify(line) for line in clean_lines(lines)]


def needs_provider(refs: Iterable[TypedReference]) -> bool:
    return any(ref.kind.is_stream for ref in refs)


def resolve_lines(
    lines: Iterable[str],
    config: CardConfig,
    provider: Optional[MetadataProvider] = None,
    image_loader: Optional[ImageLoader] = None,
) -> ResolutionResult:
    """Classify and resolve every line. Raises MetadataProviderError on provider failure."""
    refs = classify_lines(lines)
    if provider is None and needs_provider(refs):
        provider = build_provider(config)
    resolver = MetadataResolver(config, provider=provider, image_loader=image_loader)
    return resolver.resolve_all(refs)


def write_deck(
    result: ResolutionResult,
    config: CardConfig,
    destination: Path,
    encoder: Optional[CodeEncoder] = None,
) -> int:
    """Paginate resolved cards and render the fold PDF. Returns the number of rows."""
    rows: Deck = paginate(result.cards, config.cards_per_row)
    engine = FoldLayoutEngine(config, encoder or QrEncoder())
    with open_document(destination, config) as doc:
        count = engine.layout(rows, doc)
    logger.info("Laid out %d cards in %d rows", len(result.cards), count)
    return count


def run(
    config: CardConfig,
    links_path: Optional[Path] = None,
    destination: Optional[Path] = None,
    provider: Optional[MetadataProvider] = None,
    image_loader: Optional[ImageLoader] = None,
    encoder: Optional[CodeEncoder] = None,
) -> ResolutionResult:
    """File-driven run. All cards are resolved before the PDF is opened."""
    links_path = Path(links_path or config.cards_file)
    destination = Path(destination or config.destination_file)
    lines = read_link_list(links_path)
    result = resolve_lines(lines, config, provider=provider, image_loader=image_loader)
    write_deck(result, config, destination, encoder=encoder)
    if result.warnings:
        logger.warning("%d card(s) resolved with warnings", len(result.warnings))
    return result

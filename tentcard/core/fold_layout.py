"""Fold layout: every row is emitted twice, once rotated, for tent cards.

Each row fills one page. The top half holds the row with every cell turned
180 degrees in place, the bottom half holds it upright. Folding the sheet on
the horizontal midline puts both halves back to back so the card reads the
same from either side.
"""
import logging
from typing import List, Optional, Protocol, Tuple

from PIL import Image

from tentcard.config import (
    BRAND_MARK_HEIGHT,
    BRAND_MARK_MARGIN,
    BRAND_MARK_PADDING_BOTTOM,
    CardConfig,
)
from tentcard.models.card import Deck, ResolvedCard, Row
from tentcard.models.layout import (
    BrandBlock,
    CardCell,
    CodeBlock,
    CoverBlock,
    Grid,
    TextBlock,
)

logger = logging.getLogger(__name__)

UPRIGHT = 0
INVERTED = 180


class CodeEncoder(Protocol):
    def encode(self, payload: str) -> Image.Image: ...


class GridSink(Protocol):
    def add_grid(self, grid: Grid) -> None: ...


class FoldLayoutEngine:
    def __init__(self, config: CardConfig, encoder: CodeEncoder) -> None:
        self._config = config
        self._encoder = encoder

    def column_percents(self) -> List[float]:
        n = self._config.cards_per_row
        return [100.0 / n] * n

    def card_blocks(self, card: ResolvedCard) -> list:
        """Content stack of one card, top to bottom."""
        cfg = self._config
        blocks = []
        if card.source_kind.is_stream:
            blocks.append(
                BrandBlock(
                    height=BRAND_MARK_HEIGHT,
                    margin=BRAND_MARK_MARGIN,
                    padding_bottom=BRAND_MARK_PADDING_BOTTOM,
                )
            )
        blocks.append(
            CodeBlock(
                payload=card.code_payload,
                image=self._encoder.encode(card.code_payload),
                edge=cfg.qr_size,
                padding_top=cfg.top_margin,
            )
        )
        blocks.append(CoverBlock(image=card.cover, edge=cfg.cover_size, padding_top=cfg.cover_padding_top))
        blocks.append(TextBlock(text=card.artist, font_size=cfg.artist_font_size, padding_top=cfg.artist_padding_top))
        blocks.append(
            TextBlock(
                text=card.title,
                font_size=cfg.title_font_size,
                padding_top=cfg.title_padding_top,
                bold=True,
                max_height=cfg.title_max_height,
            )
        )
        return blocks

    def row_grids(self, row: Row) -> Tuple[Grid, Grid]:
        """Return (front, back) grids for one row.

        Both share the same block lists; only the per-cell rotation differs.
        Missing cards at the end of a short row become empty cells.
        """
        cfg = self._config
        if len(row) > cfg.cards_per_row:
            raise ValueError(f"Row has {len(row)} cards, at most {cfg.cards_per_row} allowed")
        stacks: List[Optional[list]] = [self.card_blocks(card) for card in row]
        stacks += [None] * (cfg.cards_per_row - len(row))

        def grid(rotation: int) -> Grid:
            return Grid(
                column_percents=self.column_percents(),
                row_height=cfg.page_height / 2,
                row_width=cfg.row_width,
                border_width=cfg.border_width,
                cells=[CardCell(blocks=list(s or []), rotation=rotation) for s in stacks],
            )

        return grid(INVERTED), grid(UPRIGHT)

    def layout(self, deck: Deck, document: GridSink) -> int:
        """Send front and back grids of every row to the document. Returns row count."""
        count = 0
        for count, row in enumerate(deck, start=1):
            front, back = self.row_grids(row)
            logger.debug("Row %d: %d cards", count, len(row))
            document.add_grid(front)
            document.add_grid(back)
        return count

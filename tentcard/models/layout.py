"""Renderer-independent grid instructions emitted by the fold layout engine.

All lengths are millimetres, font sizes points.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from PIL import Image


@dataclass(frozen=True)
class BrandBlock:
    """Streaming-service mark drawn above the code."""
    height: float
    margin: float
    padding_bottom: float  # negative: the following block overlaps it


@dataclass(frozen=True)
class CodeBlock:
    payload: str
    image: Image.Image
    edge: float
    padding_top: float


@dataclass(frozen=True)
class CoverBlock:
    """Cover art, or an empty spacer of the same height when image is None."""
    image: Optional[Image.Image]
    edge: float
    padding_top: float


@dataclass(frozen=True)
class TextBlock:
    text: str
    font_size: float
    padding_top: float
    bold: bool = False
    max_height: Optional[float] = None


Block = Union[BrandBlock, CodeBlock, CoverBlock, TextBlock]


@dataclass
class CardCell:
    """Content stack of one cell, top to bottom. Empty blocks = blank shell."""
    blocks: List[Block] = field(default_factory=list)
    rotation: int = 0  # 0 or 180, applied in place around the cell centre

    @property
    def is_empty(self) -> bool:
        return not self.blocks


@dataclass
class Grid:
    """One row of cells rendered across the page at a fixed height."""
    column_percents: List[float]
    row_height: float
    row_width: float
    border_width: float
    cells: List[CardCell]

    @property
    def column_count(self) -> int:
        return len(self.column_percents)

    def column_widths(self) -> List[float]:
        return [self.row_width * pct / 100.0 for pct in self.column_percents]

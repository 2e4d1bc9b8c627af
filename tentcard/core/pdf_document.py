"""PDF output for fold layout grids, drawn with ReportLab."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from reportlab.lib.colors import Color
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from tentcard.config import CardConfig
from tentcard.models.layout import (
    BrandBlock,
    CardCell,
    CodeBlock,
    CoverBlock,
    Grid,
    TextBlock,
)

logger = logging.getLogger(__name__)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
LEADING_FACTOR = 1.2
TEXT_SIDE_PADDING = 1.5  # mm
BORDER_GRAY = Color(0.5, 0.5, 0.5)
BORDER_ALPHA = 0.5
BRAND_GREEN = Color(0.114, 0.725, 0.329)
ELLIPSIS = "…"


@dataclass(frozen=True)
class PageGeometry:
    """Page size and the left/right margin that centres each row (mm)."""
    width: float
    height: float
    side_margin: float

    @classmethod
    def from_config(cls, config: CardConfig) -> "PageGeometry":
        return cls(width=config.page_width, height=config.page_height, side_margin=config.side_margin)


def ellipsize(text: str, font: str, size: float, max_width: float) -> str:
    if pdfmetrics.stringWidth(text, font, size) <= max_width:
        return text
    lo, hi = 0, len(text)
    best = ELLIPSIS
    while lo <= hi:
        mid = (lo + hi) // 2
        candidate = text[:mid].rstrip() + ELLIPSIS
        if pdfmetrics.stringWidth(candidate, font, size) <= max_width:
            best = candidate
            lo = mid + 1
        else:
            hi = mid - 1
    return best


def break_word(line: str, font: str, size: float, max_width: float) -> List[str]:
    """Split a line that is too wide (e.g. a URL) at character level."""
    out = []
    current = ""
    for ch in line:
        if current and pdfmetrics.stringWidth(current + ch, font, size) > max_width:
            out.append(current)
            current = ch
        else:
            current += ch
    if current:
        out.append(current)
    return out


def fit_lines(text: str, font: str, size: float, max_width: float, max_lines: Optional[int] = None) -> List[str]:
    """Wrap text to max_width; with max_lines, clip and ellipsize the last line.

    Words wider than max_width are broken between characters.
    """
    lines = []
    for line in simpleSplit(text, font, size, max_width):
        if pdfmetrics.stringWidth(line, font, size) > max_width:
            lines.extend(break_word(line, font, size, max_width))
        else:
            lines.append(line)
    if max_lines is not None and len(lines) > max_lines:
        lines = lines[:max_lines]
        if lines:
            lines[-1] = ellipsize(lines[-1] + " " + ELLIPSIS, font, size, max_width)
    return lines


class PdfDeckDocument:
    """Write-once PDF: grids are stacked top to bottom, a new page when full.

    Use as a context manager; the file is only written when the block exits
    without an exception.
    """

    def __init__(self, path, geometry: PageGeometry, brand_logo: Optional[str] = None) -> None:
        self.path = Path(path)
        self.geometry = geometry
        self.brand_logo = brand_logo if brand_logo and Path(brand_logo).is_file() else None
        self._canvas = canvas.Canvas(str(self.path), pagesize=(geometry.width * mm, geometry.height * mm))
        self._cursor = 0.0  # mm from the top of the current page
        self._pages = 1
        self._closed = False

    @property
    def page_count(self) -> int:
        return self._pages

    def __enter__(self) -> "PdfDeckDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            logger.error("Aborting %s, nothing written", self.path)
            self._closed = True

    def add_grid(self, grid: Grid) -> None:
        if self._closed:
            raise RuntimeError(f"Document {self.path} is closed")
        if self._cursor > 0 and self._cursor + grid.row_height > self.geometry.height + 1e-6:
            self._canvas.showPage()
            self._pages += 1
            self._cursor = 0.0
        x = self.geometry.side_margin
        for cell, width in zip(grid.cells, grid.column_widths()):
            self._draw_cell(cell, x, self._cursor, width, grid.row_height, grid.border_width)
            x += width
        self._cursor += grid.row_height

    def close(self) -> None:
        if self._closed:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._canvas.showPage()
        self._canvas.save()
        self._closed = True
        logger.info("Wrote %s (%d pages)", self.path, self._pages)

    # Drawing

    def _draw_cell(self, cell: CardCell, x: float, top: float, w: float, h: float, border_width: float) -> None:
        c = self._canvas
        bx, by = x * mm, (self.geometry.height - top - h) * mm
        c.saveState()
        c.setStrokeColor(BORDER_GRAY)
        c.setStrokeAlpha(BORDER_ALPHA)
        c.setLineWidth(border_width)
        c.rect(bx, by, w * mm, h * mm, stroke=1, fill=0)
        c.restoreState()
        if cell.is_empty:
            return

        c.saveState()
        if cell.rotation == 180:
            c.translate(bx + w * mm, by + h * mm)
            c.rotate(180)
        else:
            c.translate(bx, by)
        clip = c.beginPath()
        clip.rect(0, 0, w * mm, h * mm)
        c.clipPath(clip, stroke=0, fill=0)

        y = 0.0  # mm from the cell top
        for block in cell.blocks:
            if isinstance(block, BrandBlock):
                y = self._draw_brand(block, y, w, h)
            elif isinstance(block, CodeBlock):
                y += block.padding_top
                self._draw_image(block.image, y, w, h, block.edge)
                y += block.edge
            elif isinstance(block, CoverBlock):
                y += block.padding_top
                if block.image is not None:
                    y += self._draw_image(block.image, y, w, h, block.edge)
                else:
                    y += block.edge
            elif isinstance(block, TextBlock):
                y = self._draw_text(block, y, w, h)
        c.restoreState()

    def _draw_image(self, image, y: float, w: float, h: float, edge: float) -> float:
        """Draw image edge mm wide, centred, top at y; returns drawn height in mm."""
        iw, ih = image.size
        height = edge * ih / iw if iw else edge
        mask = "auto" if image.mode in ("RGBA", "LA", "P") else None
        self._canvas.drawImage(
            ImageReader(image),
            (w - edge) / 2 * mm,
            (h - y - height) * mm,
            width=edge * mm,
            height=height * mm,
            mask=mask,
        )
        return height

    def _draw_brand(self, block: BrandBlock, y: float, w: float, h: float) -> float:
        c = self._canvas
        y += block.margin
        size = block.height
        left, bottom = (w - size) / 2 * mm, (h - y - size) * mm
        if self.brand_logo:
            c.drawImage(self.brand_logo, left, bottom, width=size * mm, height=size * mm,
                        preserveAspectRatio=True, mask="auto")
        else:
            c.setFillColor(BRAND_GREEN)
            c.circle(left + size * mm / 2, bottom + size * mm / 2, size * mm / 2, stroke=0, fill=1)
            c.setFillColorRGB(0, 0, 0)
        return y + size + block.margin + block.padding_bottom

    def _draw_text(self, block: TextBlock, y: float, w: float, h: float) -> float:
        c = self._canvas
        y += block.padding_top
        font = FONT_BOLD if block.bold else FONT_REGULAR
        leading = block.font_size * LEADING_FACTOR  # pt
        max_lines = None
        if block.max_height is not None:
            max_lines = max(1, int(block.max_height * mm // leading))
        lines = fit_lines(block.text, font, block.font_size, (w - 2 * TEXT_SIDE_PADDING) * mm, max_lines)
        c.setFont(font, block.font_size)
        baseline = (h - y) * mm - block.font_size
        for line in lines:
            c.drawCentredString(w * mm / 2, baseline, line)
            baseline -= leading
        return y + len(lines) * leading / mm


def open_document(path, config: CardConfig) -> PdfDeckDocument:
    return PdfDeckDocument(path, PageGeometry.from_config(config), brand_logo=config.brand_logo_file)

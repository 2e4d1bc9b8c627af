"""Resolved card record and deck aliases."""
from dataclasses import dataclass
from typing import List, Optional

from PIL import Image

from tentcard.models.reference import ReferenceKind


@dataclass
class ResolvedCard:
    """Card ready for layout: texts, optional cover art and code payload."""
    title: str
    artist: str
    code_payload: str
    source_kind: ReferenceKind
    cover: Optional[Image.Image] = None

    @property
    def has_cover(self) -> bool:
        return self.cover is not None


Row = List[ResolvedCard]
Deck = List[Row]

"""Data models for references, resolved cards, and fold layout grids."""
from tentcard.models.card import Deck, ResolvedCard, Row
from tentcard.models.layout import (
    BrandBlock,
    CardCell,
    CodeBlock,
    CoverBlock,
    Grid,
    TextBlock,
)
from tentcard.models.reference import ReferenceKind, TypedReference

__all__ = [
    "BrandBlock",
    "CardCell",
    "CodeBlock",
    "CoverBlock",
    "Deck",
    "Grid",
    "ReferenceKind",
    "ResolvedCard",
    "Row",
    "TextBlock",
    "TypedReference",
]

"""Bucket resolved cards into printable rows."""
from typing import Iterable, List, TypeVar

T = TypeVar("T")


def paginate(cards: Iterable[T], row_size: int) -> List[List[T]]:
    """Split cards into rows of row_size, keeping order; the last row may be short."""
    if row_size <= 0:
        raise ValueError(f"row_size must be positive, got {row_size}")
    rows: List[List[T]] = []
    row: List[T] = []
    for card in cards:
        row.append(card)
        if len(row) == row_size:
            rows.append(row)
            row = []
    if row:
        rows.append(row)
    return rows

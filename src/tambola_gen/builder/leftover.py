"""Short-circuit construction of the last card from the leftover pool."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..card import Card, Cell, sorted_columns
from ..partition import COLUMNS, NUMBERS_PER_ROW, ROWS, NumericBucket, column_of
from ..rng import RandomSource


def build_card_from_leftover(
    numbers: Iterable[int], *, buckets: Sequence[NumericBucket], rng: RandomSource
) -> Card:
    """Drop shuffled leftover numbers into the first row with room in their column.

    The result is not validated; numbers that find no slot are skipped.
    """
    pending = list(numbers)
    rng.shuffle(pending)
    cells: List[List[Cell]] = [[None] * COLUMNS for _ in range(ROWS)]
    for number in pending:
        col = column_of(number, buckets)
        for r in range(ROWS):
            if sum(1 for v in cells[r] if v is not None) >= NUMBERS_PER_ROW:
                continue
            if cells[r][col] is None:
                cells[r][col] = number
                break
    return sorted_columns(cells)

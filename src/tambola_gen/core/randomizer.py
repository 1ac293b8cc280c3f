"""Column-row randomization for finished cards."""

from __future__ import annotations

from typing import List, Optional

from ..card import Card, Cell
from ..layout import assign_rows
from ..partition import COLUMNS, ROWS
from ..rng import RandomSource, create_rng


class ColumnRowRandomizer:
    """Re-chooses which rows hold each column's numbers.

    Per column with k numbers:
      - k=1: any of rows 0, 1, 2
      - k=2: one of the pairs (0,1), (0,2), (1,2), smaller value on top
      - k=3: rows 0, 1, 2 in ascending order
      - k=0: column stays empty
    Options are restricted to those that keep the card's row totals, so a
    valid ticket stays valid.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else create_rng()

    def randomize(self, card: Card) -> Card:
        columns = [sorted(card.column_values(c)) for c in range(COLUMNS)]
        placement = assign_rows(card.row_counts(), [len(v) for v in columns], self.rng)

        cells: List[List[Cell]] = [[None] * COLUMNS for _ in range(ROWS)]
        for c, rows in enumerate(placement):
            for r, value in zip(rows, columns[c]):
                cells[r][c] = value
        return Card.from_cells(cells)


def randomize_column_rows(card: Card, rng: Optional[RandomSource] = None) -> Card:
    return ColumnRowRandomizer(rng).randomize(card)

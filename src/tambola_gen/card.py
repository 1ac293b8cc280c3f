"""Ticket value type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .partition import COLUMNS, ROWS

Cell = Optional[int]
Grid = Tuple[Tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Card:
    """A 3x9 ticket. Empty cells are None."""

    rows: Grid

    def __post_init__(self) -> None:
        if len(self.rows) != ROWS or any(len(row) != COLUMNS for row in self.rows):
            raise ValueError(f"card must be {ROWS}x{COLUMNS}")

    @classmethod
    def empty(cls) -> "Card":
        return cls(rows=tuple((None,) * COLUMNS for _ in range(ROWS)))

    @classmethod
    def from_cells(cls, cells: Sequence[Sequence[Cell]]) -> "Card":
        return cls(rows=tuple(tuple(row) for row in cells))

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> "Card":
        """Build from the interchange shape where 0 marks an empty cell."""
        return cls.from_cells([[value or None for value in row] for row in matrix])

    def to_matrix(self) -> List[List[int]]:
        return [[value or 0 for value in row] for row in self.rows]

    def cell(self, row: int, col: int) -> Cell:
        return self.rows[row][col]

    def numbers(self) -> List[int]:
        return [value for row in self.rows for value in row if value is not None]

    def column_values(self, col: int) -> List[int]:
        """Non-empty values of a column, top to bottom."""
        return [row[col] for row in self.rows if row[col] is not None]

    def column_rows(self, col: int) -> Tuple[int, ...]:
        return tuple(r for r in range(ROWS) if self.rows[r][col] is not None)

    def row_counts(self) -> List[int]:
        return [sum(1 for value in row if value is not None) for row in self.rows]

    def column_counts(self) -> List[int]:
        return [len(self.column_values(c)) for c in range(COLUMNS)]

    def __iter__(self) -> Iterator[Tuple[Cell, ...]]:
        return iter(self.rows)


def sorted_columns(cells: Sequence[Sequence[Cell]]) -> Card:
    """Keep each column's occupied rows but put its values in ascending order."""
    grid = [list(row) for row in cells]
    for c in range(COLUMNS):
        rows = [r for r in range(ROWS) if grid[r][c] is not None]
        values = sorted(grid[r][c] for r in rows)
        for r, value in zip(rows, values):
            grid[r][c] = value
    return Card.from_cells(grid)

"""Row placement for column counts.

A card layout is described by how many cells each column holds. These helpers
decide which rows those cells occupy so that every row ends up with its target
count (5 on a ticket).
"""

from __future__ import annotations

import itertools
from typing import Dict, List, Optional, Sequence, Tuple

from .partition import ROWS
from .rng import RandomSource

RowOption = Tuple[int, ...]

# Fixed option lists per column count; index order is the canonical order.
ROW_OPTIONS: Dict[int, List[RowOption]] = {
    k: list(itertools.combinations(range(ROWS), k)) for k in range(ROWS + 1)
}


def row_options(k: int) -> List[RowOption]:
    if k not in ROW_OPTIONS:
        raise ValueError(f"a column holds 0..{ROWS} cells, got {k}")
    return ROW_OPTIONS[k]


def rows_fit(row_caps: Sequence[int], col_counts: Sequence[int]) -> bool:
    """Gale-Ryser check: can columns with these counts exactly fill row_caps?

    Each column puts at most one cell in any row.
    """
    if any(cap < 0 for cap in row_caps):
        return False
    if sum(row_caps) != sum(col_counts):
        return False
    caps = sorted(row_caps, reverse=True)
    for j in range(1, len(caps) + 1):
        if sum(caps[:j]) > sum(min(k, j) for k in col_counts):
            return False
    return True


def assign_rows(
    row_caps: Sequence[int],
    col_counts: Sequence[int],
    rng: Optional[RandomSource] = None,
) -> List[RowOption]:
    """Choose rows for every column so row totals equal row_caps.

    Columns are placed most-filled first. With rng, ties in the visiting order
    are shuffled and each column takes a uniformly random option among those
    that keep the rest placeable; without rng the first such option is taken.
    """
    if not rows_fit(row_caps, col_counts):
        raise ValueError(f"column counts {list(col_counts)} cannot fill rows {list(row_caps)}")

    order = list(range(len(col_counts)))
    if rng is not None:
        rng.shuffle(order)
    order.sort(key=lambda c: -col_counts[c])

    caps = list(row_caps)
    placed: List[RowOption] = [()] * len(col_counts)
    for idx, c in enumerate(order):
        rest = [col_counts[o] for o in order[idx + 1:]]
        viable = []
        for option in row_options(col_counts[c]):
            after = [caps[r] - (1 if r in option else 0) for r in range(len(caps))]
            if rows_fit(after, rest):
                viable.append(option)
        # rows_fit held before this column, so at least one option survives
        chosen = viable[rng.pick_index(len(viable))] if rng is not None else viable[0]
        for r in chosen:
            caps[r] -= 1
        placed[c] = chosen
    return placed

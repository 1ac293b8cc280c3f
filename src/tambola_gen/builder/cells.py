"""Cell-selection-first ticket construction.

The layout (which cells are filled) is fixed before any number is drawn, so
row and column counts hold by construction and a card is never scrapped.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Set

from ..card import Card, Cell
from ..errors import GenerationExhausted
from ..feasibility import available_by_column
from ..layout import assign_rows
from ..partition import COLUMNS, NUMBERS_PER_CARD, NUMBERS_PER_ROW, ROWS, NumericBucket
from ..rng import RandomSource

log = logging.getLogger(__name__)


def select_column_counts(
    available: Sequence[int], *, reserve: int, rng: RandomSource
) -> List[int]:
    """Pick how many cells each column gets (1..3, 15 in total).

    Columns are seeded with one cell each, then the remaining cells go to
    random columns with spare capacity. With reserve > 0 every pick keeps the
    leftover pool able to host `reserve` more cards: a column never drops
    below `reserve` numbers, and the leftover capacity (at most 3 numbers per
    column per card) stays at 15 * reserve or more.
    """
    cap_per_card = ROWS * reserve
    hi = [min(ROWS, a - reserve) for a in available]
    # Numbers a column can give away without shrinking the leftover capacity.
    free = [max(0, a - cap_per_card) for a in available]
    budget = sum(min(a, cap_per_card) for a in available) - NUMBERS_PER_CARD * reserve

    if any(h < 1 for h in hi):
        short = [c for c, h in enumerate(hi) if h < 1]
        raise GenerationExhausted(f"No more numbers available for columns {short}")

    counts = [1] * COLUMNS

    def cost(values: Sequence[int]) -> int:
        return sum(max(0, k - f) for k, f in zip(values, free))

    def completable(values: Sequence[int]) -> bool:
        need = NUMBERS_PER_CARD - sum(values)
        headroom = sum(h - k for h, k in zip(hi, values))
        free_units = sum(max(0, min(h, f) - k) for h, f, k in zip(hi, free, values))
        spent = cost(values)
        return need <= headroom and spent + max(0, need - free_units) <= budget

    if not completable(counts):
        raise GenerationExhausted(
            f"Pool cannot host this card and {reserve} more (available per column: {list(available)})"
        )

    while sum(counts) < NUMBERS_PER_CARD:
        candidates = []
        for c in range(COLUMNS):
            if counts[c] >= hi[c]:
                continue
            trial = list(counts)
            trial[c] += 1
            if completable(trial):
                candidates.append(c)
        counts[rng.choice(candidates)] += 1
    return counts


def draw_column_numbers(
    bucket: NumericBucket, k: int, used: Set[int], rng: RandomSource
) -> List[int]:
    """Draw k distinct unused numbers from a bucket, ascending."""
    if sum(1 for n in bucket.numbers() if n not in used) < k:
        raise GenerationExhausted(f"No more numbers available in column {bucket.column}")
    picked: Set[int] = set()
    while len(picked) < k:
        n = rng.randint(bucket.low, bucket.high)
        if n in used or n in picked:
            continue
        picked.add(n)
    return sorted(picked)


def build_card_cells(
    used: Set[int],
    *,
    buckets: Sequence[NumericBucket],
    rng: RandomSource,
    reserve: int = 0,
) -> Card:
    available = available_by_column(used, buckets)
    counts = select_column_counts(available, reserve=reserve, rng=rng)
    placement = assign_rows([NUMBERS_PER_ROW] * ROWS, counts, rng)

    cells: List[List[Cell]] = [[None] * COLUMNS for _ in range(ROWS)]
    drawn: List[int] = []
    for c, rows in enumerate(placement):
        values = draw_column_numbers(buckets[c], counts[c], used, rng)
        for r, value in zip(rows, values):
            cells[r][c] = value
        drawn.extend(values)

    used.update(drawn)
    log.debug("cells layout %s (reserve=%d)", counts, reserve)
    return Card.from_cells(cells)

"""Incremental random placement with scrap-and-retry."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set

from ..card import Card, Cell, sorted_columns
from ..constraints import ConstraintChecker
from ..errors import GenerationExhausted, GenerationRetryLimitExceeded, InvalidCardConstraint
from ..partition import COLUMNS, NUMBERS_PER_CARD, NUMBERS_PER_ROW, ROWS, NumericBucket, column_of, pool_numbers
from ..rng import RandomSource

log = logging.getLogger(__name__)


def target_row(placed: int) -> int:
    """Row for the next number: <5 placed -> row 0, <10 -> row 1, else row 2."""
    return min(placed // NUMBERS_PER_ROW, ROWS - 1)


def _fill_attempt(
    used: Set[int],
    pool: Sequence[int],
    col_index: Dict[int, int],
    rng: RandomSource,
) -> Optional[List[List[Cell]]]:
    """Place 15 numbers row by row; numbers placed are added to `used`.

    Returns None when the current row can no longer take any unused number.
    """
    cells: List[List[Cell]] = [[None] * COLUMNS for _ in range(ROWS)]
    placed = 0
    while placed < NUMBERS_PER_CARD:
        free = [n for n in pool if n not in used]
        if not free:
            raise GenerationExhausted("No more numbers available!")
        row = target_row(placed)
        if all(cells[row][col_index[n]] is not None for n in free):
            return None
        number = rng.choice(free)
        col = col_index[number]
        if cells[row][col] is not None:
            # occupied: discard the draw, the number stays in the pool
            continue
        cells[row][col] = number
        used.add(number)
        placed += 1
    return cells


def build_card_incremental(
    used: Set[int],
    *,
    buckets: Sequence[NumericBucket],
    rng: RandomSource,
    max_attempts: int = 20,
    checker: Optional[ConstraintChecker] = None,
) -> Card:
    """Draw random unused numbers into row-by-row slots until the card is full.

    Row balance holds by construction; column coverage does not, so a card
    that fails validation is scrapped, its numbers go back to the pool and the
    attempt restarts, up to `max_attempts` times.
    """
    checker = checker or ConstraintChecker(buckets)
    pool = pool_numbers(buckets)
    col_index = {n: column_of(n, buckets) for n in pool}

    for attempt in range(1, max_attempts + 1):
        before = set(used)
        try:
            cells = _fill_attempt(used, pool, col_index, rng)
            if cells is None:
                log.debug("attempt %d: no placeable number left, scrapping", attempt)
            else:
                return checker.ensure_valid(sorted_columns(cells))
        except InvalidCardConstraint as exc:
            log.debug("attempt %d scrapped: %s", attempt, exc)
        except GenerationExhausted:
            used.intersection_update(before)
            raise
        # release every number this attempt consumed
        used.intersection_update(before)

    raise GenerationRetryLimitExceeded(max_attempts)

"""Single card generation with a selectable strategy."""

from __future__ import annotations

from typing import Optional, Sequence, Set

from ..builder.cells import build_card_cells
from ..builder.incremental import build_card_incremental
from ..card import Card
from ..constraints import ConstraintChecker
from ..partition import NumericBucket, column_buckets
from ..rng import RandomSource, create_rng

STRATEGIES = ("cells", "incremental")


class CardGenerator:
    """Produces one valid card from the numbers not yet in `used_numbers`.

    Strategies:
      - cells: choose the filled cells first, then draw numbers per column
      - incremental: random row-by-row placement with scrap-and-retry
    """

    def __init__(
        self,
        strategy: str = "cells",
        *,
        buckets: Optional[Sequence[NumericBucket]] = None,
        rng: Optional[RandomSource] = None,
        max_attempts: int = 20,
    ):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}")
        self.strategy = strategy
        self.buckets = tuple(buckets) if buckets is not None else column_buckets()
        self.rng = rng if rng is not None else create_rng()
        self.max_attempts = max_attempts
        self.checker = ConstraintChecker(self.buckets)

    def generate(self, used_numbers: Set[int], reserve: int = 0) -> Card:
        """Build a card and add its numbers to `used_numbers`.

        `reserve` is how many more cards must still fit into the pool
        afterwards; only the cells strategy plans for it.
        """
        if self.strategy == "cells":
            return build_card_cells(
                used_numbers, buckets=self.buckets, rng=self.rng, reserve=reserve
            )
        return build_card_incremental(
            used_numbers,
            buckets=self.buckets,
            rng=self.rng,
            max_attempts=self.max_attempts,
            checker=self.checker,
        )


def generate_one_card(
    used_numbers: Set[int],
    *,
    strategy: str = "cells",
    rng: Optional[RandomSource] = None,
    buckets: Optional[Sequence[NumericBucket]] = None,
    reserve: int = 0,
    max_attempts: int = 20,
) -> Card:
    generator = CardGenerator(strategy, buckets=buckets, rng=rng, max_attempts=max_attempts)
    return generator.generate(used_numbers, reserve=reserve)

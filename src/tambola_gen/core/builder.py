"""Batch construction: several cards with no number shared between them."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ..builder.leftover import build_card_from_leftover
from ..card import Card
from ..constraints import ConstraintChecker
from ..errors import GenerationExhausted
from ..feasibility import check_batch_capacity
from ..partition import NumericBucket, column_buckets, pool_numbers
from ..rng import RandomSource, create_rng, derive_parallel_seed
from .generator import CardGenerator
from .randomizer import ColumnRowRandomizer

log = logging.getLogger(__name__)


@dataclass
class BuildParams:
    """Parameters for batch generation."""

    count: int
    strategy: str = "cells"
    partition: str = "variable"
    seed: Optional[int] = None
    rng_engine: str = "py_random"
    shortcut_last: bool = True
    max_attempts: int = 20


@dataclass
class BuildMetrics:
    """Metrics for batch generation."""

    total_time: float
    shortcut_used: bool = False
    shortcut_fallback: bool = False


@dataclass
class BuildResult:
    """Result of batch generation."""

    cards: List[Card]
    metrics: BuildMetrics
    buckets: Sequence[NumericBucket] = field(default_factory=column_buckets)


def _check_count(count: object) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"count must be a positive integer, got {count!r}")
    return count


class BatchBuilder:
    """Builds a batch of non-overlapping cards.

    One used-number set is shared by every card of the batch and dropped when
    the batch is done. Each card is column-row randomized as soon as it is
    created. Any generation error aborts the whole batch.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng

    def build(self, params: BuildParams) -> BuildResult:
        count = _check_count(params.count)
        buckets = column_buckets(params.partition)

        capacity = check_batch_capacity(count=count, buckets=buckets)
        if not capacity.feasible:
            raise GenerationExhausted("; ".join(capacity.reasons))

        rng = self.rng if self.rng is not None else create_rng(params.rng_engine, params.seed)
        generator = CardGenerator(
            params.strategy, buckets=buckets, rng=rng, max_attempts=params.max_attempts
        )
        randomizer = ColumnRowRandomizer(rng)
        metrics = BuildMetrics(total_time=0.0)

        start = time.perf_counter()
        used: Set[int] = set()
        cards: List[Card] = []
        for i in range(count):
            base = None
            if params.shortcut_last and count > 1 and i == count - 1:
                base = self._card_from_leftover(used, buckets, rng, generator.checker)
                metrics.shortcut_used = base is not None
                metrics.shortcut_fallback = base is None
            if base is None:
                base = generator.generate(used, reserve=count - i - 1)
            cards.append(randomizer.randomize(base))

        metrics.total_time = time.perf_counter() - start
        log.info(
            "Generated %d card(s) with %s strategy in %.3fs", count, params.strategy, metrics.total_time
        )
        return BuildResult(cards=cards, metrics=metrics, buckets=buckets)

    def _card_from_leftover(
        self,
        used: Set[int],
        buckets: Sequence[NumericBucket],
        rng: RandomSource,
        checker: ConstraintChecker,
    ) -> Optional[Card]:
        leftover = [n for n in pool_numbers(buckets) if n not in used]
        card = build_card_from_leftover(leftover, buckets=buckets, rng=rng)
        problems = checker.violations(card)
        if problems:
            log.debug("leftover short-circuit rejected (%s), falling back", "; ".join(problems))
            return None
        used.update(card.numbers())
        return card


def generate_batch(
    count: int,
    *,
    strategy: str = "cells",
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
    engine: str = "py_random",
    partition: str = "variable",
    shortcut_last: bool = True,
    max_attempts: int = 20,
) -> List[Card]:
    params = BuildParams(
        count=count,
        strategy=strategy,
        partition=partition,
        seed=seed,
        rng_engine=engine,
        shortcut_last=shortcut_last,
        max_attempts=max_attempts,
    )
    return BatchBuilder(rng).build(params).cards


def generate_batches(batches: int, params: BuildParams) -> List[BuildResult]:
    """Independent batches, each with its own used numbers and RNG stream."""
    _check_count(batches)
    results: List[BuildResult] = []
    for index in range(batches):
        seed = None if params.seed is None else derive_parallel_seed(params.seed, index, "batch")
        rng = create_rng(params.rng_engine, seed)
        results.append(BatchBuilder(rng).build(params))
    return results

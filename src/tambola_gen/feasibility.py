from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Sequence

from .partition import COLUMNS, NUMBERS_PER_CARD, ROWS, NumericBucket


@dataclass
class Feasibility:
    feasible: bool
    reasons: List[str]


def check_batch_capacity(*, count: int, buckets: Sequence[NumericBucket]) -> Feasibility:
    """Can `count` non-overlapping cards be cut from the bucket pool at all?"""
    reasons: List[str] = []
    pool = sum(b.size for b in buckets)
    if count * NUMBERS_PER_CARD > pool:
        reasons.append(
            f"{count} cards need {count * NUMBERS_PER_CARD} numbers but the pool has {pool}"
        )
    for b in buckets:
        if b.size < count:
            reasons.append(f"column {b.column} has {b.size} numbers for {count} cards")
    return Feasibility(feasible=not reasons, reasons=reasons)


def available_by_column(used: AbstractSet[int], buckets: Sequence[NumericBucket]) -> List[int]:
    return [sum(1 for n in b.numbers() if n not in used) for b in buckets]


def can_host(available: Sequence[int], cards: int) -> bool:
    """Whether `cards` more tickets fit into per-column availability.

    Every ticket takes 1..3 numbers per column and 15 in total, so this holds
    iff each column keeps at least one number per card and the per-column
    caps (3 per card) still add up to the numbers needed.
    """
    if cards <= 0:
        return True
    if len(available) != COLUMNS or any(a < cards for a in available):
        return False
    return sum(min(a, ROWS * cards) for a in available) >= NUMBERS_PER_CARD * cards

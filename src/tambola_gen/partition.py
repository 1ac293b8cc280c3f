"""Column buckets: how 1..90 is split across the 9 ticket columns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

COLUMNS = 9
ROWS = 3
NUMBERS_PER_ROW = 5
NUMBERS_PER_CARD = ROWS * NUMBERS_PER_ROW
MAX_NUMBER = 90

POLICIES = ("variable", "fixed")


@dataclass(frozen=True)
class NumericBucket:
    """Inclusive numeric range assigned to one column."""

    column: int
    low: int
    high: int

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    def contains(self, number: int) -> bool:
        return self.low <= number <= self.high

    def numbers(self) -> List[int]:
        return list(range(self.low, self.high + 1))


def column_buckets(policy: str = "variable") -> Tuple[NumericBucket, ...]:
    """Return the 9 column buckets for a partitioning policy.

    - variable: 1-9, 10-19, ..., 70-79, 80-90 (9 / 10 x 7 / 11 numbers)
    - fixed: 10c+1 .. 10c+9 for every column, 1-89 (90 is never used)
    """
    policy = (policy or "variable").strip().lower()
    buckets: List[NumericBucket] = []
    if policy == "variable":
        for c in range(COLUMNS):
            low = 1 if c == 0 else 10 * c
            high = MAX_NUMBER if c == COLUMNS - 1 else 10 * c + 9
            buckets.append(NumericBucket(column=c, low=low, high=high))
    elif policy == "fixed":
        for c in range(COLUMNS):
            buckets.append(NumericBucket(column=c, low=10 * c + 1, high=10 * c + 9))
    else:
        raise ValueError(f"Unsupported partition policy: {policy}")
    return tuple(buckets)


def column_of(number: int, buckets: Sequence[NumericBucket]) -> int:
    for bucket in buckets:
        if bucket.contains(number):
            return bucket.column
    raise ValueError(f"Number {number} does not belong to any column bucket")


def pool_numbers(buckets: Sequence[NumericBucket]) -> List[int]:
    numbers: List[int] = []
    for bucket in buckets:
        numbers.extend(bucket.numbers())
    return sorted(numbers)

"""Ticket invariant checks."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .card import Card
from .errors import InvalidCardConstraint
from .partition import COLUMNS, NUMBERS_PER_CARD, NUMBERS_PER_ROW, NumericBucket, column_buckets


class ConstraintChecker:
    """Checks the standard Tambola constraints on a card."""

    def __init__(self, buckets: Optional[Sequence[NumericBucket]] = None):
        self.buckets = tuple(buckets) if buckets is not None else column_buckets()

    def violations(self, card: Card, *, check_order: bool = True) -> List[str]:
        """Return human-readable violations; empty when the card is valid."""
        problems: List[str] = []

        total = len(card.numbers())
        if total != NUMBERS_PER_CARD:
            problems.append(f"card has {total} numbers (must be {NUMBERS_PER_CARD})")

        for r, count in enumerate(card.row_counts()):
            if count != NUMBERS_PER_ROW:
                problems.append(f"row {r} has {count} numbers (must be {NUMBERS_PER_ROW})")

        seen = set()
        for c in range(COLUMNS):
            values = card.column_values(c)
            if not values:
                problems.append(f"column {c} is empty")
                continue
            bucket = self.buckets[c]
            outside = [n for n in values if not bucket.contains(n)]
            if outside:
                problems.append(
                    f"column {c} has values {outside} outside {bucket.low}-{bucket.high}"
                )
            if check_order and any(a >= b for a, b in zip(values, values[1:])):
                problems.append(f"column {c} not ascending: {values}")
            for n in values:
                if n in seen:
                    problems.append(f"duplicate number {n}")
                seen.add(n)

        return problems

    def is_valid(self, card: Card, *, check_order: bool = True) -> bool:
        return not self.violations(card, check_order=check_order)

    def ensure_valid(self, card: Card) -> Card:
        problems = self.violations(card)
        if problems:
            raise InvalidCardConstraint(problems)
        return card


def validate_card(card: Card, buckets: Optional[Sequence[NumericBucket]] = None) -> bool:
    return ConstraintChecker(buckets).is_valid(card)

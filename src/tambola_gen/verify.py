from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .card import Card
from .constraints import ConstraintChecker
from .partition import COLUMNS, NumericBucket, column_buckets, pool_numbers
from .uniqueness import card_hash, cross_card_duplicates, layout_histogram


@dataclass
class CardReport:
    index: int
    card_hash: str
    valid: bool
    violations: List[str]


def check_cards(
    cards: Sequence[Card], buckets: Sequence[NumericBucket]
) -> List[CardReport]:
    checker = ConstraintChecker(buckets)
    reports: List[CardReport] = []
    for idx, card in enumerate(cards):
        problems = checker.violations(card)
        reports.append(
            CardReport(index=idx, card_hash=card_hash(card), valid=not problems, violations=problems)
        )
    return reports


def column_usage(cards: Sequence[Card]) -> Dict[str, Dict[int, int]]:
    """Per column: how many cards hold 1, 2 or 3 numbers in it."""
    usage: Dict[str, Dict[int, int]] = {}
    for c in range(COLUMNS):
        counts: Counter[int] = Counter(card.column_counts()[c] for card in cards)
        usage[str(c)] = {k: counts.get(k, 0) for k in (1, 2, 3)}
    return usage


def verify(
    cards: Sequence[Card], *, buckets: Optional[Sequence[NumericBucket]] = None
) -> Dict[str, object]:
    buckets = tuple(buckets) if buckets is not None else column_buckets()
    card_reports = check_cards(cards, buckets)
    duplicates = cross_card_duplicates(cards)
    used = sorted({n for card in cards for n in card.numbers()})
    return {
        "cards": [
            {
                "index": r.index,
                "card_hash": r.card_hash,
                "valid": r.valid,
                "violations": r.violations,
            }
            for r in card_reports
        ],
        "cross_card_duplicates": {str(n): idxs for n, idxs in duplicates.items()},
        "column_usage": column_usage(cards),
        "layouts": layout_histogram(cards),
        "numbers_used": len(used),
        "pool_size": len(pool_numbers(buckets)),
        "ok_all_cards_valid": all(r.valid for r in card_reports),
        "ok_no_duplicates_across_cards": not duplicates,
        "ok": all(r.valid for r in card_reports) and not duplicates,
    }

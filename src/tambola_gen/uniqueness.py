from __future__ import annotations

import hashlib
import json
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from .card import Card


def card_hash(card: Card) -> str:
    payload = json.dumps(card.to_matrix(), ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def batch_hash(cards: Iterable[Card]) -> str:
    hashes = [card_hash(c) for c in cards]
    payload = json.dumps(hashes, ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def cross_card_duplicates(cards: Sequence[Card]) -> Dict[int, List[int]]:
    """Numbers that appear on more than one card, mapped to the card indexes."""
    owners: Dict[int, List[int]] = {}
    for idx, card in enumerate(cards):
        for n in card.numbers():
            owners.setdefault(n, []).append(idx)
    return {n: idxs for n, idxs in sorted(owners.items()) if len(idxs) > 1}


def column_count_signature(card: Card) -> str:
    """Compact layout key such as '2-1-2-1-2-2-1-2-2'."""
    return "-".join(str(k) for k in card.column_counts())


def layout_histogram(cards: Iterable[Card]) -> Dict[str, int]:
    return dict(Counter(column_count_signature(c) for c in cards))

from __future__ import annotations

from tambola_gen.card import Card
from tambola_gen.uniqueness import (
    batch_hash,
    card_hash,
    column_count_signature,
    cross_card_duplicates,
    layout_histogram,
)


def test_hashes_stable_and_distinct(sample_card):
    other = Card.from_matrix(
        [
            [1, 10, 20, 30, 40, 0, 0, 0, 0],
            [0, 0, 0, 0, 45, 50, 60, 70, 80],
            [5, 0, 25, 0, 0, 55, 0, 75, 89],
        ]
    )
    h_a = card_hash(sample_card)
    assert h_a.startswith("sha256:")
    assert h_a == card_hash(Card.from_matrix(sample_card.to_matrix()))
    assert h_a != card_hash(other)
    assert batch_hash([sample_card, other]) != batch_hash([other, sample_card])


def test_cross_card_duplicates(sample_card):
    assert cross_card_duplicates([sample_card]) == {}
    dupes = cross_card_duplicates([sample_card, sample_card])
    assert sorted(dupes) == sorted(sample_card.numbers())
    assert dupes[1] == [0, 1]


def test_layout_signature(sample_card):
    assert column_count_signature(sample_card) == "2-1-2-1-2-2-1-2-2"
    assert layout_histogram([sample_card, sample_card]) == {"2-1-2-1-2-2-1-2-2": 2}

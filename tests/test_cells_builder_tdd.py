from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from tambola_gen.builder.cells import build_card_cells, draw_column_numbers, select_column_counts
from tambola_gen.constraints import ConstraintChecker
from tambola_gen.errors import GenerationExhausted
from tambola_gen.feasibility import available_by_column, can_host
from tambola_gen.partition import column_buckets
from tambola_gen.rng import create_rng

FULL = [9, 10, 10, 10, 10, 10, 10, 10, 11]


@given(seed=st.integers(min_value=0, max_value=2**32 - 1))
def test_column_counts_cover_every_column(seed):
    counts = select_column_counts(FULL, reserve=0, rng=create_rng("py_random", seed))
    assert sum(counts) == 15
    assert all(1 <= k <= 3 for k in counts)


@given(
    seed=st.integers(min_value=0, max_value=2**32 - 1),
    reserve=st.integers(min_value=1, max_value=5),
)
def test_column_counts_leave_room_for_reserved_cards(seed, reserve):
    counts = select_column_counts(FULL, reserve=reserve, rng=create_rng("py_random", seed))
    after = [a - k for a, k in zip(FULL, counts)]
    assert can_host(after, reserve)


def test_column_counts_respect_scarce_columns():
    available = [1, 10, 10, 10, 10, 10, 10, 10, 2]
    counts = select_column_counts(available, reserve=0, rng=create_rng("py_random", 1))
    assert counts[0] == 1
    assert counts[8] <= 2


def test_column_counts_exhausted_column():
    with pytest.raises(GenerationExhausted):
        select_column_counts([0] + FULL[1:], reserve=0, rng=create_rng("py_random", 1))


def test_draw_column_numbers_ascending_and_unused():
    bucket = column_buckets()[3]
    used = {30, 31, 32, 33}
    values = draw_column_numbers(bucket, 3, used, create_rng("py_random", 4))
    assert values == sorted(values)
    assert len(set(values)) == 3
    assert all(bucket.contains(v) and v not in used for v in values)
    with pytest.raises(GenerationExhausted):
        draw_column_numbers(bucket, 3, set(range(30, 38)), create_rng("py_random", 4))


def test_build_card_cells_valid_and_marks_used():
    buckets = column_buckets()
    used = {1, 2, 3, 44, 90}
    card = build_card_cells(set(used), buckets=buckets, rng=create_rng("py_random", 11))
    assert ConstraintChecker(buckets).violations(card) == []
    assert used.isdisjoint(card.numbers())

    shared = set(used)
    card = build_card_cells(shared, buckets=buckets, rng=create_rng("py_random", 11))
    assert shared == used | set(card.numbers())


def test_build_card_cells_failure_leaves_used_untouched():
    buckets = column_buckets()
    used = set(range(1, 10))
    with pytest.raises(GenerationExhausted):
        build_card_cells(used, buckets=buckets, rng=create_rng("py_random", 2))
    assert used == set(range(1, 10))


def test_build_card_cells_uses_exact_leftover():
    buckets = column_buckets()
    leftover = {1, 12, 13, 24, 35, 36, 47, 58, 59, 61, 62, 73, 84, 85, 90}
    used = set(range(1, 91)) - leftover
    card = build_card_cells(used, buckets=buckets, rng=create_rng("py_random", 8))
    assert set(card.numbers()) == leftover
    assert available_by_column(used, buckets) == [0] * 9

from __future__ import annotations

import pytest

from tambola_gen.card import Card
from tambola_gen.constraints import ConstraintChecker, validate_card
from tambola_gen.errors import InvalidCardConstraint
from tambola_gen.partition import column_buckets


def _with(card: Card, row: int, col: int, value):
    cells = [list(r) for r in card.rows]
    cells[row][col] = value
    return Card.from_cells(cells)


def test_valid_card_has_no_violations(sample_card):
    checker = ConstraintChecker()
    assert checker.violations(sample_card) == []
    assert validate_card(sample_card)


def test_validation_is_pure(sample_card):
    broken = _with(sample_card, 0, 0, None)
    checker = ConstraintChecker()
    assert checker.is_valid(broken) is checker.is_valid(broken) is False
    assert checker.is_valid(sample_card) is checker.is_valid(sample_card) is True


def test_row_and_total_counts(sample_card):
    problems = ConstraintChecker().violations(_with(sample_card, 0, 5, 51))
    assert any("16 numbers" in p for p in problems)
    assert any("row 0 has 6" in p for p in problems)


def test_empty_column_detected(sample_card):
    card = _with(_with(sample_card, 0, 1, None), 0, 0, 2)
    problems = ConstraintChecker().violations(card)
    assert "column 1 is empty" in problems


def test_out_of_bucket_value(sample_card):
    problems = ConstraintChecker().violations(_with(sample_card, 0, 1, 25))
    assert any("outside 10-19" in p for p in problems)


def test_column_order_and_duplicates(sample_card):
    descending = _with(_with(sample_card, 0, 0, 5), 2, 0, 1)
    assert any("not ascending" in p for p in ConstraintChecker().violations(descending))
    assert ConstraintChecker().is_valid(descending, check_order=False)

    duplicate = _with(sample_card, 2, 0, 1)
    problems = ConstraintChecker().violations(duplicate)
    assert "duplicate number 1" in problems


def test_fixed_policy_rejects_ninety(sample_card):
    checker = ConstraintChecker(column_buckets("fixed"))
    assert not checker.is_valid(sample_card)


def test_ensure_valid_raises_with_violations(sample_card):
    with pytest.raises(InvalidCardConstraint) as exc:
        ConstraintChecker().ensure_valid(_with(sample_card, 1, 8, None))
    assert exc.value.violations
    assert ConstraintChecker().ensure_valid(sample_card) is sample_card

from __future__ import annotations

import pytest

from tambola_gen.card import Card, sorted_columns


def test_accessors(sample_card):
    assert sample_card.row_counts() == [5, 5, 5]
    assert sample_card.column_counts() == [2, 1, 2, 1, 2, 2, 1, 2, 2]
    assert sample_card.column_values(8) == [80, 90]
    assert sample_card.column_rows(1) == (0,)
    assert len(sample_card.numbers()) == 15
    assert sample_card.cell(1, 0) is None


def test_matrix_uses_zero_for_empty(sample_card):
    matrix = sample_card.to_matrix()
    assert matrix[1][0] == 0
    assert Card.from_matrix(matrix) == sample_card


def test_shape_is_enforced():
    with pytest.raises(ValueError):
        Card.from_cells([[None] * 9, [None] * 9])
    with pytest.raises(ValueError):
        Card.from_cells([[None] * 8] * 3)


def test_sorted_columns_keeps_rows_and_orders_values():
    cells = [[None] * 9 for _ in range(3)]
    cells[0][3] = 39
    cells[2][3] = 31
    cells[1][3] = 35
    cells[0][0] = 7
    card = sorted_columns(cells)
    assert card.column_values(3) == [31, 35, 39]
    assert card.column_rows(0) == (0,)

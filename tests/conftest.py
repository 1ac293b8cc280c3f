from __future__ import annotations

import pytest

from tambola_gen.card import Card


@pytest.fixture
def sample_card() -> Card:
    return Card.from_matrix(
        [
            [1, 10, 20, 30, 40, 0, 0, 0, 0],
            [0, 0, 0, 0, 45, 50, 60, 70, 80],
            [5, 0, 25, 0, 0, 55, 0, 75, 90],
        ]
    )

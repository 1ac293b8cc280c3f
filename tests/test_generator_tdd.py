from __future__ import annotations

import pytest

from tambola_gen.constraints import ConstraintChecker
from tambola_gen.core.generator import CardGenerator, generate_one_card
from tambola_gen.errors import GenerationExhausted
from tambola_gen.rng import create_rng


@pytest.mark.parametrize("strategy", ["cells", "incremental"])
def test_generate_one_card_both_strategies(strategy):
    used = {7, 17, 27}
    card = generate_one_card(
        used, strategy=strategy, rng=create_rng("py_random", 13), max_attempts=200
    )
    assert ConstraintChecker().violations(card) == []
    assert {7, 17, 27}.isdisjoint(card.numbers())
    assert used == {7, 17, 27} | set(card.numbers())


def test_generate_one_card_on_empty_pool():
    with pytest.raises(GenerationExhausted):
        generate_one_card(set(range(1, 91)), rng=create_rng("py_random", 1))


def test_unknown_strategy():
    with pytest.raises(ValueError):
        CardGenerator("magic")


def test_six_cards_in_a_row_with_reserve():
    generator = CardGenerator("cells", rng=create_rng("py_random", 77))
    used = set()
    for i in range(6):
        generator.generate(used, reserve=5 - i)
    assert used == set(range(1, 91))

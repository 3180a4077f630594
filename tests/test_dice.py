import random

import pytest

from tracker import dice


def test_parse_die():
    assert dice.parse_die(None) == 20
    assert dice.parse_die("d6") == 6
    assert dice.parse_die("D100") == 100
    for bad in ("6", "dx", "d0", "d-3"):
        with pytest.raises(ValueError):
            dice.parse_die(bad)


def test_roll_stays_in_range():
    rng = random.Random(7)
    values = {dice.roll(6, rng) for _ in range(500)}
    assert values == {1, 2, 3, 4, 5, 6}


def test_roll_is_reproducible_with_seeded_rng():
    assert dice.roll(20, random.Random(3)) == dice.roll(20, random.Random(3))


def test_roll_rejects_zero_sides():
    with pytest.raises(ValueError):
        dice.roll(0)


def test_flip_coin():
    rng = random.Random(1)
    assert {dice.flip_coin(rng) for _ in range(100)} == {"Heads", "Tails"}

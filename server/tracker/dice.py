"""Dice and coin helpers. Stateless, never recorded in history."""
from __future__ import annotations
import random

from .config import DEFAULT_DIE


def parse_die(spec: str | None) -> int:
    """Parse ``dN`` / ``DN`` into a side count, defaulting to d20.

    Raises ValueError for anything that is not a positive die size.
    """
    if not spec:
        return DEFAULT_DIE
    if spec[0] not in "dD":
        raise ValueError(f"Dice must look like d6 or d20, got {spec!r}")
    try:
        sides = int(spec[1:])
    except ValueError:
        raise ValueError(f"Dice must look like d6 or d20, got {spec!r}") from None
    if sides < 1:
        raise ValueError(f"A die needs at least one side, got {sides}")
    return sides


def roll(sides: int = DEFAULT_DIE, rng: random.Random | None = None) -> int:
    """Roll a die with ``sides`` faces, returning 1..sides."""
    if sides < 1:
        raise ValueError(f"A die needs at least one side, got {sides}")
    rng = rng or random
    return rng.randint(1, sides)


def flip_coin(rng: random.Random | None = None) -> str:
    rng = rng or random
    return "Heads" if rng.random() < 0.5 else "Tails"

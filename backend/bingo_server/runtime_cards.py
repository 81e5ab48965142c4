from __future__ import annotations

import random
from typing import Iterable

from .runtime_constants import CARD_SIZE, CENTER_INDEX, FREE, NUMBER_MAX, NUMBER_MIN
from .runtime_types import Card


def generate_card(rng: random.Random | None = None) -> Card:
    """Build a 5x5 card from a uniform shuffle of the number pool.

    The first 25 shuffled values fill the card column by column; the center
    cell is then overwritten with FREE.
    """
    rng = rng or random.Random()
    pool = list(range(NUMBER_MIN, NUMBER_MAX + 1))
    rng.shuffle(pool)

    card: Card = []
    for col in range(CARD_SIZE):
        start = col * CARD_SIZE
        card.append(list(pool[start:start + CARD_SIZE]))

    card[CENTER_INDEX][CENTER_INDEX] = FREE
    return card


def has_win(card: Card, marked_numbers: Iterable[int]) -> bool:
    marked = set(marked_numbers)

    def is_marked(row: int, col: int) -> bool:
        value = card[col][row]
        return value == FREE or value in marked

    indexes = range(CARD_SIZE)

    for col in indexes:
        if all(is_marked(row, col) for row in indexes):
            return True

    for row in indexes:
        if all(is_marked(row, col) for col in indexes):
            return True

    if all(is_marked(i, i) for i in indexes):
        return True

    return all(is_marked(i, CARD_SIZE - 1 - i) for i in indexes)

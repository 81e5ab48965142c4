import random

import pytest

from bingo_server.runtime_cards import generate_card, has_win
from bingo_server.runtime_constants import FREE


def _known_card():
    # card[col][row]; column 2 is [7, 23, FREE, 41, 9]
    return [
        [5, 12, 3, 14, 1],
        [16, 22, 18, 27, 30],
        [7, 23, FREE, 41, 9],
        [46, 48, 44, 50, 47],
        [33, 35, 37, 39, 31],
    ]


@pytest.mark.parametrize('seed', range(50))
def test_generated_card_is_well_formed(seed):
    card = generate_card(random.Random(seed))

    assert len(card) == 5
    assert all(len(column) == 5 for column in card)
    assert card[2][2] == FREE

    cells = [value for column in card for value in column]
    numbers = [value for value in cells if value != FREE]
    assert cells.count(FREE) == 1
    assert len(numbers) == 24
    assert len(set(numbers)) == 24
    assert all(isinstance(n, int) and 1 <= n <= 50 for n in numbers)


def test_generated_card_is_column_major_slice_of_shuffle():
    pool = list(range(1, 51))
    random.Random(7).shuffle(pool)

    card = generate_card(random.Random(7))

    assert card[0] == pool[0:5]
    assert card[1] == pool[5:10]
    assert card[2][:2] == pool[10:12]
    assert card[2][3:] == pool[13:15]
    assert card[4] == pool[20:25]


def test_generated_cards_vary():
    rng = random.Random(99)
    cards = {str(generate_card(rng)) for _ in range(20)}
    assert len(cards) == 20


def test_empty_marks_do_not_win():
    assert has_win(_known_card(), []) is False


def test_full_column_wins():
    assert has_win(_known_card(), [5, 12, 3, 14, 1]) is True


def test_full_row_wins():
    # row 0 across every column
    assert has_win(_known_card(), [5, 16, 7, 46, 33]) is True


def test_middle_row_counts_free_cell():
    assert has_win(_known_card(), [3, 18, 44, 37]) is True


def test_diagonals_count_free_cell():
    assert has_win(_known_card(), [5, 22, 50, 31]) is True
    assert has_win(_known_card(), [33, 48, 27, 1]) is True


def test_center_column_missing_one_cell_does_not_win():
    assert has_win(_known_card(), [7, 23, 41]) is False


def test_partial_marks_across_lines_do_not_win():
    assert has_win(_known_card(), [5, 12, 3, 14, 16, 22, 18, 27]) is False

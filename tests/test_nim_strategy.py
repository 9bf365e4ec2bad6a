import itertools

import pytest

from nim import Move, compute_nim_sum
from nim_strategy import (
    Decision,
    Outcome,
    best_move,
    decide,
    find_max,
    find_winning_move,
    is_bit_set,
    most_significant_bit,
)


@pytest.mark.parametrize(
    "z, expected", [(0, 0), (1, 1), (5, 4), (8, 8), (255, 128), (2**32 - 1, 2**31)]
)
def test_most_significant_bit_known_values(z, expected):
    assert most_significant_bit(z) == expected


def test_most_significant_bit_is_bracketing_power_of_two():
    for z in list(range(1, 1100)) + [2**64 - 1, 2**64, 2**100 + 7]:
        msb = most_significant_bit(z)
        assert msb & (msb - 1) == 0
        assert msb <= z < 2 * msb


def test_most_significant_bit_rejects_negative():
    with pytest.raises(ValueError):
        most_significant_bit(-3)


def test_is_bit_set():
    assert is_bit_set(5, 4)
    assert not is_bit_set(5, 2)
    assert not is_bit_set(0, 1)


def test_find_max_returns_first_of_ties():
    assert find_max([3, 7, 7, 2]) == 1
    assert find_max([5]) == 0
    assert find_max([0, 0, 0]) == 0
    assert find_max([1, 2**70, 2**70]) == 1


def test_find_max_rejects_empty():
    with pytest.raises(ValueError):
        find_max([])


def test_winning_move_zeroes_nim_sum():
    piles = (3, 4, 5)
    move = find_winning_move(piles)

    assert move == Move(0, 2)
    assert compute_nim_sum(move.apply(piles)) == 0


@pytest.mark.parametrize("piles", [(1, 1), (0, 0, 0), (1, 2, 3), (0,)])
def test_no_winning_move_when_nim_sum_is_zero(piles):
    assert find_winning_move(piles) is None


def test_winning_move_uses_first_pile_with_leading_bit():
    # nim-sum 6, leading bit 4 is set in piles 1, 2 and 3
    assert find_winning_move([1, 4, 6, 5]) == Move(1, 2)
    assert find_winning_move([2, 4, 4]) == Move(0, 2)


def test_winning_move_rejects_empty():
    with pytest.raises(ValueError):
        find_winning_move([])


def test_winning_move_does_not_mutate_piles():
    piles = [3, 4, 5]
    find_winning_move(piles)
    assert piles == [3, 4, 5]


def test_winning_moves_are_valid_and_final_for_small_games():
    for piles in itertools.product(range(6), repeat=3):
        move = find_winning_move(piles)
        if compute_nim_sum(piles) == 0:
            assert move is None
            continue
        assert move.is_valid(piles)
        after = move.apply(piles)
        assert compute_nim_sum(after) == 0
        assert find_winning_move(after) is None


def test_decide_driver_contract():
    assert decide(()) == Decision(Outcome.GAME_OVER)
    assert decide((0, 0, 0)) == Decision(Outcome.GAME_OVER)
    assert decide((1, 1)) == Decision(Outcome.LOSE, Move(0, 1))
    assert decide((2, 3, 1)) == Decision(Outcome.LOSE, Move(1, 1))
    assert decide((3, 4, 5)) == Decision(Outcome.WIN, Move(0, 2))


def test_decision_describe():
    assert Decision(Outcome.GAME_OVER).describe() == "GAME OVER"
    assert Decision(Outcome.WIN, Move(0, 2)).describe() == "WIN: take 2 from pile 0"
    assert Decision(Outcome.LOSE, Move(3, 1)).describe() == "LOSE: take 1 from pile 3"


def test_best_move():
    assert best_move((0, 0)) is None
    assert best_move((1, 1)) == Move(0, 1)
    assert best_move((0, 7)) == Move(1, 7)

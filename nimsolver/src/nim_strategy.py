"""Optimal Nim play from the nim-sum."""

import enum
import numpy as np
from typing import NamedTuple, Optional, Sequence

from nim import Move, compute_nim_sum


def most_significant_bit(z: int) -> int:
    """Place value of the leading 1 in z, so msb <= z < 2 * msb. Zero for z == 0."""
    if z < 0:
        raise ValueError(f"Expected a nonnegative integer, got {z}")
    if z == 0:
        return 0
    return 1 << (z.bit_length() - 1)


def is_bit_set(value: int, bit: int) -> bool:
    return (value & bit) != 0


def find_max(piles: Sequence[int]) -> int:
    """Index of the first largest pile."""
    if len(piles) == 0:
        raise ValueError("Cannot find the largest of zero piles")
    # argmax returns the first occurrence on ties
    return int(np.argmax(np.asarray(piles)))


def find_winning_move(piles: Sequence[int]) -> Optional[Move]:
    """
    Move that leaves a nim-sum of zero, or None if the position is lost
    against optimal play.
    """
    if len(piles) == 0:
        raise ValueError("No piles to move from")

    nim_sum = compute_nim_sum(piles)
    if nim_sum == 0:
        return None

    msb = most_significant_bit(nim_sum)

    # some pile must have the leading bit of the nim-sum set
    pile_idx = next(i for i, pile in enumerate(piles) if is_bit_set(pile, msb))

    leave = nim_sum ^ piles[pile_idx]
    return Move(pile_idx, piles[pile_idx] - leave)


class Outcome(enum.Enum):
    GAME_OVER = "GAME OVER"
    WIN = "WIN"
    LOSE = "LOSE"


class Decision(NamedTuple):
    outcome: Outcome
    move: Optional[Move] = None

    def describe(self) -> str:
        if self.move is None:
            return self.outcome.value
        return f"{self.outcome.value}: {self.move}"


def decide(piles: Sequence[int]) -> Decision:
    if len(piles) == 0:
        return Decision(Outcome.GAME_OVER)

    move = find_winning_move(piles)
    if move is not None:
        return Decision(Outcome.WIN, move)

    # Lost position: stall by taking one from the largest pile
    largest_pile = find_max(piles)
    if piles[largest_pile] > 0:
        return Decision(Outcome.LOSE, Move(largest_pile, 1))
    return Decision(Outcome.GAME_OVER)


def best_move(piles: Sequence[int]) -> Optional[Move]:
    return decide(piles).move

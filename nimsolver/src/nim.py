"""
Nim game state, moves and environment.
Player who takes the last object wins (normal play convention).
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

DEFAULT_PILES: Tuple[int, ...] = (3, 4, 5)


class Move(NamedTuple):
    """Remove `count` objects from pile `pile`."""

    pile: int
    count: int

    def is_valid(self, piles: Sequence[int]) -> bool:
        return 0 <= self.pile < len(piles) and 1 <= self.count <= piles[self.pile]

    def apply(self, piles: Sequence[int]) -> Tuple[int, ...]:
        if not self.is_valid(piles):
            raise ValueError(f"Invalid move {self} for piles {tuple(piles)}")
        new_piles = list(piles)
        new_piles[self.pile] -= self.count
        return tuple(new_piles)

    def __str__(self) -> str:
        return f"take {self.count} from pile {self.pile}"


class Nim:
    def __init__(self, piles: Tuple[int, ...] = DEFAULT_PILES) -> None:
        self.initial_piles = tuple(piles)
        self.n_piles = len(piles)
        self.piles = list(piles)
        self.current_player = 1
        self.done = not any(self.piles)
        self.winner: Optional[int] = None

    def reset(self) -> Tuple[int, ...]:
        self.piles = list(self.initial_piles)
        self.current_player = 1
        self.done = not any(self.piles)
        self.winner = None
        return tuple(self.piles)

    def get_state(self) -> Tuple[int, ...]:
        return tuple(self.piles)

    def get_valid_actions(self) -> List[Move]:
        actions = []
        for pile_idx in range(self.n_piles):
            for count in range(1, self.piles[pile_idx] + 1):
                actions.append(Move(pile_idx, count))
        return actions

    def step(
        self, action: Tuple[int, int]
    ) -> Tuple[Tuple[int, ...], bool, Optional[int]]:
        if self.done:
            raise ValueError("Game is over")

        move = Move(*action)
        self.piles = list(move.apply(self.piles))

        if all(p == 0 for p in self.piles):
            self.done = True
            self.winner = self.current_player
        else:
            self.current_player *= -1

        return tuple(self.piles), self.done, self.winner

    def copy(self) -> "Nim":
        new_game = Nim(self.initial_piles)
        new_game.piles = self.piles.copy()
        new_game.current_player = self.current_player
        new_game.done = self.done
        new_game.winner = self.winner
        return new_game

    def render(self) -> str:
        lines = [
            f"Pile {i}: {'|' * count} ({count})" for i, count in enumerate(self.piles)
        ]
        lines.append(f"Player {1 if self.current_player == 1 else 2}'s turn")
        return "\n".join(lines)


def compute_nim_sum(state: Sequence[int]) -> int:
    """Compute nim-sum (XOR of all pile sizes)."""
    result = 0
    for pile in state:
        result ^= pile
    return result

"""
Command-line driver for the Nim strategy.
Reads a game as a pile count followed by pile sizes and reports the move to make.
"""

import argparse
import sys
import numpy as np
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple

from nim import DEFAULT_PILES, Move, Nim, compute_nim_sum
from nim_strategy import best_move, decide

DEFAULT_EVAL_GAMES = 500


class GameInputError(ValueError):
    """The game description could not be read."""


def _parse_nonnegative(token: str) -> Optional[int]:
    try:
        value = int(token)
    except ValueError:
        return None
    return value if value >= 0 else None


def read_game(text: str, strict: bool = False) -> Tuple[int, ...]:
    """
    Read a pile count and that many pile sizes from whitespace-separated text.

    Missing trailing pile sizes are filled with 0. In lenient mode an unreadable
    count means no piles, and reading stops at the first token that is not a
    nonnegative integer. In strict mode either situation raises GameInputError.
    """
    tokens = text.split()

    num_piles = _parse_nonnegative(tokens[0]) if tokens else None
    if num_piles is None:
        if strict:
            raise GameInputError(
                f"Expected a pile count, got {tokens[0]!r}" if tokens else "Empty input"
            )
        return ()

    try:
        pile_size = [0] * num_piles
    except (MemoryError, OverflowError) as e:
        raise GameInputError(f"Cannot hold {num_piles} piles") from e

    values = tokens[1 : num_piles + 1]
    for i, token in enumerate(values):
        size = _parse_nonnegative(token)
        if size is None:
            if strict:
                raise GameInputError(f"Invalid size {token!r} for pile {i}")
            break
        pile_size[i] = size

    if strict and len(values) < num_piles:
        raise GameInputError(f"Expected {num_piles} pile sizes, got {len(values)}")

    return tuple(pile_size)


def parse_piles(spec: str) -> Tuple[int, ...]:
    """Parse comma-separated pile sizes, e.g. "3,4,5"."""
    if not spec.strip():
        return ()
    piles = []
    for token in spec.split(","):
        size = _parse_nonnegative(token.strip())
        if size is None:
            raise GameInputError(f"Invalid pile size {token.strip()!r}")
        piles.append(size)
    return tuple(piles)


def evaluate_policy(
    predict_fn: Callable[[Tuple[int, ...]], Optional[Move]] = best_move,
    initial_piles: Tuple[int, ...] = DEFAULT_PILES,
    n_games: int = DEFAULT_EVAL_GAMES,
    seed: Optional[int] = None,
    verbose: bool = True,
) -> Dict[str, Dict[str, int]]:
    """Play predict_fn as player 1 against a random and a nim-sum opponent."""
    rng = np.random.default_rng(seed)
    results: Dict[str, Dict[str, int]] = {
        "vs_random": {"win": 0, "loss": 0},
        "vs_optimal": {"win": 0, "loss": 0},
    }

    def random_opponent(game: Nim) -> Move:
        valid = game.get_valid_actions()
        return valid[int(rng.integers(len(valid)))]

    def optimal_opponent(game: Nim) -> Optional[Move]:
        return best_move(game.get_state())

    opponents: List[Tuple[str, Callable[[Nim], Optional[Move]]]] = [
        ("vs_random", random_opponent),
        ("vs_optimal", optimal_opponent),
    ]
    for key, opponent in opponents:
        for _ in range(n_games):
            game = Nim(initial_piles)
            state = game.reset()

            while not game.done:
                if game.current_player == 1:
                    action = predict_fn(state)
                else:
                    action = opponent(game)
                if action is None:
                    break
                state, _, _ = game.step(action)

            if game.winner == 1:
                results[key]["win"] += 1
            else:
                results[key]["loss"] += 1

    if verbose and n_games > 0:
        print("\nEvaluation Results:")
        for key, label in (("vs_random", "vs Random"), ("vs_optimal", "vs Optimal")):
            print(f"  {label} (n={n_games}):")
            print(f"    Win:  {results[key]['win'] / n_games * 100:.1f}%")
            print(f"    Loss: {results[key]['loss'] / n_games * 100:.1f}%")

    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the optimal move in a game of Nim",
        epilog="Without --piles, reads a pile count followed by pile sizes from stdin.",
    )
    parser.add_argument(
        "--piles",
        type=str,
        default=None,
        help="Pile sizes (comma-separated) instead of reading stdin",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject malformed or short input instead of zero-filling",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Print diagnostics to stderr"
    )
    parser.add_argument(
        "--evaluate",
        type=int,
        default=None,
        metavar="N",
        help="Play N self-play games per opponent instead of reporting one move",
    )
    parser.add_argument("--seed", type=int, default=None, help="Evaluation RNG seed")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        if args.piles is not None:
            piles = parse_piles(args.piles)
        else:
            piles = read_game(stdin.read(), strict=args.strict)
    except GameInputError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        nim_sum = compute_nim_sum(piles)
        position = "Losing" if nim_sum == 0 else "Winning"
        print(f"piles={piles} nim-sum={nim_sum} ({position})", file=sys.stderr)

    if args.evaluate is not None:
        if args.evaluate < 1:
            print(
                f"{parser.prog}: error: --evaluate needs a positive game count",
                file=sys.stderr,
            )
            return 2
        n_games = args.evaluate
        print("=" * 60, file=stdout)
        print(f"Evaluating nim-sum strategy from {piles}", file=stdout)
        print("=" * 60, file=stdout)
        results = evaluate_policy(
            best_move,
            initial_piles=piles,
            n_games=n_games,
            seed=args.seed,
            verbose=False,
        )
        for key, label in (("vs_random", "vs Random"), ("vs_optimal", "vs Optimal")):
            wins = results[key]["win"]
            print(
                f"  {label}: {wins}/{n_games} won ({wins / n_games * 100:.1f}%)",
                file=stdout,
            )
        return 0

    print(decide(piles).describe(), file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

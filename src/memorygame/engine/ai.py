from __future__ import annotations

import random
from typing import Protocol

from .board import Board
from .types import Position

Pair = tuple[Position, Position]


class DifficultyStrategy(Protocol):
    def select_cards(self, board: Board, rng: random.Random) -> Pair | None: ...


def _random_distinct(rng: random.Random, positions: list[Position]) -> Pair | None:
    if len(positions) < 2:
        return None
    first, second = rng.sample(positions, 2)
    return (first, second)


class EasyStrategy:
    """Two random cards, no memory of anything seen so far."""

    def select_cards(self, board: Board, rng: random.Random) -> Pair | None:
        return _random_distinct(rng, board.playable_positions())


class MediumStrategy:
    """Replays two remembered cards at random, hoping they pair up.

    Falls back to the easy pick until at least two seen cards are on the board.
    """

    def select_cards(self, board: Board, rng: random.Random) -> Pair | None:
        known = board.get_seen_cards()
        if len(known) >= 2:
            first = rng.choice(known)
            second = rng.choice(known)
            while second == first:
                second = rng.choice(known)
            return (first, second)
        return EasyStrategy().select_cards(board, rng)


class HardStrategy:
    def select_cards(self, board: Board, rng: random.Random) -> Pair | None:
        seen = board.get_seen_cards()

        # 1. a pair already known
        for i, first in enumerate(seen):
            for second in seen[i + 1 :]:
                if board.is_potential_match(first, second):
                    return (first, second)

        unseen = board.get_unseen_and_unmatched_positions()

        # 2. probe one unknown card and pair it from memory
        if unseen:
            probe = rng.choice(unseen)
            for known in seen:
                if board.is_potential_match(probe, known):
                    return (probe, known)

        # 3. two fresh cards
        pick = _random_distinct(rng, unseen)
        if pick is not None:
            return pick
        return EasyStrategy().select_cards(board, rng)


def difficulty_for(level: int) -> DifficultyStrategy:
    if level == 2:
        return MediumStrategy()
    if level == 3:
        return HardStrategy()
    # anything else plays easy
    return EasyStrategy()

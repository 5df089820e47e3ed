"""Match and score rules.

Both are chosen when a game is built and never swapped mid-game.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Callable, Literal, Protocol

from .types import Card, ConfigError

if TYPE_CHECKING:
    from .players import Player

MatchRule = Literal["full", "symbol", "color"]
ScoreRule = Literal["simple", "penalty", "time"]

MATCH_POINTS = 10
PENALTY_POINTS = -5
TIME_BASE_POINTS = 5


class MatchStrategy(Protocol):
    def do_cards_match(self, first: Card, second: Card) -> bool: ...


class FullMatchStrategy:
    """Rank, suit and color must all agree."""

    def do_cards_match(self, first: Card, second: Card) -> bool:
        return (
            first.id != second.id
            and first.rank == second.rank
            and first.suit == second.suit
            and first.color == second.color
        )


class SymbolMatchStrategy:
    def do_cards_match(self, first: Card, second: Card) -> bool:
        return first.id != second.id and first.suit == second.suit


class ColorMatchStrategy:
    def do_cards_match(self, first: Card, second: Card) -> bool:
        return first.id != second.id and first.color == second.color


class ScoreStrategy(Protocol):
    def update_score(self, player: "Player", matched: bool, cards: Sequence[Card]) -> int: ...


class SimpleScoreStrategy:
    def update_score(self, player: "Player", matched: bool, cards: Sequence[Card]) -> int:
        return MATCH_POINTS if matched else 0


class PenaltyScoreStrategy:
    def update_score(self, player: "Player", matched: bool, cards: Sequence[Card]) -> int:
        return MATCH_POINTS if matched else PENALTY_POINTS


class TimeBasedScoreStrategy:
    """Quicker matches score higher.

    The clock belongs to the strategy instance, so every player shares it:
    elapsed time runs from the previous scored match, whoever made it.
    `clock` returns seconds (monotonic by default).
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._start = self._clock()

    def update_score(self, player: "Player", matched: bool, cards: Sequence[Card]) -> int:
        if not matched:
            return 0
        now = self._clock()
        elapsed_ms = int((now - self._start) * 1000)
        self._start = now
        return (TIME_BASE_POINTS * 1000) // (max(0, elapsed_ms) + 100)


def match_strategy_for(rule: str) -> MatchStrategy:
    if rule == "full":
        return FullMatchStrategy()
    if rule == "symbol":
        return SymbolMatchStrategy()
    if rule == "color":
        return ColorMatchStrategy()
    raise ConfigError(f"Unknown match rule: {rule}")


def score_strategy_for(rule: str, clock: Callable[[], float] | None = None) -> ScoreStrategy:
    if rule == "simple":
        return SimpleScoreStrategy()
    if rule == "penalty":
        return PenaltyScoreStrategy()
    if rule == "time":
        return TimeBasedScoreStrategy(clock=clock)
    raise ConfigError(f"Unknown score rule: {rule}")

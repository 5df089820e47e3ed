from __future__ import annotations

import pytest

from memorygame.engine.players import Player
from memorygame.engine.rules import (
    ColorMatchStrategy,
    FullMatchStrategy,
    PenaltyScoreStrategy,
    SimpleScoreStrategy,
    SymbolMatchStrategy,
    TimeBasedScoreStrategy,
    match_strategy_for,
    score_strategy_for,
)
from memorygame.engine.board import Board
from memorygame.engine.types import Card, CardFace, ConfigError


def _card(card_id: int, rank: str, suit: str, color: str) -> Card:
    return Card(id=card_id, face=CardFace(rank=rank, suit=suit, color=color))  # type: ignore[arg-type]


ACE_SPADES = _card(1, "A", "♠", "Black")
ACE_SPADES_PAIR = _card(2, "A", "♠", "Black")
KING_SPADES = _card(3, "K", "♠", "Black")
KING_CLUBS = _card(4, "K", "♣", "Black")
ACE_HEARTS = _card(5, "A", "♥", "Red")


def _player() -> Player:
    return Player("Tester", Board(pair_count=13))


@pytest.mark.parametrize("strategy", [FullMatchStrategy(), SymbolMatchStrategy(), ColorMatchStrategy()])
def test_no_strategy_matches_a_card_with_itself(strategy: object) -> None:
    assert not strategy.do_cards_match(ACE_SPADES, ACE_SPADES)  # type: ignore[attr-defined]


def test_full_match_only_accepts_the_pair_partner() -> None:
    s = FullMatchStrategy()
    assert s.do_cards_match(ACE_SPADES, ACE_SPADES_PAIR)
    assert s.do_cards_match(ACE_SPADES_PAIR, ACE_SPADES)
    assert not s.do_cards_match(ACE_SPADES, KING_SPADES)
    assert not s.do_cards_match(ACE_SPADES, ACE_HEARTS)


def test_symbol_match_accepts_cross_rank_same_suit() -> None:
    s = SymbolMatchStrategy()
    assert s.do_cards_match(ACE_SPADES, KING_SPADES)
    assert s.do_cards_match(KING_SPADES, ACE_SPADES)
    assert not s.do_cards_match(KING_SPADES, KING_CLUBS)


def test_color_match_accepts_cross_rank_same_color() -> None:
    s = ColorMatchStrategy()
    assert s.do_cards_match(ACE_SPADES, KING_CLUBS)
    assert s.do_cards_match(KING_CLUBS, ACE_SPADES)
    assert not s.do_cards_match(ACE_SPADES, ACE_HEARTS)


def test_simple_and_penalty_scores() -> None:
    p = _player()
    pair = (ACE_SPADES, ACE_SPADES_PAIR)
    assert SimpleScoreStrategy().update_score(p, True, pair) == 10
    assert SimpleScoreStrategy().update_score(p, False, pair) == 0
    assert PenaltyScoreStrategy().update_score(p, True, pair) == 10
    assert PenaltyScoreStrategy().update_score(p, False, pair) == -5


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_time_based_score_follows_elapsed_time() -> None:
    clock = FakeClock()
    s = TimeBasedScoreStrategy(clock=clock)
    p = _player()
    pair = (ACE_SPADES, ACE_SPADES_PAIR)

    clock.now = 0.0
    assert s.update_score(p, True, pair) == 50  # 5000 / 100

    clock.now = 0.4
    assert s.update_score(p, True, pair) == 10  # 5000 / 500

    clock.now = 10.0
    assert s.update_score(p, False, pair) == 0
    # misses do not reset the clock
    assert s.update_score(p, True, pair) == 0  # 5000 / 9700


def test_quick_second_match_outscores_slow_one() -> None:
    pair = (ACE_SPADES, ACE_SPADES_PAIR)
    deltas = {}
    for gap in (0.05, 5.0):
        clock = FakeClock()
        s = TimeBasedScoreStrategy(clock=clock)
        s.update_score(_player(), True, pair)
        clock.now += gap
        deltas[gap] = s.update_score(_player(), True, pair)

    assert deltas[0.05] == 33
    assert deltas[5.0] == 0
    assert deltas[0.05] > deltas[5.0]


def test_time_based_clock_is_shared_between_players() -> None:
    clock = FakeClock()
    s = TimeBasedScoreStrategy(clock=clock)
    pair = (ACE_SPADES, ACE_SPADES_PAIR)
    clock.now = 1.0
    s.update_score(_player(), True, pair)
    clock.now = 1.1
    # a different player still measures from the previous match
    assert s.update_score(Player("Other", Board(pair_count=13)), True, pair) == 25


def test_rule_lookup() -> None:
    assert isinstance(match_strategy_for("symbol"), SymbolMatchStrategy)
    assert isinstance(score_strategy_for("penalty"), PenaltyScoreStrategy)
    with pytest.raises(ConfigError):
        match_strategy_for("rank")
    with pytest.raises(ConfigError):
        score_strategy_for("bonus")

from __future__ import annotations

from memorygame.engine.game import GameConfig, new_game
from memorygame.engine.mediator import GameMediator


def _cpu_game(seed: int = 3, difficulty: int = 1):
    return new_game(GameConfig(human_players=0, board_size="small", difficulty=difficulty), seed=seed)


def test_lifecycle_transitions() -> None:
    game = _cpu_game()
    sm = game.state
    assert sm.state == "initializing"

    game.start_game()
    assert sm.state == "waiting_for_player"
    assert game.event_log[0]["type"] == "GAME_STARTED"

    assert sm.handle() is True
    assert sm.state == "playing"
    assert game.turns_played == 0

    assert sm.handle() is True
    assert sm.state == "waiting_for_player"
    assert game.turns_played == 1


def test_waiting_goes_straight_to_game_over_when_board_is_done() -> None:
    game = _cpu_game()
    game.start_game()
    for card in game.board.cards:
        card.mark_matched()
    assert game.state.handle() is False
    assert game.state.is_over


def test_results_are_published_once() -> None:
    game = _cpu_game()
    game.start_game()
    game.state.run()
    game.state.go_to_game_over()
    game.finish_game()
    game.end_game()
    assert [e["type"] for e in game.event_log].count("GAME_OVER") == 1


def test_turn_limit_ends_the_game() -> None:
    game = _cpu_game()
    game.start_game()
    game.state.run(max_turns=3)

    assert game.state.is_over
    assert game.turns_played == 3
    assert game.ended
    ended = [e for e in game.event_log if e["type"] == "GAME_ENDED"]
    assert ended and ended[0]["reason"] == "turn_limit"
    over = [e for e in game.event_log if e["type"] == "GAME_OVER"]
    assert over[0]["completed"] is False


def test_observers_see_every_event_in_order() -> None:
    mediator = GameMediator()
    seen: list[str] = []
    mediator.subscribe(lambda e: seen.append(str(e["type"])))
    game = new_game(GameConfig(human_players=0, board_size="small", difficulty=3), seed=8, mediator=mediator)
    game.start_game()
    game.state.run()

    assert seen == [e["type"] for e in game.event_log]
    assert seen[0] == "GAME_STARTED"
    assert seen[-1] == "GAME_OVER"
    assert "MATCH_FOUND" in seen


def test_unsubscribed_observer_stops_receiving() -> None:
    mediator = GameMediator()
    seen: list[object] = []

    def observer(event: dict[str, object]) -> None:
        seen.append(event["type"])

    mediator.subscribe(observer)
    mediator.publish({"type": "PING"})
    mediator.unsubscribe(observer)
    mediator.publish({"type": "PONG"})
    assert seen == ["PING"]
    assert [e["type"] for e in mediator.event_log] == ["PING", "PONG"]


def test_reset_game_clears_everything() -> None:
    game = _cpu_game()
    game.start_game()
    game.state.run(max_turns=4)
    game.reset_game()

    assert game.players == []
    assert game.board.cards == []
    assert game.board.remaining_pairs == 0
    assert len(game.caretaker) == 0
    assert game.event_log == []
    assert game.turns_played == 0


def test_reset_game_returns_to_initializing() -> None:
    game = _cpu_game()
    game.start_game()
    game.state.run(max_turns=3)
    assert game.state.is_over and game.ended

    game.reset_game()

    assert game.state.state == "initializing"
    assert game.ended is False
    assert not game.state.is_over

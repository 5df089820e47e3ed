"""Coarse game lifecycle wrapped around the turn engine.

Deciding whether to act (``waiting_for_player``) and acting (``playing``) are
separate checkpoints, so pre-turn hooks can slot in between them without
touching turn resolution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .game import Game

GameStatus = Literal["initializing", "waiting_for_player", "playing", "game_over"]


class GameStateManager:
    def __init__(self, game: "Game") -> None:
        self.game = game
        self.state: GameStatus = "initializing"
        self._results_published = False

    @property
    def is_over(self) -> bool:
        return self.state == "game_over"

    def handle(self) -> bool:
        """Run one transition. Returns False once the game is over."""
        if self.state == "initializing":
            self.go_to_waiting_for_player()
        elif self.state == "waiting_for_player":
            if self.game.is_game_over() or self.game.ended:
                self.go_to_game_over()
            else:
                self.go_to_playing()
        elif self.state == "playing":
            if self.game.is_game_over():
                self.go_to_game_over()
            else:
                self.game.process_game_turn()
                # the turn itself may have finished the game
                if self.state == "playing":
                    self.go_to_waiting_for_player()
        return not self.is_over

    def run(self, max_turns: int | None = None) -> None:
        """Drive the game until it is over, or until `max_turns` turns were played."""
        while self.handle():
            if max_turns is not None and self.game.turns_played >= max_turns and self.state != "playing":
                self.game.end_game(reason="turn_limit")

    def go_to_initializing(self) -> None:
        self.state = "initializing"
        self._results_published = False

    def go_to_waiting_for_player(self) -> None:
        self.state = "waiting_for_player"

    def go_to_playing(self) -> None:
        self.state = "playing"

    def go_to_game_over(self) -> None:
        self.state = "game_over"
        if not self._results_published:
            self._results_published = True
            self.game.publish_results()

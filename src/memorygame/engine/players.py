from __future__ import annotations

import random
import time
import weakref
from typing import Callable, Protocol

from .actions import (
    CancelSelection,
    Move,
    RequestEnd,
    RequestHelp,
    RequestUndo,
    SelectCard,
    TurnResult,
)
from .ai import DifficultyStrategy, difficulty_for
from .board import Board
from .commands import FlipCommand
from .mediator import Event, GameMediator
from .types import ConfigError, Position

COMPUTER_MAX_ATTEMPTS = 20


class MoveSource(Protocol):
    """Supplies a human player's moves, one request at a time.

    `pending` is the first card of the turn once it has been turned over.
    """

    def next_move(self, player: "HumanPlayer", pending: Position | None) -> Move: ...


class Player:
    kind = "player"

    def __init__(self, name: str, board: Board) -> None:
        self.name = name
        self.score = 0
        self.board = board
        self._mediator: weakref.ReferenceType[GameMediator] | None = None

    def set_mediator(self, mediator: GameMediator) -> None:
        self._mediator = weakref.ref(mediator)

    def publish(self, event: Event) -> None:
        mediator = self._mediator() if self._mediator is not None else None
        if mediator is not None:
            mediator.publish(event)

    def add_score(self, points: int) -> None:
        self.score += points

    def play_turn(self) -> TurnResult:
        raise NotImplementedError

    def reset(self) -> None:
        self.score = 0

    def _flip(self, pos: Position) -> FlipCommand:
        card = self.board.card_at(pos)
        assert card is not None
        cmd = FlipCommand(card)
        cmd.execute()
        self.publish(
            {"type": "CARD_FLIPPED", "player": self.name, "position": list(pos), "card_id": card.id}
        )
        return cmd

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, score={self.score})"


class HumanPlayer(Player):
    kind = "human"

    def __init__(self, name: str, board: Board, source: MoveSource) -> None:
        super().__init__(name, board)
        self.source = source

    def play_turn(self) -> TurnResult:
        first: Position | None = None
        first_cmd: FlipCommand | None = None

        def drop_pending() -> None:
            if first_cmd is not None:
                first_cmd.undo()

        while True:
            move = self.source.next_move(self, first)

            if isinstance(move, RequestEnd):
                drop_pending()
                return TurnResult.no_action("end")
            if isinstance(move, RequestUndo):
                drop_pending()
                return TurnResult.no_action("undo")
            if isinstance(move, RequestHelp):
                drop_pending()
                return TurnResult.no_action("help")
            if isinstance(move, CancelSelection):
                if first is not None:
                    drop_pending()
                    self.publish({"type": "SELECTION_CANCELLED", "player": self.name, "position": list(first)})
                    first, first_cmd = None, None
                continue
            if isinstance(move, SelectCard):
                reason = self.board.selection_error(move.position, first)
                if reason is not None:
                    self.publish(
                        {
                            "type": "MOVE_REJECTED",
                            "player": self.name,
                            "position": list(move.position),
                            "reason": reason,
                        }
                    )
                    continue
                cmd = self._flip(move.position)
                if first is None:
                    first, first_cmd = move.position, cmd
                    continue
                return TurnResult.flip(first, move.position)

            self.publish({"type": "MOVE_REJECTED", "player": self.name, "reason": "Unknown move."})


class ComputerPlayer(Player):
    kind = "computer"

    def __init__(
        self,
        name: str,
        board: Board,
        strategy: DifficultyStrategy,
        rng: random.Random,
        think_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(name, board)
        self.strategy = strategy
        self.rng = rng
        self.think_delay = think_delay
        self._sleep = sleep

    def _pause(self) -> None:
        if self.think_delay > 0:
            self._sleep(self.think_delay)

    def play_turn(self) -> TurnResult:
        if self.board.is_all_matched():
            return TurnResult.no_action()

        for _ in range(COMPUTER_MAX_ATTEMPTS):
            pair = self.strategy.select_cards(self.board, self.rng)
            if pair is None:
                break
            first, second = pair
            if self.board.selection_error(first) or self.board.selection_error(second, first):
                continue
            self._pause()
            self._flip(first)
            self._pause()
            self._flip(second)
            self._pause()
            return TurnResult.flip(first, second)

        self.publish({"type": "STRATEGY_FAILED", "player": self.name})
        return TurnResult.no_action()


def create_player(
    kind: str,
    name: str,
    board: Board,
    *,
    difficulty: int = 1,
    rng: random.Random | None = None,
    source: MoveSource | None = None,
    think_delay: float = 0.0,
) -> Player:
    kind = kind.lower()
    if kind == "human":
        if source is None:
            raise ConfigError("A human player needs a move source.")
        return HumanPlayer(name, board, source)
    if kind == "computer":
        return ComputerPlayer(
            name,
            board,
            difficulty_for(difficulty),
            rng or random.Random(),
            think_delay=think_delay,
        )
    raise ConfigError(f"Unknown player type: {kind}")

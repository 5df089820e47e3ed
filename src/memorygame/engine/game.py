from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable

from .actions import TurnResult
from .board import Board
from .commands import FlipCommand
from .mediator import Event, GameMediator
from .memento import Caretaker, Memento
from .players import MoveSource, Player, create_player
from .rules import ScoreStrategy, match_strategy_for, score_strategy_for
from .state import GameStateManager
from .types import DEFAULT_DECK, ConfigError, DeckTemplate

BOARD_PAIRS: dict[str, int] = {"small": 13, "medium": 26, "large": 52}
DEFAULT_PAIRS = 52
SEAT_COUNT = 2


def pairs_for(board_size: str) -> int:
    return BOARD_PAIRS.get(board_size.lower(), DEFAULT_PAIRS)


@dataclass(frozen=True)
class GameConfig:
    human_players: int = 1
    board_size: str = "large"
    difficulty: int = 1
    match_rule: str = "full"
    score_rule: str = "simple"
    think_delay: float = 0.0


@dataclass
class TurnOutcome:
    """What one call to `Game.process_game_turn` did, for the presentation layer."""

    player: str
    result: TurnResult
    matched: bool | None = None
    score_delta: int = 0
    next_player: str = ""
    game_over: bool = False
    events: list[Event] = field(default_factory=list)


class Game:
    def __init__(
        self,
        board: Board,
        players: Sequence[Player],
        score_strategy: ScoreStrategy,
        mediator: GameMediator | None = None,
    ) -> None:
        if not players:
            raise ConfigError("A game needs at least one player.")
        self.board = board
        self.players: list[Player] = list(players)
        self.score_strategy = score_strategy
        self.mediator = mediator or GameMediator()
        self.caretaker = Caretaker()
        self.current_player_index = 0
        self.turns_played = 0
        self.ended = False
        for p in self.players:
            p.set_mediator(self.mediator)
        self.state = GameStateManager(self)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def event_log(self) -> list[Event]:
        return self.mediator.event_log

    def publish(self, event: Event) -> None:
        self.mediator.publish(event)

    def switch_player(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)

    def is_game_over(self) -> bool:
        return self.board.is_all_matched()

    def start_game(self) -> None:
        self.publish({"type": "GAME_STARTED", "players": [p.name for p in self.players]})
        self.state.handle()

    def finish_game(self) -> None:
        self.state.go_to_game_over()

    def end_game(self, reason: str = "player_request") -> None:
        """Stop after the last completed turn; recorded matches stay undoable."""
        if self.ended:
            return
        self.ended = True
        self.publish({"type": "GAME_ENDED", "player": self.current_player.name, "reason": reason})
        self.state.go_to_game_over()

    def scores(self) -> dict[str, int]:
        return {p.name: p.score for p in self.players}

    def determine_winner(self) -> Player | None:
        if not self.players:
            return None
        best = max(p.score for p in self.players)
        leaders = [p for p in self.players if p.score == best]
        if len(leaders) != 1:
            return None
        return leaders[0]

    def publish_results(self) -> None:
        winner = self.determine_winner()
        self.publish(
            {
                "type": "GAME_OVER",
                "scores": self.scores(),
                "winner": winner.name if winner is not None else None,
                "completed": self.is_game_over(),
            }
        )

    def process_game_turn(self) -> TurnOutcome:
        if self.is_game_over():
            self.finish_game()
            return TurnOutcome(
                player=self.current_player.name,
                result=TurnResult.no_action(),
                next_player=self.current_player.name,
                game_over=True,
            )

        start = len(self.event_log)
        player = self.current_player
        result = player.play_turn()
        self.turns_played += 1

        if result.successful and result.positions is not None:
            outcome = self._resolve_pair(player, result)
        else:
            outcome = TurnOutcome(player=player.name, result=result)
            if result.action == "undo":
                self.undo_last_action()
            elif result.action == "end":
                self.end_game()
            elif result.action == "help":
                self.publish({"type": "HELP_REQUESTED", "player": player.name})

        outcome.next_player = self.current_player.name
        outcome.game_over = self.state.is_over or self.is_game_over()
        outcome.events = self.event_log[start:]
        return outcome

    def _resolve_pair(self, player: Player, result: TurnResult) -> TurnOutcome:
        assert result.positions is not None
        first_pos, second_pos = result.positions
        first = self.board.card_at(first_pos)
        second = self.board.card_at(second_pos)
        if first is None or second is None:
            self.publish({"type": "MOVE_REJECTED", "player": player.name, "reason": "Position is off the board."})
            return TurnOutcome(player=player.name, result=TurnResult.no_action())

        cards = (first, second)
        matched = self.board.match_strategy.do_cards_match(first, second)
        delta = self.score_strategy.update_score(player, matched, cards)
        player.add_score(delta)

        if matched:
            first.mark_matched()
            second.mark_matched()
            self.board.decrease_pairs()
            self.caretaker.save(
                Memento.capture(cards, (first_pos, second_pos), delta, self.current_player_index)
            )
            self.publish(
                {
                    "type": "MATCH_FOUND",
                    "player": player.name,
                    "positions": [list(first_pos), list(second_pos)],
                    "score_delta": delta,
                    "remaining_pairs": self.board.remaining_pairs,
                }
            )
        else:
            for card in cards:
                if card.is_face_up:
                    FlipCommand(card).execute()
            self.publish(
                {
                    "type": "NO_MATCH",
                    "player": player.name,
                    "positions": [list(first_pos), list(second_pos)],
                    "score_delta": delta,
                }
            )
            self.switch_player()

        self.publish({"type": "SCORES_UPDATED", "scores": self.scores(), "next_player": self.current_player.name})
        if self.is_game_over():
            self.finish_game()
        return TurnOutcome(player=player.name, result=result, matched=matched, score_delta=delta)

    def undo_last_action(self) -> bool:
        memento = self.caretaker.restore()
        if memento is None:
            self.publish({"type": "UNDO_EMPTY"})
            return False
        for snap, pos in zip(memento.cards, memento.positions):
            card = self.board.card_at(pos)
            if card is not None and card.id == snap.id:
                card.restore_face_down()
        self.board.increase_pairs()
        scorer = self.players[memento.player_index]
        scorer.add_score(-memento.score_delta)
        self.publish(
            {
                "type": "MATCH_UNDONE",
                "player": scorer.name,
                "positions": [list(p) for p in memento.positions],
                "score_delta": -memento.score_delta,
            }
        )
        return True

    def reset_game(self) -> None:
        self.board.reset_board()
        for p in self.players:
            p.reset()
        self.players.clear()
        self.caretaker.clear()
        self.mediator.clear()
        self.current_player_index = 0
        self.turns_played = 0
        self.ended = False
        self.state.go_to_initializing()


def new_game(
    config: GameConfig,
    seed: int | None = None,
    *,
    source: MoveSource | None = None,
    deck: DeckTemplate = DEFAULT_DECK,
    mediator: GameMediator | None = None,
    clock: Callable[[], float] | None = None,
) -> Game:
    """Build a ready-to-play game: shuffled board, humans first, computers filling the seats."""
    if not 0 <= config.human_players <= SEAT_COUNT:
        raise ConfigError(f"Player count must be between 0 and {SEAT_COUNT}.")

    rng = random.Random(seed)
    match_strategy = match_strategy_for(config.match_rule)
    score_strategy = score_strategy_for(config.score_rule, clock=clock)

    board = Board(pair_count=pairs_for(config.board_size), match_strategy=match_strategy, deck=deck)
    board.setup_board(rng)

    players: list[Player] = []
    for i in range(config.human_players):
        players.append(create_player("human", f"Player {i + 1}", board, source=source))
    for i in range(SEAT_COUNT - config.human_players):
        players.append(
            create_player(
                "computer",
                f"Computer {i + 1}",
                board,
                difficulty=config.difficulty,
                rng=rng,
                think_delay=config.think_delay,
            )
        )

    return Game(board, players, score_strategy, mediator=mediator)

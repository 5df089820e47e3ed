from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Mapping

from memorygame.engine.board import Board
from memorygame.engine.game import Game

HEADER = "\n".join(
    [
        "  __  __                                 ____",
        " |  \\/  | ___ _ __ ___   ___  _ __ _   _/ ___| __ _ _ __ ___   ___",
        " | |\\/| |/ _ \\ '_ ` _ \\ / _ \\| '__| | | | |  _ / _` | '_ ` _ \\ / _ \\",
        " | |  | |  __/ | | | | | (_) | |  | |_| | |_| | (_| | | | | | |  __/",
        " |_|  |_|\\___|_| |_| |_|\\___/|_|   \\__, |\\____|\\__,_|_| |_| |_|\\___|",
        "                                   |___/",
        " " + "-" * 68,
    ]
)

INSTRUCTIONS = """Instructions:

1. The game board contains a grid of face-down cards.
2. Players take turns to flip two cards.
3. If the two cards match, the player earns points and plays again.
4. If the two cards do not match, the turn passes to the next player.
5. The game ends when all cards have been matched.
6. The player with the highest score wins the game."""

HELP_TEXT = """Enter card coordinates (e.g. 1A, 2B) to flip a card.
Type 'z' to turn your first card back over and pick again.
Type 'undo' to undo the last match.
Type 'end' to end the game.
Type 'help' to see this message."""


def render_board(board: Board) -> str:
    lines = ["   " + "".join(f"  {chr(ord('A') + c)}  " for c in range(board.cols)), ""]
    for row in range(board.rows):
        cells = []
        for col in range(board.cols):
            card = board.get_card_at(row, col)
            cells.append(card.display() if card is not None else "    ")
        lines.append(f"{row + 1:>2} " + " ".join(cells))
    lines.append("")
    lines.append(f"Remaining pairs: {board.remaining_pairs}")
    return "\n".join(lines)


def render_scores(scores: Mapping[str, int]) -> str:
    ordered = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)
    return "\n".join(f"{name}: {score} points" for name, score in ordered)


def render_results(scores: Mapping[str, int], winner: str | None) -> str:
    lines = ["GAME OVER", "", render_scores(scores), ""]
    if winner is None:
        lines.append("It's a tie! No winner this time.")
    else:
        lines.append(f"Congratulations, {winner}! You are the winner!")
    return "\n".join(lines)


def clear_console() -> None:
    if os.name == "nt":
        os.system("cls")
    else:
        print("\033[H\033[2J", end="", flush=True)


@dataclass
class ConsoleView:
    """Mediator observer that turns engine events into console output."""

    game: Game
    out: Callable[[str], None] = print
    clear: Callable[[], None] | None = None
    pause: Callable[[], None] | None = None
    _handlers: dict[str, Callable[[Mapping[str, object]], None]] = field(init=False)

    def __post_init__(self) -> None:
        self._handlers = {
            "GAME_STARTED": self._on_refresh,
            "CARD_FLIPPED": self._on_refresh,
            "SELECTION_CANCELLED": self._on_refresh,
            "MOVE_REJECTED": self._on_rejected,
            "MATCH_FOUND": self._on_match,
            "NO_MATCH": self._on_no_match,
            "SCORES_UPDATED": self._on_refresh,
            "MATCH_UNDONE": self._on_undone,
            "UNDO_EMPTY": lambda e: self.out("No more actions to undo."),
            "HELP_REQUESTED": lambda e: self.out(HELP_TEXT),
            "STRATEGY_FAILED": lambda e: self.out(f"{e.get('player')} could not find a move."),
            "GAME_ENDED": lambda e: self.out("Ending the game..."),
            "GAME_OVER": self._on_game_over,
        }

    def on_event(self, event: Mapping[str, object]) -> None:
        handler = self._handlers.get(str(event.get("type")))
        if handler is not None:
            handler(event)

    def show(self) -> None:
        if self.clear is not None:
            self.clear()
        self.out(HEADER)
        self.out(render_board(self.game.board))
        self.out(render_scores(self.game.scores()))
        if self.game.players:
            self.out(f"It is now {self.game.current_player.name}'s turn.")

    def _on_refresh(self, event: Mapping[str, object]) -> None:
        self.show()

    def _on_rejected(self, event: Mapping[str, object]) -> None:
        self.out(f"Invalid move: {event.get('reason')} Please enter again:")

    def _on_match(self, event: Mapping[str, object]) -> None:
        self.out(f"Congratulations! {event.get('player')} found a match! (+{event.get('score_delta')})")
        self._wait()

    def _on_no_match(self, event: Mapping[str, object]) -> None:
        self.out("Sorry, the cards do not match.")
        self._wait()

    def _wait(self) -> None:
        if self.pause is not None:
            self.pause()

    def _on_undone(self, event: Mapping[str, object]) -> None:
        self.show()
        self.out(f"Last match undone for {event.get('player')}.")

    def _on_game_over(self, event: Mapping[str, object]) -> None:
        scores = event.get("scores")
        winner = event.get("winner")
        self.out(
            render_results(
                scores if isinstance(scores, dict) else {},
                winner if isinstance(winner, str) else None,
            )
        )

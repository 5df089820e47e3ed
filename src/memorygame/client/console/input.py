from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Sequence

from memorygame.engine.actions import (
    CancelSelection,
    Move,
    RequestEnd,
    RequestHelp,
    RequestUndo,
    SelectCard,
)
from memorygame.engine.players import HumanPlayer
from memorygame.engine.types import Position
from memorygame.services.settings import GameSettings

_COORD = re.compile(r"^(\d{1,2})([A-Z])$")

_COMMANDS: dict[str, Move] = {
    "END": RequestEnd(),
    "UNDO": RequestUndo(),
    "HELP": RequestHelp(),
    "Z": CancelSelection(),
}


def parse_position(text: str) -> Position | None:
    """`1A` -> (0, 0). Rows are 1-based, columns are letters."""
    m = _COORD.match(text.strip().upper())
    if m is None:
        return None
    row = int(m.group(1)) - 1
    col = ord(m.group(2)) - ord("A")
    if row < 0:
        return None
    return (row, col)


def parse_move(text: str) -> Move | None:
    cleaned = text.strip().upper()
    if cleaned in _COMMANDS:
        return _COMMANDS[cleaned]
    pos = parse_position(cleaned)
    if pos is None:
        return None
    return SelectCard(pos)


@dataclass
class ConsoleMoveSource:
    read: Callable[[str], str] = input
    out: Callable[[str], None] = print

    def next_move(self, player: HumanPlayer, pending: Position | None) -> Move:
        if pending is None:
            prompt = f"{player.name}, enter command or coordinates (e.g., 1A, end, undo, help): "
        else:
            prompt = "Enter the second card coordinates, or type 'z' to undo the first pick: "
        while True:
            move = parse_move(self.read(prompt))
            if move is not None:
                return move
            self.out("Invalid command or coordinates. Please enter again:")


def prompt_int(
    read: Callable[[str], str], out: Callable[[str], None], message: str, low: int, high: int
) -> int:
    while True:
        raw = read(message + " ")
        try:
            value = int(raw.strip())
        except ValueError:
            value = None
        if value is not None and low <= value <= high:
            return value
        out(f"Invalid input. Please enter a number between {low} and {high}:")


def prompt_choice(
    read: Callable[[str], str], out: Callable[[str], None], message: str, choices: Sequence[str]
) -> str:
    lowered = {c.lower(): c for c in choices}
    while True:
        raw = read(message + " ").strip().lower()
        if raw in lowered:
            return lowered[raw].lower()
        out("Invalid input. Valid options are: " + ", ".join(choices))


def prompt_for_setup(
    read: Callable[[str], str], out: Callable[[str], None], base: GameSettings
) -> GameSettings:
    out("Select the number of players:")
    out("0 - Computer vs. Computer")
    out("1 - One player vs. Computer")
    out("2 - Player vs. Player")
    humans = prompt_int(read, out, "Enter choice (0-2):", 0, 2)
    size = prompt_choice(read, out, "Choose board size (Small, Medium, Large):", ["Small", "Medium", "Large"])
    difficulty = base.difficulty
    if humans < 2:
        difficulty = prompt_int(read, out, "Enter computer difficulty level (1-Easy, 2-Medium, 3-Hard):", 1, 3)
    return GameSettings(
        human_players=humans,
        board_size=size,
        difficulty=difficulty,
        match_rule=base.match_rule,
        score_rule=base.score_rule,
        think_delay=base.think_delay,
        max_turns=base.max_turns,
        seed=base.seed,
    )


def ask_play_again(read: Callable[[str], str]) -> bool:
    return read("Play again? (Y/N): ").strip().lower() in ("y", "yes")

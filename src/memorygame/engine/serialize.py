from __future__ import annotations

from .board import Board
from .game import Game
from .players import Player
from .types import Card


def _card_to_dict(c: Card) -> dict[str, object]:
    return {
        "id": c.id,
        "rank": c.rank,
        "suit": c.suit,
        "color": c.color,
        "state": c.state.value,
        "seen": c.seen,
    }


def board_to_dict(board: Board) -> dict[str, object]:
    return {
        "rows": board.rows,
        "cols": board.cols,
        "remaining_pairs": board.remaining_pairs,
        "cards": [_card_to_dict(c) for c in board.cards],
    }


def _player_to_dict(p: Player) -> dict[str, object]:
    return {"name": p.name, "kind": p.kind, "score": p.score}


def snapshot(game: Game) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game."""
    return {
        "state": game.state.state,
        "current_player": game.current_player_index,
        "turns_played": game.turns_played,
        "undo_depth": len(game.caretaker),
        "board": board_to_dict(game.board),
        "players": [_player_to_dict(p) for p in game.players],
        "event_log": list(game.event_log),
    }

"""Headless rules engine for the memory card game.

IMPORTANT: This package must never read from stdin or print.
"""

from .actions import CancelSelection, RequestEnd, RequestHelp, RequestUndo, SelectCard, TurnResult
from .board import Board
from .game import Game, GameConfig, TurnOutcome, new_game
from .types import Card, ConfigError, FaceState, Position

__all__ = [
    "Board",
    "CancelSelection",
    "Card",
    "ConfigError",
    "FaceState",
    "Game",
    "GameConfig",
    "Position",
    "RequestEnd",
    "RequestHelp",
    "RequestUndo",
    "SelectCard",
    "TurnOutcome",
    "TurnResult",
    "new_game",
]

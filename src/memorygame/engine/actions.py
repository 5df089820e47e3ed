from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .types import Position

ActionKind = Literal["flip", "undo", "end", "help", "none"]


@dataclass(frozen=True)
class SelectCard:
    position: Position


@dataclass(frozen=True)
class CancelSelection:
    """Turn the pending first card back over and pick again."""


@dataclass(frozen=True)
class RequestUndo:
    pass


@dataclass(frozen=True)
class RequestEnd:
    pass


@dataclass(frozen=True)
class RequestHelp:
    pass


Move = SelectCard | CancelSelection | RequestUndo | RequestEnd | RequestHelp


@dataclass(frozen=True)
class TurnResult:
    successful: bool
    action: ActionKind
    positions: tuple[Position, Position] | None = None

    @staticmethod
    def flip(first: Position, second: Position) -> "TurnResult":
        return TurnResult(successful=True, action="flip", positions=(first, second))

    @staticmethod
    def no_action(action: ActionKind = "none") -> "TurnResult":
        return TurnResult(successful=False, action=action, positions=None)

    @property
    def card_indices(self) -> tuple[int, int, int, int] | None:
        """The pair flattened as row1, col1, row2, col2."""
        if self.positions is None:
            return None
        (r1, c1), (r2, c2) = self.positions
        return (r1, c1, r2, c2)

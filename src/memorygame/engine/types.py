from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

Color = Literal["Black", "Red"]

# (row, col); flat indices only exist at the board boundary
Position = tuple[int, int]


class ConfigError(ValueError):
    pass


class FaceState(str, Enum):
    FACE_DOWN = "face_down"
    FACE_UP = "face_up"
    MATCHED = "matched"

    def after_flip(self) -> "FaceState":
        if self is FaceState.FACE_DOWN:
            return FaceState.FACE_UP
        if self is FaceState.FACE_UP:
            return FaceState.FACE_DOWN
        return self

    def render(self, card: "Card") -> str:
        if self is FaceState.FACE_DOWN:
            return "[##]"
        if self is FaceState.FACE_UP:
            return f"[{card.rank}{card.suit}]"
        return "    "


@dataclass(frozen=True)
class SuitDefinition:
    symbol: str
    color: Color


@dataclass(frozen=True)
class DeckTemplate:
    """Immutable card template used to generate board pairs."""

    ranks: tuple[str, ...]
    suits: tuple[SuitDefinition, ...]
    columns: int = 13

    def faces(self) -> Sequence["CardFace"]:
        # suit-major, the order pairs are dealt in
        return [CardFace(rank=r, suit=s.symbol, color=s.color) for s in self.suits for r in self.ranks]


@dataclass(frozen=True)
class CardFace:
    rank: str
    suit: str
    color: Color


@dataclass
class Card:
    id: int
    face: CardFace
    state: FaceState = FaceState.FACE_DOWN
    seen: bool = False

    @property
    def rank(self) -> str:
        return self.face.rank

    @property
    def suit(self) -> str:
        return self.face.suit

    @property
    def color(self) -> Color:
        return self.face.color

    @property
    def is_face_up(self) -> bool:
        return self.state is FaceState.FACE_UP

    @property
    def is_matched(self) -> bool:
        return self.state is FaceState.MATCHED

    def flip(self) -> None:
        if self.state is FaceState.FACE_DOWN:
            self.seen = True
        self.state = self.state.after_flip()

    def mark_matched(self) -> None:
        if self.is_matched:
            raise ValueError(f"Card {self.id} is already matched.")
        self.state = FaceState.MATCHED

    def restore_face_down(self) -> None:
        """Undo path out of MATCHED; nothing else may leave that state."""
        self.state = FaceState.FACE_DOWN

    def display(self) -> str:
        return self.state.render(self)

    def clone(self, new_id: int) -> "Card":
        return replace(self, id=new_id, state=FaceState.FACE_DOWN, seen=False)

    def snapshot(self) -> "Card":
        return replace(self)


DEFAULT_RANKS: tuple[str, ...] = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K")
DEFAULT_SUITS: tuple[SuitDefinition, ...] = (
    SuitDefinition(symbol="♠", color="Black"),
    SuitDefinition(symbol="♥", color="Red"),
    SuitDefinition(symbol="♣", color="Black"),
    SuitDefinition(symbol="♦", color="Red"),
)
DEFAULT_DECK = DeckTemplate(ranks=DEFAULT_RANKS, suits=DEFAULT_SUITS)

from __future__ import annotations

from dataclasses import dataclass, field

from .types import Card, Position


@dataclass(frozen=True)
class Memento:
    """A successful match, detached from later board mutation."""

    cards: tuple[Card, Card]
    positions: tuple[Position, Position]
    score_delta: int
    player_index: int

    @staticmethod
    def capture(
        cards: tuple[Card, Card], positions: tuple[Position, Position], score_delta: int, player_index: int
    ) -> "Memento":
        return Memento(
            cards=(cards[0].snapshot(), cards[1].snapshot()),
            positions=positions,
            score_delta=score_delta,
            player_index=player_index,
        )


@dataclass
class Caretaker:
    _mementos: list[Memento] = field(default_factory=list)

    def save(self, memento: Memento) -> None:
        self._mementos.append(memento)

    def restore(self) -> Memento | None:
        if not self._mementos:
            return None
        return self._mementos.pop()

    def clear(self) -> None:
        self._mementos.clear()

    def __len__(self) -> int:
        return len(self._mementos)

from __future__ import annotations

from dataclasses import dataclass, field

from .types import Card


@dataclass
class FlipCommand:
    """Reversible flip of a single card. Matched cards are left alone."""

    card: Card
    was_face_up: bool = field(init=False)

    def __post_init__(self) -> None:
        self.was_face_up = self.card.is_face_up

    def execute(self) -> None:
        if not self.card.is_matched:
            self.card.flip()

    def undo(self) -> None:
        if self.card.is_matched:
            return
        if self.card.is_face_up != self.was_face_up:
            self.card.flip()

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .rules import FullMatchStrategy, MatchStrategy
from .types import DEFAULT_DECK, Card, DeckTemplate, Position


def create_pairs(pair_count: int, deck: DeckTemplate, first_id: int = 1) -> list[Card]:
    """Deal `pair_count` pairs, cycling the deck faces when more are requested.

    Each pair is an original card plus a copy carrying the next free id.
    """
    faces = deck.faces()
    if not faces:
        raise ValueError("Deck template has no faces.")
    cards: list[Card] = []
    next_id = first_id
    for i in range(pair_count):
        original = Card(id=next_id, face=faces[i % len(faces)])
        cards.append(original)
        cards.append(original.clone(next_id + 1))
        next_id += 2
    return cards


@dataclass
class Board:
    pair_count: int
    match_strategy: MatchStrategy = field(default_factory=FullMatchStrategy)
    deck: DeckTemplate = DEFAULT_DECK
    cards: list[Card] = field(default_factory=list)
    remaining_pairs: int = 0

    @property
    def cols(self) -> int:
        return self.deck.columns

    @property
    def rows(self) -> int:
        # last row may be partial when the pair count is not a column multiple
        return -(-(self.pair_count * 2) // self.cols)

    @property
    def card_count(self) -> int:
        return len(self.cards)

    def setup_board(self, rng: random.Random) -> None:
        self.cards = create_pairs(self.pair_count, self.deck)
        rng.shuffle(self.cards)
        self.remaining_pairs = self.pair_count

    def reset_board(self) -> None:
        self.cards.clear()
        self.remaining_pairs = 0

    def to_flat(self, pos: Position) -> int:
        return pos[0] * self.cols + pos[1]

    def to_position(self, index: int) -> Position:
        return divmod(index, self.cols)

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols and row * self.cols + col < len(self.cards)

    def get_card_at(self, row: int, col: int) -> Card | None:
        if not self.is_valid_position(row, col):
            return None
        return self.cards[row * self.cols + col]

    def card_at(self, pos: Position) -> Card | None:
        return self.get_card_at(pos[0], pos[1])

    def position_of(self, card_id: int) -> Position | None:
        for i, c in enumerate(self.cards):
            if c.id == card_id:
                return self.to_position(i)
        return None

    def flip_card(self, row: int, col: int) -> bool:
        card = self.get_card_at(row, col)
        if card is None:
            return False
        card.flip()
        return True

    def is_card_face_up(self, row: int, col: int) -> bool:
        card = self.get_card_at(row, col)
        return card is not None and card.is_face_up

    def selection_error(self, pos: Position, pending: Position | None = None) -> str | None:
        """Why `pos` cannot be picked now, or None when the pick is legal."""
        card = self.card_at(pos)
        if card is None:
            return "Position is off the board."
        if pending is not None and pos == pending:
            return "That card is already selected."
        if card.is_matched:
            return "That card is already matched."
        if card.is_face_up:
            return "That card is already face up."
        return None

    def is_potential_match(self, first: Position, second: Position) -> bool:
        a = self.card_at(first)
        b = self.card_at(second)
        if a is None or b is None:
            return False
        if a.is_matched or b.is_matched or a.id == b.id:
            return False
        return self.match_strategy.do_cards_match(a, b)

    def is_all_matched(self) -> bool:
        return all(c.is_matched for c in self.cards)

    def decrease_pairs(self) -> None:
        self.remaining_pairs = max(0, self.remaining_pairs - 1)

    def increase_pairs(self) -> None:
        self.remaining_pairs = min(self.pair_count, self.remaining_pairs + 1)

    def get_seen_cards(self) -> list[Position]:
        return [self.to_position(i) for i, c in enumerate(self.cards) if c.seen and not c.is_matched]

    def get_unseen_and_unmatched_positions(self) -> list[Position]:
        return [self.to_position(i) for i, c in enumerate(self.cards) if not c.seen and not c.is_matched]

    def playable_positions(self) -> list[Position]:
        """Positions a player may legally pick right now."""
        return [
            self.to_position(i) for i, c in enumerate(self.cards) if not c.is_matched and not c.is_face_up
        ]

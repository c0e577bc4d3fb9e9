"""Deck model: an ordered collection of flashcards."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from backend.config import utcnow
from backend.models.flashcard import Flashcard, new_id


@dataclass
class Deck:
    id: str
    title: str
    description: str
    created: datetime
    last_studied: datetime | None = None
    cards: list[Flashcard] = field(default_factory=list)

    @classmethod
    def new(cls, title: str, description: str = "", now: datetime | None = None) -> "Deck":
        """Create an empty deck with a generated id."""
        return cls(id=new_id(), title=title, description=description, created=now or utcnow())

    def get_card(self, card_id: str) -> Flashcard:
        """Return the card with ``card_id``.

        Raises:
            KeyError: If the deck has no such card.
        """
        for card in self.cards:
            if card.id == card_id:
                return card
        raise KeyError(card_id)

    def replace_card(self, card: Flashcard) -> "Deck":
        """Return a copy of this deck with ``card`` swapped in by id, order kept."""
        self.get_card(card.id)
        cards = [card if c.id == card.id else c for c in self.cards]
        return replace(self, cards=cards)

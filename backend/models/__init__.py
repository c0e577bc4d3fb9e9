"""Domain models for decks and flashcards."""

from backend.models.deck import Deck
from backend.models.flashcard import Flashcard

__all__ = ["Deck", "Flashcard"]

"""Due-card selection.

A card is due when it has never been reviewed or its next review instant has
arrived. Selection is a plain filter: results keep the caller's order rather
than being sorted by urgency.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Protocol, TypeVar

from backend.models.deck import Deck

logger = logging.getLogger(__name__)


class Schedulable(Protocol):
    """Anything with a ``next_review``: a bare schedule state or a Flashcard."""

    @property
    def next_review(self) -> datetime | None: ...


CardT = TypeVar("CardT", bound=Schedulable)


def is_due(card: Schedulable, now: datetime) -> bool:
    """Return True if ``card`` should be shown at ``now``.

    A card due exactly at ``now`` counts as due.
    """
    return card.next_review is None or card.next_review <= now


def due_cards(cards: Iterable[CardT], now: datetime) -> list[CardT]:
    """Return the due subset of ``cards``, preserving input order."""
    selected = [card for card in cards if is_due(card, now)]
    logger.debug("Selected %d due cards at %s", len(selected), now.isoformat())
    return selected


def count_due(cards: Iterable[Schedulable], now: datetime) -> int:
    return sum(1 for card in cards if is_due(card, now))


def deck_due_counts(decks: Sequence[Deck], now: datetime) -> dict[str, int]:
    """Return the number of due cards per deck id."""
    return {deck.id: count_due(deck.cards, now) for deck in decks}


def total_due(decks: Sequence[Deck], now: datetime) -> int:
    return sum(deck_due_counts(decks, now).values())


def next_deck_to_study(decks: Sequence[Deck], now: datetime) -> Deck | None:
    """Return the first deck (in input order) with at least one due card."""
    for deck in decks:
        if any(is_due(card, now) for card in deck.cards):
            logger.info("Next deck to study: %s (%s)", deck.title, deck.id)
            return deck
    logger.info("No deck has cards due at %s", now.isoformat())
    return None

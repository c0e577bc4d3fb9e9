"""Apply reviews to flashcards and decks."""

import logging
from dataclasses import replace
from datetime import datetime

from backend.models.deck import Deck
from backend.models.flashcard import Flashcard
from backend.srs.sm2 import ReviewScheduler, schedule

logger = logging.getLogger(__name__)


def review_card(
    card: Flashcard,
    quality: int,
    now: datetime,
    scheduler: ReviewScheduler | None = None,
) -> Flashcard:
    """Return ``card`` with its schedule advanced by one review."""
    if scheduler is None:
        new_state = schedule(card.schedule, quality, now)
    else:
        new_state = scheduler.schedule(card.schedule, quality, now)
    return card.with_schedule(new_state)


def review_deck_card(
    deck: Deck,
    card_id: str,
    quality: int,
    now: datetime,
    scheduler: ReviewScheduler | None = None,
) -> tuple[Deck, Flashcard]:
    """Review one card of a deck.

    Returns the updated deck (card replaced in place, ``last_studied`` set to
    ``now``) and the updated card.

    Raises:
        KeyError: If the deck has no card with ``card_id``.
    """
    card = review_card(deck.get_card(card_id), quality, now, scheduler)
    updated = replace(deck.replace_card(card), last_studied=now)
    logger.debug(
        "Reviewed card %s in deck %s: next review in %d days",
        card_id,
        deck.id,
        card.interval,
    )
    return updated, card

"""API routes for review scheduling and due-card selection.

The routes are stateless: callers send the current card or deck state and
store whatever comes back.
"""

import logging

from fastapi import APIRouter, HTTPException

from backend.api.schemas import (
    CardSchema,
    ChoicesResponse,
    DeckReviewRequest,
    DeckReviewResponse,
    DecksDueRequest,
    DecksDueResponse,
    DeckSchema,
    DueRequest,
    DueResponse,
    ReviewRequest,
    ReviewResponse,
    ScheduleState,
)
from backend.config import settings, utcnow
from backend.srs.quality import CHOICE_TO_QUALITY
from backend.srs.queue import deck_due_counts, due_cards, next_deck_to_study, total_due
from backend.srs.review import review_deck_card
from backend.srs.sm2 import ReviewScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/schedule", tags=["schedule"])

scheduler = ReviewScheduler.from_settings(settings)


@router.post("/review", response_model=ReviewResponse)
async def schedule_review(request: ReviewRequest) -> ReviewResponse:
    """Apply one review to a schedule state."""
    now = request.now or utcnow()
    new_state = scheduler.schedule(request.state.to_state(), request.quality, now)
    return ReviewResponse(
        state=ScheduleState.from_state(new_state),
        interval_days=new_state.interval,
        is_lapse=not scheduler.is_passing(request.quality),
    )


@router.post("/due", response_model=DueResponse)
async def schedule_due(request: DueRequest) -> DueResponse:
    """Return the due cards in input order."""
    now = request.now or utcnow()
    selected: list[CardSchema] = due_cards(request.cards, now)
    total = len(selected)
    if settings.max_due_cards > 0:
        selected = selected[: settings.max_due_cards]

    logger.info(
        "Due selection: %d of %d cards due (returning %d)",
        total,
        len(request.cards),
        len(selected),
    )
    return DueResponse(due=selected, count=len(selected), total=total)


@router.post("/deck/review", response_model=DeckReviewResponse)
async def schedule_deck_review(request: DeckReviewRequest) -> DeckReviewResponse:
    """Review one card of a deck and return the updated deck."""
    now = request.now or utcnow()
    try:
        deck, card = review_deck_card(
            request.deck.to_model(),
            request.card_id,
            request.quality,
            now,
            scheduler=scheduler,
        )
    except KeyError:
        raise HTTPException(status_code=404, detail="Card not found in deck") from None

    return DeckReviewResponse(deck=DeckSchema.from_model(deck), card=CardSchema.from_model(card))


@router.post("/decks/due", response_model=DecksDueResponse)
async def schedule_decks_due(request: DecksDueRequest) -> DecksDueResponse:
    """Summarize due cards across decks."""
    now = request.now or utcnow()
    decks = [deck.to_model() for deck in request.decks]
    counts = deck_due_counts(decks, now)
    next_deck = next_deck_to_study(decks, now)
    return DecksDueResponse(
        due_counts=counts,
        total_due=total_due(decks, now),
        next_deck_id=next_deck.id if next_deck else None,
    )


@router.get("/choices", response_model=ChoicesResponse)
async def schedule_choices() -> ChoicesResponse:
    """List the answer choices and their quality ratings."""
    return ChoicesResponse(choices={choice.value: q for choice, q in CHOICE_TO_QUALITY.items()})

"""Pydantic schemas for API request/response models."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from backend.models.deck import Deck
from backend.models.flashcard import Flashcard
from backend.srs.sm2 import DEFAULT_EASE_FACTOR, CardScheduleState


def _naive_utc(value: datetime | None) -> datetime | None:
    """Convert aware datetimes to naive UTC so they compare with ``utcnow()``."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


class TimestampedModel(BaseModel):
    """Base model that stores every datetime field as naive UTC."""

    @field_validator("*", mode="after")
    @classmethod
    def normalize_datetimes(cls, value: object) -> object:
        if isinstance(value, datetime):
            return _naive_utc(value)
        return value


# --- Cards and decks ---


class ScheduleState(TimestampedModel):
    """SM-2 scheduling fields of a card."""

    interval: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = 0
    last_review: datetime | None = None
    next_review: datetime | None = None

    def to_state(self) -> CardScheduleState:
        return CardScheduleState(
            interval=self.interval,
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            last_review=self.last_review,
            next_review=self.next_review,
        )

    @classmethod
    def from_state(cls, state: CardScheduleState) -> "ScheduleState":
        return cls(
            interval=state.interval,
            ease_factor=state.ease_factor,
            repetitions=state.repetitions,
            last_review=state.last_review,
            next_review=state.next_review,
        )


class CardSchema(TimestampedModel):
    """A flashcard as sent over the wire."""

    id: str
    front: str
    back: str
    created: datetime
    schedule: ScheduleState = Field(default_factory=ScheduleState)

    @property
    def next_review(self) -> datetime | None:
        return self.schedule.next_review

    def to_model(self) -> Flashcard:
        return Flashcard(
            id=self.id,
            front=self.front,
            back=self.back,
            created=self.created,
            schedule=self.schedule.to_state(),
        )

    @classmethod
    def from_model(cls, card: Flashcard) -> "CardSchema":
        return cls(
            id=card.id,
            front=card.front,
            back=card.back,
            created=card.created,
            schedule=ScheduleState.from_state(card.schedule),
        )


class DeckSchema(TimestampedModel):
    """A deck and its cards."""

    id: str
    title: str
    description: str = ""
    created: datetime
    last_studied: datetime | None = None
    cards: list[CardSchema] = Field(default_factory=list)

    def to_model(self) -> Deck:
        return Deck(
            id=self.id,
            title=self.title,
            description=self.description,
            created=self.created,
            last_studied=self.last_studied,
            cards=[card.to_model() for card in self.cards],
        )

    @classmethod
    def from_model(cls, deck: Deck) -> "DeckSchema":
        return cls(
            id=deck.id,
            title=deck.title,
            description=deck.description,
            created=deck.created,
            last_studied=deck.last_studied,
            cards=[CardSchema.from_model(card) for card in deck.cards],
        )


# --- Scheduling ---


class ReviewRequest(TimestampedModel):
    """Request to apply one review to a schedule state."""

    state: ScheduleState = Field(default_factory=ScheduleState)
    quality: int  # Clamped into 0-5
    now: datetime | None = None  # Defaults to the server clock


class ReviewResponse(BaseModel):
    """The next schedule state after a review."""

    state: ScheduleState
    interval_days: int
    is_lapse: bool


class DueRequest(TimestampedModel):
    """Request to select the due subset of a list of cards."""

    cards: list[CardSchema]
    now: datetime | None = None


class DueResponse(BaseModel):
    """Due cards in input order."""

    due: list[CardSchema]
    count: int
    total: int  # Due cards before any max_due_cards cap


class DeckReviewRequest(TimestampedModel):
    """Request to review one card inside a deck."""

    deck: DeckSchema
    card_id: str
    quality: int
    now: datetime | None = None


class DeckReviewResponse(BaseModel):
    """The updated deck and the reviewed card."""

    deck: DeckSchema
    card: CardSchema


class DecksDueRequest(TimestampedModel):
    """Request for due counts across decks."""

    decks: list[DeckSchema]
    now: datetime | None = None


class DecksDueResponse(BaseModel):
    """Dashboard-style due summary."""

    due_counts: dict[str, int]
    total_due: int
    next_deck_id: str | None


class ChoicesResponse(BaseModel):
    """Answer choices and the quality each one maps to."""

    choices: dict[str, int]

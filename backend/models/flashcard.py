"""Flashcard model with embedded SM-2 scheduling state."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

from backend.config import settings, utcnow
from backend.srs.sm2 import CardScheduleState


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Flashcard:
    """A single front/back card.

    Only ``schedule`` is touched by the scheduler; content and identity are
    owned by the caller.
    """

    id: str
    front: str
    back: str
    created: datetime
    schedule: CardScheduleState = field(default_factory=CardScheduleState.fresh)

    @classmethod
    def new(cls, front: str, back: str, now: datetime | None = None) -> "Flashcard":
        """Create a never-reviewed card with a generated id."""
        return cls(
            id=new_id(),
            front=front,
            back=back,
            created=now or utcnow(),
            schedule=CardScheduleState.fresh(settings.initial_ease_factor),
        )

    @property
    def interval(self) -> int:
        return self.schedule.interval

    @property
    def ease_factor(self) -> float:
        return self.schedule.ease_factor

    @property
    def repetitions(self) -> int:
        return self.schedule.repetitions

    @property
    def last_review(self) -> datetime | None:
        return self.schedule.last_review

    @property
    def next_review(self) -> datetime | None:
        return self.schedule.next_review

    def with_schedule(self, schedule: CardScheduleState) -> "Flashcard":
        """Return a copy of this card carrying ``schedule``."""
        return replace(self, schedule=schedule)

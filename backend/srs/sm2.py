"""SM-2 (SuperMemo 2) review scheduling.

Given a card's scheduling state and a recall-quality rating, compute when the
card should next be shown.

Key concepts:
- Quality (q): 0-5 recall rating. 0=total blackout, 5=perfect recall.
  Anything below 3 is a lapse.
- Ease factor (EF): per-card multiplier controlling how fast intervals grow.
  Never drops below 1.3.
- Interval: days until the next review. The first two passing reviews use
  fixed steps (1 day, 6 days); after that the previous interval is scaled by
  the updated ease factor. Intervals are capped at 100 years by default.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from backend.config import Settings

logger = logging.getLogger(__name__)

MIN_QUALITY = 0
MAX_QUALITY = 5

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
PASSING_QUALITY = 3
MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 36500  # 100 years


@dataclass(frozen=True)
class CardScheduleState:
    """The scheduling-relevant subset of a flashcard."""

    interval: int = 0  # Days until next review; 0 only before the first review
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = 0  # Consecutive passing reviews since the last lapse
    last_review: datetime | None = None
    next_review: datetime | None = None

    @classmethod
    def fresh(cls, ease_factor: float = DEFAULT_EASE_FACTOR) -> "CardScheduleState":
        """Return the state of a card that has never been reviewed."""
        return cls(interval=0, ease_factor=ease_factor, repetitions=0)

    @property
    def is_new(self) -> bool:
        return self.last_review is None


def clamp_quality(quality: int) -> int:
    """Clamp a quality rating into [0, 5]."""
    return max(MIN_QUALITY, min(MAX_QUALITY, int(quality)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    Python's ``round`` uses banker's rounding, which would turn 2.5 into 2.
    """
    return math.floor(value + 0.5)


def _add_days(moment: datetime, days: int) -> datetime:
    """Return ``moment + days``, saturating at ``datetime.max``."""
    try:
        return moment + timedelta(days=days)
    except OverflowError:
        logger.warning("Next review past %s; capping at datetime.max", moment.isoformat())
        return datetime.max


class ReviewScheduler:
    """SM-2 scheduler.

    Stateless apart from its tunables, so one instance can be shared across
    any number of cards and threads.
    """

    def __init__(
        self,
        minimum_ease_factor: float = MIN_EASE_FACTOR,
        first_interval_days: int = FIRST_INTERVAL_DAYS,
        second_interval_days: int = SECOND_INTERVAL_DAYS,
        passing_quality: int = PASSING_QUALITY,
        maximum_interval_days: int = MAX_INTERVAL_DAYS,
    ) -> None:
        self.minimum_ease_factor = max(MIN_EASE_FACTOR, minimum_ease_factor)
        self.first_interval_days = first_interval_days
        self.second_interval_days = second_interval_days
        self.passing_quality = passing_quality
        self.maximum_interval_days = max(MIN_INTERVAL_DAYS, maximum_interval_days)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReviewScheduler":
        """Build a scheduler from application settings."""
        return cls(
            minimum_ease_factor=settings.minimum_ease_factor,
            first_interval_days=settings.first_interval_days,
            second_interval_days=settings.second_interval_days,
            passing_quality=settings.passing_quality,
            maximum_interval_days=settings.maximum_interval_days,
        )

    def is_passing(self, quality: int) -> bool:
        """Return True if ``quality`` (after clamping) counts as a successful recall."""
        return clamp_quality(quality) >= self.passing_quality

    def schedule(
        self,
        state: CardScheduleState,
        quality: int,
        now: datetime,
    ) -> CardScheduleState:
        """Apply a review to a card state and return the next state.

        Args:
            state: Current scheduling state (never mutated).
            quality: Recall quality; values outside 0-5 are clamped.
            now: The review instant. The scheduler never reads the clock.

        Returns:
            A new CardScheduleState with all five fields replaced.
        """
        q = clamp_quality(quality)
        previous_interval = max(0, state.interval or 0)
        previous_reps = max(0, state.repetitions or 0)

        # Ease is updated before the interval branch: the compounding step
        # below multiplies by the *new* ease factor.
        ease_factor = self._update_ease(state.ease_factor, q)

        if not self.is_passing(q):
            repetitions = 0
            interval = MIN_INTERVAL_DAYS
            logger.info(
                "Lapse at quality %d: repetitions %d -> 0, ease %.2f -> %.2f",
                q,
                previous_reps,
                state.ease_factor,
                ease_factor,
            )
        else:
            repetitions = previous_reps + 1
            interval = self._next_interval(repetitions, previous_interval, ease_factor)

        interval = min(self.maximum_interval_days, max(MIN_INTERVAL_DAYS, interval))

        new_state = CardScheduleState(
            interval=interval,
            ease_factor=ease_factor,
            repetitions=repetitions,
            last_review=now,
            next_review=_add_days(now, interval),
        )
        logger.debug(
            "Scheduled q=%d: interval %d -> %d, reps %d -> %d, ease %.4f",
            q,
            previous_interval,
            interval,
            previous_reps,
            repetitions,
            ease_factor,
        )
        return new_state

    def _update_ease(self, ease_factor: float, quality: int) -> float:
        """EF' = EF + (0.1 - (5-q) * (0.08 + (5-q) * 0.02)), floored."""
        miss = MAX_QUALITY - quality
        return max(self.minimum_ease_factor, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))

    def _next_interval(self, repetitions: int, interval: int, ease_factor: float) -> int:
        """Pick the interval for a passing review with the new repetition count."""
        if repetitions == 1:
            return self.first_interval_days
        if repetitions == 2:
            return self.second_interval_days
        return round_half_up(interval * ease_factor)


_default_scheduler = ReviewScheduler()


def schedule(state: CardScheduleState, quality: int, now: datetime) -> CardScheduleState:
    """Schedule a review with the classical SM-2 constants."""
    return _default_scheduler.schedule(state, quality, now)


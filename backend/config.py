from datetime import UTC, datetime

from pydantic import Field
from pydantic_settings import BaseSettings


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime.

    Replaces the deprecated ``datetime.utcnow()`` while keeping datetimes
    naive so review timestamps compare cleanly with caller-supplied values.
    """
    return datetime.now(UTC).replace(tzinfo=None)


class Settings(BaseSettings):
    app_name: str = "Flashdeck SRS"
    initial_ease_factor: float = Field(default=2.5, ge=1.3)
    minimum_ease_factor: float = Field(default=1.3, ge=1.3)
    first_interval_days: int = Field(default=1, ge=1)
    second_interval_days: int = Field(default=6, ge=1)
    passing_quality: int = Field(default=3, ge=1, le=5)
    maximum_interval_days: int = Field(default=36500, ge=1)
    max_due_cards: int = 0  # 0 = no cap
    debug: bool = False

    model_config = {"env_prefix": "FLASHDECK_", "env_file": ".env"}


settings = Settings()

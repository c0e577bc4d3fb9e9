"""Mapping from the learner's answer buttons to SM-2 quality ratings."""

from enum import Enum


class AnswerChoice(Enum):
    """What the learner pressed after flipping a card."""

    DIDNT_KNOW = "didnt_know"
    HARD = "hard"
    EASY = "easy"


CHOICE_TO_QUALITY = {
    AnswerChoice.DIDNT_KNOW: 1,  # Lapse
    AnswerChoice.HARD: 3,        # Pass, ease drops
    AnswerChoice.EASY: 5,        # Pass, ease rises
}


def quality_for(choice: AnswerChoice | str) -> int:
    """Return the quality rating for an answer choice.

    Accepts the enum or its string value.

    Raises:
        ValueError: If ``choice`` is not a known answer choice.
    """
    return CHOICE_TO_QUALITY[AnswerChoice(choice)]


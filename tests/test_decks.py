"""Tests for flashcard/deck models, card reviews, and deck-level due summaries."""

from datetime import datetime, timedelta

import pytest

from backend.models import Deck, Flashcard
from backend.srs.queue import count_due, deck_due_counts, due_cards, next_deck_to_study, total_due
from backend.srs.review import review_card, review_deck_card
from backend.srs.sm2 import CardScheduleState, ReviewScheduler

NOW = datetime(2025, 3, 1, 9, 30)


def make_card(front: str, next_review: datetime | None = None) -> Flashcard:
    card = Flashcard.new(front, f"{front} (back)", now=NOW - timedelta(days=30))
    if next_review is not None:
        card = card.with_schedule(
            CardScheduleState(
                interval=1,
                repetitions=1,
                last_review=next_review - timedelta(days=1),
                next_review=next_review,
            )
        )
    return card


def make_deck(title: str, *cards: Flashcard) -> Deck:
    deck = Deck.new(title, now=NOW - timedelta(days=30))
    deck.cards.extend(cards)
    return deck


class TestModels:
    def test_new_card_is_fresh(self) -> None:
        card = Flashcard.new("hola", "hello", now=NOW)
        assert card.id
        assert card.created == NOW
        assert card.interval == 0
        assert card.ease_factor == 2.5
        assert card.repetitions == 0
        assert card.last_review is None
        assert card.next_review is None

    def test_new_ids_are_unique(self) -> None:
        assert Flashcard.new("a", "b").id != Flashcard.new("a", "b").id

    def test_with_schedule_keeps_content(self) -> None:
        card = Flashcard.new("hola", "hello", now=NOW)
        state = CardScheduleState(interval=6, ease_factor=2.6, repetitions=2)
        updated = card.with_schedule(state)
        assert updated.schedule is state
        assert (updated.id, updated.front, updated.back, updated.created) == (
            card.id,
            card.front,
            card.back,
            card.created,
        )
        assert card.repetitions == 0

    def test_new_deck(self) -> None:
        deck = Deck.new("Spanish", "Basics", now=NOW)
        assert deck.title == "Spanish"
        assert deck.description == "Basics"
        assert deck.last_studied is None
        assert deck.cards == []

    def test_get_card_unknown(self) -> None:
        deck = make_deck("Empty")
        with pytest.raises(KeyError):
            deck.get_card("missing")

    def test_replace_card_keeps_order(self) -> None:
        a, b, c = make_card("a"), make_card("b"), make_card("c")
        deck = make_deck("Letters", a, b, c)
        new_b = b.with_schedule(CardScheduleState(interval=6, repetitions=2))
        updated = deck.replace_card(new_b)
        assert [card.id for card in updated.cards] == [a.id, b.id, c.id]
        assert updated.cards[1] is new_b
        assert deck.cards[1] is b


class TestReviewCard:
    def test_review_card(self) -> None:
        card = Flashcard.new("hola", "hello", now=NOW)
        reviewed = review_card(card, 5, NOW)
        assert reviewed.id == card.id
        assert reviewed.repetitions == 1
        assert reviewed.interval == 1
        assert reviewed.last_review == NOW
        assert reviewed.next_review == NOW + timedelta(days=1)
        assert card.last_review is None

    def test_review_card_with_custom_scheduler(self) -> None:
        card = Flashcard.new("hola", "hello", now=NOW)
        reviewed = review_card(card, 5, NOW, scheduler=ReviewScheduler(first_interval_days=3))
        assert reviewed.interval == 3

    def test_review_deck_card(self) -> None:
        a, b = make_card("a"), make_card("b")
        deck = make_deck("Letters", a, b)
        updated, card = review_deck_card(deck, b.id, 2, NOW)
        assert updated.last_studied == NOW
        assert updated.cards[1] == card
        assert updated.cards[0] is a
        assert card.repetitions == 0
        assert card.interval == 1
        assert deck.last_studied is None

    def test_review_deck_card_unknown_id(self) -> None:
        deck = make_deck("Letters", make_card("a"))
        with pytest.raises(KeyError):
            review_deck_card(deck, "missing", 5, NOW)

    def test_reviewed_card_leaves_due_queue(self) -> None:
        deck = make_deck("Letters", make_card("a"), make_card("b"))
        queue = due_cards(deck.cards, NOW)
        assert len(queue) == 2

        deck, _ = review_deck_card(deck, queue[0].id, 5, NOW)
        remaining = due_cards(deck.cards, NOW)
        assert [card.id for card in remaining] == [queue[1].id]


class TestDeckDue:
    def setup_method(self) -> None:
        self.caught_up = make_deck(
            "Caught up",
            make_card("x", next_review=NOW + timedelta(days=2)),
        )
        self.mixed = make_deck(
            "Mixed",
            make_card("a", next_review=NOW - timedelta(days=1)),
            make_card("b", next_review=NOW + timedelta(days=4)),
            make_card("c"),
        )
        self.all_due = make_deck(
            "All due",
            make_card("d", next_review=NOW),
        )

    def test_due_cards_on_flashcards(self) -> None:
        due = due_cards(self.mixed.cards, NOW)
        assert [card.front for card in due] == ["a", "c"]

    def test_count_due(self) -> None:
        assert count_due(self.mixed.cards, NOW) == 2
        assert count_due(self.caught_up.cards, NOW) == 0

    def test_deck_due_counts(self) -> None:
        counts = deck_due_counts([self.caught_up, self.mixed, self.all_due], NOW)
        assert counts == {self.caught_up.id: 0, self.mixed.id: 2, self.all_due.id: 1}

    def test_total_due(self) -> None:
        assert total_due([self.caught_up, self.mixed, self.all_due], NOW) == 3
        assert total_due([], NOW) == 0

    def test_next_deck_to_study(self) -> None:
        decks = [self.caught_up, self.all_due, self.mixed]
        assert next_deck_to_study(decks, NOW) is self.all_due

    def test_next_deck_none_when_caught_up(self) -> None:
        assert next_deck_to_study([self.caught_up], NOW) is None
        assert next_deck_to_study([make_deck("Empty")], NOW) is None

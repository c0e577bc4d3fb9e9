"""CLI interface for Flashdeck SRS.

Usage:
    python -m flashdeck review --quality 4               Schedule one review of a fresh card
    python -m flashdeck review --choice hard --interval 6 --repetitions 2
    python -m flashdeck simulate 5 5 5 2 4               Run a fresh card through a sequence
    python -m flashdeck choices                          Show answer choices and their quality
"""

import argparse
import logging
from datetime import datetime

from backend.config import settings, utcnow
from backend.srs.quality import CHOICE_TO_QUALITY, AnswerChoice, quality_for
from backend.srs.sm2 import CardScheduleState, ReviewScheduler


def _review_time(args: argparse.Namespace) -> datetime:
    return args.now or utcnow()


def format_state(state: CardScheduleState) -> str:
    """One-line summary of a schedule state."""
    next_review = "-"
    if state.next_review is not None:
        next_review = state.next_review.isoformat(sep=" ", timespec="minutes")
    return (
        f"reps={state.repetitions:<3} interval={state.interval:>5}d  "
        f"ease={state.ease_factor:.2f}  next={next_review}"
    )


def cmd_review(args: argparse.Namespace) -> None:
    """Schedule a single review and print the resulting state."""
    scheduler = ReviewScheduler.from_settings(settings)
    quality = quality_for(args.choice) if args.choice else args.quality
    state = CardScheduleState(
        interval=args.interval,
        ease_factor=args.ease,
        repetitions=args.repetitions,
    )
    result = scheduler.schedule(state, quality, _review_time(args))

    outcome = "pass" if scheduler.is_passing(quality) else "lapse"
    print(f"  quality={quality} ({outcome})")
    print(f"  {format_state(result)}")


def cmd_simulate(args: argparse.Namespace) -> None:
    """Run a fresh card through a sequence of qualities.

    Each review happens on the day the previous one scheduled.
    """
    scheduler = ReviewScheduler.from_settings(settings)
    state = CardScheduleState.fresh(settings.initial_ease_factor)
    now = _review_time(args)

    print(f"\n  {'#':>3}  {'q':>2}  schedule")
    for i, quality in enumerate(args.qualities, 1):
        state = scheduler.schedule(state, quality, now)
        print(f"  {i:>3}  {quality:>2}  {format_state(state)}")
        now = state.next_review
    print()


def cmd_choices(args: argparse.Namespace) -> None:
    """Show the answer choices and the quality each maps to."""
    for choice, quality in CHOICE_TO_QUALITY.items():
        print(f"  {choice.value:<12} {quality}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashdeck",
        description="Flashdeck SM-2 review scheduler",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Review instant as ISO 8601 (default: current UTC time)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # review
    review_parser = subparsers.add_parser("review", help="Schedule one review")
    quality_group = review_parser.add_mutually_exclusive_group(required=True)
    quality_group.add_argument("-q", "--quality", type=int, help="Quality rating 0-5")
    quality_group.add_argument(
        "-c", "--choice", choices=[c.value for c in AnswerChoice], help="Answer choice"
    )
    review_parser.add_argument("--interval", type=int, default=0, help="Current interval in days")
    review_parser.add_argument(
        "--ease", type=float, default=settings.initial_ease_factor, help="Current ease factor"
    )
    review_parser.add_argument(
        "--repetitions", type=int, default=0, help="Current repetition count"
    )

    # simulate
    simulate_parser = subparsers.add_parser("simulate", help="Simulate a review history")
    simulate_parser.add_argument("qualities", type=int, nargs="+", help="Quality ratings 0-5")

    # choices
    subparsers.add_parser("choices", help="Show answer choices")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the Flashdeck CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if not args.command:
        parser.print_help()
        return

    cmd_map = {
        "review": cmd_review,
        "simulate": cmd_simulate,
        "choices": cmd_choices,
    }

    cmd_map[args.command](args)


if __name__ == "__main__":
    main()

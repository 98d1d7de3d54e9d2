"""CLI command for the route hazard quiz."""

import sys
from pathlib import Path

from ..core import Config, load_gpx_route
from ..gamification import GamificationLedger
from ..reports import HazardQuiz, load_reports_csv

CHOICE_LABELS = {
    "traffic": "Traffic hazard",
    "crime": "Crime risk",
    "disaster": "Disaster risk",
    "other": "Other",
}


def _ask(choices):
    """Prompt until the user picks one of the numbered choices."""
    while True:
        raw = input("Your answer (number): ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(choices):
            return choices[int(raw) - 1]
        print(f"   Please enter a number between 1 and {len(choices)}")


def run_quiz(args):
    """Execute the interactive hazard quiz."""
    try:
        config = Config(args.config) if args.config else Config()
        buffer_m = args.buffer if args.buffer is not None else config.get_quiz_buffer()

        route = load_gpx_route(args.gpx)
        reports = load_reports_csv(args.reports)

        quiz = HazardQuiz(
            route,
            reports,
            buffer_m=buffer_m,
            points_per_correct=config.get_points_per_correct(),
            seed=args.seed,
        )
    except FileNotFoundError as e:
        print(f"\n❌ Error: File not found: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"\n❌ Error: Invalid input: {e}", file=sys.stderr)
        return 1

    if quiz.is_empty:
        print(f"\n⚠ No hazards within {buffer_m:g} m of this route. "
              "Try another route.")
        return 0

    print("=" * 60)
    print(f"🧭 ROUTE QUIZ: {len(quiz)} hazard(s) along your route")
    print("=" * 60)

    choices = list(HazardQuiz.CHOICES)
    try:
        while not quiz.finished:
            hazard = quiz.current
            print(f"\nQuestion {quiz.index + 1} / {len(quiz)}")
            if hazard.title:
                print(f"  \"{hazard.title}\"")
            print(f"  at {hazard.latitude:.5f}, {hazard.longitude:.5f}")
            for number, choice in enumerate(choices, start=1):
                print(f"  {number}. {CHOICE_LABELS[choice]}")

            if quiz.answer(_ask(choices)):
                print("  ✓ Correct!")
            else:
                print(f"  ✗ It was: {CHOICE_LABELS.get(hazard.danger_type, hazard.danger_type)}")
    except (KeyboardInterrupt, EOFError):
        print("\n\n⚠ Quiz interrupted by user")
        return 130

    print("\n" + "=" * 60)
    print(f"🏆 {quiz.score} points! ({quiz.correct_count}/{len(quiz)} correct)")

    if args.ledger:
        ledger = GamificationLedger(points_per_level=config.get_points_per_level())
        try:
            if Path(args.ledger).exists():
                ledger.load(args.ledger)
            user = ledger.add_points(args.user, quiz.score)
            ledger.save(args.ledger)
        except (OSError, ValueError) as e:
            print(f"\n❌ Error: Could not update ledger: {e}", file=sys.stderr)
            return 1
        print(f"   {args.user}: {user.points} points in total, level {user.level}")
        print(f"✓ Ledger saved to: {args.ledger}")

    print("=" * 60)
    return 0

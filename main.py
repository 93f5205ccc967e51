"""Command line entrypoint to print outfit suggestions for a user."""

from __future__ import annotations

import argparse
import json
import sys

from closet_app.app import ClosetApp
from logic.outfit_builder import InsufficientItemsError
from logic.validation import candidate_to_payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Closet Stylist command line tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    suggest = subparsers.add_parser("suggest", help="Print ranked outfit suggestions as JSON.")
    suggest.add_argument("user_id", help="Owner of the wardrobe to draw from.")
    suggest.add_argument("--season", default=None, help="Season preference: spring, summer, fall or winter.")
    suggest.add_argument("--max", type=int, default=None, dest="max_suggestions", help="Number of suggestions.")
    suggest.add_argument("--no-accessories", action="store_true", help="Skip accessory variants.")
    args = parser.parse_args(argv)

    app = ClosetApp()
    try:
        result = app.orchestrator.generate_suggestions(
            args.user_id,
            season_preference=args.season,
            include_accessories=not args.no_accessories,
            max_suggestions=args.max_suggestions,
        )
    except InsufficientItemsError as exc:
        print(f"{exc.code}: add at least one top, bottom and pair of shoes ({', '.join(exc.missing)})", file=sys.stderr)
        return 2

    print(json.dumps([candidate_to_payload(candidate) for candidate in result.suggestions], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Print a leaderboard page from the local store as JSON.

How to run:
    python -m backend_based.tools.show_leaderboard --type degen --limit 10 --time week

Reads LEADERBOARD_DB_PATH / BASED_DB_URL / DATABASE_URL like the rest of the package.
"""

from __future__ import annotations

import argparse
import json
import sys

from backend_based.based_logging import get_logger
from backend_based.database import leaderboard

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show the Builder / Degen leaderboard.")
    parser.add_argument("--type", dest="kind", choices=sorted(leaderboard.LEADERBOARD_TYPES), default="all")
    parser.add_argument(
        "--limit",
        type=int,
        default=leaderboard.DEFAULT_LIMIT,
        help=f"Rows per page, clamped to 1..{leaderboard.MAX_LIMIT} (default: {leaderboard.DEFAULT_LIMIT})",
    )
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument("--time", dest="time_filter", choices=["day", "week", "all"], default="all")
    args = parser.parse_args(argv)

    try:
        leaderboard.init_db()
        page = leaderboard.get_leaderboard(
            kind=args.kind,
            limit=args.limit,
            offset=args.offset,
            time_filter=args.time_filter,
        )
    except Exception as e:
        logger.exception("show_leaderboard_failed", error=str(e))
        print("ERROR:", e, file=sys.stderr)
        return 1

    print(json.dumps(page, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

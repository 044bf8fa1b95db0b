"""
Classify one or more Base wallets and print the personality report as JSON.

How to run:
    From project root (with .env configured, optional):
        python -m backend_based.tools.classify_wallet 0xABC... [0xDEF ...] [--save]

Optional env vars:
    BLOCKSCOUT_API_URL, BLOCKSCOUT_API_KEY, REQUEST_TIMEOUT_SEC, BLOCKSCOUT_MAX_PAGES
    LEADERBOARD_DB_PATH or BASED_DB_URL (only with --save)

Output: one JSON object on stdout for a single address, a JSON list for several.
Exit codes: 0 ok, 1 unexpected failure, 2 malformed address.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from backend_based.analytics.analytics_pipeline import classify_async
from backend_based.analytics.blockscout_client import BlockscoutClient
from backend_based.analytics.models import WalletScore
from backend_based.analytics.personality import build_wallet_report
from backend_based.based_logging import get_logger
from backend_based.core.exceptions import InvalidAddressError
from backend_based.database import leaderboard
from backend_based.utils.wallet_utils import normalize_address

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_ADDRESS = 2


async def run(addresses: list[str]) -> list[WalletScore]:
    """Classify addresses sequentially over one shared explorer client."""
    scores = []
    async with BlockscoutClient() as client:
        for address in addresses:
            scores.append(await classify_async(address, data_source=client))
    return scores


def save_scores(scores: list[WalletScore]) -> None:
    leaderboard.init_db()
    for score in scores:
        leaderboard.record_score(score)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Classify Base wallets as Builder / Degen / Balanced / New and print the report.",
    )
    parser.add_argument("addresses", nargs="+", metavar="ADDRESS", help="0x-prefixed wallet address")
    parser.add_argument("--save", action="store_true", help="Record the scores into the leaderboard store")
    args = parser.parse_args(argv)

    try:
        addresses = [normalize_address(a) for a in args.addresses]
    except InvalidAddressError as e:
        print("ERROR:", e, file=sys.stderr)
        return EXIT_BAD_ADDRESS

    try:
        scores = asyncio.run(run(addresses))
    except Exception as e:
        logger.exception("classify_wallet_failed", error=str(e))
        print("ERROR:", e, file=sys.stderr)
        return EXIT_FAILURE

    reports: list[dict[str, Any]] = [build_wallet_report(s) for s in scores]
    payload: Any = reports[0] if len(reports) == 1 else reports
    print(json.dumps(payload, indent=2))

    if args.save:
        try:
            save_scores(scores)
        except Exception as e:
            logger.exception("classify_wallet_save_failed", error=str(e))
            print("ERROR: reports not saved:", e, file=sys.stderr)
            return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

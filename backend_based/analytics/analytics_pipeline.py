"""
Analytics pipeline: fetch -> score -> report.

classify() is the single entrypoint for the CLI and leaderboard tools. The five
explorer sub-queries run concurrently; each one that fails is logged and
treated as an empty slice, so a best-effort WalletScore always comes back.
Only a malformed address raises (InvalidAddressError, before any I/O).
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Protocol, TypeVar

from backend_based.analytics.blockscout_client import BlockscoutClient
from backend_based.analytics.models import (
    AccountSummary,
    InternalTransactionRecord,
    TokenTransferRecord,
    WalletActivity,
    WalletActivityRecord,
    WalletScore,
)
from backend_based.analytics.personality import build_wallet_report
from backend_based.analytics.price_source import PriceSource
from backend_based.analytics.wallet_classifier import score_wallet_activity
from backend_based.based_logging import get_logger
from backend_based.utils.wallet_utils import normalize_address, short_wallet

logger = get_logger(__name__)

T = TypeVar("T")


class WalletDataSource(Protocol):
    """Read-only explorer interface; BlockscoutClient is the production implementation."""

    async def get_balance(self, address: str) -> int: ...

    async def get_counters(self, address: str) -> dict[str, int]: ...

    async def get_transactions(self, address: str) -> list[WalletActivityRecord]: ...

    async def get_token_transfers(self, address: str) -> list[TokenTransferRecord]: ...

    async def get_internal_transactions(self, address: str) -> list[InternalTransactionRecord]: ...


async def _degrade(call: Awaitable[T], default: T, wallet: str, slice_name: str) -> T:
    """Await one sub-query; on any failure log it and return the empty default."""
    try:
        return await call
    except Exception as e:
        logger.warning(
            "wallet_slice_degraded",
            wallet=short_wallet(wallet),
            slice=slice_name,
            error=str(e),
            error_type=e.__class__.__name__,
        )
        return default


async def fetch_wallet_activity(address: str, source: WalletDataSource) -> WalletActivity:
    """Issue all sub-queries concurrently and bundle whatever came back."""
    balance, counters, transactions, token_transfers, internal = await asyncio.gather(
        _degrade(source.get_balance(address), 0, address, "balance"),
        _degrade(source.get_counters(address), {}, address, "counters"),
        _degrade(source.get_transactions(address), [], address, "transactions"),
        _degrade(source.get_token_transfers(address), [], address, "token_transfers"),
        _degrade(source.get_internal_transactions(address), [], address, "internal_transactions"),
    )
    summary = AccountSummary(
        balance_wei=balance,
        transactions_count=int(counters.get("transactions_count") or 0),
        token_transfers_count=int(counters.get("token_transfers_count") or 0),
    )
    return WalletActivity(
        address=address,
        summary=summary,
        transactions=list(transactions),
        token_transfers=list(token_transfers),
        internal_transactions=list(internal),
    )


async def classify_async(
    address: str,
    data_source: WalletDataSource | None = None,
    price_source: PriceSource | None = None,
) -> WalletScore:
    """
    Classify one wallet. Raises InvalidAddressError for malformed input;
    never raises for data-source trouble.
    """
    wallet = normalize_address(address)
    logger.info("wallet_classify_start", wallet=short_wallet(wallet))

    if data_source is None:
        async with BlockscoutClient() as client:
            activity = await fetch_wallet_activity(wallet, client)
    else:
        activity = await fetch_wallet_activity(wallet, data_source)

    score = score_wallet_activity(activity, price_source)
    logger.info(
        "wallet_classified",
        wallet=short_wallet(wallet),
        builder_score=score.builder_score,
        degen_score=score.degen_score,
        total_transactions=score.total_transaction_count,
        classification=score.classification.value,
    )
    return score


def classify(
    address: str,
    data_source: WalletDataSource | None = None,
    price_source: PriceSource | None = None,
) -> WalletScore:
    """Synchronous wrapper around classify_async. Not for use inside a running event loop."""
    return asyncio.run(classify_async(address, data_source=data_source, price_source=price_source))


def run_wallet_analysis(
    address: str,
    data_source: WalletDataSource | None = None,
    price_source: PriceSource | None = None,
) -> dict[str, Any]:
    """Classify and return the full personality report dict."""
    score = classify(address, data_source=data_source, price_source=price_source)
    return build_wallet_report(score)

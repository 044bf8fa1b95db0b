"""
Pytest fixtures for Based-or-Degen tests. Uses a temporary SQLite DB for the
leaderboard and an in-memory fake in place of the Blockscout explorer.
"""

from __future__ import annotations

from typing import Any

import pytest

from backend_based.analytics.models import (
    InternalTransactionRecord,
    TokenTransferRecord,
    WalletActivityRecord,
)
from backend_based.core.exceptions import DataSourceError

WALLET = "0x1234567890abcdef1234567890abcdef12345678"
OTHER = "0x9999999999999999999999999999999999999999"


def make_tx(
    sender: str | None = WALLET,
    receiver: str | None = OTHER,
    call_data: str = "0x",
    method_name: str | None = None,
    value_wei: int = 0,
    fee_wei: int = 0,
    created_contract: str | None = None,
    failed: bool = False,
    tx_types: tuple[str, ...] = (),
) -> WalletActivityRecord:
    data = call_data.lower()
    return WalletActivityRecord(
        sender=sender,
        receiver=receiver,
        selector=data[:10] if len(data) >= 10 else "",
        method_name=method_name,
        call_data=data,
        value_wei=value_wei,
        fee_wei=fee_wei,
        created_contract=created_contract,
        failed=failed,
        tx_types=frozenset(tx_types),
    )


def make_transfer(
    sender: str | None = WALLET,
    receiver: str | None = OTHER,
    symbol: str = "USDC",
    decimals: int = 6,
    raw_amount: int = 0,
) -> TokenTransferRecord:
    return TokenTransferRecord(
        sender=sender, receiver=receiver, symbol=symbol, decimals=decimals, raw_amount=raw_amount
    )


def make_internal_create(created_contract: str | None, call_type: str = "create") -> InternalTransactionRecord:
    return InternalTransactionRecord(receiver=None, call_type=call_type, created_contract=created_contract)


class FakeDataSource:
    """
    In-memory stand-in for BlockscoutClient. Slices named in `fail` raise
    DataSourceError; `calls` counts requests per slice.
    """

    def __init__(
        self,
        balance_wei: int = 0,
        counters: dict[str, int] | None = None,
        transactions: list[WalletActivityRecord] | None = None,
        token_transfers: list[TokenTransferRecord] | None = None,
        internal_transactions: list[InternalTransactionRecord] | None = None,
        fail: set[str] | frozenset[str] = frozenset(),
    ) -> None:
        self.balance_wei = balance_wei
        self.counters = counters or {}
        self.transactions = transactions or []
        self.token_transfers = token_transfers or []
        self.internal_transactions = internal_transactions or []
        self.fail = set(fail)
        self.calls: dict[str, int] = {}
        self.closed = False

    def _hit(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.fail:
            raise DataSourceError(f"/addresses/x/{name}", "HTTP 503")

    async def get_balance(self, address: str) -> int:
        self._hit("balance")
        return self.balance_wei

    async def get_counters(self, address: str) -> dict[str, int]:
        self._hit("counters")
        return dict(self.counters)

    async def get_transactions(self, address: str) -> list[WalletActivityRecord]:
        self._hit("transactions")
        return list(self.transactions)

    async def get_token_transfers(self, address: str) -> list[TokenTransferRecord]:
        self._hit("token_transfers")
        return list(self.token_transfers)

    async def get_internal_transactions(self, address: str) -> list[InternalTransactionRecord]:
        self._hit("internal_transactions")
        return list(self.internal_transactions)

    async def __aenter__(self) -> "FakeDataSource":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.closed = True


ALL_SLICES = frozenset({"balance", "counters", "transactions", "token_transfers", "internal_transactions"})


@pytest.fixture
def leaderboard_db(tmp_path, monkeypatch):
    """
    Point the leaderboard store at a temporary SQLite DB and init tables.
    Resets engine cache so each test gets a fresh DB. Unset DB URLs so we use SQLite.
    """
    monkeypatch.delenv("BASED_DB_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LEADERBOARD_MAX_ENTRIES", raising=False)
    monkeypatch.setenv("LEADERBOARD_DB_PATH", str(tmp_path / "leaderboard.db"))

    import backend_based.database.leaderboard as db

    db.reset_engine_for_test()
    db.init_db()
    yield db
    db.reset_engine_for_test()


@pytest.fixture
def fake_source():
    return FakeDataSource()


@pytest.fixture
def failing_source():
    """Every sub-query raises."""
    return FakeDataSource(fail=ALL_SLICES)

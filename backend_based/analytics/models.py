"""
Data models for classifier input and output.

Input records mirror the Blockscout v2 REST items they are built from
(from_api_item classmethods); WalletScore is the classifier result and
to_dict() is its JSON encoding (camelCase keys, as consumed by callers).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

WEI_PER_ETH = 10**18
SELECTOR_LEN = 10  # "0x" + 4 bytes hex


class Classification(str, Enum):
    """Categorical wallet label."""

    NEW = "New"
    BALANCED = "Balanced"
    BUILDER = "Builder"
    DEGEN = "Degen"


def _hash_of(entry: Any) -> str | None:
    """Explorer address fields are {"hash": "0x..."} objects or null."""
    if isinstance(entry, dict):
        entry = entry.get("hash")
    if isinstance(entry, str) and entry.strip():
        return entry.strip().lower()
    return None


def _int_of(raw: Any) -> int:
    if raw is None or raw == "":
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError):
        try:
            return int(float(raw))
        except (TypeError, ValueError):
            return 0


def method_selector(call_data: str | None) -> str:
    """First 4 bytes of call data as 0x-prefixed lower-case hex; "" when absent."""
    data = (call_data or "").strip().lower()
    if not data.startswith("0x") or len(data) < SELECTOR_LEN:
        return ""
    return data[:SELECTOR_LEN]


@dataclass(frozen=True)
class WalletActivityRecord:
    """One transaction touching the wallet."""

    sender: str | None
    receiver: str | None  # None signifies contract deployment
    selector: str
    method_name: str | None
    call_data: str
    value_wei: int
    fee_wei: int
    created_contract: str | None
    failed: bool = False
    tx_types: frozenset[str] = frozenset()

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "WalletActivityRecord":
        """Build from a /addresses/{a}/transactions item."""
        raw_input = item.get("raw_input") or item.get("input") or ""
        fee = item.get("fee")
        fee_value = fee.get("value") if isinstance(fee, dict) else fee
        types = item.get("transaction_types") or item.get("tx_types") or []
        method = item.get("method")
        return cls(
            sender=_hash_of(item.get("from")),
            receiver=_hash_of(item.get("to")),
            selector=method_selector(raw_input),
            method_name=method.strip() if isinstance(method, str) and method.strip() else None,
            call_data=str(raw_input).lower(),
            value_wei=_int_of(item.get("value")),
            fee_wei=_int_of(fee_value),
            created_contract=_hash_of(item.get("created_contract")),
            failed=item.get("status") == "error",
            tx_types=frozenset(str(t) for t in types if t),
        )


@dataclass(frozen=True)
class TokenTransferRecord:
    sender: str | None
    receiver: str | None
    symbol: str
    decimals: int
    raw_amount: int

    @property
    def amount(self) -> float:
        """Amount scaled by the token's declared decimals."""
        if self.decimals <= 0:
            return float(self.raw_amount)
        return self.raw_amount / (10**self.decimals)

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "TokenTransferRecord":
        """Build from a /addresses/{a}/token-transfers item."""
        token = item.get("token") or {}
        total = item.get("total") or {}
        decimals = total.get("decimals") if isinstance(total, dict) else None
        if decimals is None:
            decimals = token.get("decimals")
        raw = total.get("value") if isinstance(total, dict) else None
        return cls(
            sender=_hash_of(item.get("from")),
            receiver=_hash_of(item.get("to")),
            symbol=str(token.get("symbol") or "").strip().upper(),
            decimals=_int_of(decimals),
            raw_amount=_int_of(raw),
        )


@dataclass(frozen=True)
class InternalTransactionRecord:
    receiver: str | None
    call_type: str
    created_contract: str | None

    @property
    def is_create(self) -> bool:
        return self.call_type in ("create", "create2")

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "InternalTransactionRecord":
        """Build from a /addresses/{a}/internal-transactions item."""
        return cls(
            receiver=_hash_of(item.get("to")),
            call_type=str(item.get("type") or item.get("call_type") or "").strip().lower(),
            created_contract=_hash_of(item.get("created_contract")),
        )


@dataclass(frozen=True)
class AccountSummary:
    balance_wei: int = 0
    transactions_count: int = 0
    token_transfers_count: int = 0


@dataclass
class WalletActivity:
    """Everything fetched for one address; empty slices when a sub-query failed."""

    address: str
    summary: AccountSummary = field(default_factory=AccountSummary)
    transactions: list[WalletActivityRecord] = field(default_factory=list)
    token_transfers: list[TokenTransferRecord] = field(default_factory=list)
    internal_transactions: list[InternalTransactionRecord] = field(default_factory=list)


def format_eth(balance_wei: int) -> str:
    """Wei as a decimal ETH string without float rounding ("1.5", "0")."""
    whole, frac = divmod(max(0, balance_wei), WEI_PER_ETH)
    if frac == 0:
        return str(whole)
    return f"{whole}.{frac:018d}".rstrip("0")


@dataclass
class WalletScore:
    """Classifier result for one address."""

    address: str
    builder_score: int = 0
    degen_score: int = 0
    contracts_deployed: int = 0
    token_transfer_count: int = 0
    total_transaction_count: int = 0
    eth_balance: str = "0"
    total_volume_usd: float = 0.0
    top_dapp: str = "None"
    top_dapp_interactions: int = 0
    classification: Classification = Classification.NEW

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "builderScore": self.builder_score,
            "degenScore": self.degen_score,
            "contractsDeployed": self.contracts_deployed,
            "tokenTransferCount": self.token_transfer_count,
            "totalTransactionCount": self.total_transaction_count,
            "ethBalance": self.eth_balance,
            "totalVolumeUSD": self.total_volume_usd,
            "topDapp": self.top_dapp,
            "topDappInteractions": self.top_dapp_interactions,
            "classification": self.classification.value,
        }

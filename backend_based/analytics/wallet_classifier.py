"""
Builder/Degen classification from fetched wallet activity.

score_wallet_activity() reduces one WalletActivity into a WalletScore in a
single pass with request-local accumulators; classify_scores() maps the final
scores to a Classification. Both are pure: no I/O, no module state.

Per-transaction precedence: deployment -> DEX exclusion -> known dApp
tracking -> degen-signal call -> factory heuristic -> generic contract call.
Token transfers, internal creates and bulk-activity bonuses are separate passes.
"""

from __future__ import annotations

from backend_based.analytics.models import (
    WEI_PER_ETH,
    Classification,
    WalletActivity,
    WalletActivityRecord,
    WalletScore,
    format_eth,
)
from backend_based.analytics.price_source import FixedPriceSource, PriceSource
from backend_based.analytics.rules import (
    CLASSIFICATION_RATIO,
    COIN_TRANSFER_TAG,
    CONTRACT_CALL_TAG,
    CONTRACT_CALL_WEIGHT,
    DEGEN_SELECTOR_WEIGHTS,
    DEPLOY_WEIGHT,
    DEX_ROUTERS,
    DEX_SELECTORS,
    DUST_THRESHOLD_ETH,
    FACTORY_CALLDATA_PREFIXES,
    KNOWN_DAPPS,
    MINT_METHOD_KEYWORDS,
    MINT_WEIGHT,
    SWAP_METHOD_KEYWORDS,
    SWAP_WEIGHT,
    TOKEN_RECEIVED_WEIGHT,
    TOKEN_SENT_WEIGHT,
    TOKEN_TRANSFER_DEGEN_BONUSES,
    TX_COUNT_BUILDER_BONUSES,
)
from backend_based.based_logging import get_logger
from backend_based.utils.wallet_utils import short_wallet

logger = get_logger(__name__)

NO_DAPP = "None"


def classify_scores(
    builder_score: int,
    degen_score: int,
    total_transaction_count: int,
    contracts_deployed: int,
) -> Classification:
    """
    Map final scores to a label. Order of checks matters; first match wins.

    New when the wallet has no transactions; Balanced when nothing scored;
    Builder needs a 1.5x lead and at least one deployment; Degen needs a 1.5x lead.
    """
    if total_transaction_count == 0:
        return Classification.NEW
    if builder_score == 0 and degen_score == 0:
        return Classification.BALANCED
    if builder_score >= degen_score * CLASSIFICATION_RATIO and contracts_deployed > 0:
        return Classification.BUILDER
    if degen_score >= builder_score * CLASSIFICATION_RATIO:
        return Classification.DEGEN
    return Classification.BALANCED


def is_dex_interaction(tx: WalletActivityRecord) -> bool:
    return (tx.receiver or "") in DEX_ROUTERS or tx.selector in DEX_SELECTORS


def degen_call_weight(tx: WalletActivityRecord) -> int:
    """Weight of an application-level call: selector table first, then decoded method name."""
    weight = DEGEN_SELECTOR_WEIGHTS.get(tx.selector)
    if weight:
        return weight
    name = (tx.method_name or "").lower()
    if not name or name.startswith("0x"):
        return 0
    if any(k in name for k in SWAP_METHOD_KEYWORDS):
        return SWAP_WEIGHT
    if any(k in name for k in MINT_METHOD_KEYWORDS):
        return MINT_WEIGHT
    return 0


def is_factory_call(tx: WalletActivityRecord) -> bool:
    return tx.call_data.startswith(FACTORY_CALLDATA_PREFIXES)


def _native_volume_usd(tx: WalletActivityRecord, outgoing: bool, eth_price_usd: float) -> float:
    """Moved value (not for reverted tx) plus the fee when this wallet paid it."""
    usd = 0.0
    value_eth = tx.value_wei / WEI_PER_ETH
    if not tx.failed and value_eth > DUST_THRESHOLD_ETH:
        usd += value_eth * eth_price_usd
    if outgoing:
        usd += (tx.fee_wei / WEI_PER_ETH) * eth_price_usd
    return usd


def _bulk_bonus(count: int, tiers: tuple[tuple[int, int], ...]) -> int:
    return sum(bonus for threshold, bonus in tiers if count > threshold)


def score_wallet_activity(
    activity: WalletActivity,
    price_source: PriceSource | None = None,
) -> WalletScore:
    """
    Reduce fetched activity to a WalletScore.

    activity.address must already be lower-cased. Scores only ever increase
    during the pass. Empty activity yields an all-default score labelled New.
    """
    prices = price_source or FixedPriceSource()
    address = activity.address
    eth_price = prices.unit_price_usd("ETH")

    summary = activity.summary
    # Counter endpoint missing: fall back to what the list endpoints returned
    total_transactions = summary.transactions_count or len(activity.transactions)
    token_transfer_count = summary.token_transfers_count or len(activity.token_transfers)
    # Side slices (token transfers, internal creates) only score wallets with history
    active = total_transactions > 0

    builder_score = 0
    degen_score = 0
    contracts_deployed = 0
    volume_usd = 0.0
    dapp_counts: dict[str, int] = {}  # insertion order is first-seen order
    created: set[str] = set()

    for tx in activity.transactions:
        outgoing = tx.sender == address
        volume_usd += _native_volume_usd(tx, outgoing, eth_price)
        if tx.failed:
            continue

        if not tx.receiver:
            if outgoing:
                builder_score += DEPLOY_WEIGHT
                contracts_deployed += 1
                if tx.created_contract:
                    created.add(tx.created_contract)
            continue

        if is_dex_interaction(tx):
            continue

        dapp = KNOWN_DAPPS.get(tx.receiver)
        if dapp:
            dapp_counts[dapp] = dapp_counts.get(dapp, 0) + 1

        if not outgoing:
            continue

        weight = degen_call_weight(tx)
        if weight:
            degen_score += weight
            continue

        if is_factory_call(tx):
            builder_score += DEPLOY_WEIGHT
            continue

        if CONTRACT_CALL_TAG in tx.tx_types and COIN_TRANSFER_TAG not in tx.tx_types:
            degen_score += CONTRACT_CALL_WEIGHT

    for itx in activity.internal_transactions:
        if not active or not itx.is_create:
            continue
        if itx.created_contract and itx.created_contract in created:
            continue
        builder_score += DEPLOY_WEIGHT
        contracts_deployed += 1
        if itx.created_contract:
            created.add(itx.created_contract)

    for transfer in activity.token_transfers:
        volume_usd += transfer.amount * prices.unit_price_usd(transfer.symbol)
        if not active:
            continue
        if transfer.sender == address:
            degen_score += TOKEN_SENT_WEIGHT
        elif transfer.receiver == address:
            degen_score += TOKEN_RECEIVED_WEIGHT

    if active:
        builder_score += _bulk_bonus(total_transactions, TX_COUNT_BUILDER_BONUSES)
        degen_score += _bulk_bonus(token_transfer_count, TOKEN_TRANSFER_DEGEN_BONUSES)

    top_dapp, top_dapp_interactions = NO_DAPP, 0
    for name, count in dapp_counts.items():
        if count > top_dapp_interactions:
            top_dapp, top_dapp_interactions = name, count

    score = WalletScore(
        address=address,
        builder_score=builder_score,
        degen_score=degen_score,
        contracts_deployed=contracts_deployed,
        token_transfer_count=token_transfer_count,
        total_transaction_count=total_transactions,
        eth_balance=format_eth(summary.balance_wei),
        total_volume_usd=round(volume_usd, 2),
        top_dapp=top_dapp,
        top_dapp_interactions=top_dapp_interactions,
        classification=classify_scores(builder_score, degen_score, total_transactions, contracts_deployed),
    )
    logger.debug(
        "wallet_classifier_result",
        wallet=short_wallet(address),
        builder_score=builder_score,
        degen_score=degen_score,
        contracts_deployed=contracts_deployed,
        classification=score.classification.value,
    )
    return score

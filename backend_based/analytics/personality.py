"""
Personality and badges: display labels derived from a WalletScore.

Nothing here feeds back into scoring. Percentages round half up so a 50.5%
split reads as 51/49, matching how the numbers are shown to users.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from backend_based.analytics.models import Classification, WalletScore

PERSONALITY_NEW = "New to Base"
PERSONALITY_ULTIMATE_BUILDER = "Ultimate Builder"
PERSONALITY_BUILDER_LEANING = "Builder-Leaning"
PERSONALITY_FULL_DEGEN = "Full Degen"
PERSONALITY_DEGEN_CURIOUS = "Degen-Curious"
PERSONALITY_BALANCED = "Perfectly Balanced"

BADGE_MASTER_BUILDER = "Master Builder"
BADGE_CONTRACT_CREATOR = "Contract Creator"
BADGE_MEGA_DEGEN = "Mega Degen"
BADGE_ACTIVE_TRADER = "Active Trader"
BADGE_POWER_USER = "Power User"
BADGE_VETERAN = "Veteran"
BADGE_BALANCED = "Balanced"
BADGE_BUILDER = "Builder"
BADGE_DEGEN = "Degen"
BADGE_WHALE = "Whale"
BADGE_HIGH_ROLLER = "High Roller"
BADGE_DAPP_POWER_USER = "dApp Power User"

# (badge, predicate over (score, builder_percentage)); evaluated in this order
BADGE_RULES = (
    (BADGE_MASTER_BUILDER, lambda s, bp: s.contracts_deployed >= 10),
    (BADGE_CONTRACT_CREATOR, lambda s, bp: s.contracts_deployed >= 5),
    (BADGE_MEGA_DEGEN, lambda s, bp: s.token_transfer_count >= 100),
    (BADGE_ACTIVE_TRADER, lambda s, bp: s.token_transfer_count >= 50),
    (BADGE_POWER_USER, lambda s, bp: s.total_transaction_count >= 1000),
    (BADGE_VETERAN, lambda s, bp: s.total_transaction_count >= 500),
    (BADGE_BALANCED, lambda s, bp: abs(bp - 50) <= 10),
    (BADGE_BUILDER, lambda s, bp: s.classification == Classification.BUILDER),
    (BADGE_DEGEN, lambda s, bp: s.classification == Classification.DEGEN),
    (BADGE_WHALE, lambda s, bp: s.total_volume_usd >= 100_000),
    (BADGE_HIGH_ROLLER, lambda s, bp: s.total_volume_usd >= 10_000),
    (BADGE_DAPP_POWER_USER, lambda s, bp: s.top_dapp_interactions >= 20),
)


def builder_percentage(builder_score: int, degen_score: int) -> int:
    """round(100 * builder / total), half up; 50 when both scores are zero."""
    total = builder_score + degen_score
    if total <= 0:
        return 50
    pct = Decimal(100 * builder_score) / Decimal(total)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def derive_personality(classification: Classification, builder_pct: int) -> str:
    degen_pct = 100 - builder_pct
    if classification == Classification.NEW:
        return PERSONALITY_NEW
    if builder_pct >= 80:
        return PERSONALITY_ULTIMATE_BUILDER
    if builder_pct >= 60:
        return PERSONALITY_BUILDER_LEANING
    if degen_pct >= 80:
        return PERSONALITY_FULL_DEGEN
    if degen_pct >= 60:
        return PERSONALITY_DEGEN_CURIOUS
    return PERSONALITY_BALANCED


def derive_badges(score: WalletScore, builder_pct: int | None = None) -> list[str]:
    """All badges whose threshold the score meets; badges are independent."""
    if builder_pct is None:
        builder_pct = builder_percentage(score.builder_score, score.degen_score)
    return [badge for badge, applies in BADGE_RULES if applies(score, builder_pct)]


def build_wallet_report(score: WalletScore) -> dict[str, Any]:
    """
    JSON-ready report for the presentation layer.

    Keys: address, builderScore, degenScore, builderPercentage, degenPercentage,
    personality, classification, badges, stats{...}.
    """
    bp = builder_percentage(score.builder_score, score.degen_score)
    return {
        "address": score.address,
        "builderScore": score.builder_score,
        "degenScore": score.degen_score,
        "builderPercentage": bp,
        "degenPercentage": 100 - bp,
        "personality": derive_personality(score.classification, bp),
        "classification": score.classification.value,
        "badges": derive_badges(score, bp),
        "stats": {
            "totalTransactions": score.total_transaction_count,
            "contractsDeployed": score.contracts_deployed,
            "tokenTransfers": score.token_transfer_count,
            "totalVolumeUSD": score.total_volume_usd,
            "ethBalance": score.eth_balance,
            "topDapp": score.top_dapp,
            "topDappInteractions": score.top_dapp_interactions,
        },
    }

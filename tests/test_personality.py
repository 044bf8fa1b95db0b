"""
Pytest tests for personality labels, badges and the wallet report.
"""

from __future__ import annotations

from backend_based.analytics.models import Classification, WalletScore
from backend_based.analytics.personality import (
    BADGE_ACTIVE_TRADER,
    BADGE_BALANCED,
    BADGE_BUILDER,
    BADGE_CONTRACT_CREATOR,
    BADGE_DAPP_POWER_USER,
    BADGE_DEGEN,
    BADGE_HIGH_ROLLER,
    BADGE_MASTER_BUILDER,
    BADGE_MEGA_DEGEN,
    BADGE_POWER_USER,
    BADGE_VETERAN,
    BADGE_WHALE,
    PERSONALITY_BALANCED,
    PERSONALITY_BUILDER_LEANING,
    PERSONALITY_DEGEN_CURIOUS,
    PERSONALITY_FULL_DEGEN,
    PERSONALITY_NEW,
    PERSONALITY_ULTIMATE_BUILDER,
    build_wallet_report,
    builder_percentage,
    derive_badges,
    derive_personality,
)

ADDR = "0x1234567890abcdef1234567890abcdef12345678"


def _score(**kwargs) -> WalletScore:
    kwargs.setdefault("address", ADDR)
    return WalletScore(**kwargs)


def test_builder_percentage_rounding():
    assert builder_percentage(0, 0) == 50
    assert builder_percentage(10, 0) == 100
    assert builder_percentage(1, 1) == 50
    assert builder_percentage(2, 1) == 67
    # 101/200 = 50.5 rounds half up
    assert builder_percentage(101, 99) == 51
    assert builder_percentage(1, 2) == 33


def test_personality_thresholds():
    assert derive_personality(Classification.NEW, 100) == PERSONALITY_NEW
    assert derive_personality(Classification.BUILDER, 80) == PERSONALITY_ULTIMATE_BUILDER
    assert derive_personality(Classification.BUILDER, 79) == PERSONALITY_BUILDER_LEANING
    assert derive_personality(Classification.BALANCED, 60) == PERSONALITY_BUILDER_LEANING
    assert derive_personality(Classification.DEGEN, 20) == PERSONALITY_FULL_DEGEN
    assert derive_personality(Classification.DEGEN, 40) == PERSONALITY_DEGEN_CURIOUS
    assert derive_personality(Classification.BALANCED, 59) == PERSONALITY_BALANCED
    assert derive_personality(Classification.BALANCED, 41) == PERSONALITY_BALANCED


def test_master_builder_and_contract_creator_thresholds():
    ten = derive_badges(_score(contracts_deployed=10, builder_score=100))
    assert BADGE_MASTER_BUILDER in ten
    assert BADGE_CONTRACT_CREATOR in ten

    five = derive_badges(_score(contracts_deployed=5, builder_score=50))
    assert BADGE_MASTER_BUILDER not in five
    assert BADGE_CONTRACT_CREATOR in five

    four = derive_badges(_score(contracts_deployed=4, builder_score=40))
    assert BADGE_MASTER_BUILDER not in four
    assert BADGE_CONTRACT_CREATOR not in four


def test_activity_and_volume_badges():
    badges = derive_badges(
        _score(
            token_transfer_count=120,
            total_transaction_count=1200,
            total_volume_usd=150_000.0,
            top_dapp="Zora",
            top_dapp_interactions=20,
            degen_score=50,
            classification=Classification.DEGEN,
        )
    )
    for badge in (
        BADGE_MEGA_DEGEN,
        BADGE_ACTIVE_TRADER,
        BADGE_POWER_USER,
        BADGE_VETERAN,
        BADGE_WHALE,
        BADGE_HIGH_ROLLER,
        BADGE_DAPP_POWER_USER,
        BADGE_DEGEN,
    ):
        assert badge in badges
    assert BADGE_BUILDER not in badges
    assert BADGE_BALANCED not in badges


def test_badges_keep_table_order():
    badges = derive_badges(
        _score(contracts_deployed=12, builder_score=10, degen_score=10, classification=Classification.BUILDER)
    )
    assert badges == [BADGE_MASTER_BUILDER, BADGE_CONTRACT_CREATOR, BADGE_BALANCED, BADGE_BUILDER]


def test_new_wallet_report():
    report = build_wallet_report(_score())
    assert report["classification"] == "New"
    assert report["personality"] == PERSONALITY_NEW
    assert report["builderPercentage"] == 50
    assert report["degenPercentage"] == 50
    # 50/50 split earns Balanced even with no activity
    assert report["badges"] == [BADGE_BALANCED]
    assert report["stats"]["topDapp"] == "None"


def test_report_shape():
    score = _score(
        builder_score=30,
        degen_score=5,
        contracts_deployed=3,
        token_transfer_count=4,
        total_transaction_count=12,
        eth_balance="1.5",
        total_volume_usd=42.5,
        top_dapp="Zora",
        top_dapp_interactions=2,
        classification=Classification.BUILDER,
    )
    report = build_wallet_report(score)
    assert report["address"] == ADDR
    assert report["builderScore"] == 30
    assert report["degenScore"] == 5
    assert report["builderPercentage"] == 86
    assert report["degenPercentage"] == 14
    assert report["personality"] == PERSONALITY_ULTIMATE_BUILDER
    assert report["stats"] == {
        "totalTransactions": 12,
        "contractsDeployed": 3,
        "tokenTransfers": 4,
        "totalVolumeUSD": 42.5,
        "ethBalance": "1.5",
        "topDapp": "Zora",
        "topDappInteractions": 2,
    }

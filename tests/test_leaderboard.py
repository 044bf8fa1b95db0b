"""
Pytest tests for the leaderboard store (temporary SQLite DB via conftest).
"""

from __future__ import annotations

import pytest

from backend_based.analytics.models import Classification, WalletScore
from backend_based.core.exceptions import InvalidAddressError

NOW = 1_700_000_000
DAY = 24 * 60 * 60


def _addr(n: int) -> str:
    return "0x" + f"{n:040x}"


def _score(n: int, builder: int = 0, degen: int = 0, deployed: int = 0) -> WalletScore:
    classification = Classification.BUILDER if deployed else Classification.DEGEN
    return WalletScore(
        address=_addr(n),
        builder_score=builder,
        degen_score=degen,
        contracts_deployed=deployed,
        total_transaction_count=1,
        classification=classification,
    )


def test_record_and_get_entry(leaderboard_db):
    stored = leaderboard_db.record_score(_score(1, builder=30, deployed=3), now=NOW)
    assert stored == {
        "address": _addr(1),
        "builderScore": 30,
        "degenScore": 0,
        "classification": "Builder",
        "contractsDeployed": 3,
        "lastUpdated": NOW,
    }
    assert leaderboard_db.get_entry(_addr(1).upper().replace("0X", "0x")) == stored
    assert leaderboard_db.get_entry(_addr(2)) is None


def test_record_is_last_write_wins(leaderboard_db):
    leaderboard_db.record_score(_score(1, builder=30, deployed=3), now=NOW)
    leaderboard_db.record_score(_score(1, degen=12), now=NOW + 5)
    entry = leaderboard_db.get_entry(_addr(1))
    assert entry["builderScore"] == 0
    assert entry["degenScore"] == 12
    assert entry["classification"] == "Degen"
    assert entry["lastUpdated"] == NOW + 5
    assert leaderboard_db.get_leaderboard(now=NOW + 5)["meta"]["totalCount"] == 1


def test_record_rejects_invalid_address(leaderboard_db):
    bad = WalletScore(address="0xnope")
    with pytest.raises(InvalidAddressError):
        leaderboard_db.record_score(bad)


def test_retention_evicts_oldest(leaderboard_db, monkeypatch):
    monkeypatch.setenv("LEADERBOARD_MAX_ENTRIES", "2")
    leaderboard_db.record_score(_score(1, builder=10, deployed=1), now=NOW)
    leaderboard_db.record_score(_score(2, builder=20, deployed=2), now=NOW + 1)
    leaderboard_db.record_score(_score(3, builder=5, deployed=1), now=NOW + 2)
    assert leaderboard_db.get_entry(_addr(1)) is None
    assert leaderboard_db.get_entry(_addr(2)) is not None
    assert leaderboard_db.get_entry(_addr(3)) is not None


def test_retention_keeps_rewritten_entry_within_same_second(leaderboard_db, monkeypatch):
    """Writes sharing a timestamp are evicted in write order, not insertion order."""
    monkeypatch.setenv("LEADERBOARD_MAX_ENTRIES", "2")
    leaderboard_db.record_score(_score(1, builder=10, deployed=1), now=NOW)
    leaderboard_db.record_score(_score(2, builder=20, deployed=2), now=NOW)
    leaderboard_db.record_score(_score(1, builder=15, deployed=1), now=NOW)
    leaderboard_db.record_score(_score(3, builder=5, deployed=1), now=NOW)
    assert leaderboard_db.get_entry(_addr(2)) is None
    assert leaderboard_db.get_entry(_addr(1))["builderScore"] == 15
    assert leaderboard_db.get_entry(_addr(3)) is not None


def test_leaderboard_ordering_by_kind(leaderboard_db):
    leaderboard_db.record_score(_score(1, builder=50, degen=1, deployed=5), now=NOW)
    leaderboard_db.record_score(_score(2, builder=5, degen=40), now=NOW)
    leaderboard_db.record_score(_score(3, builder=20, degen=10, deployed=2), now=NOW)

    builders = leaderboard_db.get_leaderboard(kind="builder", now=NOW)
    assert [r["address"] for r in builders["data"]] == [_addr(1), _addr(3), _addr(2)]

    degens = leaderboard_db.get_leaderboard(kind="degen", now=NOW)
    assert [r["address"] for r in degens["data"]] == [_addr(2), _addr(3), _addr(1)]

    everyone = leaderboard_db.get_leaderboard(kind="all", now=NOW)
    assert everyone["data"] == builders["data"]
    assert everyone["meta"]["type"] == "all"


def test_leaderboard_limit_offset_and_meta(leaderboard_db):
    for n in range(1, 6):
        leaderboard_db.record_score(_score(n, builder=n * 10, deployed=1), now=NOW)

    page = leaderboard_db.get_leaderboard(kind="builder", limit=2, offset=1, now=NOW)
    assert [r["builderScore"] for r in page["data"]] == [40, 30]
    assert page["meta"] == {
        "count": 2,
        "totalCount": 5,
        "type": "builder",
        "timeFilter": "all",
        "offset": 1,
        "limit": 2,
    }

    assert leaderboard_db.get_leaderboard(limit=500, now=NOW)["meta"]["limit"] == 100
    assert leaderboard_db.get_leaderboard(limit=0, now=NOW)["meta"]["limit"] == 1
    assert leaderboard_db.get_leaderboard(kind="whales", now=NOW)["meta"]["type"] == "all"


def test_leaderboard_time_filters(leaderboard_db):
    leaderboard_db.record_score(_score(1, builder=10, deployed=1), now=NOW - 2 * DAY)
    leaderboard_db.record_score(_score(2, builder=20, deployed=1), now=NOW - 10 * DAY)
    leaderboard_db.record_score(_score(3, builder=30, deployed=1), now=NOW - 60)

    day = leaderboard_db.get_leaderboard(time_filter="day", now=NOW)
    assert [r["address"] for r in day["data"]] == [_addr(3)]
    assert day["meta"]["timeFilter"] == "day"

    week = leaderboard_db.get_leaderboard(time_filter="week", now=NOW)
    assert {r["address"] for r in week["data"]} == {_addr(1), _addr(3)}

    all_time = leaderboard_db.get_leaderboard(time_filter="all", now=NOW)
    assert all_time["meta"]["totalCount"] == 3

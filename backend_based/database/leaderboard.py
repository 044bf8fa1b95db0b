"""
Leaderboard store: latest WalletScore per address.

Uses BASED_DB_URL or DATABASE_URL when set; otherwise SQLite
(LEADERBOARD_DB_PATH or leaderboard.db). One row per lower-cased address,
last write wins. Retention is bounded by LEADERBOARD_MAX_ENTRIES; the least
recently written rows are evicted first.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Column, Integer, String, create_engine, func
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backend_based.analytics.models import WalletScore
from backend_based.based_logging import get_logger
from backend_based.config import get_settings
from backend_based.utils.wallet_utils import normalize_address, short_wallet

logger = get_logger(__name__)

Base = declarative_base()

LEADERBOARD_TYPES = frozenset({"builder", "degen", "all"})
TIME_FILTER_WINDOWS = {"day": 24 * 60 * 60, "week": 7 * 24 * 60 * 60}
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class WalletScoreEntry(Base):
    """Cached classification result for one wallet."""

    __tablename__ = "wallet_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    address = Column(String(42), unique=True, nullable=False, index=True)
    builder_score = Column(Integer, nullable=False, default=0, index=True)
    degen_score = Column(Integer, nullable=False, default=0, index=True)
    classification = Column(String(16), nullable=False)
    contracts_deployed = Column(Integer, nullable=False, default=0)
    last_updated = Column(Integer, nullable=False, index=True)  # Unix seconds
    write_seq = Column(Integer, nullable=False, default=0, index=True)  # bumped on every write

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "builderScore": self.builder_score,
            "degenScore": self.degen_score,
            "classification": self.classification,
            "contractsDeployed": self.contracts_deployed,
            "lastUpdated": self.last_updated,
        }


# -----------------------------------------------------------------------------
# Engine and session
# -----------------------------------------------------------------------------

_engine = None
_SessionLocal: sessionmaker | None = None


def _safe_url(url: str) -> str:
    return url.split("?")[0].split("//")[-1].split("@")[-1]


def _get_engine():
    """Create or return cached engine."""
    global _engine
    if _engine is None:
        url = get_settings().database_url
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        _engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        logger.info("leaderboard_engine", url=_safe_url(url))
    return _engine


def _get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal


@contextmanager
def _session_scope() -> Iterator[Session]:
    """Context manager for a single session. Commits on success, rolls back on error."""
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine_for_test() -> None:
    """Drop the cached engine so the next call picks up a new database URL."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def init_db() -> None:
    """Create leaderboard tables if they do not exist. Safe to call on every startup."""
    try:
        Base.metadata.create_all(bind=_get_engine())
        logger.info("leaderboard_init_db", url=_safe_url(get_settings().database_url))
    except Exception as e:
        logger.exception("leaderboard_init_db_failed", error=str(e))
        raise


# -----------------------------------------------------------------------------
# Writes
# -----------------------------------------------------------------------------


def _evict_oldest(session: Session, max_entries: int) -> int:
    total = session.query(WalletScoreEntry).count()
    excess = total - max_entries
    if excess <= 0:
        return 0
    stale_ids = [
        r[0]
        for r in session.query(WalletScoreEntry.id)
        .order_by(WalletScoreEntry.write_seq.asc())
        .limit(excess)
        .all()
    ]
    session.query(WalletScoreEntry).filter(WalletScoreEntry.id.in_(stale_ids)).delete(
        synchronize_session=False
    )
    return len(stale_ids)


def record_score(score: WalletScore, now: int | None = None) -> dict[str, Any]:
    """
    Upsert the latest score for score.address and return the stored row.
    Last write wins; rows beyond LEADERBOARD_MAX_ENTRIES are evicted in write order,
    least recently written first.
    """
    address = normalize_address(score.address)
    ts = now if now is not None else int(time.time())
    max_entries = get_settings().leaderboard_max_entries
    try:
        with _session_scope() as session:
            row = session.query(WalletScoreEntry).filter(WalletScoreEntry.address == address).first()
            if row is None:
                row = WalletScoreEntry(address=address)
                session.add(row)
            row.builder_score = score.builder_score
            row.degen_score = score.degen_score
            row.classification = score.classification.value
            row.contracts_deployed = score.contracts_deployed
            row.last_updated = ts
            row.write_seq = (session.query(func.max(WalletScoreEntry.write_seq)).scalar() or 0) + 1
            session.flush()
            evicted = _evict_oldest(session, max_entries)
            stored = row.to_dict()
        logger.info(
            "leaderboard_score_recorded",
            wallet=short_wallet(address),
            builder_score=stored["builderScore"],
            degen_score=stored["degenScore"],
            evicted=evicted,
        )
        return stored
    except Exception as e:
        logger.exception("leaderboard_record_failed", wallet=short_wallet(address), error=str(e))
        raise


# -----------------------------------------------------------------------------
# Reads
# -----------------------------------------------------------------------------


def get_entry(address: str) -> dict[str, Any] | None:
    """Stored row for address (any case), or None."""
    wallet = normalize_address(address)
    try:
        with _session_scope() as session:
            row = session.query(WalletScoreEntry).filter(WalletScoreEntry.address == wallet).first()
            return row.to_dict() if row else None
    except Exception as e:
        logger.exception("leaderboard_get_entry_failed", wallet=short_wallet(wallet), error=str(e))
        raise


def _clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(int(limit), MAX_LIMIT))


def get_leaderboard(
    kind: str = "all",
    limit: int | None = DEFAULT_LIMIT,
    offset: int = 0,
    time_filter: str = "all",
    now: int | None = None,
) -> dict[str, Any]:
    """
    Ranked leaderboard page.

    kind: "builder" (builderScore desc), "degen" (degenScore desc) or "all"
    (builderScore desc). Unknown kinds read as "all". time_filter "day"/"week"
    keeps rows updated within the last 24h/7d; anything else means all time.
    Returns {"data": [...], "meta": {count, totalCount, type, timeFilter, offset, limit}}.
    """
    kind = kind if kind in LEADERBOARD_TYPES else "all"
    time_filter = time_filter if time_filter in TIME_FILTER_WINDOWS else "all"
    limit = _clamp_limit(limit)
    offset = max(0, int(offset or 0))
    ts = now if now is not None else int(time.time())

    if kind == "degen":
        order = (WalletScoreEntry.degen_score.desc(), WalletScoreEntry.builder_score.desc())
    else:
        order = (WalletScoreEntry.builder_score.desc(), WalletScoreEntry.degen_score.desc())

    try:
        with _session_scope() as session:
            q = session.query(WalletScoreEntry)
            window = TIME_FILTER_WINDOWS.get(time_filter)
            if window is not None:
                q = q.filter(WalletScoreEntry.last_updated >= ts - window)
            total_count = q.count()
            rows = q.order_by(*order, WalletScoreEntry.id.asc()).offset(offset).limit(limit).all()
            data = [r.to_dict() for r in rows]
    except Exception as e:
        logger.exception("leaderboard_query_failed", kind=kind, error=str(e))
        raise

    return {
        "data": data,
        "meta": {
            "count": len(data),
            "totalCount": total_count,
            "type": kind,
            "timeFilter": time_filter,
            "offset": offset,
            "limit": limit,
        },
    }

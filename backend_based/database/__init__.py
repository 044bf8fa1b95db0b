"""Leaderboard persistence (SQLAlchemy)."""

from backend_based.database.leaderboard import (
    get_entry,
    get_leaderboard,
    init_db,
    record_score,
)

__all__ = ["get_entry", "get_leaderboard", "init_db", "record_score"]

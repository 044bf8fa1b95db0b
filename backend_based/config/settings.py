"""
Application settings.

Collects the env getters into one typed, immutable object. The explorer client,
price source and leaderboard store take their defaults from get_settings().
"""

from __future__ import annotations

from dataclasses import dataclass

from backend_based.config import env


@dataclass(frozen=True)
class Settings:
    blockscout_api_url: str
    blockscout_api_key: str | None
    request_timeout_sec: float
    max_pages: int
    eth_price_usd: float
    fallback_token_price_usd: float
    leaderboard_max_entries: int
    database_url: str


def get_settings() -> Settings:
    """Return settings built from the current environment (and .env)."""
    return Settings(
        blockscout_api_url=env.get_blockscout_api_url(),
        blockscout_api_key=env.get_blockscout_api_key(),
        request_timeout_sec=env.get_request_timeout(),
        max_pages=env.get_max_pages(),
        eth_price_usd=env.get_eth_price_usd(),
        fallback_token_price_usd=env.get_fallback_token_price_usd(),
        leaderboard_max_entries=env.get_leaderboard_max_entries(),
        database_url=env.get_database_url(),
    )

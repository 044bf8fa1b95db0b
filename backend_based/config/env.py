"""
Environment variable loading for Based-or-Degen.

- BLOCKSCOUT_API_URL: Blockscout v2 REST root (default: Base mainnet explorer)
- BLOCKSCOUT_API_KEY: optional API key, sent as ?apikey=
- REQUEST_TIMEOUT_SEC: per-request timeout for explorer calls
- BLOCKSCOUT_MAX_PAGES: pages followed per list endpoint
- ETH_PRICE_USD / FALLBACK_TOKEN_PRICE_USD: fixed prices for volume estimation
- LEADERBOARD_MAX_ENTRIES: retention bound of the leaderboard store
- BASED_DB_URL / DATABASE_URL / LEADERBOARD_DB_PATH: leaderboard database
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# config is backend_based/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_BLOCKSCOUT_API_URL = "https://base.blockscout.com/api/v2"
DEFAULT_REQUEST_TIMEOUT_SEC = 15.0
DEFAULT_MAX_PAGES = 2
# Placeholder prices, not a price feed
DEFAULT_ETH_PRICE_USD = 3000.0
DEFAULT_FALLBACK_TOKEN_PRICE_USD = 0.01
DEFAULT_LEADERBOARD_MAX_ENTRIES = 1000
DEFAULT_SQLITE_PATH = "leaderboard.db"


def load_based_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_blockscout_api_url() -> str:
    """Explorer REST root without trailing slash."""
    load_based_env()
    url = (os.getenv("BLOCKSCOUT_API_URL") or "").strip() or DEFAULT_BLOCKSCOUT_API_URL
    return url.rstrip("/")


def get_blockscout_api_key() -> str | None:
    load_based_env()
    return (os.getenv("BLOCKSCOUT_API_KEY") or "").strip() or None


def get_request_timeout() -> float:
    load_based_env()
    return max(0.1, _float_env("REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC))


def get_max_pages() -> int:
    load_based_env()
    return max(1, _int_env("BLOCKSCOUT_MAX_PAGES", DEFAULT_MAX_PAGES))


def get_eth_price_usd() -> float:
    load_based_env()
    return _float_env("ETH_PRICE_USD", DEFAULT_ETH_PRICE_USD)


def get_fallback_token_price_usd() -> float:
    load_based_env()
    return _float_env("FALLBACK_TOKEN_PRICE_USD", DEFAULT_FALLBACK_TOKEN_PRICE_USD)


def get_leaderboard_max_entries() -> int:
    load_based_env()
    return max(1, _int_env("LEADERBOARD_MAX_ENTRIES", DEFAULT_LEADERBOARD_MAX_ENTRIES))


def get_database_url() -> str:
    """
    Return BASED_DB_URL or DATABASE_URL if set; else SQLite from LEADERBOARD_DB_PATH or default.
    """
    load_based_env()
    url = (os.getenv("BASED_DB_URL") or os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url
    path = (os.getenv("LEADERBOARD_DB_PATH") or "").strip() or DEFAULT_SQLITE_PATH
    return f"sqlite:///{path}"

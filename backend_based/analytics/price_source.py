"""
USD conversion for volume estimation.

FixedPriceSource is an approximation: stablecoins at 1.0, ETH/WETH at a
fixed unit price, everything else at a low fallback price. totalVolumeUSD
only feeds display and badges, so a live feed is not required; callers that
have one pass any object implementing PriceSource.
"""

from __future__ import annotations

from typing import Protocol

from backend_based.analytics.rules import ETH_SYMBOLS, STABLECOIN_SYMBOLS
from backend_based.config import get_settings


class PriceSource(Protocol):
    def unit_price_usd(self, symbol: str) -> float:
        """USD price of one whole token unit."""
        ...


class FixedPriceSource:
    def __init__(self, eth_price_usd: float | None = None, fallback_price_usd: float | None = None) -> None:
        settings = get_settings()
        self.eth_price_usd = settings.eth_price_usd if eth_price_usd is None else eth_price_usd
        self.fallback_price_usd = (
            settings.fallback_token_price_usd if fallback_price_usd is None else fallback_price_usd
        )

    def unit_price_usd(self, symbol: str) -> float:
        sym = (symbol or "").strip().upper()
        if sym in STABLECOIN_SYMBOLS:
            return 1.0
        if sym in ETH_SYMBOLS:
            return self.eth_price_usd
        return self.fallback_price_usd

    def __repr__(self) -> str:
        return f"FixedPriceSource(eth_price_usd={self.eth_price_usd}, fallback_price_usd={self.fallback_price_usd})"

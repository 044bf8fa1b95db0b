"""Wallet address validation utilities."""

from __future__ import annotations

import re

from backend_based.core.exceptions import InvalidAddressError

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_wallet(w: str | None) -> bool:
    """Return True if w is a 20-byte hex address (case-insensitive)."""
    return bool(w and ADDRESS_RE.match(w.strip()))


def normalize_address(w: str | None) -> str:
    """Strip and lower-case a wallet address. Raises InvalidAddressError if malformed."""
    value = (w or "").strip()
    if not is_valid_wallet(value):
        raise InvalidAddressError(value)
    return value.lower()


def short_wallet(w: str) -> str:
    """Log-friendly prefix of an address."""
    return w[:16] + "..." if len(w) > 16 else w

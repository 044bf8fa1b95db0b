"""
Application-level exceptions.

InvalidAddressError is caller-visible (bad input). DataSourceError never
leaves the classifier: each explorer sub-query catches it and degrades to an
empty slice.
"""

from __future__ import annotations


class InvalidAddressError(ValueError):
    """Wallet address is not 0x followed by 40 hex characters."""

    def __init__(self, address: str) -> None:
        self.address = address
        shown = address if len(address) <= 48 else address[:48] + "..."
        super().__init__(f"Invalid wallet address: {shown!r} (expected 0x + 40 hex chars)")


class DataSourceError(RuntimeError):
    """Explorer request failed or returned an unexpected shape."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"{endpoint}: {reason}")

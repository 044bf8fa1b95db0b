"""
Backend Based-or-Degen: wallet activity classifier for Base.

Fetches a wallet's history from a Blockscout-compatible explorer, scores it
as Builder or Degen, and derives a personality report. Modules are split
between data source, scoring rules, report derivation and leaderboard store.
"""

__version__ = "0.1.0"

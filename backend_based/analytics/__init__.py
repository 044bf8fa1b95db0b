"""
Based-or-Degen analytics: wallet activity classifier.

Modules: blockscout_client (data source), wallet_classifier (rules),
personality (labels and badges), analytics_pipeline (entrypoint).
"""

from backend_based.analytics.analytics_pipeline import classify, classify_async, run_wallet_analysis
from backend_based.analytics.models import Classification, WalletScore
from backend_based.analytics.personality import build_wallet_report
from backend_based.analytics.wallet_classifier import classify_scores, score_wallet_activity

__all__ = [
    "classify",
    "classify_async",
    "run_wallet_analysis",
    "build_wallet_report",
    "classify_scores",
    "score_wallet_activity",
    "Classification",
    "WalletScore",
]

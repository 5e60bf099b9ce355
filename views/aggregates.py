"""
aggregates.py — Summary metrics for the dashboard stat cards.

Always computed over the full dataset, never the filtered view.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable

from ingest.models import RiskAccount, RiskLevel


@dataclass(frozen=True)
class DashboardSummary:
    total_accounts: int = 0
    high_risk_accounts: int = 0
    total_flagged_transactions: float = 0
    total_suspicious_amount: float = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_summary(accounts: Iterable[RiskAccount]) -> DashboardSummary:
    accounts = list(accounts)
    return DashboardSummary(
        total_accounts=len(accounts),
        high_risk_accounts=sum(1 for a in accounts if a.risk_level is RiskLevel.HIGH),
        total_flagged_transactions=sum(a.flagged_transactions for a in accounts),
        total_suspicious_amount=sum(a.transaction_amount for a in accounts),
    )


def risk_level_counts(accounts: Iterable[RiskAccount]) -> Dict[str, int]:
    """Number of accounts per risk level, HIGH → LOW, zeros included."""
    counts = {level.value: 0 for level in RiskLevel}
    for account in accounts:
        counts[account.risk_level.value] += 1
    return counts

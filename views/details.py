"""
details.py — Per-account drill-down data: transaction history and the
flagged / suspicious / normal distribution shown in the pie chart.

Call sites depend only on ``DetailSource``; ``StaticDetailSource`` holds
illustrative tables keyed by the fallback sample's account ids and can be
swapped for a real per-account join.  A lookup miss always yields an empty
list.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Protocol, Sequence

from ingest.models import ChartSlice, Transaction, TransactionStatus, TransactionType


class DetailSource(Protocol):
    def transactions_for(self, account_id: str) -> List[Transaction]:
        ...

    def chart_for(self, account_id: str) -> List[ChartSlice]:
        ...


def _tx(id, date, type, amount, description, status, location=None) -> Transaction:
    return Transaction(
        id=id,
        date=date,
        type=TransactionType(type),
        amount=amount,
        description=description,
        status=TransactionStatus(status),
        location=location,
    )


def _distribution(flagged: int, suspicious: int, normal: int) -> List[ChartSlice]:
    return [
        ChartSlice("Flagged Transactions", flagged, "destructive"),
        ChartSlice("Suspicious Transactions", suspicious, "warning"),
        ChartSlice("Normal Transactions", normal, "primary"),
    ]


SAMPLE_TRANSACTIONS: Dict[str, List[Transaction]] = {
    "1": [
        _tx("txn-001", "2024-01-15", "DEPOSIT", 50000, "Large cash deposit", "FLAGGED", "Branch A"),
        _tx("txn-002", "2024-01-14", "TRANSFER", 25000, "International wire transfer", "SUSPICIOUS", "Online"),
        _tx("txn-003", "2024-01-13", "WITHDRAWAL", 9900, "ATM withdrawal", "FLAGGED", "ATM-123"),
        _tx("txn-004", "2024-01-12", "DEPOSIT", 15000, "Check deposit", "NORMAL", "Branch B"),
        _tx("txn-005", "2024-01-11", "TRANSFER", 30000, "Wire transfer to offshore account", "SUSPICIOUS", "Online"),
    ],
    "2": [
        _tx("txn-006", "2024-01-14", "TRANSFER", 20000, "International transfer", "FLAGGED", "Online"),
        _tx("txn-007", "2024-01-13", "DEPOSIT", 12000, "Cash deposit", "SUSPICIOUS", "Branch C"),
    ],
    "3": [
        _tx("txn-008", "2024-01-13", "TRANSFER", 10000, "Round number transfer", "FLAGGED", "Online"),
    ],
    "4": [
        _tx("txn-009", "2024-01-16", "DEPOSIT", 45000, "Structured deposit", "SUSPICIOUS", "Branch A"),
        _tx("txn-010", "2024-01-15", "TRANSFER", 75000, "Shell company transfer", "FLAGGED", "Online"),
    ],
}

SAMPLE_CHARTS: Dict[str, List[ChartSlice]] = {
    "1": _distribution(15, 8, 25),
    "2": _distribution(8, 5, 18),
    "3": _distribution(3, 2, 35),
    "4": _distribution(22, 12, 15),
}


class StaticDetailSource:
    """``DetailSource`` backed by in-memory tables keyed by account id."""

    def __init__(
        self,
        transactions: Mapping[str, Sequence[Transaction]] | None = None,
        charts: Mapping[str, Sequence[ChartSlice]] | None = None,
    ) -> None:
        self._transactions = SAMPLE_TRANSACTIONS if transactions is None else transactions
        self._charts = SAMPLE_CHARTS if charts is None else charts

    def transactions_for(self, account_id: str) -> List[Transaction]:
        return list(self._transactions.get(account_id, ()))

    def chart_for(self, account_id: str) -> List[ChartSlice]:
        return list(self._charts.get(account_id, ()))


def total_transactions(slices: Iterable[ChartSlice]) -> int:
    return sum(s.value for s in slices)

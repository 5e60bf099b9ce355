"""
models.py — Typed records shared by the loader, the views and the UI.

RiskAccount is what every dataset row becomes; Transaction and ChartSlice
only appear in the account drill-down.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class RiskLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class TransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"


class TransactionStatus(str, Enum):
    FLAGGED = "FLAGGED"
    SUSPICIOUS = "SUSPICIOUS"
    NORMAL = "NORMAL"


@dataclass(frozen=True)
class CustomerDetails:
    email: str
    phone: str
    address: str
    account_open_date: str


@dataclass(frozen=True)
class RiskAccount:
    id: str
    account_number: str
    customer_name: str
    risk_score: float
    risk_level: RiskLevel
    transaction_amount: float
    flagged_transactions: float
    last_activity: str
    suspicious_activity: Tuple[str, ...] = field(default_factory=tuple)
    customer_details: Optional[CustomerDetails] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-friendly representation (used by the exporters)."""
        data = asdict(self)
        data["risk_level"] = self.risk_level.value
        data["suspicious_activity"] = list(self.suspicious_activity)
        return data


@dataclass(frozen=True)
class Transaction:
    id: str
    date: str
    type: TransactionType
    amount: float
    description: str
    status: TransactionStatus
    location: Optional[str] = None


@dataclass(frozen=True)
class ChartSlice:
    name: str
    value: int
    fill: str

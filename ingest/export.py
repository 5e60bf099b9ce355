"""
export.py — Downloadable JSON / CSV renditions of the visible accounts.

JSON Schema
-----------
{
  "accounts": [ ... ],
  "summary": { ... },
  "filters": {"search_term": ..., "risk_level": ...}
}
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

import pandas as pd

from ingest.models import RiskAccount

ACCOUNT_TABLE_COLUMNS = [
    "ID",
    "Account",
    "Customer",
    "Risk Level",
    "Risk Score",
    "Amount",
    "Flagged Txns",
    "Last Activity",
    "Suspicious Activities",
]


def generate_report(
    accounts: Iterable[RiskAccount],
    summary: Dict[str, Any],
    search_term: str = "",
    risk_level: str = "ALL",
) -> Dict[str, Any]:
    """Build the JSON-serialisable export dictionary.

    Parameters
    ----------
    accounts : iterable of RiskAccount
        The accounts currently visible (already filtered).
    summary : dict
        Dashboard summary for the full dataset, see
        ``views.aggregates.DashboardSummary.to_dict``.
    search_term, risk_level : str
        The filter inputs that produced *accounts*.
    """
    return {
        "accounts": [a.to_dict() for a in accounts],
        "summary": dict(summary),
        "filters": {"search_term": search_term, "risk_level": risk_level},
    }


def report_to_json_string(report: Dict[str, Any], indent: int = 2) -> str:
    """Serialise the report dict to a pretty-printed JSON string."""
    return json.dumps(report, indent=indent, default=str)


def build_account_table(accounts: Iterable[RiskAccount]) -> List[Dict[str, Any]]:
    """Rows for the accounts table (Streamlit display and CSV export).

    Columns: ID, Account, Customer, Risk Level, Risk Score, Amount,
             Flagged Txns, Last Activity, Suspicious Activities
    """
    rows: List[Dict[str, Any]] = []
    for account in accounts:
        rows.append(
            {
                "ID": account.id,
                "Account": account.account_number,
                "Customer": account.customer_name,
                "Risk Level": account.risk_level.value,
                "Risk Score": account.risk_score,
                "Amount": account.transaction_amount,
                "Flagged Txns": account.flagged_transactions,
                "Last Activity": account.last_activity,
                "Suspicious Activities": "; ".join(account.suspicious_activity),
            }
        )
    return rows


def accounts_to_csv_bytes(accounts: Iterable[RiskAccount]) -> bytes:
    """CSV export of the accounts table as UTF-8 bytes."""
    df = pd.DataFrame(build_account_table(accounts), columns=ACCOUNT_TABLE_COLUMNS)
    return df.to_csv(index=False).encode("utf-8")

"""
normalizer.py — Map one raw CSV row onto a typed ``RiskAccount``.

The row is a plain ``{column: value}`` mapping as produced by the loader
(every cell read as text).  Nothing in here raises on bad data: numbers that
do not parse become 0, unknown risk levels become LOW and missing display
fields get generated placeholders.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Callable, Mapping, Optional, Tuple

import pandas as pd

from ingest.models import RiskAccount, RiskLevel


# ── Source columns ───────────────────────────────────────────────────────────
COL_ACCOUNT = "Account"
COL_CUSTOMER = "Customer_Name"
COL_RISK_SCORE = "Risk_Score"
COL_RISK_LEVEL = "Risk_Level"
COL_TOTAL_AMOUNT = "Total_Amount"
COL_TX_COUNT = "Transaction_Count"
COL_LAST_ACTIVITY = "Last_Activity"

# Ordered (column, label) table for the suspicious-activity list.
ACTIVITY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Pattern_Type", "Pattern"),
    ("Fan_Degree", "Fan Degree"),
    ("Connection_Type", "Connection"),
    ("Unique_Currencies", "Currencies"),
    ("Time_Span_Days", "Days"),
    ("Amount_Range_Ratio", "Amt Range Ratio"),
    ("Temporal_Clustering", "Temporal Clustering"),
)

EXPECTED_COLUMNS: Tuple[str, ...] = (
    COL_ACCOUNT,
    COL_CUSTOMER,
    COL_RISK_SCORE,
    COL_RISK_LEVEL,
    COL_TOTAL_AMOUNT,
    COL_TX_COUNT,
    COL_LAST_ACTIVITY,
) + tuple(col for col, _ in ACTIVITY_FIELDS)

_LEVEL_MAP = {
    "CRITICAL": RiskLevel.HIGH,
    "HIGH": RiskLevel.HIGH,
    "MEDIUM": RiskLevel.MEDIUM,
    "LOW": RiskLevel.LOW,
}


# ── Field coercion ───────────────────────────────────────────────────────────

def _text(value: Any) -> Optional[str]:
    """Return the cell as stripped text, or ``None`` when it is blank/NaN."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return None
    text = str(value).strip()
    return text or None


def safe_number(value: Any) -> float:
    """Coerce *value* to a finite float; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    number = pd.to_numeric(value, errors="coerce")
    try:
        number = float(number)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def map_risk_level(raw: Any) -> RiskLevel:
    """Map a raw category (``critical``, ``High``, ...) onto HIGH/MEDIUM/LOW."""
    text = _text(raw)
    if text is None:
        return RiskLevel.LOW
    return _LEVEL_MAP.get(text.upper(), RiskLevel.LOW)


def build_suspicious_activity(
    row: Mapping[str, Any],
    fields: Tuple[Tuple[str, str], ...] = ACTIVITY_FIELDS,
) -> Tuple[str, ...]:
    """One ``"<label>: <value>"`` entry per populated field, in table order."""
    entries = []
    for column, label in fields:
        value = _text(row.get(column))
        if value is not None:
            entries.append(f"{label}: {value}")
    return tuple(entries)


# ── Public API ───────────────────────────────────────────────────────────────

def normalize_row(
    row: Mapping[str, Any],
    ordinal: int,
    today: Callable[[], date] = date.today,
) -> RiskAccount:
    """Build a ``RiskAccount`` from one raw row.

    Parameters
    ----------
    row : Mapping[str, Any]
        Column name → cell value.  Columns may be missing entirely.
    ordinal : int
        1-based row position, used for the generated placeholders.
    today : callable
        Date provider for the ``last_activity`` fallback.

    Returns
    -------
    RiskAccount
    """
    account = _text(row.get(COL_ACCOUNT))
    return RiskAccount(
        id=account or str(ordinal),
        account_number=account or f"ACC-{ordinal:04d}",
        customer_name=_text(row.get(COL_CUSTOMER)) or f"Customer {ordinal}",
        risk_score=safe_number(row.get(COL_RISK_SCORE)),
        risk_level=map_risk_level(row.get(COL_RISK_LEVEL)),
        transaction_amount=safe_number(row.get(COL_TOTAL_AMOUNT)),
        flagged_transactions=safe_number(row.get(COL_TX_COUNT)),
        last_activity=_text(row.get(COL_LAST_ACTIVITY)) or today().isoformat(),
        suspicious_activity=build_suspicious_activity(row),
        customer_details=None,
    )

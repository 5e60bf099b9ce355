"""
sample_data.py — Embedded fallback dataset and a synthetic CSV generator.

``FALLBACK_ACCOUNTS`` is what the dashboard shows whenever the live CSV
cannot be loaded.  ``generate_sample_csv`` produces a risk-results file in
the same column layout as the upstream pattern detector, for demos and
tests.
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import List, Tuple

import numpy as np
import pandas as pd

from ingest.models import CustomerDetails, RiskAccount, RiskLevel
from ingest.normalizer import EXPECTED_COLUMNS


# ── Fallback dataset ─────────────────────────────────────────────────────────

FALLBACK_ACCOUNTS: Tuple[RiskAccount, ...] = (
    RiskAccount(
        id="1",
        account_number="ACC-2024-001",
        customer_name="John Smith",
        risk_score=87,
        risk_level=RiskLevel.HIGH,
        transaction_amount=250000,
        flagged_transactions=15,
        last_activity="2024-01-15",
        suspicious_activity=("Large cash deposits", "Frequent international transfers"),
        customer_details=CustomerDetails(
            email="john.smith@email.com",
            phone="+1-555-0123",
            address="123 Main St, New York, NY 10001",
            account_open_date="2020-05-15",
        ),
    ),
    RiskAccount(
        id="2",
        account_number="ACC-2024-002",
        customer_name="Maria Garcia",
        risk_score=65,
        risk_level=RiskLevel.MEDIUM,
        transaction_amount=120000,
        flagged_transactions=8,
        last_activity="2024-01-14",
        suspicious_activity=("Unusual transaction patterns", "High-risk jurisdictions"),
        customer_details=CustomerDetails(
            email="maria.garcia@email.com",
            phone="+1-555-0124",
            address="456 Oak Ave, Los Angeles, CA 90210",
            account_open_date="2019-08-22",
        ),
    ),
    RiskAccount(
        id="3",
        account_number="ACC-2024-003",
        customer_name="David Johnson",
        risk_score=42,
        risk_level=RiskLevel.LOW,
        transaction_amount=75000,
        flagged_transactions=3,
        last_activity="2024-01-13",
        suspicious_activity=("Round number transactions",),
        customer_details=CustomerDetails(
            email="david.johnson@email.com",
            phone="+1-555-0125",
            address="789 Pine St, Chicago, IL 60601",
            account_open_date="2021-03-10",
        ),
    ),
    RiskAccount(
        id="4",
        account_number="ACC-2024-004",
        customer_name="Sarah Wilson",
        risk_score=91,
        risk_level=RiskLevel.HIGH,
        transaction_amount=380000,
        flagged_transactions=22,
        last_activity="2024-01-16",
        suspicious_activity=("Structuring", "Shell company connections", "PEP connections"),
        customer_details=CustomerDetails(
            email="sarah.wilson@email.com",
            phone="+1-555-0126",
            address="321 Elm St, Miami, FL 33101",
            account_open_date="2018-11-05",
        ),
    ),
)


# ── Synthetic CSV ────────────────────────────────────────────────────────────

_PATTERNS = ["fan_in", "fan_out", "fan_in_fan_out"]
_CONNECTIONS = ["direct", "intermediary", "multi_hop"]
_FIRST_NAMES = ["Alex", "Jordan", "Sam", "Priya", "Chen", "Fatima", "Luca", "Noor"]
_LAST_NAMES = ["Okafor", "Silva", "Novak", "Haddad", "Kim", "Moreau", "Patel", "Berg"]


def generate_sample_csv(
    n_accounts: int = 40,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate a risk-results DataFrame in the upstream detector's layout.

    Parameters
    ----------
    n_accounts : int
        Number of account rows.
    seed : int
        Random seed for reproducibility.

    Returns
    -------
    pd.DataFrame
        One row per account with every column in ``EXPECTED_COLUMNS``.
        Some optional cells are left blank, the way the detector emits
        them for accounts where a metric does not apply.
    """
    rng = random.Random(seed)
    np_rng = np.random.RandomState(seed)

    base_day = date(2025, 6, 1)
    scores = np.clip(np_rng.normal(loc=55, scale=22, size=n_accounts), 1, 99).round(1)
    amounts = np_rng.lognormal(mean=11, sigma=0.8, size=n_accounts).round(2)
    tx_counts = np_rng.poisson(lam=12, size=n_accounts) + 1

    rows: List[dict] = []
    for i in range(n_accounts):
        score = float(scores[i])
        if score >= 85:
            level = "CRITICAL"
        elif score >= 65:
            level = "HIGH"
        elif score >= 40:
            level = "MEDIUM"
        else:
            level = "LOW"
        # A few rows use other spellings, as the detector output does.
        if rng.random() < 0.1:
            level = level.lower()

        span = rng.randint(1, 60)
        rows.append({
            "Account": f"ACC_{i + 1:04d}",
            "Customer_Name": f"{rng.choice(_FIRST_NAMES)} {rng.choice(_LAST_NAMES)}",
            "Risk_Score": score,
            "Risk_Level": level,
            "Total_Amount": float(amounts[i]),
            "Transaction_Count": int(tx_counts[i]),
            "Last_Activity": (base_day + timedelta(days=rng.randint(0, 90))).isoformat(),
            "Pattern_Type": rng.choice(_PATTERNS),
            "Fan_Degree": rng.randint(3, 25),
            "Connection_Type": rng.choice(_CONNECTIONS) if rng.random() < 0.8 else "",
            "Unique_Currencies": rng.randint(1, 5) if rng.random() < 0.6 else "",
            "Time_Span_Days": span,
            "Amount_Range_Ratio": round(rng.uniform(1.0, 12.0), 2) if rng.random() < 0.7 else "",
            "Temporal_Clustering": round(rng.uniform(0.05, 0.95), 2) if rng.random() < 0.5 else "",
        })

    return pd.DataFrame(rows, columns=list(EXPECTED_COLUMNS))


def sample_csv_bytes(n_accounts: int = 40, seed: int = 42) -> bytes:
    """Return sample CSV as UTF-8 bytes (for the Streamlit download button)."""
    df = generate_sample_csv(n_accounts=n_accounts, seed=seed)
    return df.to_csv(index=False).encode("utf-8")

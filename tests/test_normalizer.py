from datetime import date

import pytest

from ingest.models import RiskLevel
from ingest.normalizer import (
    ACTIVITY_FIELDS,
    build_suspicious_activity,
    map_risk_level,
    normalize_row,
    safe_number,
)


@pytest.mark.parametrize("raw", ["critical", "Critical", "CRITICAL", "HIGH", "high", "High", " high "])
def test_critical_and_high_map_to_high(raw):
    assert map_risk_level(raw) is RiskLevel.HIGH


@pytest.mark.parametrize("raw", ["MEDIUM", "medium", "Medium"])
def test_medium_maps_to_medium(raw):
    assert map_risk_level(raw) is RiskLevel.MEDIUM


@pytest.mark.parametrize("raw", ["LOW", "low", "", None, "severe", "unknown", "MED"])
def test_everything_else_maps_to_low(raw):
    assert map_risk_level(raw) is RiskLevel.LOW


@pytest.mark.parametrize("raw", ["abc", "", "   ", None, "12abc", "nan", "inf", float("nan")])
def test_safe_number_falls_back_to_zero(raw):
    assert safe_number(raw) == 0


@pytest.mark.parametrize("raw, expected", [("10", 10), (" 42.5 ", 42.5), ("-3", -3), (7, 7), ("1e3", 1000)])
def test_safe_number_parses_numbers(raw, expected):
    assert safe_number(raw) == expected


def test_minimal_row():
    account = normalize_row({"Account": "ACC1", "Risk_Level": "LOW", "Risk_Score": "10"}, 1)
    assert account.id == "ACC1"
    assert account.account_number == "ACC1"
    assert account.risk_level is RiskLevel.LOW
    assert account.risk_score == 10
    assert account.suspicious_activity == ()
    assert account.customer_details is None


def test_placeholders_use_ordinal():
    account = normalize_row({}, 7, today=lambda: date(2025, 3, 9))
    assert account.id == "7"
    assert account.account_number == "ACC-0007"
    assert account.customer_name == "Customer 7"
    assert account.last_activity == "2025-03-09"
    assert account.risk_level is RiskLevel.LOW
    assert account.risk_score == 0
    assert account.transaction_amount == 0
    assert account.flagged_transactions == 0


def test_bad_numbers_do_not_abort_the_row():
    row = {
        "Account": "X1",
        "Customer_Name": "Jane Roe",
        "Risk_Score": "n/a",
        "Total_Amount": "lots",
        "Transaction_Count": "",
        "Risk_Level": "bogus",
    }
    account = normalize_row(row, 1)
    assert account.customer_name == "Jane Roe"
    assert (account.risk_score, account.transaction_amount, account.flagged_transactions) == (0, 0, 0)
    assert account.risk_level is RiskLevel.LOW


def test_suspicious_activity_full_order():
    row = {
        "Temporal_Clustering": "0.8",
        "Pattern_Type": "fan_in",
        "Amount_Range_Ratio": "3.2",
        "Fan_Degree": "12",
        "Time_Span_Days": "5",
        "Connection_Type": "direct",
        "Unique_Currencies": "3",
    }
    assert build_suspicious_activity(row) == (
        "Pattern: fan_in",
        "Fan Degree: 12",
        "Connection: direct",
        "Currencies: 3",
        "Days: 5",
        "Amt Range Ratio: 3.2",
        "Temporal Clustering: 0.8",
    )


def test_suspicious_activity_skips_blank_fields():
    row = {
        "Pattern_Type": "fan_out",
        "Fan_Degree": "",
        "Connection_Type": "   ",
        "Time_Span_Days": "14",
        "Temporal_Clustering": float("nan"),
    }
    activity = build_suspicious_activity(row)
    populated = sum(1 for col, _ in ACTIVITY_FIELDS if str(row.get(col, "")).strip() not in ("", "nan"))
    assert len(activity) == populated == 2
    assert activity == ("Pattern: fan_out", "Days: 14")


def test_normalize_is_deterministic():
    row = {"Account": "A", "Last_Activity": "2024-02-01", "Pattern_Type": "fan_in", "Risk_Level": "critical"}
    assert normalize_row(row, 3) == normalize_row(row, 3)

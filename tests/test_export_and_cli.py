import json

import pandas as pd

import run_local
from ingest.export import (
    ACCOUNT_TABLE_COLUMNS,
    accounts_to_csv_bytes,
    build_account_table,
    generate_report,
    report_to_json_string,
)
from ingest.models import RiskLevel, TransactionType
from ingest.normalizer import EXPECTED_COLUMNS
from ingest.sample_data import FALLBACK_ACCOUNTS, generate_sample_csv
from views.aggregates import compute_summary
from views.styling import (
    activity_preview,
    format_money,
    format_number,
    risk_badge_variant,
    signed_amount,
    status_badge_variant,
)


# ── Export ───────────────────────────────────────────────────────────────────

def test_report_shape():
    accounts = list(FALLBACK_ACCOUNTS[:2])
    report = generate_report(accounts, compute_summary(FALLBACK_ACCOUNTS).to_dict(), "a", "ALL")
    data = json.loads(report_to_json_string(report))
    assert [a["id"] for a in data["accounts"]] == ["1", "2"]
    assert data["accounts"][0]["risk_level"] == "HIGH"
    assert data["accounts"][0]["customer_details"]["email"] == "john.smith@email.com"
    assert data["summary"]["high_risk_accounts"] == 2
    assert data["filters"] == {"search_term": "a", "risk_level": "ALL"}


def test_account_table_rows():
    rows = build_account_table(FALLBACK_ACCOUNTS[3:])
    assert rows[0]["Account"] == "ACC-2024-004"
    assert rows[0]["Suspicious Activities"] == "Structuring; Shell company connections; PEP connections"


def test_csv_export_keeps_header_when_empty():
    text = accounts_to_csv_bytes([]).decode("utf-8")
    assert text.strip() == ",".join(ACCOUNT_TABLE_COLUMNS)


# ── Sample data ──────────────────────────────────────────────────────────────

def test_generated_sample_layout_and_seed():
    df = generate_sample_csv(n_accounts=12, seed=3)
    assert list(df.columns) == list(EXPECTED_COLUMNS)
    assert len(df) == 12
    pd.testing.assert_frame_equal(df, generate_sample_csv(n_accounts=12, seed=3))


def test_fallback_sample():
    assert len(FALLBACK_ACCOUNTS) == 4
    assert all(a.customer_details is not None for a in FALLBACK_ACCOUNTS)


# ── Styling ──────────────────────────────────────────────────────────────────

def test_badge_variants():
    assert risk_badge_variant(RiskLevel.HIGH) == "destructive"
    assert risk_badge_variant("MEDIUM") == "default"
    assert risk_badge_variant("LOW") == "secondary"
    assert risk_badge_variant("other") == "default"
    assert status_badge_variant("FLAGGED") == "destructive"
    assert status_badge_variant("whatever") == "secondary"


def test_formatting():
    assert format_money(250000) == "$250,000"
    assert format_money(1234.5) == "$1,234.50"
    assert format_number(87.0) == "87"
    assert format_number(3.25) == "3.25"
    assert signed_amount(TransactionType.WITHDRAWAL, 9900) == "-$9,900"
    assert signed_amount(TransactionType.DEPOSIT, 50000) == "+$50,000"


def test_activity_preview():
    assert activity_preview(["a", "b", "c", "d"], 2) == ["a", "b", "+2 more"]
    assert activity_preview(["a"], 2) == ["a"]


# ── CLI ──────────────────────────────────────────────────────────────────────

def test_cli_missing_file_falls_back(tmp_path, capsys):
    assert run_local.main([str(tmp_path / "missing.csv")]) == 0
    out = capsys.readouterr().out
    assert "[ERROR] Failed to load CSV file" in out
    assert "High Risk Accounts:      2" in out


def test_cli_generate_load_and_export(tmp_path, capsys):
    sample = tmp_path / "sample.csv"
    assert run_local.main(["--generate-sample", str(sample), "--rows", "10"]) == 0
    assert sample.exists()

    out_file = tmp_path / "visible.json"
    assert run_local.main([str(sample), "--risk", "all", "--out", str(out_file)]) == 0
    data = json.loads(out_file.read_text(encoding="utf-8"))
    assert data["summary"]["total_accounts"] == 10
    assert len(data["accounts"]) == 10


def test_cli_account_detail(tmp_path, capsys):
    assert run_local.main([str(tmp_path / "missing.csv"), "--account", "1"]) == 0
    out = capsys.readouterr().out
    assert "John Smith | ACC-2024-001" in out
    assert "Transaction History (5)" in out
    assert any(line.split() == ["Total", "48"] for line in out.splitlines())


def test_cli_unknown_account(tmp_path, capsys):
    assert run_local.main([str(tmp_path / "missing.csv"), "--account", "nope"]) == 1

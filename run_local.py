"""
run_local.py — Command-line view of the Risk Account Dashboard.

Run with:  python run_local.py [csv_path_or_url]
           python run_local.py --search smith --risk HIGH
           python run_local.py --account ACC_0007
           python run_local.py --out visible.json        (or .csv)
           python run_local.py --generate-sample sample.csv --rows 50
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import config
from ingest.export import accounts_to_csv_bytes, generate_report, report_to_json_string
from ingest.loader import DatasetLoader
from ingest.models import RiskAccount
from ingest.sample_data import generate_sample_csv
from views.aggregates import risk_level_counts
from views.details import DetailSource, StaticDetailSource, total_transactions
from views.filters import FILTER_LEVELS
from views.state import ViewState
from views.styling import activity_preview, format_money, format_number, signed_amount


def print_separator(title: str = "") -> None:
    """Print a visual separator."""
    if title:
        print(f"\n{'='*60}\n  {title}\n{'='*60}")
    else:
        print("-" * 60)


def print_summary(state: ViewState) -> None:
    summary = state.summary()
    print_separator("SUMMARY")
    print(f"  Total Risky Accounts:    {summary.total_accounts}")
    print(f"  High Risk Accounts:      {summary.high_risk_accounts}")
    print(f"  Flagged Transactions:    {format_number(summary.total_flagged_transactions)}")
    print(f"  Total Amount at Risk:    {format_money(summary.total_suspicious_amount)}")
    counts = risk_level_counts(state.dataset)
    print("  Breakdown:               " + ", ".join(f"{k} {v}" for k, v in counts.items()))


def print_accounts(accounts: List[RiskAccount]) -> None:
    print_separator(f"ACCOUNTS ({len(accounts)})")
    if not accounts:
        print("No accounts match the current search and risk level.")
        return
    print(f"  {'Account':<16} {'Customer':<20} {'Level':<7} {'Score':>6} {'Amount':>14} {'Flagged':>8}")
    print_separator()
    for a in accounts:
        print(
            f"  {a.account_number:<16.16} {a.customer_name:<20.20} {a.risk_level.value:<7} "
            f"{format_number(a.risk_score):>5}% {format_money(a.transaction_amount):>14} "
            f"{format_number(a.flagged_transactions):>8}"
        )
        preview = activity_preview(a.suspicious_activity, config.PREVIEW_ACTIVITIES)
        if preview:
            print(f"      {' | '.join(preview)}")


def print_detail(state: ViewState, source: DetailSource) -> None:
    account = state.selected_account
    customer = account.customer_details
    transactions, slices = state.selected_details(source)

    print_separator(f"{account.customer_name} | {account.account_number}")
    print(f"  Risk:           {account.risk_level.value} ({format_number(account.risk_score)}%)")
    print(f"  Amount:         {format_money(account.transaction_amount)}")
    print(f"  Flagged Txns:   {format_number(account.flagged_transactions)}")
    print(f"  Last Activity:  {account.last_activity}")
    print(f"  Email:          {customer.email if customer else 'N/A'}")
    print(f"  Phone:          {customer.phone if customer else 'N/A'}")
    print(f"  Address:        {customer.address if customer else 'N/A'}")
    print(f"  Account Opened: {customer.account_open_date if customer else 'N/A'}")
    if account.suspicious_activity:
        print("\nSuspicious Activities:")
        for activity in account.suspicious_activity:
            print(f"  - {activity}")

    print(f"\nTransaction History ({len(transactions)}):")
    if not transactions:
        print("  No transactions found for this account.")
    for tx in transactions:
        where = f" @ {tx.location}" if tx.location else ""
        print(
            f"  {tx.date}  {tx.type.value:<10} {signed_amount(tx.type, tx.amount):>12}  "
            f"{tx.status.value:<10} {tx.description}{where}"
        )

    print("\nTransaction Analysis:")
    if not slices:
        print("  No transaction breakdown available for this account.")
    for s in slices:
        print(f"  {s.name:<26} {s.value:>4}")
    if slices:
        print(f"  {'Total':<26} {total_transactions(slices):>4}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Risk Account Dashboard (terminal view)")
    parser.add_argument("source", nargs="?", default=None, help=f"CSV path or URL (default: {config.CSV_SOURCE})")
    parser.add_argument("--search", default="", help="Case-insensitive name / account number search")
    parser.add_argument("--risk", default="ALL", type=str.upper, choices=FILTER_LEVELS)
    parser.add_argument("--account", help="Show the detail view for this account id")
    parser.add_argument("--out", type=Path, help="Export visible accounts (.json or .csv)")
    parser.add_argument("--generate-sample", type=Path, metavar="FILE",
                        help="Write a synthetic risk-results CSV and exit")
    parser.add_argument("--rows", type=int, default=40, help="Rows for --generate-sample")
    parser.add_argument("--seed", type=int, default=42, help="Seed for --generate-sample")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.configure_logging("WARNING")

    if args.generate_sample:
        df = generate_sample_csv(n_accounts=args.rows, seed=args.seed)
        df.to_csv(args.generate_sample, index=False)
        print(f"[OK] Sample CSV with {len(df)} accounts saved to: {args.generate_sample}")
        return 0

    print_separator("Money Laundering Detection Dashboard")
    state = ViewState()
    loader = DatasetLoader(args.source)
    print(f"[INFO] Loading data from {loader.source}")
    state.load_from(loader)
    if state.error:
        print(f"[ERROR] {state.error}")
        print("[INFO] Using fallback mock data for demonstration.")
    elif state.using_fallback:
        print("[INFO] Data file contained no accounts; using fallback mock data.")
    else:
        print(f"[OK] Loaded {len(state.accounts)} accounts")
    for w in state.warnings:
        print(f"[WARN] {w}")

    state.set_search(args.search)
    state.set_risk_level(args.risk)

    if args.account:
        if not state.select_by_id(args.account):
            print(f"[ERROR] Account not found: {args.account}")
            return 1
        print_detail(state, StaticDetailSource())
        return 0

    visible = state.visible_accounts()
    print_summary(state)
    print_accounts(visible)

    if args.out:
        if args.out.suffix.lower() == ".csv":
            args.out.write_bytes(accounts_to_csv_bytes(visible))
        else:
            report = generate_report(
                visible,
                state.summary().to_dict(),
                search_term=state.search_term,
                risk_level=state.selected_risk_level,
            )
            args.out.write_text(report_to_json_string(report), encoding="utf-8")
        print(f"\n[OK] {len(visible)} accounts exported to: {args.out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

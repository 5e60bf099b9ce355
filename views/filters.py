"""
filters.py — Search-box and risk-level filtering of the accounts list.
"""

from __future__ import annotations

from typing import Iterable, List

from ingest.models import RiskAccount, RiskLevel

ALL_LEVELS = "ALL"
FILTER_LEVELS = (ALL_LEVELS,) + tuple(level.value for level in RiskLevel)


def normalise_level(risk_level: str | RiskLevel) -> str:
    level = risk_level.value if isinstance(risk_level, RiskLevel) else str(risk_level).upper()
    if level not in FILTER_LEVELS:
        raise ValueError(f"Unknown risk level filter {risk_level!r}; expected one of {FILTER_LEVELS}")
    return level


def matches(account: RiskAccount, search_term: str = "", risk_level: str | RiskLevel = ALL_LEVELS) -> bool:
    """True if *account* passes both the text search and the level filter."""
    level = normalise_level(risk_level)
    needle = search_term.lower()
    matches_search = (
        needle in account.customer_name.lower()
        or needle in account.account_number.lower()
    )
    matches_risk = level == ALL_LEVELS or account.risk_level.value == level
    return matches_search and matches_risk


def filter_accounts(
    accounts: Iterable[RiskAccount],
    search_term: str = "",
    risk_level: str | RiskLevel = ALL_LEVELS,
) -> List[RiskAccount]:
    """Return the visible subset, preserving the original order.

    The search is a case-insensitive substring match against the customer
    name or the account number; an empty term matches everything.
    """
    level = normalise_level(risk_level)
    return [a for a in accounts if matches(a, search_term, level)]

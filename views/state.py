"""
state.py — Per-session view state for the dashboard.

One ``ViewState`` lives in ``st.session_state`` for the lifetime of a
browser session.  It owns the loaded dataset, the filter inputs, the load
status and the current selection, and implements the two-level
LIST ⇄ DETAIL navigation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ingest.loader import DatasetLoader, LoadResult
from ingest.models import ChartSlice, RiskAccount, RiskLevel, Transaction
from ingest.sample_data import FALLBACK_ACCOUNTS
from views.aggregates import DashboardSummary, compute_summary
from views.details import DetailSource
from views.filters import ALL_LEVELS, normalise_level, filter_accounts

log = logging.getLogger(__name__)


class ViewMode(str, Enum):
    LIST = "LIST"
    DETAIL = "DETAIL"


@dataclass
class ViewState:
    search_term: str = ""
    selected_risk_level: str = ALL_LEVELS
    selected_account: Optional[RiskAccount] = None
    loading: bool = False
    error: Optional[str] = None
    accounts: List[RiskAccount] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    loaded: bool = False
    fallback: Sequence[RiskAccount] = FALLBACK_ACCOUNTS

    # ── Loading ───────────────────────────────────────────────────────────

    def begin_load(self) -> None:
        self.loading = True
        self.error = None

    def finish_load(self, result: LoadResult) -> None:
        self.accounts = list(result.accounts)
        self.error = result.error
        self.warnings = list(result.warnings)
        self.loading = False
        self.loaded = True

    def load_from(self, loader: DatasetLoader) -> None:
        """Run *loader* once; ``loading`` is cleared on every path."""
        self.begin_load()
        result = LoadResult()
        try:
            result = loader.load()
        finally:
            self.finish_load(result)
        if self.using_fallback:
            log.info("No live data available, showing %d sample accounts", len(self.fallback))

    # ── Dataset ───────────────────────────────────────────────────────────

    @property
    def using_fallback(self) -> bool:
        return not self.accounts

    @property
    def dataset(self) -> Sequence[RiskAccount]:
        """Loaded accounts, or the embedded sample when nothing loaded."""
        return self.accounts if self.accounts else self.fallback

    def visible_accounts(self) -> List[RiskAccount]:
        return filter_accounts(self.dataset, self.search_term, self.selected_risk_level)

    def summary(self) -> DashboardSummary:
        return compute_summary(self.dataset)

    # ── Filters ───────────────────────────────────────────────────────────

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def set_risk_level(self, level: str | RiskLevel) -> None:
        self.selected_risk_level = normalise_level(level)

    # ── Navigation ────────────────────────────────────────────────────────

    @property
    def mode(self) -> ViewMode:
        return ViewMode.LIST if self.selected_account is None else ViewMode.DETAIL

    def select(self, account: RiskAccount) -> None:
        self.selected_account = account

    def select_by_id(self, account_id: str) -> bool:
        """Select the account with *account_id*; last one wins on duplicates."""
        found = None
        for account in self.dataset:
            if account.id == account_id:
                found = account
        if found is None:
            return False
        self.select(found)
        return True

    def back(self) -> None:
        self.selected_account = None

    def selected_details(self, source: DetailSource) -> Tuple[List[Transaction], List[ChartSlice]]:
        """Transactions and chart slices for the selection (empty in LIST)."""
        if self.selected_account is None:
            return [], []
        account_id = self.selected_account.id
        return source.transactions_for(account_id), source.chart_for(account_id)

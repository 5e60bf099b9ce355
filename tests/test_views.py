import pytest

from ingest.models import RiskAccount, RiskLevel
from ingest.sample_data import FALLBACK_ACCOUNTS
from views.aggregates import compute_summary, risk_level_counts
from views.details import SAMPLE_TRANSACTIONS, StaticDetailSource, total_transactions
from views.filters import filter_accounts
from views.state import ViewMode, ViewState


def _account(id, name="Someone", number=None, level=RiskLevel.LOW, flagged=0, amount=0):
    return RiskAccount(
        id=id,
        account_number=number or f"ACC-{id}",
        customer_name=name,
        risk_score=50,
        risk_level=level,
        transaction_amount=amount,
        flagged_transactions=flagged,
        last_activity="2024-01-01",
    )


ACCOUNTS = list(FALLBACK_ACCOUNTS)


# ── FilterEngine ─────────────────────────────────────────────────────────────

def test_filter_identity():
    assert filter_accounts(ACCOUNTS, "", "ALL") == ACCOUNTS


def test_filter_returns_new_list():
    result = filter_accounts(ACCOUNTS)
    assert result is not ACCOUNTS


@pytest.mark.parametrize("term, level", [("a", "ALL"), ("smith", "HIGH"), ("2024-00", "LOW"), ("zzz", "MEDIUM")])
def test_filter_is_idempotent(term, level):
    once = filter_accounts(ACCOUNTS, term, level)
    assert filter_accounts(once, term, level) == once


def test_search_matches_name_case_insensitively():
    assert [a.id for a in filter_accounts(ACCOUNTS, "MARIA")] == ["2"]


def test_search_matches_account_number_substring():
    assert [a.id for a in filter_accounts(ACCOUNTS, "acc-2024-00")] == ["1", "2", "3", "4"]
    assert [a.id for a in filter_accounts(ACCOUNTS, "004")] == ["4"]


def test_risk_level_filter_preserves_order():
    assert [a.id for a in filter_accounts(ACCOUNTS, "", "HIGH")] == ["1", "4"]
    assert [a.id for a in filter_accounts(ACCOUNTS, "", RiskLevel.LOW)] == ["3"]


def test_search_and_level_combine():
    assert filter_accounts(ACCOUNTS, "wilson", "MEDIUM") == []
    assert [a.id for a in filter_accounts(ACCOUNTS, "wilson", "high")] == ["4"]


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        filter_accounts(ACCOUNTS, "", "SEVERE")


# ── AggregateComputer ────────────────────────────────────────────────────────

def test_aggregates_on_sample():
    summary = compute_summary(ACCOUNTS)
    assert summary.total_accounts == 4
    assert summary.high_risk_accounts == 2
    assert summary.total_flagged_transactions == 48
    assert summary.total_suspicious_amount == 825000


def test_aggregates_from_plain_values():
    levels = [RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW, RiskLevel.HIGH]
    accounts = [_account(str(i), level=lvl, flagged=f) for i, (lvl, f) in enumerate(zip(levels, [15, 8, 3, 22]))]
    summary = compute_summary(accounts)
    assert summary.total_flagged_transactions == 48
    assert summary.high_risk_accounts == 2


def test_aggregates_empty():
    summary = compute_summary([])
    assert summary.to_dict() == {
        "total_accounts": 0,
        "high_risk_accounts": 0,
        "total_flagged_transactions": 0,
        "total_suspicious_amount": 0,
    }


def test_risk_level_counts_includes_zeros():
    assert risk_level_counts([_account("1", level=RiskLevel.HIGH)]) == {"HIGH": 1, "MEDIUM": 0, "LOW": 0}


# ── ViewState ────────────────────────────────────────────────────────────────

def test_aggregates_ignore_filters():
    state = ViewState(accounts=ACCOUNTS)
    state.set_search("maria")
    assert len(state.visible_accounts()) == 1
    assert state.summary().total_accounts == 4


def test_list_detail_navigation():
    state = ViewState()
    assert state.mode is ViewMode.LIST
    state.select(ACCOUNTS[0])
    assert state.mode is ViewMode.DETAIL
    state.back()
    assert state.mode is ViewMode.LIST
    assert state.selected_account is None


def test_select_by_id_last_wins():
    first = _account("dup", name="First")
    second = _account("dup", name="Second")
    state = ViewState(accounts=[first, second])
    assert state.select_by_id("dup")
    assert state.selected_account.customer_name == "Second"
    assert not state.select_by_id("missing")


def test_loaded_accounts_replace_fallback():
    loaded = [_account("x")]
    state = ViewState(accounts=loaded)
    assert not state.using_fallback
    assert list(state.dataset) == loaded


def test_set_risk_level_validates():
    state = ViewState()
    state.set_risk_level("medium")
    assert state.selected_risk_level == "MEDIUM"
    with pytest.raises(ValueError):
        state.set_risk_level("nope")


# ── DetailLookup ─────────────────────────────────────────────────────────────

def test_detail_lookup_hit():
    source = StaticDetailSource()
    assert [t.id for t in source.transactions_for("2")] == ["txn-006", "txn-007"]
    slices = source.chart_for("1")
    assert [s.value for s in slices] == [15, 8, 25]
    assert total_transactions(slices) == 48


def test_detail_lookup_miss_is_empty():
    source = StaticDetailSource()
    assert source.transactions_for("ACC_9999") == []
    assert source.chart_for("ACC_9999") == []
    assert total_transactions(source.chart_for("ACC_9999")) == 0


def test_selected_account_without_details_renders_empty():
    state = ViewState()
    state.select(_account("not-in-table"))
    transactions, slices = state.selected_details(StaticDetailSource())
    assert transactions == []
    assert slices == []


def test_detail_source_is_injectable():
    tx = SAMPLE_TRANSACTIONS["3"]
    source = StaticDetailSource(transactions={"custom": tx}, charts={})
    state = ViewState()
    state.select(_account("custom"))
    transactions, slices = state.selected_details(source)
    assert transactions == tx
    assert slices == []


def test_lookup_returns_copies():
    source = StaticDetailSource()
    source.transactions_for("1").clear()
    assert len(source.transactions_for("1")) == 5

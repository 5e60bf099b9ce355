"""
app.py — Streamlit dashboard for monitoring risky financial accounts.

Run with:  streamlit run app.py
"""

from __future__ import annotations

import html
import logging

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

# ── Local imports ─────────────────────────────────────────────────────────────
import config
from ingest.loader import DatasetLoader
from ingest.models import RiskAccount
from ingest.export import (
    build_account_table,
    generate_report,
    report_to_json_string,
    accounts_to_csv_bytes,
)
from ingest.sample_data import sample_csv_bytes
from views.aggregates import risk_level_counts
from views.details import DetailSource, StaticDetailSource, total_transactions
from views.filters import FILTER_LEVELS
from views.state import ViewMode, ViewState
from views.styling import (
    RISK_CSS_CLASSES,
    TRANSACTION_TYPE_COLORS,
    activity_preview,
    format_money,
    format_number,
    intent_color,
    risk_badge_variant,
    signed_amount,
    status_badge_variant,
)

config.configure_logging()
log = logging.getLogger(__name__)

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Money Laundering Detection Dashboard",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ────────────────────────────────────────────────────────────────
st.markdown(
    """
    <style>
    .dashboard-header {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        border-radius: 12px;
        padding: 24px;
        color: white;
        margin-bottom: 12px;
    }
    .dashboard-header h1 { margin: 0; font-size: 2rem; color: white; }
    .dashboard-header p  { margin: 0; opacity: 0.85; }
    .badge {
        display: inline-block;
        padding: 2px 10px;
        border-radius: 999px;
        font-size: 0.78rem;
        font-weight: 600;
        margin: 0 4px 4px 0;
    }
    .badge-destructive { background: #ff4b4b; color: white; }
    .badge-default     { background: #ffa726; color: #0e1117; }
    .badge-secondary   { background: #2b2f3a; color: #e0e0e0; }
    .badge-outline     { border: 1px solid #90caf9; color: #90caf9; }
    .risk-high   { color: #ff4b4b; font-weight: bold; }
    .risk-medium { color: #ffa726; font-weight: bold; }
    .risk-low    { color: #66bb6a; }
    .tx-row { border-bottom: 1px solid #2b2f3a; padding: 8px 0; }
    .muted  { color: #9ea0a6; font-size: 0.85rem; }
    </style>
    """,
    unsafe_allow_html=True,
)


def _badge(text: str, variant: str) -> str:
    return f'<span class="badge badge-{variant}">{html.escape(str(text))}</span>'


# ══════════════════════════════════════════════════════════════════════════════
#  SESSION STATE — one load per browser session
# ══════════════════════════════════════════════════════════════════════════════

if "view_state" not in st.session_state:
    st.session_state.view_state = ViewState()
    st.session_state.table_key = 0
if "detail_source" not in st.session_state:
    st.session_state.detail_source = StaticDetailSource()

state: ViewState = st.session_state.view_state
details: DetailSource = st.session_state.detail_source

if not state.loaded:
    with st.spinner(f"Loading data from {config.CSV_SOURCE}…"):
        state.load_from(DatasetLoader(config.CSV_SOURCE))


# ══════════════════════════════════════════════════════════════════════════════
#  DETAIL VIEW
# ══════════════════════════════════════════════════════════════════════════════

def _go_back() -> None:
    state.back()
    # New key so the table does not re-apply the old row selection.
    st.session_state.table_key += 1


def render_transactions(account: RiskAccount) -> None:
    transactions = details.transactions_for(account.id)
    st.subheader(f"💳 Transaction History ({len(transactions)})")
    if not transactions:
        st.info("No transactions found for this account.")
        return
    for tx in transactions:
        amount_color = TRANSACTION_TYPE_COLORS[tx.type]
        where = f" • {html.escape(tx.location)}" if tx.location else ""
        st.markdown(
            f"""
            <div class="tx-row">
              <b>{html.escape(tx.description)}</b>
              <span style="float:right; color:{amount_color}; font-weight:600;">
                {signed_amount(tx.type, tx.amount)}
              </span><br>
              <span class="muted">{tx.id} • {tx.date}{where} • {tx.type.value}</span>
              <span style="float:right;">{_badge(tx.status.value, status_badge_variant(tx.status))}</span>
            </div>
            """,
            unsafe_allow_html=True,
        )


def render_chart(account: RiskAccount) -> None:
    slices = details.chart_for(account.id)
    st.subheader("📊 Transaction Analysis")
    if not slices:
        st.info("No transaction breakdown available for this account.")
        return

    fig = go.Figure(
        go.Pie(
            labels=[s.name for s in slices],
            values=[s.value for s in slices],
            marker=dict(colors=[intent_color(s.fill) for s in slices]),
            hole=0.45,
            sort=False,
        )
    )
    fig.update_layout(
        template="plotly_dark",
        margin=dict(t=20, b=20, l=20, r=20),
        height=300,
        showlegend=False,
    )
    st.plotly_chart(fig, use_container_width=True)

    for s in slices:
        st.markdown(
            f'<span style="color:{intent_color(s.fill)};">●</span> {html.escape(s.name)}'
            f'<span style="float:right;"><b>{s.value}</b></span>',
            unsafe_allow_html=True,
        )
    st.markdown(f"**Total Transactions:** {total_transactions(slices)}")


def render_detail(account: RiskAccount) -> None:
    st.button("← Back to Dashboard", on_click=_go_back)

    css = RISK_CSS_CLASSES[account.risk_level]
    st.markdown(
        f"""
        <div class="dashboard-header">
          <h1>{html.escape(account.customer_name)}</h1>
          <p>Account {html.escape(account.account_number)} &nbsp;
             {_badge(f"{account.risk_level.value} RISK", risk_badge_variant(account.risk_level))}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    left, right = st.columns([2, 1])
    customer = account.customer_details

    with left:
        st.subheader("👤 Customer Information")
        c1, c2 = st.columns(2)
        c1.markdown(f"**Name**  \n{account.customer_name}")
        c2.markdown(f"**Account Number**  \n`{account.account_number}`")
        c1.markdown(f"**Email**  \n{customer.email if customer else 'N/A'}")
        c2.markdown(f"**Phone**  \n{customer.phone if customer else 'N/A'}")
        st.markdown(f"**Address**  \n{customer.address if customer else 'N/A'}")

        st.markdown("---")
        st.subheader("⚠️ Risk Assessment")
        r1, r2, r3 = st.columns(3)
        r1.markdown(
            f'Risk Score<br><span class="{css}" style="font-size:1.8rem;">'
            f"{format_number(account.risk_score)}%</span>",
            unsafe_allow_html=True,
        )
        r2.metric("Flagged Transactions", format_number(account.flagged_transactions))
        r3.metric("Total Amount", format_money(account.transaction_amount))
        st.progress(min(max(account.risk_score, 0.0), 100.0) / 100.0)
        st.markdown("**Suspicious Activities**")
        if account.suspicious_activity:
            st.markdown(
                "".join(_badge(a, "secondary") for a in account.suspicious_activity),
                unsafe_allow_html=True,
            )
        else:
            st.caption("None recorded.")

        st.markdown("---")
        render_transactions(account)

    with right:
        render_chart(account)

        st.markdown("---")
        st.subheader("🗓️ Account Timeline")
        st.markdown(f"**Last Activity**  \n{account.last_activity}")
        st.markdown(f"**Account Opened**  \n{customer.account_open_date if customer else 'N/A'}")
        st.markdown(
            "**Risk Level**  \n" + _badge(account.risk_level.value, risk_badge_variant(account.risk_level)),
            unsafe_allow_html=True,
        )


if state.mode is ViewMode.DETAIL:
    render_detail(state.selected_account)
    st.stop()


# ══════════════════════════════════════════════════════════════════════════════
#  SIDEBAR — Filters & Data
# ══════════════════════════════════════════════════════════════════════════════

st.sidebar.title("🛡️ Risk Dashboard")
st.sidebar.markdown("---")
st.sidebar.subheader("1 · Filter Accounts")

search = st.sidebar.text_input(
    "Search",
    value=state.search_term,
    placeholder="Search by name or account number...",
)
state.set_search(search)

level = st.sidebar.radio(
    "Risk level",
    FILTER_LEVELS,
    index=FILTER_LEVELS.index(state.selected_risk_level),
    horizontal=True,
)
state.set_risk_level(level)

st.sidebar.markdown("---")
st.sidebar.subheader("2 · Data Source")
st.sidebar.caption(f"`{config.CSV_SOURCE}`")
if st.sidebar.button("🔄 Reload data"):
    state.load_from(DatasetLoader(config.CSV_SOURCE))

counts = risk_level_counts(state.dataset)
st.sidebar.markdown("---")
st.sidebar.subheader("📊 Risk Breakdown")
for name, count in counts.items():
    st.sidebar.metric(name.title(), count)


# ══════════════════════════════════════════════════════════════════════════════
#  MAIN AREA
# ══════════════════════════════════════════════════════════════════════════════

st.markdown(
    """
    <div class="dashboard-header">
      <h1>Money Laundering Detection Dashboard</h1>
      <p>Monitor and analyze potentially risky financial accounts</p>
    </div>
    """,
    unsafe_allow_html=True,
)

# ── Load status ──────────────────────────────────────────────────────────────
if state.error:
    st.error(f"**Error Loading Data:** {state.error}\n\nUsing fallback mock data for demonstration.")
elif state.using_fallback:
    st.warning("The data file contained no accounts. Using fallback mock data for demonstration.")

if state.warnings:
    with st.expander("⚠️ Data Warnings", expanded=False):
        for w in state.warnings:
            st.warning(w)

# ══════════════════════════════════════════════════════════════════════════════
#  SUMMARY METRICS
# ══════════════════════════════════════════════════════════════════════════════

summary = state.summary()

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Total Risky Accounts", summary.total_accounts, help="Flagged for review")
with col2:
    st.metric("High Risk Accounts", summary.high_risk_accounts, help="Require immediate attention")
with col3:
    st.metric(
        "Flagged Transactions",
        format_number(summary.total_flagged_transactions),
        help="Suspicious activities detected",
    )
with col4:
    st.metric(
        "Total Amount at Risk",
        format_money(summary.total_suspicious_amount),
        help="Under investigation",
    )

# ══════════════════════════════════════════════════════════════════════════════
#  ACCOUNTS TABLE
# ══════════════════════════════════════════════════════════════════════════════

st.markdown("---")
st.subheader("🔎 Risk Account Analysis")

visible = state.visible_accounts()
st.caption(f"Showing {len(visible)} of {summary.total_accounts} accounts · select a row for details")

if visible:
    table_df = pd.DataFrame(build_account_table(visible))
    table_df["Suspicious Activities"] = [
        ", ".join(activity_preview(a.suspicious_activity, config.PREVIEW_ACTIVITIES))
        for a in visible
    ]
    event = st.dataframe(
        table_df.drop(columns=["ID"]),
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=f"accounts_table_{st.session_state.table_key}",
        column_config={
            "Risk Score": st.column_config.ProgressColumn(
                min_value=0, max_value=100, format="%.0f%%"
            ),
            "Amount": st.column_config.NumberColumn(format="$%.2f"),
        },
    )
    rows = event.selection.rows
    if rows:
        state.select(visible[rows[0]])
        st.rerun()
else:
    st.info("No accounts match the current search and risk level.")

# ══════════════════════════════════════════════════════════════════════════════
#  DOWNLOADS
# ══════════════════════════════════════════════════════════════════════════════

st.markdown("---")
st.subheader("📥 Download")

report = generate_report(
    visible,
    summary.to_dict(),
    search_term=state.search_term,
    risk_level=state.selected_risk_level,
)

col_dl1, col_dl2, col_dl3 = st.columns(3)
with col_dl1:
    st.download_button(
        label="⬇️ Visible accounts (JSON)",
        data=report_to_json_string(report),
        file_name="risk_accounts.json",
        mime="application/json",
    )
with col_dl2:
    st.download_button(
        label="⬇️ Visible accounts (CSV)",
        data=accounts_to_csv_bytes(visible),
        file_name="risk_accounts.csv",
        mime="text/csv",
    )
with col_dl3:
    st.download_button(
        label="⬇️ Sample input CSV",
        data=sample_csv_bytes(),
        file_name="fan_pattern_results_sample.csv",
        mime="text/csv",
    )

# ── Footer ────────────────────────────────────────────────────────────────────
st.markdown("---")
st.caption("Money Laundering Detection Dashboard · Built with Streamlit, pandas & Plotly")

"""
styling.py — Style intents and formatting shared by the Streamlit app and
the CLI.

The core hands the UI plain strings ("destructive", "risk-high", ...); the
app decides what they look like.
"""

from __future__ import annotations

from ingest.models import RiskLevel, TransactionStatus, TransactionType

RISK_BADGE_VARIANTS = {
    RiskLevel.HIGH: "destructive",
    RiskLevel.MEDIUM: "default",
    RiskLevel.LOW: "secondary",
}

STATUS_BADGE_VARIANTS = {
    TransactionStatus.FLAGGED: "destructive",
    TransactionStatus.SUSPICIOUS: "default",
    TransactionStatus.NORMAL: "secondary",
}

# CSS classes defined in app.py
RISK_CSS_CLASSES = {
    RiskLevel.HIGH: "risk-high",
    RiskLevel.MEDIUM: "risk-medium",
    RiskLevel.LOW: "risk-low",
}

# Badge variant / chart fill → colour
INTENT_COLORS = {
    "destructive": "#ff4b4b",
    "warning": "#ffa726",
    "default": "#ffa726",
    "secondary": "#66bb6a",
    "primary": "#667eea",
    "outline": "#90caf9",
}

TRANSACTION_TYPE_COLORS = {
    TransactionType.DEPOSIT: "#66bb6a",
    TransactionType.WITHDRAWAL: "#ff4b4b",
    TransactionType.TRANSFER: "#42a5f5",
}


def risk_badge_variant(level: RiskLevel | str) -> str:
    try:
        return RISK_BADGE_VARIANTS[RiskLevel(level)]
    except ValueError:
        return "default"


def status_badge_variant(status: TransactionStatus | str) -> str:
    try:
        return STATUS_BADGE_VARIANTS[TransactionStatus(status)]
    except ValueError:
        return "secondary"


def intent_color(intent: str) -> str:
    return INTENT_COLORS.get(intent, INTENT_COLORS["outline"])


def format_money(amount: float) -> str:
    """``$250,000`` style; cents only when present."""
    if float(amount).is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def format_number(value: float) -> str:
    """Drop the trailing ``.0`` for whole numbers (scores, counts)."""
    value = float(value)
    return f"{value:,.0f}" if value.is_integer() else f"{value:,.2f}".rstrip("0").rstrip(".")


def signed_amount(tx_type: TransactionType, amount: float) -> str:
    """Withdrawals show as outflows, everything else as inflows."""
    sign = "-" if tx_type is TransactionType.WITHDRAWAL else "+"
    return f"{sign}{format_money(amount)}"


def activity_preview(activities, limit: int) -> list[str]:
    """First *limit* activities plus a ``+N more`` marker when truncated."""
    activities = list(activities)
    shown = activities[:limit]
    if len(activities) > limit:
        shown.append(f"+{len(activities) - limit} more")
    return shown

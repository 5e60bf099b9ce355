"""
config.py — Centralised settings for the Risk Account Dashboard.

Everything tunable is read from the environment once, at import time.
"""

from __future__ import annotations

import logging
import os


# ── Data source ──────────────────────────────────────────────────────────────
CSV_SOURCE: str = os.getenv("RISKDASH_CSV_SOURCE", "fan_pattern_results_combined.csv")
FETCH_TIMEOUT: float = float(os.getenv("RISKDASH_FETCH_TIMEOUT", "10"))

# ── Display ──────────────────────────────────────────────────────────────────
PREVIEW_ACTIVITIES: int = int(os.getenv("RISKDASH_PREVIEW_ACTIVITIES", "2"))

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("RISKDASH_LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)-8s %(name)s │ %(message)s"
LOG_DATEFMT: str = "%Y-%m-%dT%H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """Install the root handler used by the app and the CLI."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

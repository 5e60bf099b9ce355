"""
validation.py — Sanity checks on a parsed risk-results DataFrame.

Runs after the CSV text is framed by ``ingest.loader.read_csv_frame`` and
before per-row normalisation.  Only a missing header is fatal; everything
else is reported as a ``Warning:`` message and the load continues (bad
cells are coerced by the normaliser).
"""

from __future__ import annotations

import pandas as pd
from typing import Tuple, List

from ingest.normalizer import COL_ACCOUNT, EXPECTED_COLUMNS


# ── Public API ───────────────────────────────────────────────────────────────

def validate_frame(df: pd.DataFrame) -> Tuple[bool, List[str], pd.DataFrame]:
    """Validate and clean a parsed risk-results DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        Frame read from the CSV resource with every cell as text.

    Returns
    -------
    is_valid : bool
        ``False`` only when the frame has no usable header row.
    messages : list[str]
        Human-readable notes; non-fatal ones start with ``"Warning:"``.
    cleaned_df : pd.DataFrame
        Copy with trimmed column names and blank cells as ``""``
        (empty DataFrame on failure).
    """
    messages: List[str] = []

    # 1. Header row ------------------------------------------------------------
    columns = [str(c).strip().lstrip("\ufeff") for c in df.columns]
    if not columns or all(c == "" or c.startswith("Unnamed:") for c in columns):
        messages.append("CSV has no header row.")
        return False, messages, pd.DataFrame()

    cleaned = df.copy()
    cleaned.columns = columns
    cleaned = cleaned.fillna("")

    # 2. Expected columns (all optional) ---------------------------------------
    present = set(columns)
    known = [c for c in EXPECTED_COLUMNS if c in present]
    if not known:
        messages.append(
            "Warning: none of the expected columns were found; "
            "every row will use placeholder values."
        )
    else:
        missing = [c for c in EXPECTED_COLUMNS if c not in present]
        if missing:
            messages.append(f"Warning: missing columns treated as absent: {', '.join(missing)}")

    # 3. Duplicate account ids --------------------------------------------------
    if COL_ACCOUNT in present:
        ids = cleaned[COL_ACCOUNT].astype(str).str.strip()
        dup_count = int(ids[ids != ""].duplicated().sum())
        if dup_count:
            messages.append(
                f"Warning: column '{COL_ACCOUNT}' has {dup_count} duplicate value(s); "
                "the last occurrence wins in id lookups."
            )

    return True, messages, cleaned

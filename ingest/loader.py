"""
loader.py — Fetch the risk-results CSV and turn it into ``RiskAccount`` rows.

The source is either an ``http(s)://`` URL (fetched with ``requests``) or a
local file path.  Failures never escape ``DatasetLoader.load``: they come
back as a status message on the ``LoadResult`` and the caller decides how
to fall back.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
import requests

import config
from ingest.models import RiskAccount
from ingest.normalizer import normalize_row
from ingest.validation import validate_frame

log = logging.getLogger(__name__)


# ── Errors ───────────────────────────────────────────────────────────────────

class DatasetError(Exception):
    """Base class for recoverable load failures."""


class FetchError(DatasetError):
    """The CSV resource could not be retrieved."""

    def __str__(self) -> str:
        return f"Failed to load CSV file: Failed to fetch CSV file: {self.args[0]}"


class ParseError(DatasetError):
    """The CSV resource was retrieved but could not be parsed."""

    def __str__(self) -> str:
        return f"Failed to parse CSV file: {self.args[0]}"


@dataclass
class LoadResult:
    accounts: List[RiskAccount] = field(default_factory=list)
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


# ── Parsing ──────────────────────────────────────────────────────────────────

def _header_names(header: List[str]) -> List[str]:
    # Blank names become "Unnamed: i"; repeats get ".1", ".2" suffixes.
    names: List[str] = []
    seen: Dict[str, int] = {}
    for i, raw in enumerate(header):
        name = raw if raw.strip() else f"Unnamed: {i}"
        if name in seen:
            seen[name] += 1
            name = f"{name}.{seen[name]}"
        else:
            seen[name] = 0
        names.append(name)
    return names


def read_csv_frame(text: str) -> Tuple[pd.DataFrame, int]:
    """Tokenise CSV text into an all-text DataFrame sized to the header row.

    Blank lines are skipped.  Short rows are padded with ``""``; long rows
    are cut to the header width, and those whose dropped cells held data
    are counted as ragged.  A lone trailing delimiter on every row is
    therefore harmless.  Raises ``ParseError`` on broken quoting or when
    there is no header row.

    Returns
    -------
    df : pd.DataFrame
    ragged : int
        Number of rows that lost non-empty cells.
    """
    try:
        rows = [
            row for row in csv.reader(io.StringIO(text), strict=True)
            if row and not (len(row) == 1 and not row[0].strip())
        ]
    except csv.Error as exc:
        raise ParseError(str(exc)) from exc

    if not rows:
        raise ParseError("No columns to parse from file")

    columns = _header_names(rows[0])
    width = len(columns)
    ragged = 0
    records = []
    for row in rows[1:]:
        if len(row) > width:
            if any(cell.strip() for cell in row[width:]):
                ragged += 1
            row = row[:width]
        elif len(row) < width:
            row = row + [""] * (width - len(row))
        records.append(row)

    return pd.DataFrame(records, columns=columns, dtype=str), ragged


def parse_csv_text(text: str) -> Tuple[List[RiskAccount], List[str]]:
    """Parse CSV text (header row required) into normalised accounts.

    Every cell is read as text; missing cells come through as empty
    strings.  Rows with surplus fields are kept (truncated) and reported
    in the returned warnings.  Raises ``ParseError``.
    """
    df, ragged = read_csv_frame(text)

    is_valid, messages, cleaned = validate_frame(df)
    if not is_valid:
        raise ParseError("; ".join(messages))

    warnings = [m for m in messages if m.startswith("Warning:")]
    if ragged:
        warnings.append(
            f"Warning: {ragged} row(s) had more fields than the header; "
            "extra fields were dropped."
        )
    for message in warnings:
        log.warning(message)

    try:
        accounts = [
            normalize_row(row, idx + 1)
            for idx, row in enumerate(cleaned.to_dict(orient="records"))
        ]
    except Exception as exc:
        raise ParseError("Failed to parse CSV data. Please check the file format.") from exc

    return accounts, warnings


# ── Loader ───────────────────────────────────────────────────────────────────

class DatasetLoader:
    """One-shot loader for the dashboard's CSV resource.

    Parameters
    ----------
    source : str
        URL or local path of the CSV.  Defaults to ``config.CSV_SOURCE``.
    session : requests.Session or None
        HTTP session used for URL sources.  When omitted, a session is
        opened for the one fetch and closed afterwards.
    timeout : float
        Seconds before an HTTP fetch is abandoned.
    """

    def __init__(
        self,
        source: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.source = source or config.CSV_SOURCE
        self.session = session
        self.timeout = config.FETCH_TIMEOUT if timeout is None else timeout

    @property
    def is_remote(self) -> bool:
        return self.source.lower().startswith(("http://", "https://"))

    def fetch_text(self) -> str:
        """Return the raw CSV body.  Raises ``FetchError``."""
        if self.is_remote:
            if self.session is not None:
                return self._get(self.session)
            with requests.Session() as session:
                return self._get(session)

        try:
            return Path(self.source).read_text(encoding="utf-8-sig", errors="replace")
        except OSError as exc:
            raise FetchError(exc.strerror or str(exc)) from exc

    def _get(self, session) -> str:
        try:
            resp = session.get(self.source, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(str(exc)) from exc
        if not resp.ok:
            raise FetchError(resp.reason or f"HTTP {resp.status_code}")
        return resp.content.decode("utf-8-sig", errors="replace")

    def load(self) -> LoadResult:
        """Fetch, parse and normalise; never raises ``DatasetError``."""
        log.info("Loading risk data from %s", self.source)
        try:
            text = self.fetch_text()
            accounts, warnings = parse_csv_text(text)
        except DatasetError as exc:
            log.error("%s", exc)
            return LoadResult(error=str(exc))

        log.info("Loaded %d accounts from %s", len(accounts), self.source)
        return LoadResult(accounts=accounts, warnings=warnings)

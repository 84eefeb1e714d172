"""Load search queries from a CSV file (header row, queries in column A)."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def load_queries(path: str | Path) -> list[str]:
    """Return the non-empty, stripped queries from the first CSV column.

    The first row is treated as a header. Raises FileNotFoundError when the
    file does not exist.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Query source not found: {source}")

    with source.open(newline="", encoding="utf-8-sig") as fh:
        rows = list(csv.reader(fh))

    queries = [row[0].strip() for row in rows[1:] if row and row[0].strip()]
    if not queries:
        LOGGER.info("No queries found in %s (rows after the header are empty)", source)
    return queries

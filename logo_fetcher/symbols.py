from __future__ import annotations

import logging
from typing import Iterator

from .tsv import Table

logger = logging.getLogger(__name__)


def normalize_symbol(raw: str) -> str | None:
    """Trimmed, upper-cased symbol, or None if it is empty or not entirely alphanumeric."""
    symbol = raw.strip().upper()
    if not symbol or not symbol.isalnum():
        return None
    return symbol


def iter_symbols(table: Table, symbol_index: int) -> Iterator[str]:
    """
    Yield one normalized symbol per row, in row order.

    Rows with no cell for the symbol column or with an invalid symbol
    (e.g. "BRK.B", "PRA-B") are skipped with a warning.
    """
    column = table.headers[symbol_index]
    for row in table.rows:
        raw = row.get(column)
        if raw is None:
            logger.warning("skipping row without '%s' value: %r", column, row)
            continue
        symbol = normalize_symbol(raw)
        if symbol is None:
            logger.warning("skipping non-alphanumeric symbol %r", raw)
            continue
        yield symbol

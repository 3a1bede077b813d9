"""Preamble detection - find leading lines that are not part of the table.

Titles, blank lines and notes above a table either do not split on any
candidate delimiter or split into a different number of fields than the rows
that follow them. The preamble ends at the first record that matches the
consistent multi-field structure of the block after it.
"""
import logging
from collections import Counter
from typing import List, Optional, Sequence, Tuple

from .tokenize import Record, split_records

logger = logging.getLogger(__name__)

MIN_FIELDS = 2


def modal_count(counts: Sequence[int]) -> Tuple[int, int]:
    """Return (most common field count, occurrences). Ties go to the larger count."""
    if not counts:
        return 0, 0
    freq = Counter(counts)
    best = max(freq.items(), key=lambda kv: (kv[1], kv[0]))
    return best


def consistent_count(counts: Sequence[int]) -> Optional[int]:
    """Modal field count if it is multi-field and held by a strict majority, else None."""
    mode, occurrences = modal_count(counts)
    if mode >= MIN_FIELDS and occurrences * 2 > len(counts):
        return mode
    return None


def count_preamble_rows(
    text: str,
    delimiters: Sequence[str],
    quotes: Sequence[Optional[str]] = ('"',),
    window: int = 10,
    max_rows: int = 50,
) -> int:
    """
    Number of leading lines to skip before the header or first data row.

    Every delimiter is tried under every quote option; the first record that
    matches the block after it under any of them starts the table.
    """
    splits: List[Tuple[str, List[Record]]] = [
        (d, split_records(text, d, q)) for d in delimiters for q in (quotes or [None])
    ]
    longest = max((len(records) for _, records in splits), default=0)
    for i in range(min(longest - 1, max_rows)):
        for delimiter, records in splits:
            # an unbalanced quote can collapse a split to fewer records
            if i >= len(records) - 1:
                continue
            following = [len(r) for r in records[i + 1:i + 1 + window] if not r.is_blank]
            if not following:
                continue
            mode = consistent_count(following)
            if mode is not None and len(records[i]) == mode:
                if i:
                    logger.debug(f"Preamble: {i} rows (table starts under {delimiter!r}, {mode} fields)")
                return _lines_before(records, i)

    logger.debug("Preamble: no consistent table structure found, assuming none")
    return 0


def _lines_before(records: Sequence[Record], index: int) -> int:
    """Physical line count of the first `index` records (quoted fields may span lines)."""
    lines = 0
    for record in records[:index]:
        lines += max(1, record.raw.count('\n') + record.raw.count('\r') - record.raw.count('\r\n'))
    return lines

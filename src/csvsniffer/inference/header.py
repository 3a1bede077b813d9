"""Header row detection.

Row 0 is a header when, in a strict majority of columns, it holds a text label
above data that has a more specific type (numbers, booleans, dates). When the
evidence is missing or split, assume there is no header: treating a data row as
a header silently drops it.
"""
import logging
from typing import Sequence

from .types import Type, classify, infer_column_type

logger = logging.getLogger(__name__)


def column_votes(rows: Sequence[Sequence[str]], max_rows: int = 20) -> list:
    """Per column: True if row 0 looks like a label for the data under it, else False."""
    first, data = rows[0], rows[1:1 + max_rows]
    votes = []
    for idx, label in enumerate(first):
        data_type = infer_column_type(row[idx] for row in data if idx < len(row))
        votes.append(classify(label) is Type.TEXT and data_type not in (Type.TEXT, Type.NULL))
    return votes


def detect_header(rows: Sequence[Sequence[str]], max_rows: int = 20) -> bool:
    """Whether rows[0] is a header row."""
    if len(rows) < 2 or len(rows[0]) < 2:
        return False

    votes = column_votes(rows, max_rows)
    has_header = sum(votes) * 2 > len(votes)
    logger.debug(f"Header votes: {sum(votes)}/{len(votes)} -> {has_header}")
    return has_header

"""Delimiter and quoting inference.

Each candidate delimiter is scored by how consistently it splits the sample:
the fraction of records whose field count equals the most common field count.
Quoting, escaping, comments and raggedness are then decided for the winner.
"""
import logging
import string
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..errors import NoConsistentDelimiterError
from .preamble import MIN_FIELDS, modal_count
from .tokenize import Record, split_lines, split_naive, split_records

logger = logging.getLogger(__name__)

# Characters that occur at regular intervals inside values too often to be
# trusted as delimiters (dates, times, decimals, paths, identifiers).
NON_DELIMITER_CHARS = set('.-/_\\:+%$@"\'#')
COMMENT_CHARS = ('#',)
ESCAPE_CHAR = '\\'
MIN_QUOTED_ROWS = 2


@dataclass
class DelimiterScore:
    delimiter: str
    score: float            # fraction of records with the modal field count
    modal_count: int
    distinct_counts: int
    order: int              # position among candidates
    extra: bool = False     # found by frequency scan rather than configured

    @property
    def splits(self) -> bool:
        return self.modal_count >= MIN_FIELDS

    def rank_key(self) -> tuple:
        # candidates that never split a row rank after every one that does
        return (not self.splits, -self.score, self.distinct_counts, self.extra,
                ord(self.delimiter), self.order)


@dataclass
class DialectGuess:
    """Inferred dialect for a preamble-stripped sample, before header detection."""
    delimiter: str
    quote: Optional[str] = None
    doublequote: bool = False
    escape: Optional[str] = None
    comment: Optional[str] = None
    flexible: bool = False
    score: float = 0.0
    records: List[Record] = field(default_factory=list)   # structural records, quote-aware

    @property
    def max_fields(self) -> int:
        return max((len(r) for r in self.records), default=0)


def find_extra_delimiters(text: str, exclude: Sequence[str], max_rows: int = 100) -> List[str]:
    """Punctuation that appears the same non-zero number of times on a strict majority of lines."""
    lines = [line for line in split_lines(text)[:max_rows] if line.strip()]
    if len(lines) < 2:
        return []

    extras = []
    for ch in string.punctuation:
        if ch in exclude or ch in NON_DELIMITER_CHARS:
            continue
        counts = [line.count(ch) for line in lines]
        mode, occurrences = modal_count(counts)
        if mode > 0 and occurrences * 2 > len(lines):
            extras.append(ch)
    return extras


def _score(records: List[Record], max_rows: int) -> tuple:
    counts = [len(r) for r in records if not r.is_blank][:max_rows]
    if not counts:
        return 0.0, 0, 0
    mode, occurrences = modal_count(counts)
    return occurrences / len(counts), mode, len(set(counts))


def score_delimiter(
    text: str,
    delimiter: str,
    quotes: Sequence[str],
    max_rows: int,
    order: int = 0,
    extra: bool = False,
) -> DelimiterScore:
    """
    Score quote-naively, then under each quote seen in the sample; keep the best.

    A quote-aware split that merges lines is only trusted when it does not
    lower the modal field count.
    """
    naive = split_naive(text, delimiter)
    best = _score(naive, max_rows)
    naive_mode = best[1]
    for q in quotes:
        if q not in text:
            continue
        records = split_records(text, delimiter, q)
        candidate = _score(records, max_rows)
        # an unbalanced quote swallows the following lines into one record
        if len(records) < len(naive) and candidate[1] < naive_mode:
            continue
        if (candidate[0], -candidate[2]) > (best[0], -best[2]):
            best = candidate
    score, mode, distinct = best
    return DelimiterScore(delimiter, score, mode, distinct, order, extra)


def rank_delimiters(
    text: str,
    delimiters: Sequence[str],
    quotes: Sequence[str],
    max_rows: int = 100,
    detect_extra: bool = True,
) -> List[DelimiterScore]:
    """All candidates, best first."""
    candidates = [(d, False) for d in delimiters]
    if detect_extra:
        candidates += [(d, True) for d in find_extra_delimiters(text, delimiters, max_rows)]

    scores = [score_delimiter(text, d, quotes, max_rows, order, extra)
              for order, (d, extra) in enumerate(candidates)]
    scores.sort(key=DelimiterScore.rank_key)
    for s in scores:
        logger.debug(f"Delimiter {s.delimiter!r}: score={s.score:.3f} fields={s.modal_count} "
                     f"distinct={s.distinct_counts}")
    return scores


def choose_delimiter(scores: List[DelimiterScore], min_confidence: float) -> DelimiterScore:
    """Best multi-field candidate; single-field candidates only when nothing splits."""
    eligible = [s for s in scores if s.splits] or scores
    best = min(eligible, key=DelimiterScore.rank_key)
    if best.score < min_confidence:
        raise NoConsistentDelimiterError(best.delimiter.encode('latin-1'), best.score, min_confidence)
    return best


def detect_quote(text: str, delimiter: str, quotes: Sequence[str]) -> tuple:
    """
    Return (quote, doublequote, escape) for the chosen delimiter.

    A quote character qualifies when it wraps whole fields at the same column
    in at least two records that have the expected field count; the one
    wrapping the most fields wins.
    """
    best = (None, False, None)
    best_count = 0
    for q in quotes:
        if q not in text:
            continue
        escape = ESCAPE_CHAR if ESCAPE_CHAR + q in text else None
        records = split_records(text, delimiter, q, escape)
        mode, _ = modal_count([len(r) for r in records if not r.is_blank])
        rows = [r for r in records if len(r) == mode]
        quoted = [f for r in rows for f in r.fields if f.quoted]
        positions = Counter(idx for r in rows for idx, f in enumerate(r.fields) if f.quoted)
        if max(positions.values(), default=0) < MIN_QUOTED_ROWS:
            continue
        if len(quoted) > best_count:
            best_count = len(quoted)
            doublequote = any(f.doubled for f in quoted)
            used_escape = escape if any(f.escaped for f in quoted) else None
            best = (q, doublequote, used_escape)

    if best[0] is not None:
        logger.debug(f"Quote {best[0]!r}: {best_count} quoted fields, doublequote={best[1]}, "
                     f"escape={best[2]!r}")
    return best


def detect_comment(records: List[Record], modal: int) -> Optional[str]:
    """A comment character must start every line it appears on, and those lines must not fit the table."""
    for c in COMMENT_CHARS:
        commented = [r for r in records if r.raw.lstrip().startswith(c)]
        if not commented:
            continue
        others = [r for r in records if not r.raw.lstrip().startswith(c)]
        if any(c in r.raw for r in others):
            continue
        if all(len(r) != modal for r in commented):
            return c
    return None


def infer_dialect(
    text: str,
    delimiters: Sequence[str],
    quotes: Sequence[str],
    max_rows: int = 100,
    min_confidence: float = 0.5,
    detect_extra: bool = True,
    quote: Optional[str] = None,
    quote_fixed: bool = False,
) -> DialectGuess:
    """
    Infer delimiter, quoting, comment character and raggedness.

    When exactly one delimiter is given it is used as-is without a confidence
    check. When quote_fixed is set, quote detection is skipped and `quote`
    (possibly None) is used.
    """
    if len(delimiters) == 1:
        best = score_delimiter(text, delimiters[0], quotes, max_rows)
    else:
        best = choose_delimiter(
            rank_delimiters(text, delimiters, quotes, max_rows, detect_extra), min_confidence
        )
    delimiter = best.delimiter

    if quote_fixed:
        escape = ESCAPE_CHAR if quote and ESCAPE_CHAR + quote in text else None
        q, doublequote = quote, True
    else:
        q, doublequote, escape = detect_quote(text, delimiter, quotes)

    records = [r for r in split_records(text, delimiter, q, escape) if not r.is_blank]
    mode, _ = modal_count([len(r) for r in records])

    comment = detect_comment(records, mode)
    if comment is not None:
        records = [r for r in records if not r.raw.lstrip().startswith(comment)]
        logger.debug(f"Comment character {comment!r}")

    counts = Counter(len(r) for r in records)
    flexible = len(counts) > 1
    logger.debug(f"Chose delimiter {delimiter!r} (score {best.score:.3f}); flexible={flexible}")

    return DialectGuess(
        delimiter=delimiter,
        quote=q,
        doublequote=doublequote,
        escape=escape,
        comment=comment,
        flexible=flexible,
        score=best.score,
        records=records,
    )

"""Column type inference.

Values are classified into a small lattice and a column's type is the join
(most general type) over all of its values:

    NULL < BOOLEAN < INTEGER < FLOAT < TEXT
    NULL < DATE < DATETIME < TEXT

NULL is what an empty value classifies as; it joins to the other type. TEXT
absorbs everything. Numeric and temporal types only meet at TEXT.
"""
import re
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Sequence

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
INT64_DIGITS = len(str(INT64_MAX))

BOOLEAN_LITERALS = {'true', 'false', 'yes', 'no'}

INTEGER_RE = re.compile(r'^[+-]?\d+$')
FLOAT_RE = re.compile(r'^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$')
DATE_FORMATS = ('%Y-%m-%d', '%Y/%m/%d', '%d/%m/%Y', '%m/%d/%Y', '%d-%m-%Y')
DATE_RE = re.compile(r'^\d{1,4}[-/]\d{1,2}[-/]\d{1,4}$')
DATETIME_RE = re.compile(
    r'^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d{1,9})?)?(Z|[+-]\d{2}:?\d{2})?$'
)


class Type(Enum):
    NULL = 'NULL'
    BOOLEAN = 'Boolean'
    INTEGER = 'Integer'
    FLOAT = 'Float'
    DATE = 'Date'
    DATETIME = 'DateTime'
    TEXT = 'Text'

    def __str__(self) -> str:
        return self.value

    def join(self, other: 'Type') -> 'Type':
        """Most general type accommodating both."""
        return _JOIN[(self, other)]


def _build_join_table() -> Dict[tuple, Type]:
    N, B, I, F, D, DT, T = (Type.NULL, Type.BOOLEAN, Type.INTEGER, Type.FLOAT,
                            Type.DATE, Type.DATETIME, Type.TEXT)
    rows = {
        N:  {N: N,  B: B, I: I, F: F, D: D,  DT: DT, T: T},
        B:  {N: B,  B: B, I: I, F: F, D: T,  DT: T,  T: T},
        I:  {N: I,  B: I, I: I, F: F, D: T,  DT: T,  T: T},
        F:  {N: F,  B: F, I: F, F: F, D: T,  DT: T,  T: T},
        D:  {N: D,  B: T, I: T, F: T, D: D,  DT: DT, T: T},
        DT: {N: DT, B: T, I: T, F: T, D: DT, DT: DT, T: T},
        T:  {N: T,  B: T, I: T, F: T, D: T,  DT: T,  T: T},
    }
    return {(a, b): result for a, row in rows.items() for b, result in row.items()}


_JOIN = _build_join_table()


def _is_date(value: str) -> bool:
    if not DATE_RE.match(value):
        return False
    for fmt in DATE_FORMATS:
        try:
            datetime.strptime(value, fmt)
            return True
        except ValueError:
            continue
    return False


def _is_datetime(value: str) -> bool:
    if not DATETIME_RE.match(value):
        return False
    candidate = value.replace(' ', 'T', 1)
    if candidate.endswith('Z'):
        candidate = candidate[:-1] + '+00:00'
    # fromisoformat only takes up to microseconds
    candidate = re.sub(r'(\.\d{6})\d+', r'\1', candidate)
    candidate = re.sub(r'([+-]\d{2})(\d{2})$', r'\1:\2', candidate)
    try:
        datetime.fromisoformat(candidate)
        return True
    except ValueError:
        return False


def classify(value: str) -> Type:
    """Classify a single raw field value."""
    s = value.strip()
    if not s:
        return Type.NULL
    if s.lower() in BOOLEAN_LITERALS:
        return Type.BOOLEAN
    if INTEGER_RE.match(s):
        # Out of int64 range is still a number, just not an integer column
        if len(s.lstrip('+-')) > INT64_DIGITS:
            return Type.FLOAT
        return Type.INTEGER if INT64_MIN <= int(s) <= INT64_MAX else Type.FLOAT
    if FLOAT_RE.match(s):
        return Type.FLOAT
    if _is_date(s):
        return Type.DATE
    if _is_datetime(s):
        return Type.DATETIME
    return Type.TEXT


def join_all(types: Iterable[Type]) -> Type:
    result = Type.NULL
    for t in types:
        result = result.join(t)
        if result is Type.TEXT:
            break
    return result


def infer_column_type(values: Iterable[str]) -> Type:
    return join_all(classify(v) for v in values)


def infer_types(columns: Dict[int, Sequence[str]]) -> Dict[int, Type]:
    """One type per column index, the join over that column's values."""
    return {idx: infer_column_type(values) for idx, values in columns.items()}


def columns_from_rows(rows: Sequence[Sequence[str]], num_fields: int) -> Dict[int, List[str]]:
    """Transpose rows into a column index -> values mapping, skipping missing cells."""
    columns: Dict[int, List[str]] = {idx: [] for idx in range(num_fields)}
    for row in rows:
        for idx, value in enumerate(row[:num_fields]):
            columns[idx].append(value)
    return columns

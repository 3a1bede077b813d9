"""
Sniffer - infer the dialect and schema of a delimited text file from a sample.

Pipeline:
1. Read a bounded sample and check whether it is UTF-8
2. Skip preamble lines (titles, notes, blank lines)
3. Score candidate delimiters, then detect quoting, comments and raggedness
4. Decide whether the first row is a header
5. Infer one type per column and assemble Metadata
"""
import logging
from pathlib import Path
from typing import IO, List, Optional, Sequence, Union

from .config import SniffConfig
from .errors import SampleError
from .inference.dialect import DialectGuess, find_extra_delimiters, infer_dialect
from .inference.header import detect_header
from .inference.preamble import count_preamble_rows
from .inference.tokenize import Record, split_lines
from .inference.types import columns_from_rows, infer_types
from .metadata import ByteLike, Comment, Dialect, Escape, Header, Metadata, Quote, to_byte
from .sample import decode_sample, read_sample, trim_partial_record

logger = logging.getLogger(__name__)


class Sniffer:
    """
    Infers CSV Metadata from a path, a stream or raw bytes.

    Usage:
        metadata = Sniffer().sniff_path('data.csv')
        df = metadata.open_path('data.csv')

    Passing `delimiter` or `quote` fixes that part of the dialect instead of
    inferring it (use Quote.none() to force quoting off).
    """

    def __init__(
        self,
        config: Optional[SniffConfig] = None,
        *,
        delimiter: Optional[ByteLike] = None,
        quote: Optional[Quote] = None,
    ):
        self.config = config or SniffConfig()
        self.delimiter = to_byte(delimiter) if delimiter is not None else None
        self.quote = quote

    def sniff_path(self, path: Union[str, Path]) -> Metadata:
        """Sniff a file on disk. Raises OSError if it cannot be read."""
        with open(path, 'rb') as f:
            return self.sniff_reader(f)

    def sniff_reader(self, rdr: IO) -> Metadata:
        """Sniff a stream; seekable streams are rewound afterwards."""
        sample, truncated = read_sample(rdr, self.config.sample_size)
        return self.sniff_bytes(sample, truncated=truncated)

    def sniff_bytes(self, sample: Union[bytes, str], truncated: bool = False) -> Metadata:
        """
        Sniff an in-memory sample.

        `truncated` marks a sample cut off by a size limit: its last, possibly
        partial, line is ignored.
        """
        if isinstance(sample, str):
            sample = sample.encode('utf-8')
        if not sample.strip():
            raise SampleError("Sample is empty")

        text, is_utf8 = decode_sample(sample, truncated)
        if truncated:
            text = trim_partial_record(text)

        cfg = self.config
        delimiters = self._delimiters()
        fixed_quote = self._fixed_quote_char()
        preamble_quotes = [fixed_quote] if self.quote is not None else list(cfg.quotes)

        preamble_delimiters = list(delimiters)
        if self.delimiter is None and cfg.detect_extra_delimiters:
            preamble_delimiters += find_extra_delimiters(text, delimiters, cfg.max_rows)

        num_preamble = count_preamble_rows(
            text, preamble_delimiters, preamble_quotes, cfg.preamble_window, cfg.max_preamble_rows
        )
        body = ''.join(split_lines(text)[num_preamble:])
        if not body.strip():
            raise SampleError(f"No tabular rows found after {num_preamble} preamble rows")

        guess = infer_dialect(
            body,
            delimiters,
            cfg.quotes,
            max_rows=cfg.max_rows,
            min_confidence=cfg.min_confidence,
            detect_extra=cfg.detect_extra_delimiters and self.delimiter is None,
            quote=fixed_quote,
            quote_fixed=self.quote is not None,
        )
        if not guess.records:
            raise SampleError("Sample has no records to analyse")

        rows = [r.values for r in guess.records]
        has_header = detect_header(rows, cfg.header_rows)
        dialect = self._build_dialect(guess, num_preamble, has_header, is_utf8)
        return assemble_metadata(dialect, guess.records, has_header, cfg.type_rows)

    def _delimiters(self) -> List[str]:
        if self.delimiter is not None:
            return [self.delimiter.decode('latin-1')]
        return list(self.config.delimiters)

    def _fixed_quote_char(self) -> Optional[str]:
        if self.quote is None or not self.quote.is_enabled:
            return None
        return self.quote.char.decode('latin-1')

    def _build_dialect(self, guess: DialectGuess, num_preamble: int, has_header: bool,
                       is_utf8: bool) -> Dialect:
        if self.quote is not None:
            quote = self.quote
        elif guess.quote is not None:
            quote = Quote.some(guess.quote, guess.doublequote)
        else:
            quote = Quote.none()
        return Dialect(
            delimiter=to_byte(guess.delimiter),
            header=Header(has_header_row=has_header, num_preamble_rows=num_preamble),
            quote=quote,
            escape=Escape.enabled(guess.escape) if guess.escape else Escape.disabled(),
            comment=Comment.enabled(guess.comment) if guess.comment else Comment.disabled(),
            flexible=guess.flexible,
            is_utf8=is_utf8,
        )


def field_names(header_row: Optional[Sequence[str]], num_fields: int) -> List[str]:
    """Header labels, with positional placeholders for missing or empty ones."""
    names = []
    for i in range(num_fields):
        label = header_row[i].strip() if header_row is not None and i < len(header_row) else ''
        names.append(label or f"field {i}")
    return names


def avg_record_len(records: Sequence[Record], encoding: str) -> int:
    if not records:
        return 0
    total = sum(len(r.raw.encode(encoding, errors='replace')) for r in records)
    return total // len(records)


def assemble_metadata(
    dialect: Dialect,
    records: Sequence[Record],
    has_header: bool,
    type_rows: Optional[int] = None,
) -> Metadata:
    """Combine the dialect with field names and per-column types."""
    rows = [r.values for r in records]
    num_fields = max((len(row) for row in rows), default=0)
    data_rows = rows[1:] if has_header else rows
    if type_rows is not None:
        data_rows = data_rows[:type_rows]

    types = infer_types(columns_from_rows(data_rows, num_fields))
    return Metadata(
        dialect=dialect,
        avg_record_len=avg_record_len(records, dialect.encoding),
        num_fields=num_fields,
        fields=tuple(field_names(rows[0] if has_header else None, num_fields)),
        types=tuple(types[i] for i in range(num_fields)),
    )

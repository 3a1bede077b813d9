"""
CSV metadata types - the result of sniffing.

A Dialect carries everything needed to configure a reader (stdlib csv or
pandas.read_csv). Metadata adds the column schema discovered from the sample.
"""
import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .inference.types import Type
from .sample import snip_preamble

ByteLike = Union[bytes, str, int]


def to_byte(value: ByteLike) -> bytes:
    """Normalise a single character given as bytes, str or int to one byte."""
    if isinstance(value, int):
        result = bytes([value])
    elif isinstance(value, str):
        result = value.encode('latin-1')
    else:
        result = bytes(value)
    if len(result) != 1:
        raise ValueError(f"Expected a single byte, got {value!r}")
    return result


def _show(char: Optional[bytes]) -> str:
    if char is None:
        return 'none'
    text = char.decode('latin-1')
    return {'\t': '\\t', ' ': "' '"}.get(text, text)


@dataclass(frozen=True)
class Header:
    """Header row presence and the number of preamble rows before it."""
    has_header_row: bool = False
    num_preamble_rows: int = 0


@dataclass(frozen=True)
class Quote:
    """Quoting style: disabled (char is None) or a quote byte."""
    char: Optional[bytes] = None
    doublequote: bool = True    # "" inside a quoted field is a literal quote

    @classmethod
    def none(cls) -> 'Quote':
        return cls(None, False)

    @classmethod
    def some(cls, char: ByteLike, doublequote: bool = True) -> 'Quote':
        return cls(to_byte(char), doublequote)

    @property
    def is_enabled(self) -> bool:
        return self.char is not None

    def __str__(self) -> str:
        return _show(self.char)


@dataclass(frozen=True)
class _ByteOption:
    char: Optional[bytes] = None

    @classmethod
    def enabled(cls, char: ByteLike):
        return cls(to_byte(char))

    @classmethod
    def disabled(cls):
        return cls(None)

    @property
    def is_enabled(self) -> bool:
        return self.char is not None

    def __str__(self) -> str:
        return f"Enabled({_show(self.char)})" if self.char is not None else 'Disabled'


class Escape(_ByteOption):
    """Escape character inside quoted fields, or disabled."""


class Comment(_ByteOption):
    """Comment character at the start of a line, or disabled."""


@dataclass(frozen=True)
class Dialect:
    """Structural parsing contract for a delimited text file."""
    delimiter: bytes = b','
    header: Header = field(default_factory=Header)
    quote: Quote = field(default_factory=Quote.none)
    escape: Escape = field(default_factory=Escape.disabled)
    comment: Comment = field(default_factory=Comment.disabled)
    flexible: bool = False
    is_utf8: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'delimiter', to_byte(self.delimiter))

    @property
    def delimiter_char(self) -> str:
        return self.delimiter.decode('latin-1')

    @property
    def encoding(self) -> str:
        return 'utf-8' if self.is_utf8 else 'latin-1'

    def __str__(self) -> str:
        return '\n'.join([
            'Dialect:',
            f"\tDelimiter: {_show(self.delimiter)}",
            f"\tHas header row?: {str(self.header.has_header_row).lower()}",
            f"\tNumber of preamble rows: {self.header.num_preamble_rows}",
            f"\tQuote character: {self.quote}",
            f"\tDouble quote escapes?: {str(self.quote.doublequote).lower()}",
            f"\tEscape character: {self.escape}",
            f"\tComment character: {self.comment}",
            f"\tFlexible: {str(self.flexible).lower()}",
            f"\tIs utf-8 encoded?: {str(self.is_utf8).lower()}",
        ])

    def to_dict(self) -> dict:
        def char(c: Optional[bytes]) -> Optional[str]:
            return c.decode('latin-1') if c is not None else None

        return {
            'delimiter': self.delimiter_char,
            'has_header_row': self.header.has_header_row,
            'num_preamble_rows': self.header.num_preamble_rows,
            'quote': char(self.quote.char),
            'doublequote': self.quote.doublequote,
            'escape': char(self.escape.char),
            'comment': char(self.comment.char),
            'flexible': self.flexible,
            'is_utf8': self.is_utf8,
        }

    def csv_reader_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for csv.reader (comments are filtered separately)."""
        kwargs: Dict[str, Any] = {'delimiter': self.delimiter_char}
        if self.quote.is_enabled:
            kwargs['quotechar'] = self.quote.char.decode('latin-1')
            kwargs['doublequote'] = self.quote.doublequote
            kwargs['quoting'] = csv.QUOTE_MINIMAL
        else:
            kwargs['quoting'] = csv.QUOTE_NONE
        if self.escape.is_enabled:
            kwargs['escapechar'] = self.escape.char.decode('latin-1')
        return kwargs

    def read_csv_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for pandas.read_csv on a stream already past the preamble."""
        kwargs: Dict[str, Any] = {
            'sep': self.delimiter_char,
            'header': 0 if self.header.has_header_row else None,
            'encoding': self.encoding,
            'skip_blank_lines': True,
        }
        if self.quote.is_enabled:
            kwargs['quotechar'] = self.quote.char.decode('latin-1')
            kwargs['doublequote'] = self.quote.doublequote
            kwargs['quoting'] = csv.QUOTE_MINIMAL
        else:
            kwargs['quoting'] = csv.QUOTE_NONE
        if self.escape.is_enabled:
            kwargs['escapechar'] = self.escape.char.decode('latin-1')
        if self.comment.is_enabled:
            kwargs['comment'] = self.comment.char.decode('latin-1')
        if self.flexible:
            kwargs['engine'] = 'python'
            kwargs['on_bad_lines'] = 'warn'
        return kwargs

    def open_reader(self, rdr, **overrides) -> pd.DataFrame:
        """Read a binary or text stream positioned at the start of the file into a DataFrame."""
        snip_preamble(rdr, self.header.num_preamble_rows)
        kwargs = self.read_csv_kwargs()
        kwargs.update(overrides)
        return pd.read_csv(rdr, **kwargs)

    def open_path(self, path: Union[str, Path], **overrides) -> pd.DataFrame:
        """Open a file with this dialect and read it into a DataFrame."""
        with open(path, 'rb') as f:
            return self.open_reader(f, **overrides)

    def iter_records(self, path: Union[str, Path]) -> Iterator[List[str]]:
        """Yield records (header included) using the stdlib csv reader."""
        with open(path, encoding=self.encoding, newline='') as f:
            snip_preamble(f, self.header.num_preamble_rows)
            lines: Any = f
            if self.comment.is_enabled:
                marker = self.comment.char.decode('latin-1')
                lines = (line for line in f if not line.lstrip().startswith(marker))
            for record in csv.reader(lines, **self.csv_reader_kwargs()):
                if record:
                    yield record


def _unique_names(names: Sequence[str]) -> List[str]:
    seen: Dict[str, int] = {}
    result = []
    for name in names:
        if name in seen:
            seen[name] += 1
            result.append(f"{name}.{seen[name]}")
        else:
            seen[name] = 0
            result.append(name)
    return result


@dataclass(frozen=True)
class Metadata:
    """Primary sniffing result: dialect plus column schema."""
    dialect: Dialect
    avg_record_len: int
    num_fields: int
    fields: Tuple[str, ...]
    types: Tuple[Type, ...]

    def __post_init__(self):
        object.__setattr__(self, 'fields', tuple(self.fields))
        object.__setattr__(self, 'types', tuple(self.types))
        if not len(self.fields) == len(self.types) == self.num_fields:
            raise ValueError(
                f"fields ({len(self.fields)}), types ({len(self.types)}) and "
                f"num_fields ({self.num_fields}) must agree"
            )

    def __str__(self) -> str:
        out = io.StringIO()
        out.write('Metadata\n========\n')
        out.write(f"{self.dialect}\n")
        out.write(f"Average record length (bytes): {self.avg_record_len}\n")
        out.write(f"Number of fields: {self.num_fields}\n")
        out.write('Fields:\n')
        idx_width = max((len(f"{i}:") for i in range(self.num_fields)), default=2)
        type_width = max((len(str(t)) for t in self.types), default=4)
        for i, (name, ty) in enumerate(zip(self.fields, self.types)):
            out.write(f"\t{f'{i}:'.ljust(idx_width)}  {str(ty).ljust(type_width)}  {name}\n")
        return out.getvalue()

    def to_dict(self) -> dict:
        return {
            'dialect': self.dialect.to_dict(),
            'avg_record_len': self.avg_record_len,
            'num_fields': self.num_fields,
            'fields': list(self.fields),
            'types': [str(t) for t in self.types],
        }

    def _frame_kwargs(self) -> Dict[str, Any]:
        # header=0 with explicit names replaces the header row; ragged rows fit too
        return {'names': _unique_names(self.fields)}

    def open_reader(self, rdr, **overrides) -> pd.DataFrame:
        kwargs = self._frame_kwargs()
        kwargs.update(overrides)
        return self.dialect.open_reader(rdr, **kwargs)

    def open_path(self, path: Union[str, Path], **overrides) -> pd.DataFrame:
        kwargs = self._frame_kwargs()
        kwargs.update(overrides)
        return self.dialect.open_path(path, **kwargs)

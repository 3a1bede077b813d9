"""Lightweight record splitter used by the sniffing heuristics.

This is not a full CSV reader: it is lenient about malformed quoting and only
needs to be good enough to count fields and spot quoted values. Real parsing is
left to the reader configured from the inferred dialect.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

_LINE_RE = re.compile(r'[^\r\n]*(?:\r\n|\n|\r)|[^\r\n]+$')


@dataclass
class Field:
    value: str
    quoted: bool = False    # opened and closed by the quote character at its boundaries
    doubled: bool = False   # contained a doubled quote
    escaped: bool = False   # contained an escaped character


@dataclass
class Record:
    fields: List[Field] = field(default_factory=list)
    raw: str = ''   # source text, including the line terminator

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def values(self) -> List[str]:
        return [f.value for f in self.fields]

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()


def split_lines(text: str) -> List[str]:
    """Split on \\r\\n, \\n or \\r, keeping terminators."""
    return _LINE_RE.findall(text)


def split_naive(text: str, delimiter: str) -> List[Record]:
    """Split ignoring quotes entirely."""
    records = []
    for line in split_lines(text):
        content = line.rstrip('\r\n')
        records.append(Record([Field(v) for v in content.split(delimiter)], line))
    return records


def split_records(
    text: str,
    delimiter: str,
    quote: Optional[str] = None,
    escape: Optional[str] = None,
) -> List[Record]:
    """
    Split text into records, honouring quoting when a quote character is given.

    A field is quoted only when the quote character opens it; a quote in the
    middle of a field is literal. Inside a quoted field a doubled quote and
    (when enabled) an escaped quote are both taken literally, and line breaks
    do not end the record.
    """
    if quote is None:
        return split_naive(text, delimiter)

    records: List[Record] = []
    fields: List[Field] = []
    buf: List[str] = []
    quoted = doubled = escaped = False
    in_quotes = False
    at_field_start = True
    record_start = 0
    i = 0
    n = len(text)

    def end_field():
        nonlocal buf, quoted, doubled, escaped, at_field_start
        fields.append(Field(''.join(buf), quoted, doubled, escaped))
        buf = []
        quoted = doubled = escaped = False
        at_field_start = True

    while i < n:
        ch = text[i]
        if in_quotes:
            if escape is not None and ch == escape and i + 1 < n:
                buf.append(text[i + 1])
                escaped = True
                i += 2
                continue
            if ch == quote:
                if i + 1 < n and text[i + 1] == quote:
                    buf.append(quote)
                    doubled = True
                    i += 2
                    continue
                in_quotes = False
                i += 1
                continue
            buf.append(ch)
            i += 1
            continue

        if ch == quote and at_field_start:
            in_quotes = True
            quoted = True
            at_field_start = False
        elif ch == delimiter:
            end_field()
        elif ch == '\n' or ch == '\r':
            end = i + 2 if ch == '\r' and i + 1 < n and text[i + 1] == '\n' else i + 1
            end_field()
            records.append(Record(fields, text[record_start:end]))
            fields = []
            record_start = end
            i = end
            continue
        else:
            # text after a closing quote means the field was not cleanly quoted
            buf.append(ch)
            quoted = False
            at_field_start = False
        i += 1

    if record_start < n:
        if in_quotes:
            quoted = False
        end_field()
        records.append(Record(fields, text[record_start:]))
    return records


def field_counts(records: List[Record]) -> List[int]:
    return [len(r) for r in records if not r.is_blank]

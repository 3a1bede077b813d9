"""Sample acquisition - read a bounded prefix of a file or stream for sniffing."""
import logging
from typing import IO, Tuple

from .config import SampleSize

logger = logging.getLogger(__name__)

UTF8_BOM = '\ufeff'


def _as_bytes(chunk) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode('utf-8')
    return bytes(chunk)


def read_sample(rdr: IO, sample_size: SampleSize) -> Tuple[bytes, bool]:
    """
    Read up to the configured limit from a binary or text stream.

    Returns (sample, truncated) where truncated is True when the stream had
    more data past the limit. Seekable streams are rewound to where they
    started so they can be handed to a reader afterwards.
    """
    start = rdr.tell() if rdr.seekable() else None

    if sample_size.kind == 'all':
        data, truncated = _as_bytes(rdr.read()), False
    elif sample_size.kind == 'records':
        lines = []
        for _ in range(sample_size.value):
            line = rdr.readline()
            if not line:
                break
            lines.append(_as_bytes(line))
        data = b''.join(lines)
        truncated = bool(rdr.readline())
    else:
        data = _as_bytes(rdr.read(sample_size.value))
        truncated = bool(rdr.read(1))

    if start is not None:
        rdr.seek(start)

    logger.debug(f"Read {len(data)} bytes ({sample_size}){' - truncated' if truncated else ''}")
    return data, truncated


def decode_sample(data: bytes, truncated: bool = False) -> Tuple[str, bool]:
    """
    Decode a sample, reporting whether it is valid UTF-8.

    A multibyte character cut off by a byte limit does not count against the
    sample. Anything else that fails to decode falls back to latin-1 so the
    byte-level heuristics still run.
    """
    try:
        text, is_utf8 = data.decode('utf-8'), True
    except UnicodeDecodeError as e:
        if truncated and e.reason == 'unexpected end of data' and e.start >= len(data) - 3:
            text, is_utf8 = data[:e.start].decode('utf-8'), True
        else:
            logger.debug(f"Sample is not valid UTF-8 ({e}); using latin-1")
            text, is_utf8 = data.decode('latin-1'), False

    if text.startswith(UTF8_BOM):
        text = text[1:]
    return text, is_utf8


def trim_partial_record(text: str) -> str:
    """Drop a trailing line cut off by the sample limit (kept if it is the only line)."""
    cut = max(text.rfind('\n'), text.rfind('\r'))
    if cut == -1:
        return text
    return text[:cut + 1]


def snip_preamble(rdr: IO, num_preamble_rows: int) -> None:
    """Advance a stream past the preamble lines."""
    for _ in range(num_preamble_rows):
        if not rdr.readline():
            break

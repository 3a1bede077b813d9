"""Sniffing configuration dataclasses"""
from dataclasses import dataclass, field, asdict
from typing import List, Optional
import json
import os

from dotenv import load_dotenv

DEFAULT_SAMPLE_BYTES = 64 * 1024
DEFAULT_DELIMITERS = [',', '\t', ';', '|']
DEFAULT_QUOTES = ['"', "'"]


@dataclass(frozen=True)
class SampleSize:
    """How much of a file or stream to read before sniffing."""
    kind: str = 'bytes'             # bytes, records, all
    value: Optional[int] = DEFAULT_SAMPLE_BYTES

    @classmethod
    def bytes(cls, n: int) -> 'SampleSize':
        if n <= 0:
            raise ValueError(f"Sample size must be positive, got {n}")
        return cls('bytes', n)

    @classmethod
    def records(cls, n: int) -> 'SampleSize':
        if n <= 0:
            raise ValueError(f"Sample record count must be positive, got {n}")
        return cls('records', n)

    @classmethod
    def all(cls) -> 'SampleSize':
        return cls('all', None)

    def __str__(self) -> str:
        if self.kind == 'all':
            return 'all'
        return f"{self.value} {self.kind}"


@dataclass
class SniffConfig:
    """Limits and thresholds used by the inference heuristics"""
    sample_size: SampleSize = field(default_factory=SampleSize)
    delimiters: List[str] = field(default_factory=lambda: list(DEFAULT_DELIMITERS))
    quotes: List[str] = field(default_factory=lambda: list(DEFAULT_QUOTES))
    detect_extra_delimiters: bool = True   # also try punctuation seen at regular intervals
    max_rows: int = 100                    # records scored per delimiter candidate
    min_confidence: float = 0.5            # below this: NoConsistentDelimiterError
    preamble_window: int = 10              # records examined after each preamble candidate
    max_preamble_rows: int = 50
    header_rows: int = 20                  # data rows compared against row 0
    type_rows: Optional[int] = None        # rows used for the schema (None = whole sample)

    def __post_init__(self):
        if not self.delimiters:
            raise ValueError("At least one candidate delimiter is required")
        for d in self.delimiters + self.quotes:
            if len(d.encode('latin-1')) != 1:
                raise ValueError(f"Delimiters and quotes must be single bytes, got {d!r}")
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(f"min_confidence must be within [0, 1], got {self.min_confidence}")

    def to_dict(self) -> dict:
        data = asdict(self)
        data['sample_size'] = {'kind': self.sample_size.kind, 'value': self.sample_size.value}
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> 'SniffConfig':
        size = data.get('sample_size') or {}
        return cls(
            sample_size=SampleSize(size.get('kind', 'bytes'), size.get('value', DEFAULT_SAMPLE_BYTES)),
            delimiters=data.get('delimiters', list(DEFAULT_DELIMITERS)),
            quotes=data.get('quotes', list(DEFAULT_QUOTES)),
            detect_extra_delimiters=data.get('detect_extra_delimiters', True),
            max_rows=data.get('max_rows', 100),
            min_confidence=data.get('min_confidence', 0.5),
            preamble_window=data.get('preamble_window', 10),
            max_preamble_rows=data.get('max_preamble_rows', 50),
            header_rows=data.get('header_rows', 20),
            type_rows=data.get('type_rows'),
        )

    @classmethod
    def from_env(cls) -> 'SniffConfig':
        """Build a config from CSVSNIFF_* environment variables (and a .env file if present)."""
        load_dotenv()

        kwargs = {}
        if os.getenv('CSVSNIFF_SAMPLE_RECORDS'):
            kwargs['sample_size'] = SampleSize.records(int(os.environ['CSVSNIFF_SAMPLE_RECORDS']))
        elif os.getenv('CSVSNIFF_SAMPLE_BYTES'):
            value = os.environ['CSVSNIFF_SAMPLE_BYTES']
            kwargs['sample_size'] = SampleSize.all() if value.lower() == 'all' else SampleSize.bytes(int(value))
        if os.getenv('CSVSNIFF_MAX_ROWS'):
            kwargs['max_rows'] = int(os.environ['CSVSNIFF_MAX_ROWS'])
        if os.getenv('CSVSNIFF_MIN_CONFIDENCE'):
            kwargs['min_confidence'] = float(os.environ['CSVSNIFF_MIN_CONFIDENCE'])
        if os.getenv('CSVSNIFF_DELIMITERS'):
            # "tab" is accepted since a literal tab is awkward in .env files
            raw = os.environ['CSVSNIFF_DELIMITERS']
            kwargs['delimiters'] = ['\t' if d == 'tab' else d for d in raw.split(' ') if d]
        return cls(**kwargs)

"""Sniffing errors.

I/O failures while reading the sample are not wrapped: the ``OSError`` raised by
``open``/``read`` reaches the caller unchanged.
"""
from typing import Optional


class SnifferError(Exception):
    """Base class for all sniffing failures."""


class SampleError(SnifferError):
    """Raised when the sample is empty or too short to infer any structure."""


class NoConsistentDelimiterError(SnifferError):
    """Raised when no candidate delimiter reaches the minimum confidence."""

    def __init__(self, best_delimiter: Optional[bytes], best_score: float, min_confidence: float):
        self.best_delimiter = best_delimiter
        self.best_score = best_score
        self.min_confidence = min_confidence
        shown = repr(best_delimiter.decode('latin-1')) if best_delimiter else 'none'
        super().__init__(
            f"No consistent delimiter found (best {shown} scored {best_score:.2f}, "
            f"need {min_confidence:.2f})"
        )

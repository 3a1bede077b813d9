"""csvsniffer - infer the dialect and schema of delimited text files from a sample"""
from .config import SampleSize, SniffConfig
from .errors import NoConsistentDelimiterError, SampleError, SnifferError
from .inference.types import Type
from .metadata import Comment, Dialect, Escape, Header, Metadata, Quote
from .sniffer import Sniffer

__version__ = '0.1.0'

__all__ = [
    'Sniffer',
    'SniffConfig',
    'SampleSize',
    'Metadata',
    'Dialect',
    'Header',
    'Quote',
    'Escape',
    'Comment',
    'Type',
    'SnifferError',
    'SampleError',
    'NoConsistentDelimiterError',
]

"""
Shared option parsing for csvsniff commands.
"""
from typing import Optional

import click

from csvsniffer.config import SampleSize, SniffConfig
from csvsniffer.metadata import Quote

CHAR_ALIASES = {'tab': '\t', '\\t': '\t', 'space': ' ', 'comma': ',', 'pipe': '|', 'semicolon': ';'}


def parse_char(value: Optional[str], option: str) -> Optional[str]:
    """Turn a --delimiter/--quote value (a character or alias such as 'tab') into one character."""
    if value is None:
        return None
    char = CHAR_ALIASES.get(value.lower(), value)
    if len(char) != 1 or ord(char) > 0xff:
        raise click.BadParameter(f"must be a single character, got {value!r}", param_hint=option)
    return char


def parse_quote(value: Optional[str]) -> Optional[Quote]:
    """'none' disables quoting; any other value fixes the quote character."""
    if value is None:
        return None
    if value.lower() == 'none':
        return Quote.none()
    return Quote.some(parse_char(value, '--quote'))


def build_config(sample_bytes: Optional[int], sample_records: Optional[int], read_all: bool) -> SniffConfig:
    """Environment-derived config with command line sample limits applied on top."""
    if sum(bool(x) for x in (sample_bytes, sample_records, read_all)) > 1:
        raise click.UsageError("Use only one of --sample-bytes, --sample-records and --all")

    config = SniffConfig.from_env()
    if read_all:
        config.sample_size = SampleSize.all()
    elif sample_records:
        config.sample_size = SampleSize.records(sample_records)
    elif sample_bytes:
        config.sample_size = SampleSize.bytes(sample_bytes)
    return config

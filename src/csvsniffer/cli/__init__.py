"""
csvsniff CLI module - shared console and commands.
"""
from csvsniffer.cli.console import console, custom_theme
from csvsniffer.cli.helpers import parse_char, parse_quote, build_config
from csvsniffer.cli.report import display_metadata, dialect_table, fields_table
from csvsniffer.cli.sniff import sniff_command
from csvsniffer.cli.preview import preview_command

__all__ = [
    'console',
    'custom_theme',
    'parse_char',
    'parse_quote',
    'build_config',
    'display_metadata',
    'dialect_table',
    'fields_table',
    'sniff_command',
    'preview_command',
]

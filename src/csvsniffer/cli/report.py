"""
Rich report for sniffed Metadata.
"""
from rich.panel import Panel
from rich.table import Table

from csvsniffer.cli.console import console
from csvsniffer.metadata import Metadata


def _yes_no(flag: bool) -> str:
    return "[success]yes[/]" if flag else "[muted]no[/]"


def dialect_table(metadata: Metadata) -> Table:
    dialect = metadata.dialect
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Delimiter", repr(dialect.delimiter_char))
    table.add_row("Header row", _yes_no(dialect.header.has_header_row))
    table.add_row("Preamble rows", str(dialect.header.num_preamble_rows))
    table.add_row("Quote", str(dialect.quote) if dialect.quote.is_enabled else "[muted]none[/]")
    if dialect.quote.is_enabled:
        table.add_row("Doubled quotes", _yes_no(dialect.quote.doublequote))
    table.add_row("Escape", str(dialect.escape))
    table.add_row("Comment", str(dialect.comment))
    table.add_row("Flexible", _yes_no(dialect.flexible))
    table.add_row("UTF-8", _yes_no(dialect.is_utf8))
    table.add_row("Avg record length", f"{metadata.avg_record_len} bytes")
    return table


def fields_table(metadata: Metadata) -> Table:
    table = Table(title=f"Fields ({metadata.num_fields})")
    table.add_column("#", style="muted", justify="right")
    table.add_column("Type", style="type")
    table.add_column("Name", style="bold white")
    for i, (name, ty) in enumerate(zip(metadata.fields, metadata.types)):
        table.add_row(str(i), str(ty), name)
    return table


def display_metadata(metadata: Metadata, title: str) -> None:
    """Dialect summary panel followed by the index/type/name table."""
    console.print(Panel(dialect_table(metadata), title=title, title_align="left", expand=False))
    console.print(fields_table(metadata))

"""
Preview command - sniff a file, then read it with the inferred dialect.
"""
from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from csvsniffer.cli.console import console
from csvsniffer.cli.helpers import build_config, parse_char, parse_quote
from csvsniffer.errors import SnifferError
from csvsniffer.sniffer import Sniffer


@click.command('preview')
@click.argument('path', type=click.Path(dir_okay=False))
@click.option('--rows', default=10, show_default=True, type=click.IntRange(min=1), help='Rows to show')
@click.option('--delimiter', help="Use this delimiter instead of inferring it ('tab' accepted)")
@click.option('--quote', help="Use this quote character instead of inferring it ('none' disables quoting)")
@click.pass_context
def preview_command(ctx: click.Context, path: str, rows: int, delimiter: Optional[str], quote: Optional[str]):
    """Show the first rows of a file parsed with its sniffed dialect."""
    sniffer = Sniffer(build_config(None, None, False),
                      delimiter=parse_char(delimiter, '--delimiter'), quote=parse_quote(quote))
    try:
        metadata = sniffer.sniff_path(path)
        df = metadata.open_path(path, nrows=rows, dtype=str, keep_default_na=False)
    except (SnifferError, OSError) as e:
        console.print(f"[error]{escape(path)}: {escape(str(e))}[/]")
        ctx.exit(1)
        return

    table = Table(title=f"{escape(path)} (first {len(df)} rows)")
    for name, ty in zip(df.columns, metadata.types):
        table.add_column(f"{name}\n[type]{ty}[/]")
    for row in df.itertuples(index=False):
        table.add_row(*(str(v) for v in row))
    console.print(table)

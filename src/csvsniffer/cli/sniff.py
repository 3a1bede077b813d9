"""
Sniff command - infer and report the dialect and schema of delimited files.
"""
import json
from typing import Optional, Tuple

import click
from rich.markup import escape

from csvsniffer.cli.console import console
from csvsniffer.cli.helpers import build_config, parse_char, parse_quote
from csvsniffer.cli.report import display_metadata
from csvsniffer.errors import SnifferError
from csvsniffer.sniffer import Sniffer


@click.command('sniff')
@click.argument('paths', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--delimiter', help="Use this delimiter instead of inferring it ('tab' accepted)")
@click.option('--quote', help="Use this quote character instead of inferring it ('none' disables quoting)")
@click.option('--sample-bytes', type=click.IntRange(min=1), help='Sniff the first N bytes')
@click.option('--sample-records', type=click.IntRange(min=1), help='Sniff the first N lines')
@click.option('--all', 'read_all', is_flag=True, help='Sniff the whole file')
@click.option('--json', 'as_json', is_flag=True, help='Print one JSON object per file')
@click.pass_context
def sniff_command(ctx: click.Context, paths: Tuple[str, ...], delimiter: Optional[str],
                  quote: Optional[str], sample_bytes: Optional[int], sample_records: Optional[int],
                  read_all: bool, as_json: bool):
    """
    Infer delimiter, quoting, header, preamble and column types.

    Files that cannot be sniffed are reported and the command exits with
    status 1 after processing the rest.
    """
    config = build_config(sample_bytes, sample_records, read_all)
    sniffer = Sniffer(config, delimiter=parse_char(delimiter, '--delimiter'), quote=parse_quote(quote))

    failed = 0
    for path in paths:
        try:
            metadata = sniffer.sniff_path(path)
        except (SnifferError, OSError) as e:
            failed += 1
            if as_json:
                click.echo(json.dumps({'path': path, 'error': str(e)}))
            else:
                console.print(f"[error]{escape(path)}: {escape(str(e))}[/]")
            continue

        if as_json:
            click.echo(json.dumps({'path': path, **metadata.to_dict()}))
        else:
            display_metadata(metadata, title=escape(path))

    if failed:
        ctx.exit(1)

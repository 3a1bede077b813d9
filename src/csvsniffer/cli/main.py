"""
csvsniff - infer CSV dialects and schemas

Commands:
    sniff     Report dialect and column types for one or more files
    preview   Show the first rows parsed with the sniffed dialect
"""
import logging

import click

from csvsniffer.cli.preview import preview_command
from csvsniffer.cli.sniff import sniff_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Log heuristic decisions')
def cli(verbose: bool):
    """csvsniff - CSV dialect and schema sniffer"""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


cli.add_command(sniff_command)
cli.add_command(preview_command)


if __name__ == '__main__':
    cli()

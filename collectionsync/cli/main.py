"""colsync CLI"""

import click

from collectionsync import __version__
from collectionsync.cli.backup import backup
from collectionsync.cli.locate import locate
from collectionsync.cli.sync import sync

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="colsync")
@click.pass_context
def cli(ctx):
    """
    Keep a "latest" API collection in sync with versioned snapshots.
    """
    ctx.ensure_object(dict)


cli.add_command(sync)
cli.add_command(backup)
cli.add_command(locate)

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})

"""Backup command: save the current latest collection to a local file."""

import os
import sys
from pathlib import Path

import click

from collectionsync.exceptions import CollectionSyncError
from collectionsync.remote.services import get_service
from collectionsync.sync.backup import backup_latest

from .debug import add_debug_option
from .options import load_settings, target_options


@add_debug_option
@click.command("backup")
@target_options
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for backup files [env: CS_BACKUP_DIR].",
)
@click.option(
    "--timestamp",
    type=str,
    default=None,
    help="Suffix of the backup file name [env: TIMESTAMP]. Defaults to the current UTC time.",
)
def backup(collection_uid, workspace, latest_name, output_dir, timestamp):
    """Back up the content of the latest collection as JSON."""
    settings = load_settings(
        collection_uid=collection_uid,
        workspace=workspace,
        latest_name=latest_name,
        backup_dir=output_dir,
    )
    try:
        path, located = backup_latest(
            get_service(settings),
            settings.collection_uid,
            settings.latest_name,
            settings.backup_dir,
            timestamp=timestamp or os.environ.get("TIMESTAMP"),
            workspace_name=settings.workspace,
        )
    except (CollectionSyncError, OSError) as e:
        click.echo(click.style("[ERROR]", fg="red", bold=True) + f" Backup failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"Backup created at: {path}")
    click.echo(
        f"Backed up collection: {located.resource.name} (uid: {located.resource.identifier})"
    )

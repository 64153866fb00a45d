"""Locate command: show which collection a sync would act on."""

import sys

import click

from collectionsync.exceptions import CollectionSyncError
from collectionsync.remote.services import get_release_feed, get_service
from collectionsync.sync.locator import MATCHED_BY_NAME, discover
from collectionsync.versioning.source import (
    get_version_source,
    snapshot_prefix,
    versioned_name,
)

from .debug import add_debug_option
from .options import load_settings, target_options


@add_debug_option
@click.command("locate")
@target_options
def locate(collection_uid, workspace, latest_name):
    """Resolve the latest collection and the name of the next snapshot."""
    settings = load_settings(
        collection_uid=collection_uid, workspace=workspace, latest_name=latest_name
    )
    try:
        discovery = discover(
            get_service(settings),
            settings.collection_uid,
            settings.latest_name,
            settings.workspace,
        )
    except CollectionSyncError as e:
        click.echo(click.style("[ERROR]", fg="red", bold=True) + f" {e}", err=True)
        sys.exit(1)

    source = get_version_source(
        settings.version_source.value, get_release_feed(settings)
    )
    prefix = settings.snapshot_prefix or snapshot_prefix(settings.latest_name)
    next_name = versioned_name(prefix, source.next_version(discovery.collections))
    resource = discovery.located.resource

    click.echo(f"Collection: {resource.name}")
    click.echo(f"Identifier: {resource.identifier}")
    click.echo(f"Matched by: {discovery.located.matched_by}")
    if discovery.located.workspace is not None:
        click.echo(f"Workspace:  {discovery.located.workspace.name}")
    click.echo(f"Next snapshot: {next_name}")
    if discovery.located.matched_by == MATCHED_BY_NAME:
        click.echo(
            click.style("[WARNING]", fg="yellow", bold=True)
            + f" Configured identifier is stale; set COLLECTION_UID={resource.identifier}"
        )

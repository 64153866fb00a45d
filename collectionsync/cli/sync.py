"""Sync command: snapshot the latest collection, then replace its content."""

import sys
from pathlib import Path

import click

from collectionsync.exceptions import ConfigurationError
from collectionsync.remote.services import get_release_feed, get_service
from collectionsync.sync.orchestrator import (
    SyncOrchestrator,
    SyncResult,
    SyncStage,
    SyncState,
)
from collectionsync.versioning.source import get_version_source

from .debug import add_debug_option
from .error_formatting import format_summary, pretty_print_failure
from .options import resolve_settings, target_options


@add_debug_option
@click.command("sync")
@target_options
@click.option(
    "-s",
    "--spec-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Generated collection document to publish [env: CS_SPEC_FILE].",
)
@click.option(
    "--version-source",
    type=click.Choice(["siblings", "feed"], case_sensitive=False),
    default=None,
    help="Where snapshot versions come from [env: CS_VERSION_SOURCE].",
)
@click.option(
    "--release-repo",
    type=str,
    default=None,
    help="GitHub owner/name whose latest release drives the version (feed source).",
)
@click.option(
    "-n",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Resolve the collection and the next version, then stop.",
    show_default=True,
)
def sync(
    collection_uid,
    workspace,
    latest_name,
    spec_file,
    version_source,
    release_repo,
    dry_run,
):
    """Archive the latest collection under a new version and publish the new specification."""
    try:
        settings = resolve_settings(
            collection_uid=collection_uid,
            workspace=workspace,
            latest_name=latest_name,
            spec_file=spec_file,
            version_source=version_source.lower() if version_source else None,
            release_repo=release_repo,
        )
        orchestrator = SyncOrchestrator(
            service=get_service(settings),
            version_source=get_version_source(
                settings.version_source.value, get_release_feed(settings)
            ),
            configured_identifier=settings.collection_uid,
            latest_name=settings.latest_name,
            workspace_name=settings.workspace,
            prefix=settings.snapshot_prefix,
        )
    except ConfigurationError as e:
        result = SyncResult(
            state=SyncState.FAILED,
            failed_stage=SyncStage.PREPARE,
            error=e,
            dry_run=dry_run,
        )
    else:
        result = orchestrator.run(settings.spec_file, dry_run=dry_run)

    if not result.ok:
        click.echo(pretty_print_failure(result), err=True)
        sys.exit(1)
    click.echo(format_summary(result))

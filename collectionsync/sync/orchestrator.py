"""
Snapshot-then-update protocol for the latest collection.

One run walks a fixed sequence of states:

    IDLE -> LOCATED -> FETCHED -> VERSIONED -> ARCHIVED -> UPDATED

and stops at the first failing stage. The archive step must succeed before
the update is attempted, so the latest collection is never overwritten without
a prior copy. A failed update leaves the already created snapshot in place.
Nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from collectionsync.exceptions import CollectionSyncError
from collectionsync.model import CollectionResource, Workspace
from collectionsync.remote.service import CollectionService
from collectionsync.versioning.exceptions import VersionSourceUnavailable
from collectionsync.versioning.source import (
    VersionSource,
    snapshot_prefix,
    versioned_name,
)
from collectionsync.versioning.version import default_version

from .archiver import archive
from .locator import LocateResult, discover
from .specfile import load_specification
from .updater import update

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    LOCATED = "located"
    FETCHED = "fetched"
    VERSIONED = "versioned"
    ARCHIVED = "archived"
    UPDATED = "updated"
    FAILED = "failed"


class SyncStage(str, Enum):
    """The step being attempted, reported when a run fails."""

    PREPARE = "prepare"
    LOCATE = "locate"
    FETCH = "fetch"
    VERSION = "version"
    ARCHIVE = "archive"
    UPDATE = "update"


@dataclass
class SyncContext:
    """Per-run state. Created fresh for every run and never shared."""

    specification: Dict[str, Any]
    located: Optional[LocateResult] = None
    collections: List[CollectionResource] = field(default_factory=list)
    content: Optional[Dict[str, Any]] = None
    version: Optional[str] = None
    snapshot_name: Optional[str] = None
    snapshot: Optional[CollectionResource] = None
    updated: Optional[CollectionResource] = None

    @property
    def resource(self) -> Optional[CollectionResource]:
        return self.located.resource if self.located else None

    @property
    def workspace(self) -> Optional[Workspace]:
        return self.located.workspace if self.located else None


@dataclass
class SyncResult:
    state: SyncState
    failed_stage: Optional[SyncStage] = None
    error: Optional[Exception] = None
    dry_run: bool = False
    resource: Optional[CollectionResource] = None
    matched_by: Optional[str] = None
    version: Optional[str] = None
    snapshot_name: Optional[str] = None
    snapshot: Optional[CollectionResource] = None
    updated: Optional[CollectionResource] = None

    @property
    def ok(self) -> bool:
        if self.dry_run:
            return self.state == SyncState.VERSIONED
        return self.state == SyncState.UPDATED


class SyncOrchestrator:
    """
    Runs the snapshot-then-update protocol against a collection service.

    Args:
        service: Remote collection service
        version_source: Strategy supplying the snapshot version
        configured_identifier: Identifier of the latest collection from configuration
        latest_name: Fixed display name of the latest collection
        workspace_name: Restrict discovery to the workspace with this name
        prefix: Snapshot name prefix; derived from ``latest_name`` when omitted
    """

    def __init__(
        self,
        service: CollectionService,
        version_source: VersionSource,
        configured_identifier: Optional[str],
        latest_name: str,
        workspace_name: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        self.service = service
        self.version_source = version_source
        self.configured_identifier = configured_identifier
        self.latest_name = latest_name
        self.workspace_name = workspace_name
        self.prefix = prefix or snapshot_prefix(latest_name)

    def run(self, spec_path: Union[str, Path], dry_run: bool = False) -> SyncResult:
        """Load the specification document, then run the protocol.

        The document is read before any remote call, so a missing document
        costs nothing remotely.
        """
        try:
            specification = load_specification(spec_path)
        except CollectionSyncError as e:
            logger.error(f"Sync failed at stage {SyncStage.PREPARE.value}: {e}")
            return SyncResult(
                state=SyncState.FAILED,
                failed_stage=SyncStage.PREPARE,
                error=e,
                dry_run=dry_run,
            )
        return self.run_document(specification, dry_run=dry_run)

    def run_document(
        self, specification: Dict[str, Any], dry_run: bool = False
    ) -> SyncResult:
        """
        Run the protocol with an already loaded specification document.

        With ``dry_run`` the run stops after computing the snapshot name,
        before anything is created or modified.
        """
        context = SyncContext(specification=specification)
        state = SyncState.IDLE
        stage = SyncStage.LOCATE
        logger.info("Starting collection versioning process...")
        try:
            discovery = discover(
                self.service,
                self.configured_identifier,
                self.latest_name,
                self.workspace_name,
            )
            context.located = discovery.located
            context.collections = discovery.collections
            state = SyncState.LOCATED

            stage = SyncStage.FETCH
            logger.info("Getting current collection content...")
            context.content = self.service.get_collection(context.resource.identifier)
            state = SyncState.FETCHED

            stage = SyncStage.VERSION
            context.version = self._next_version(context.collections)
            context.snapshot_name = versioned_name(self.prefix, context.version)
            logger.info(f"Next version will be: {context.snapshot_name}")
            state = SyncState.VERSIONED

            if dry_run:
                logger.info("Dry run: stopping before the snapshot is created")
                return self._result(context, state, dry_run=True)

            stage = SyncStage.ARCHIVE
            workspace = context.workspace
            context.snapshot = archive(
                self.service,
                context.content,
                context.snapshot_name,
                workspace.identifier if workspace else None,
            )
            state = SyncState.ARCHIVED

            stage = SyncStage.UPDATE
            context.updated = update(
                self.service,
                context.resource.identifier,
                context.specification,
                self.latest_name,
            )
            state = SyncState.UPDATED
        except CollectionSyncError as e:
            logger.error(f"Sync failed at stage {stage.value}: {e}")
            return self._result(
                context, SyncState.FAILED, dry_run=dry_run, stage=stage, error=e
            )

        logger.info(
            f"Updated {self.latest_name}; identifier stayed {context.resource.identifier}"
        )
        return self._result(context, state)

    def _next_version(self, collections: List[CollectionResource]) -> str:
        try:
            return self.version_source.next_version(collections)
        except VersionSourceUnavailable as e:
            fallback = str(default_version())
            logger.warning(f"{e}. Falling back to version {fallback}")
            return fallback

    def _result(
        self,
        context: SyncContext,
        state: SyncState,
        dry_run: bool = False,
        stage: Optional[SyncStage] = None,
        error: Optional[Exception] = None,
    ) -> SyncResult:
        return SyncResult(
            state=state,
            failed_stage=stage,
            error=error,
            dry_run=dry_run,
            resource=context.resource,
            matched_by=context.located.matched_by if context.located else None,
            version=context.version,
            snapshot_name=context.snapshot_name,
            snapshot=context.snapshot,
            updated=context.updated,
        )

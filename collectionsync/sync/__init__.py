from .archiver import archive, strip_identity
from .backup import backup_latest
from .exceptions import (
    ArchiveFailed,
    InvalidUpdatePayload,
    ResourceNotFound,
    SpecificationMissing,
    UpdateFailed,
    WorkspaceNotFound,
)
from .locator import LocateResult, discover, locate, select_workspace
from .orchestrator import SyncContext, SyncOrchestrator, SyncResult, SyncStage, SyncState
from .specfile import load_specification
from .updater import update

__all__ = [
    "SyncOrchestrator",
    "SyncContext",
    "SyncResult",
    "SyncStage",
    "SyncState",
    "LocateResult",
    "locate",
    "discover",
    "select_workspace",
    "archive",
    "strip_identity",
    "update",
    "load_specification",
    "backup_latest",
    "ArchiveFailed",
    "InvalidUpdatePayload",
    "ResourceNotFound",
    "SpecificationMissing",
    "UpdateFailed",
    "WorkspaceNotFound",
]

"""
Exception classes for the sync protocol.
"""

from pathlib import Path
from typing import List, Optional, Union

from collectionsync.exceptions import CollectionSyncError


class WorkspaceNotFound(CollectionSyncError):
    """Raised when no workspace has the configured name."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        self.available = list(available or [])
        listing = ", ".join(repr(n) for n in self.available) or "none"
        super().__init__(f"Workspace '{name}' not found. Available workspaces: {listing}")


class ResourceNotFound(CollectionSyncError):
    """Raised when the latest collection matches neither by identifier nor by name.

    Every candidate name is listed so the operator can see what was searched.
    """

    def __init__(
        self,
        configured_identifier: Optional[str],
        canonical_name: str,
        candidates: Optional[List[str]] = None,
    ):
        self.configured_identifier = configured_identifier
        self.canonical_name = canonical_name
        self.candidates = list(candidates or [])
        listing = ", ".join(repr(n) for n in self.candidates) or "none"
        super().__init__(
            f"Collection not found by identifier {configured_identifier} "
            f"or by name '{canonical_name}'. Candidates: {listing}"
        )


class SpecificationMissing(CollectionSyncError):
    """Raised when the new specification document is missing or unreadable."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Specification document not found at {self.path}"
        if reason:
            message = f"Specification document at {self.path} is unusable: {reason}"
        super().__init__(message)


class InvalidUpdatePayload(CollectionSyncError):
    """Raised before any remote call when an update request is malformed."""

    pass


class ArchiveFailed(CollectionSyncError):
    """Raised when the snapshot could not be created. The latest collection is untouched."""

    def __init__(self, versioned_name: str, cause: Exception):
        self.versioned_name = versioned_name
        self.cause = cause
        super().__init__(f"Failed to create snapshot '{versioned_name}': {cause}")


class UpdateFailed(CollectionSyncError):
    """Raised when the latest collection could not be replaced.

    The snapshot created before the update is not removed.
    """

    def __init__(self, identifier: str, cause: Exception):
        self.identifier = identifier
        self.cause = cause
        super().__init__(f"Failed to update collection {identifier}: {cause}")

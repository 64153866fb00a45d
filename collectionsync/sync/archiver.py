"""Create versioned snapshots of the latest collection."""

import copy
import logging
from typing import Any, Dict, Optional

from collectionsync.model import CollectionResource
from collectionsync.remote.exception import TransportError
from collectionsync.remote.service import CollectionService

from .exceptions import ArchiveFailed

logger = logging.getLogger(__name__)

# Identity is assigned by the service and must never appear in a create or update payload
IDENTITY_FIELDS = ("id", "uid")
INFO_IDENTITY_FIELDS = ("_postman_id", "id", "uid")


def strip_identity(content: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy of ``content`` without identifier fields."""
    stripped = copy.deepcopy(content)
    for key in IDENTITY_FIELDS:
        stripped.pop(key, None)
    info = stripped.get("info")
    if isinstance(info, dict):
        for key in INFO_IDENTITY_FIELDS:
            info.pop(key, None)
    return stripped


def with_name(content: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a copy of ``content`` whose display name (``info.name``) is ``name``."""
    renamed = dict(content)
    info = renamed.get("info")
    renamed["info"] = {**info, "name": name} if isinstance(info, dict) else {"name": name}
    return renamed


def archive(
    service: CollectionService,
    content: Dict[str, Any],
    versioned_name: str,
    workspace: Optional[str] = None,
) -> CollectionResource:
    """
    Create a new, independent collection holding ``content`` under ``versioned_name``.

    Args:
        service: Remote collection service
        content: Current content of the latest collection
        versioned_name: Display name of the snapshot
        workspace: Identifier of the workspace to create the snapshot in

    Returns:
        The created snapshot, with its service-assigned identifier

    Raises:
        ArchiveFailed: If the service rejects the request or cannot be reached
    """
    payload = with_name(strip_identity(content), versioned_name)
    logger.info(f'Creating snapshot: "{versioned_name}"...')
    try:
        snapshot = service.create_collection(payload, workspace=workspace)
    except TransportError as e:
        raise ArchiveFailed(versioned_name, e) from e
    logger.info(f"Created snapshot: {snapshot.name} ({snapshot.identifier})")
    return snapshot

"""Resolve the canonical "latest" collection.

The configured identifier is static configuration that goes stale whenever the
collection is recreated, while the display name is stable but not guaranteed
unique. Resolution therefore tries the identifier first and falls back to an
exact name match, reporting which of the two succeeded.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from collectionsync.model import CollectionResource, Workspace
from collectionsync.remote.service import CollectionService

from .exceptions import ResourceNotFound, WorkspaceNotFound

logger = logging.getLogger(__name__)

MATCHED_BY_IDENTIFIER = "identifier"
MATCHED_BY_NAME = "name"


@dataclass(frozen=True)
class LocateResult:
    resource: CollectionResource
    matched_by: str
    workspace: Optional[Workspace] = None


@dataclass
class Discovery:
    """Outcome of discovering the latest collection against the remote service."""

    located: LocateResult
    collections: List[CollectionResource] = field(default_factory=list)


def select_workspace(workspaces: Iterable[Workspace], name: str) -> Workspace:
    """Return the first workspace whose name equals ``name`` exactly."""
    workspaces = list(workspaces)
    for workspace in workspaces:
        if workspace.name == name:
            return workspace
    raise WorkspaceNotFound(name, [w.name for w in workspaces])


def filter_to_workspace(
    collections: Iterable[CollectionResource], workspace: Workspace
) -> List[CollectionResource]:
    return [c for c in collections if workspace.contains(c)]


def locate(
    collections: Iterable[CollectionResource],
    configured_identifier: Optional[str],
    canonical_name: str,
    workspace_name: Optional[str] = None,
    workspaces: Sequence[Workspace] = (),
) -> LocateResult:
    """
    Find the latest collection among candidates.

    Args:
        collections: Candidate collections, in the order the service listed them
        configured_identifier: Identifier from configuration, possibly stale
        canonical_name: Exact display name of the latest collection
        workspace_name: If given, only members of this workspace are candidates
        workspaces: Workspaces to select ``workspace_name`` from

    Returns:
        The matching collection and the strategy that matched it

    Raises:
        WorkspaceNotFound: If ``workspace_name`` matches no workspace
        ResourceNotFound: If neither strategy matches
    """
    candidates = list(collections)
    workspace = None
    if workspace_name:
        workspace = select_workspace(workspaces, workspace_name)
        candidates = filter_to_workspace(candidates, workspace)

    if configured_identifier:
        for resource in candidates:
            if resource.identifier == configured_identifier:
                return LocateResult(resource, MATCHED_BY_IDENTIFIER, workspace)
        logger.info(
            f"Collection with identifier {configured_identifier} not found, "
            f'searching by name "{canonical_name}"...'
        )

    for resource in candidates:
        if resource.name == canonical_name:
            if configured_identifier:
                logger.info(
                    f"Tip: update the configured collection identifier to {resource.identifier}"
                )
            return LocateResult(resource, MATCHED_BY_NAME, workspace)

    raise ResourceNotFound(
        configured_identifier, canonical_name, [c.name for c in candidates]
    )


def discover(
    service: CollectionService,
    configured_identifier: Optional[str],
    canonical_name: str,
    workspace_name: Optional[str] = None,
) -> Discovery:
    """
    List the remote collections (scoped to a workspace if requested) and locate
    the latest one.

    The returned ``collections`` are the candidates in scope, which are also
    the siblings scanned for existing versions.
    """
    workspaces: List[Workspace] = []
    scope = None
    if workspace_name:
        workspace = select_workspace(service.list_workspaces(), workspace_name)
        if workspace.members is None:
            workspace = service.get_workspace(workspace.identifier)
        logger.info(f"Using workspace {workspace.name} ({workspace.identifier})")
        workspaces = [workspace]
        scope = workspace.identifier

    collections = service.list_collections(workspace=scope)
    logger.info(
        f"Found {len(collections)} collections: {', '.join(c.name for c in collections)}"
    )
    located = locate(
        collections, configured_identifier, canonical_name, workspace_name, workspaces
    )
    in_scope = (
        filter_to_workspace(collections, located.workspace)
        if located.workspace is not None
        else collections
    )
    logger.info(
        f"Found collection: {located.resource.name} "
        f"(identifier: {located.resource.identifier}, matched by {located.matched_by})"
    )
    return Discovery(located=located, collections=in_scope)

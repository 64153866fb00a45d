"""Base class for remote collection services."""

from abc import ABCMeta, abstractmethod
from typing import Any, Dict, List, Optional

from collectionsync.model import CollectionResource, Workspace


class CollectionService(metaclass=ABCMeta):
    """
    A CRUD service over named collections grouped into workspaces.

    Every method performs exactly one blocking remote call and raises
    ``TransportError`` (or one of its subclasses) on failure. No method
    retries.

    Methods:
    - list_collections(workspace): Lists collections, optionally scoped to a workspace.
    - list_workspaces(): Lists workspaces (membership may be omitted).
    - get_workspace(identifier): Retrieves one workspace with its members.
    - get_collection(identifier): Retrieves the full content of a collection.
    - create_collection(content, workspace): Creates a new collection.
    - update_collection(identifier, content): Replaces the content of a collection.
    """

    @abstractmethod
    def list_collections(
        self, workspace: Optional[str] = None
    ) -> List[CollectionResource]:
        """
        Lists the collections visible to the caller.

        Args:
            workspace: Identifier of a workspace to scope the listing to.

        Returns:
            Collections in the order returned by the service.
        """
        raise NotImplementedError

    @abstractmethod
    def list_workspaces(self) -> List[Workspace]:
        """Lists the workspaces visible to the caller."""
        raise NotImplementedError

    @abstractmethod
    def get_workspace(self, identifier: str) -> Workspace:
        """Retrieves a workspace including the identifiers of its collections."""
        raise NotImplementedError

    @abstractmethod
    def get_collection(self, identifier: str) -> Dict[str, Any]:
        """
        Retrieves the content of a collection.

        Raises:
            RemoteNotFoundError: If no collection has this identifier.
        """
        raise NotImplementedError

    @abstractmethod
    def create_collection(
        self, content: Dict[str, Any], workspace: Optional[str] = None
    ) -> CollectionResource:
        """
        Creates a new collection. The service assigns its identifier.

        Raises:
            RemoteValidationError: If the content is rejected.
        """
        raise NotImplementedError

    @abstractmethod
    def update_collection(
        self, identifier: str, content: Dict[str, Any]
    ) -> CollectionResource:
        """
        Replaces the full content of an existing collection, keeping its identifier.

        Raises:
            RemoteValidationError: If the content is rejected.
        """
        raise NotImplementedError

from typing import Any, Optional

from collectionsync.exceptions import CollectionSyncError


class TransportError(CollectionSyncError):
    """Raised when a call to the remote service fails at the network or HTTP layer.

    The upstream status and payload are kept untouched for diagnostics.
    """

    def __init__(
        self, message: str, status: Optional[int] = None, payload: Any = None
    ):
        self.status = status
        self.payload = payload
        super().__init__(message)


class RemoteNotFoundError(TransportError):
    """Raised when the remote service reports that a resource does not exist."""

    pass


class RemoteValidationError(TransportError):
    """Raised when the remote service rejects a request payload."""

    pass

from .exception import RemoteNotFoundError, RemoteValidationError, TransportError
from .service import CollectionService

__all__ = [
    "CollectionService",
    "TransportError",
    "RemoteNotFoundError",
    "RemoteValidationError",
]

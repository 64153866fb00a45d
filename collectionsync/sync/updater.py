import logging
from typing import Any, Dict

from collectionsync.model import CollectionResource
from collectionsync.remote.exception import TransportError
from collectionsync.remote.service import CollectionService

from .archiver import strip_identity, with_name
from .exceptions import InvalidUpdatePayload, UpdateFailed

logger = logging.getLogger(__name__)


def update(
    service: CollectionService,
    identifier: str,
    new_content: Dict[str, Any],
    latest_name: str,
) -> CollectionResource:
    """
    Replace the content of the latest collection in place.

    The payload is checked locally first; nothing is sent when it is invalid.
    The display name is forced to ``latest_name`` and identity fields are
    dropped so the collection keeps its identifier.

    Raises:
        InvalidUpdatePayload: If the identifier is empty or the content is not a non-empty object
        UpdateFailed: If the service rejects the update or cannot be reached
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidUpdatePayload("Cannot update a collection without an identifier")
    if not isinstance(new_content, dict) or not new_content:
        raise InvalidUpdatePayload(
            "The new collection content must be a non-empty JSON object"
        )

    payload = with_name(strip_identity(new_content), latest_name)
    logger.info(f'Updating "{latest_name}" ({identifier}) with the new specification...')
    try:
        return service.update_collection(identifier, payload)
    except TransportError as e:
        raise UpdateFailed(identifier, e) from e

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple, Union

from collectionsync.remote.service import CollectionService

from .locator import LocateResult, discover

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def backup_latest(
    service: CollectionService,
    configured_identifier: Optional[str],
    latest_name: str,
    output_dir: Union[str, Path],
    timestamp: Optional[str] = None,
    workspace_name: Optional[str] = None,
) -> Tuple[Path, LocateResult]:
    """
    Write the current content of the latest collection to a local JSON file.

    The file is ``<output_dir>/collection_<timestamp>.json`` and holds the
    export shape ``{"collection": {...}}``, which ``load_specification``
    accepts again.

    Returns:
        The written path and the located collection
    """
    located = discover(
        service, configured_identifier, latest_name, workspace_name
    ).located
    content = service.get_collection(located.resource.identifier)

    if not timestamp:
        timestamp = datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    backup_path = output_dir / f"collection_{timestamp}.json"
    with open(backup_path, "w", encoding="utf-8") as f:
        json.dump({"collection": content}, f, indent=2)

    logger.info(f"Backup created successfully at: {backup_path}")
    return backup_path, located

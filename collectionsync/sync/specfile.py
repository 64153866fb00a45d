import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from .exceptions import SpecificationMissing

logger = logging.getLogger(__name__)


def load_specification(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the freshly generated collection document.

    A document wrapped as ``{"collection": {...}}`` (the API export and backup
    shape) is unwrapped.

    Raises:
        SpecificationMissing: If the file does not exist or is not a JSON object
    """
    path = Path(path)
    if not path.is_file():
        raise SpecificationMissing(path)
    logger.info(f"Loading specification from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        raise SpecificationMissing(path, str(e)) from e

    if not isinstance(document, dict):
        raise SpecificationMissing(path, "top-level value is not a JSON object")
    if set(document) == {"collection"} and isinstance(document["collection"], dict):
        document = document["collection"]
    return document

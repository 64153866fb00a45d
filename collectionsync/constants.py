from enum import Enum


class VersionSourceEnum(str, Enum):
    """Where the version stamped on a snapshot comes from."""

    siblings = "siblings"
    feed = "feed"


# Display name of the canonical collection. Never versioned.
DEFAULT_LATEST_NAME = "REST API (latest)"

DEFAULT_SPEC_FILE = "postman/collection.json"
DEFAULT_BACKUP_DIR = "postman/backup"

DEFAULT_API_BASE = "https://api.getpostman.com"
DEFAULT_TIMEOUT = 30.0

GITHUB_API_BASE = "https://api.github.com"

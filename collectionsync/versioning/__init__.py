"""
Versioning for collection snapshots.

``version`` holds the three-part version type and the extraction and bump
rules. ``source`` decides which version the next snapshot receives, either
from the names of existing collections or from an external release feed.
"""

from .exceptions import VersioningError, VersionFormatError, VersionSourceUnavailable
from .source import (
    ReleaseFeedVersionSource,
    SiblingScanVersionSource,
    VersionSource,
    get_version_source,
    next_from_feed,
    next_from_siblings,
    snapshot_prefix,
    versioned_name,
)
from .version import (
    SemVer,
    advance_version,
    default_version,
    extract_version,
    highest_version,
)

__all__ = [
    "SemVer",
    "extract_version",
    "advance_version",
    "default_version",
    "highest_version",
    "VersionSource",
    "SiblingScanVersionSource",
    "ReleaseFeedVersionSource",
    "get_version_source",
    "next_from_siblings",
    "next_from_feed",
    "snapshot_prefix",
    "versioned_name",
    "VersioningError",
    "VersionFormatError",
    "VersionSourceUnavailable",
]

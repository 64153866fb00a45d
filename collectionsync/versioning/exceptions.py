"""
Exception classes for the versioning module.
"""

from collectionsync.exceptions import CollectionSyncError


class VersioningError(CollectionSyncError):
    """Base exception for all versioning-related errors."""

    pass


class VersionFormatError(VersioningError):
    """Raised when a version cannot be built from the given components."""

    def __init__(self, version_string: str, expected_format: str = "x.y.z"):
        self.version_string = version_string
        self.expected_format = expected_format
        super().__init__(
            f"Invalid version format: '{version_string}'. "
            f"Expected format: {expected_format} with non-negative integers"
        )


class VersionSourceUnavailable(VersioningError):
    """Raised when a version source cannot produce a version.

    This is never fatal to a sync run: callers fall back to the default
    version.
    """

    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(message)

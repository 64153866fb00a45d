"""
Base exception classes shared by all collectionsync modules.
"""


class CollectionSyncError(Exception):
    """Base exception for every error raised by collectionsync."""

    pass


class ConfigurationError(CollectionSyncError):
    """Raised when a required setting is missing or invalid.

    Configuration errors are detected before any network call is made.
    """

    def __init__(self, message: str, setting: str = ""):
        self.setting = setting
        super().__init__(message)

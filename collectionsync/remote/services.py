import functools
import logging
from typing import Callable, Optional

from collectionsync.config import SyncSettings
from collectionsync.constants import VersionSourceEnum
from collectionsync.remote.feed import github_latest_release_tag
from collectionsync.remote.postman import PostmanService
from collectionsync.remote.service import CollectionService

logger = logging.getLogger(__name__)


def get_service(settings: SyncSettings) -> CollectionService:
    """Build the remote collection service described by the settings."""
    return PostmanService(
        settings.api_key, api_base=settings.api_base, timeout=settings.timeout
    )


def get_release_feed(settings: SyncSettings) -> Optional[Callable[[], str]]:
    """
    Build the release feed callable, or None when the feed strategy is not selected.
    """
    if settings.version_source != VersionSourceEnum.feed or not settings.release_repo:
        return None
    logger.debug(f"Using release feed of {settings.release_repo}")
    return functools.partial(
        github_latest_release_tag,
        settings.release_repo,
        token=settings.github_token,
        timeout=settings.timeout,
    )

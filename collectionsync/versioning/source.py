"""
Version sources for naming snapshots.

Two strategies exist and are chosen by configuration, never combined:

- ``siblings``: scan the names of the collections in scope and advance the
  highest version found.
- ``feed``: read the latest tag from an external release feed and advance it.

Both fall back to the default version when nothing can be discovered.
"""

import logging
import re
from abc import ABCMeta, abstractmethod
from typing import Callable, Iterable, Optional

from collectionsync.constants import VersionSourceEnum
from collectionsync.exceptions import ConfigurationError
from collectionsync.model import CollectionResource

from .exceptions import VersionSourceUnavailable
from .version import (
    SemVer,
    advance_version,
    default_version,
    extract_version,
    highest_version,
)

logger = logging.getLogger(__name__)

_TRAILING_VERSION = re.compile(
    r"\s*(?:\(\s*(?:latest|v?\d+\.\d+\.\d+)\s*\)|v?\d+\.\d+\.\d+|\blatest)\s*$",
    re.IGNORECASE,
)
_TAG_MARKER = re.compile(r"^[^\d]+")


def snapshot_prefix(display_name: str) -> str:
    """
    Strip trailing version-like suffixes from a display name.

    ``"REST API (latest)"`` and ``"REST API 1.2.0"`` both become ``"REST API"``.
    """
    current = display_name.strip()
    while True:
        reduced = _TRAILING_VERSION.sub("", current).rstrip()
        if reduced == current:
            break
        current = reduced
    return current or display_name.strip()


def versioned_name(prefix: str, version: str) -> str:
    return f"{prefix} {version}"


def strip_tag_marker(tag: str) -> str:
    """Drop a leading non-digit marker such as ``v`` or ``release-``."""
    return _TAG_MARKER.sub("", tag.strip())


def next_from_siblings(collections: Iterable[CollectionResource]) -> str:
    """
    Compute the next version from the names of the collections in scope.

    Returns:
        The advanced highest version, or the default version when no
        collection name carries one
    """
    highest = highest_version(c.name for c in collections)
    if highest is None:
        logger.debug("No versioned collection found, using the default version")
        return str(default_version())
    logger.debug(f"Highest existing version is {highest}")
    return str(advance_version(highest))


def next_from_feed(fetch_latest_tag: Callable[[], str]) -> str:
    """
    Compute the next version from the latest tag of a release feed.

    Raises:
        VersionSourceUnavailable: If the tag cannot be fetched or holds no version
    """
    try:
        tag = fetch_latest_tag()
    except VersionSourceUnavailable:
        raise
    except Exception as e:
        raise VersionSourceUnavailable(f"Release feed failed: {e}", "feed") from e

    version: Optional[SemVer] = None
    if isinstance(tag, str):
        version = extract_version(strip_tag_marker(tag))
    if version is None:
        raise VersionSourceUnavailable(
            f"Release tag {tag!r} does not contain an x.y.z version", "feed"
        )
    logger.debug(f"Latest release tag {tag!r} is version {version}")
    return str(advance_version(version))


class VersionSource(metaclass=ABCMeta):
    """Supplies the version stamped on the next snapshot."""

    name: str = ""

    @abstractmethod
    def next_version(self, collections: Iterable[CollectionResource]) -> str:
        """
        Return the next snapshot version as an ``x.y.z`` string.

        Args:
            collections: The collections in scope for this run
        """
        raise NotImplementedError


class SiblingScanVersionSource(VersionSource):
    name = VersionSourceEnum.siblings.value

    def next_version(self, collections: Iterable[CollectionResource]) -> str:
        return next_from_siblings(collections)


class ReleaseFeedVersionSource(VersionSource):
    """Reads the version from an external release feed.

    A missing external signal is not fatal: failures are logged and the
    default version is used instead.
    """

    name = VersionSourceEnum.feed.value

    def __init__(self, fetch_latest_tag: Callable[[], str]):
        self.fetch_latest_tag = fetch_latest_tag

    def next_version(self, collections: Iterable[CollectionResource]) -> str:
        try:
            return next_from_feed(self.fetch_latest_tag)
        except VersionSourceUnavailable as e:
            fallback = str(default_version())
            logger.warning(f"{e}. Falling back to version {fallback}")
            return fallback


def get_version_source(
    strategy: str, fetch_latest_tag: Optional[Callable[[], str]] = None
) -> VersionSource:
    """
    Select a version source.

    Args:
        strategy: ``"siblings"`` or ``"feed"``
        fetch_latest_tag: Callable returning the latest release tag, required for ``"feed"``
    """
    try:
        kind = VersionSourceEnum(strategy)
    except ValueError:
        choices = ", ".join(s.value for s in VersionSourceEnum)
        raise ConfigurationError(
            f"Unknown version source '{strategy}'. Choose one of: {choices}",
            "version_source",
        )
    match kind:
        case VersionSourceEnum.siblings:
            return SiblingScanVersionSource()
        case VersionSourceEnum.feed:
            if fetch_latest_tag is None:
                raise ConfigurationError(
                    "The 'feed' version source needs a release feed", "release_repo"
                )
            return ReleaseFeedVersionSource(fetch_latest_tag)

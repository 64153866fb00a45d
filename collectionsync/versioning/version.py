"""
Semantic version utilities for collection names and release tags.

Versions handled here always have three components (major.minor.patch).
Parsing is lenient about the surrounding text: the version of a string is the
first ``x.y.z`` found in it, so collection names like ``"REST API 1.4.0"`` and
release tags like ``"v2.0.1"`` both yield a version. Ordering is delegated to
the standard packaging.version library.
"""

import re
from typing import Iterable, Optional

from packaging.version import Version as PackagingVersion

from .exceptions import VersionFormatError

VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class SemVer:
    """
    A major.minor.patch version with a total order on (major, minor, patch).

    Instances are immutable; the bump helpers return new objects.
    """

    __slots__ = ("_version",)

    def __init__(self, major: int, minor: int, patch: int):
        for part in (major, minor, patch):
            if isinstance(part, bool) or not isinstance(part, int) or part < 0:
                raise VersionFormatError(f"{major}.{minor}.{patch}")
        self._version = PackagingVersion(f"{major}.{minor}.{patch}")

    @property
    def major(self) -> int:
        return self._version.major

    @property
    def minor(self) -> int:
        return self._version.minor

    @property
    def patch(self) -> int:
        return self._version.micro

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __repr__(self) -> str:
        return f"SemVer('{self}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return False
        return self._version == other._version

    def __lt__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._version < other._version

    def __le__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._version <= other._version

    def __gt__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._version > other._version

    def __ge__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._version >= other._version

    def __hash__(self) -> int:
        return hash(self._version)

    def increment_minor(self) -> "SemVer":
        """Return a new SemVer with the minor component bumped and patch reset."""
        return SemVer(self.major, self.minor + 1, 0)


def extract_version(text: Optional[str]) -> Optional[SemVer]:
    """
    Extract the first ``x.y.z`` version found in a free-form string.

    Args:
        text: A collection name, release tag or any other string

    Returns:
        The first version found scanning left to right, or None when the
        string holds no ``x.y.z`` sequence
    """
    if not isinstance(text, str):
        return None
    match = VERSION_PATTERN.search(text)
    if match is None:
        return None
    major, minor, patch = (int(group) for group in match.groups())
    return SemVer(major, minor, patch)


def advance_version(version: SemVer) -> SemVer:
    """Every sync is a minor release: bump minor, reset patch."""
    return version.increment_minor()


def default_version() -> SemVer:
    """Version used when no prior version can be discovered."""
    return SemVer(1, 0, 0)


def highest_version(texts: Iterable[Optional[str]]) -> Optional[SemVer]:
    """Return the highest version found across strings, ignoring unversioned ones."""
    versions = [v for v in (extract_version(t) for t in texts) if v is not None]
    if not versions:
        return None
    return max(versions)

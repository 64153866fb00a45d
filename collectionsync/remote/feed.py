"""External release feed used as a version source."""

import logging
from typing import Optional

import requests

from collectionsync.constants import DEFAULT_TIMEOUT, GITHUB_API_BASE
from collectionsync.versioning.exceptions import VersionSourceUnavailable

logger = logging.getLogger(__name__)


# https://docs.github.com/en/rest/releases/releases#get-the-latest-release
def github_latest_release_tag(
    repository: str,
    token: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Fetch the tag name of the latest published release of a GitHub repository.

    Args:
        repository: ``owner/name`` of the repository
        token: Optional GitHub token, needed for private repositories
        timeout: Request timeout in seconds
        session: Optional requests session (a fresh request is made otherwise)

    Returns:
        The release tag, e.g. ``"v1.4.0"``

    Raises:
        VersionSourceUnavailable: If the release cannot be fetched or has no tag
    """
    repository = repository.strip().strip("/")
    url = f"{GITHUB_API_BASE}/repos/{repository}/releases/latest"
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    client = session if session is not None else requests
    logger.debug(f"Fetching latest release from {url}")
    try:
        response = client.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise VersionSourceUnavailable(
            f"Could not fetch the latest release of {repository}: {e}", "feed"
        ) from e

    tag = payload.get("tag_name") if isinstance(payload, dict) else None
    if not tag:
        raise VersionSourceUnavailable(
            f"Latest release of {repository} has no tag name", "feed"
        )
    return tag

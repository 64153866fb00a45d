from unittest.mock import MagicMock

import pytest
import requests

from collectionsync.config import SyncSettings
from collectionsync.remote.feed import github_latest_release_tag
from collectionsync.remote.services import get_release_feed, get_service
from collectionsync.remote.postman import PostmanService
from collectionsync.versioning.exceptions import VersionSourceUnavailable


def feed_session(payload=None, error=None):
    session = MagicMock()
    response = MagicMock()
    if error is not None:
        response.raise_for_status.side_effect = error
    response.json.return_value = payload
    session.get.return_value = response
    return session


@pytest.mark.short
class TestGithubLatestReleaseTag:
    def test_returns_tag_name(self):
        session = feed_session({"tag_name": "v1.4.0", "name": "1.4.0"})

        assert github_latest_release_tag("owner/repo", session=session) == "v1.4.0"
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.github.com/repos/owner/repo/releases/latest"
        assert kwargs["headers"]["Accept"] == "application/vnd.github+json"
        assert "Authorization" not in kwargs["headers"]

    def test_sends_token(self):
        session = feed_session({"tag_name": "v1.0.0"})

        github_latest_release_tag("owner/repo", token="ghp_x", session=session)
        _, kwargs = session.get.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer ghp_x"

    def test_http_error(self):
        session = feed_session(error=requests.HTTPError("404 Client Error"))

        with pytest.raises(VersionSourceUnavailable, match="404"):
            github_latest_release_tag("owner/repo", session=session)

    def test_network_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(VersionSourceUnavailable):
            github_latest_release_tag("owner/repo", session=session)

    def test_missing_tag(self):
        with pytest.raises(VersionSourceUnavailable, match="no tag name"):
            github_latest_release_tag("owner/repo", session=feed_session({}))


@pytest.mark.short
class TestServiceFactories:
    def test_get_service(self):
        settings = SyncSettings(
            api_key="k", collection_uid="u", api_base="https://x.test", timeout=5
        )
        service = get_service(settings)
        assert isinstance(service, PostmanService)
        assert service.api_base == "https://x.test"
        assert service.timeout == 5

    def test_release_feed_only_for_feed_source(self):
        siblings = SyncSettings(api_key="k", collection_uid="u")
        assert get_release_feed(siblings) is None

        feed = SyncSettings(
            api_key="k",
            collection_uid="u",
            version_source="feed",
            release_repo="owner/repo",
            github_token="t",
        )
        fetch = get_release_feed(feed)
        assert fetch.args == ("owner/repo",)
        assert fetch.keywords["token"] == "t"

"""Tests for resolving the latest collection."""

import pytest

from collectionsync.model import CollectionResource, Workspace
from collectionsync.sync.exceptions import ResourceNotFound, WorkspaceNotFound
from collectionsync.sync.locator import (
    MATCHED_BY_IDENTIFIER,
    MATCHED_BY_NAME,
    discover,
    locate,
    select_workspace,
)
from tests.fakes import LATEST_NAME


def resource(identifier, name, workspace=None):
    return CollectionResource(identifier=identifier, name=name, workspace=workspace)


@pytest.mark.short
class TestLocate:
    def test_matches_by_identifier(self):
        collections = [resource("abc", LATEST_NAME), resource("def", "Other")]

        result = locate(collections, "abc", LATEST_NAME)

        assert result.resource.identifier == "abc"
        assert result.matched_by == MATCHED_BY_IDENTIFIER
        assert result.workspace is None

    def test_stale_identifier_falls_back_to_name(self):
        collections = [resource("abc", "Latest")]

        result = locate(collections, "stale", "Latest")

        assert result.resource.identifier == "abc"
        assert result.matched_by == MATCHED_BY_NAME

    def test_identifier_wins_over_name_on_different_resources(self):
        collections = [resource("named", LATEST_NAME), resource("configured", "Renamed")]

        result = locate(collections, "configured", LATEST_NAME)

        assert result.resource.identifier == "configured"
        assert result.matched_by == MATCHED_BY_IDENTIFIER

    def test_name_match_is_exact(self):
        collections = [
            resource("a", f"{LATEST_NAME} copy"),
            resource("b", LATEST_NAME.lower()),
        ]
        with pytest.raises(ResourceNotFound):
            locate(collections, "stale", LATEST_NAME)

    def test_first_name_match_wins(self):
        collections = [resource("first", LATEST_NAME), resource("second", LATEST_NAME)]

        assert locate(collections, None, LATEST_NAME).resource.identifier == "first"

    def test_not_found_lists_every_candidate(self):
        collections = [resource("a", "REST API 1.0.0"), resource("b", "Scratch")]

        with pytest.raises(ResourceNotFound) as excinfo:
            locate(collections, "stale", LATEST_NAME)

        assert excinfo.value.candidates == ["REST API 1.0.0", "Scratch"]
        assert "'REST API 1.0.0'" in str(excinfo.value)
        assert "'Scratch'" in str(excinfo.value)

    def test_workspace_filters_candidates(self):
        team = Workspace(identifier="ws-team", name="Team", members=["in"])
        other = Workspace(identifier="ws-other", name="Other", members=["out"])
        collections = [resource("out", LATEST_NAME), resource("in", LATEST_NAME)]

        result = locate(collections, "stale", LATEST_NAME, "Team", [other, team])

        assert result.resource.identifier == "in"
        assert result.workspace == team

    def test_configured_identifier_outside_workspace_is_ignored(self):
        team = Workspace(identifier="ws-team", name="Team", members=["in"])
        collections = [resource("abc", LATEST_NAME), resource("in", "Something")]

        with pytest.raises(ResourceNotFound) as excinfo:
            locate(collections, "abc", LATEST_NAME, "Team", [team])
        assert excinfo.value.candidates == ["Something"]

    def test_unknown_workspace(self):
        with pytest.raises(WorkspaceNotFound) as excinfo:
            locate([], "abc", LATEST_NAME, "Missing", [Workspace(identifier="1", name="Team")])
        assert excinfo.value.available == ["Team"]

    def test_select_workspace_is_exact(self):
        workspaces = [
            Workspace(identifier="1", name="team"),
            Workspace(identifier="2", name="Team"),
        ]
        assert select_workspace(workspaces, "Team").identifier == "2"


@pytest.mark.short
class TestDiscover:
    def test_lists_all_collections_without_workspace(self, service):
        discovery = discover(service, "abc", LATEST_NAME)

        assert discovery.located.resource.identifier == "abc"
        assert [c.identifier for c in discovery.collections] == ["abc", "old-1"]
        assert service.calls_to("list_collections") == [("list_collections", None)]
        assert service.calls_to("list_workspaces") == []

    def test_scopes_to_workspace(self, service):
        service.add_workspace("ws-1", "Team")
        service.add_collection("team-latest", LATEST_NAME, workspace="ws-1")
        service.add_collection("team-old", "REST API 3.0.0", workspace="ws-1")

        discovery = discover(service, "stale", LATEST_NAME, "Team")

        assert discovery.located.resource.identifier == "team-latest"
        assert discovery.located.workspace.identifier == "ws-1"
        assert [c.identifier for c in discovery.collections] == ["team-latest", "team-old"]
        assert service.calls_to("get_workspace") == [("get_workspace", "ws-1")]
        assert service.calls_to("list_collections") == [("list_collections", "ws-1")]

    def test_unknown_workspace_stops_before_listing_collections(self, service):
        with pytest.raises(WorkspaceNotFound):
            discover(service, "abc", LATEST_NAME, "Nope")
        assert service.calls_to("list_collections") == []

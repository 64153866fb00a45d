"""Pydantic models for remote collections and workspaces."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def validate_non_empty_string(v: str) -> str:
    """Validate that a string is not empty."""
    if not v or not v.strip():
        raise ValueError("must be a non-empty string")
    return v


class CollectionResource(BaseModel):
    """A named collection held by the remote service.

    The identifier is assigned by the service when the collection is created
    and never changes afterwards. The name is mutable and only used for
    discovery and for naming snapshots.
    """

    identifier: str
    name: str = ""
    content: Optional[Dict[str, Any]] = None
    workspace: Optional[str] = None

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @classmethod
    def from_api(
        cls, payload: Dict[str, Any], workspace: Optional[str] = None
    ) -> "CollectionResource":
        """Build a resource from a collection summary returned by the API.

        Postman addresses collections by ``uid``; plain ``id`` is accepted for
        payloads that do not carry one.
        """
        info = payload.get("info") or {}
        identifier = payload.get("uid") or payload.get("id") or info.get("uid")
        name = payload.get("name") or info.get("name") or ""
        return cls(identifier=identifier or "", name=name, workspace=workspace)


class Workspace(BaseModel):
    """A named grouping of collections.

    ``members`` is None until the workspace detail has been fetched.
    """

    identifier: str
    name: str
    members: Optional[List[str]] = Field(default=None)

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Workspace":
        members = None
        if "collections" in payload:
            members = [
                c.get("uid") or c.get("id")
                for c in payload.get("collections") or []
                if c.get("uid") or c.get("id")
            ]
        return cls(
            identifier=payload.get("id") or "",
            name=payload.get("name") or "",
            members=members,
        )

    def contains(self, resource: CollectionResource) -> bool:
        """Check whether a resource belongs to this workspace."""
        if self.members is None:
            return resource.workspace == self.identifier
        return resource.identifier in self.members

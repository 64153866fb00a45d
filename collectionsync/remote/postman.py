"""Postman API backend for the collection service."""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from collectionsync.constants import DEFAULT_API_BASE, DEFAULT_TIMEOUT
from collectionsync.exceptions import ConfigurationError
from collectionsync.model import CollectionResource, Workspace
from collectionsync.remote.exception import (
    RemoteNotFoundError,
    RemoteValidationError,
    TransportError,
)
from collectionsync.remote.service import CollectionService

logger = logging.getLogger(__name__)


def _decode(response: requests.Response) -> Any:
    """Return the JSON body of a response, or its text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _describe(payload: Any) -> str:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            return error.get("message") or error.get("name") or str(error)
        if error:
            return str(error)
    return str(payload) if payload else ""


class PostmanService(CollectionService):
    """
    Collection service backed by the Postman REST API.

    Collections are addressed by their ``uid``. Request and response bodies
    wrap the collection document in a top-level ``collection`` key.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ConfigurationError("A Postman API key is required", "api_key")
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {"X-Api-Key": api_key, "Accept": "application/json"}
        )

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.api_base}{path}"
        logger.debug(f"{method} {url} params={params}")
        try:
            response = self.session.request(
                method, url, params=params, json=body, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        status = response.status_code
        payload = _decode(response)
        if status == 404:
            raise RemoteNotFoundError(
                f"{method} {path} returned 404: {_describe(payload)}",
                status=status,
                payload=payload,
            )
        if status in (400, 422):
            raise RemoteValidationError(
                f"{method} {path} was rejected ({status}): {_describe(payload)}",
                status=status,
                payload=payload,
            )
        if not 200 <= status < 300:
            raise TransportError(
                f"{method} {path} returned {status}: {_describe(payload)}",
                status=status,
                payload=payload,
            )
        if not isinstance(payload, dict):
            raise TransportError(
                f"{method} {path} returned a non-JSON body",
                status=status,
                payload=payload,
            )
        return payload

    def _collection_body(self, payload: Dict[str, Any], path: str) -> Dict[str, Any]:
        collection = payload.get("collection")
        if not isinstance(collection, dict):
            raise TransportError(
                f"{path} response has no 'collection' object", payload=payload
            )
        return collection

    def _resource(
        self, collection: Dict[str, Any], path: str, workspace: Optional[str] = None
    ) -> CollectionResource:
        try:
            return CollectionResource.from_api(collection, workspace=workspace)
        except ValidationError as e:
            raise TransportError(
                f"{path} response has no collection identifier", payload=collection
            ) from e

    def list_collections(
        self, workspace: Optional[str] = None
    ) -> List[CollectionResource]:
        params = {"workspace": workspace} if workspace else None
        payload = self._request("GET", "/collections", params=params)
        collections = []
        for entry in payload.get("collections") or []:
            try:
                collections.append(CollectionResource.from_api(entry, workspace=workspace))
            except ValidationError:
                logger.debug(f"Skipping collection entry without an identifier: {entry}")
        return collections

    def list_workspaces(self) -> List[Workspace]:
        payload = self._request("GET", "/workspaces")
        workspaces = []
        for entry in payload.get("workspaces") or []:
            try:
                workspaces.append(Workspace.from_api(entry))
            except ValidationError:
                logger.debug(f"Skipping workspace entry without an identifier: {entry}")
        return workspaces

    def get_workspace(self, identifier: str) -> Workspace:
        payload = self._request("GET", f"/workspaces/{identifier}")
        workspace = payload.get("workspace")
        if not isinstance(workspace, dict):
            raise TransportError(
                f"/workspaces/{identifier} response has no 'workspace' object",
                payload=payload,
            )
        # an empty workspace has no 'collections' key at all
        workspace.setdefault("collections", [])
        try:
            return Workspace.from_api(workspace)
        except ValidationError as e:
            raise TransportError(
                f"/workspaces/{identifier} response has no workspace identifier",
                payload=payload,
            ) from e

    def get_collection(self, identifier: str) -> Dict[str, Any]:
        path = f"/collections/{identifier}"
        return self._collection_body(self._request("GET", path), path)

    def create_collection(
        self, content: Dict[str, Any], workspace: Optional[str] = None
    ) -> CollectionResource:
        params = {"workspace": workspace} if workspace else None
        payload = self._request(
            "POST", "/collections", params=params, body={"collection": content}
        )
        created = self._collection_body(payload, "/collections")
        return self._resource(created, "/collections", workspace=workspace)

    def update_collection(
        self, identifier: str, content: Dict[str, Any]
    ) -> CollectionResource:
        path = f"/collections/{identifier}"
        payload = self._request("PUT", path, body={"collection": content})
        updated = self._collection_body(payload, path)
        resource = self._resource(updated, path)
        if resource.identifier != identifier:
            logger.debug(
                f"Update response reported uid {resource.identifier}, expected {identifier}"
            )
        return resource

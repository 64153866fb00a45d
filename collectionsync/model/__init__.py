from .collection import CollectionResource, Workspace

__all__ = ["CollectionResource", "Workspace"]

"""In-memory simulation of the CI API."""

from .client import MockClient
from .permissions import ProjectPermission, authorize
from .seed import populate_store
from .store import EntityStore

__all__ = [
    "EntityStore",
    "MockClient",
    "ProjectPermission",
    "authorize",
    "populate_store",
]

"""Shared plumbing for simulated clients."""

from dataclasses import dataclass
from typing import Optional

from ..entities import Project, User
from ..permissions import ProjectPermission, authorize
from ..store import EntityStore, ProjectRef


@dataclass(frozen=True)
class ClientContext:
    """The store a client reads from and the identity it acts as."""
    store: EntityStore
    user: Optional[User] = None


class ClientBase:
    """Gives clients gated access to projects; there is no ungated path."""

    def __init__(self, context: ClientContext):
        self.context = context

    @property
    def store(self) -> EntityStore:
        return self.context.store

    @property
    def user(self) -> Optional[User]:
        return self.context.user

    def get_project(self, project_ref: ProjectRef, permission: ProjectPermission) -> Project:
        return authorize(self.store, self.user, project_ref, permission)

"""Simulated project-variable client.

The project is resolved once, when the client is built. Per-key operations
are declared but not implemented; each one still runs the permission gate
before reporting that.
"""

from typing import List, Optional

from ...errors import UnsupportedError
from ...models import Variable, VariableCreate, VariableUpdate
from ..permissions import ProjectPermission
from ..store import ProjectRef
from .base import ClientBase, ClientContext


class ProjectVariableClient(ClientBase):
    def __init__(self, context: ClientContext, project_id: ProjectRef):
        """
        Raises:
            NotFoundError: If the project does not exist
        """
        super().__init__(context)
        self.project_id = self.store.find_project(project_id).id

    def _unsupported(self, permission: ProjectPermission, operation: str):
        self.get_project(self.project_id, permission)
        raise UnsupportedError(f"Project variable {operation} is not supported")

    def get(self, key: str, environment_scope: Optional[str] = None) -> Variable:
        self._unsupported(ProjectPermission.VIEW, "lookup")

    def __getitem__(self, key: str) -> Variable:
        return self.get(key)

    @property
    def all(self) -> List[Variable]:
        self._unsupported(ProjectPermission.VIEW, "listing")

    def create(self, model: VariableCreate) -> Variable:
        self._unsupported(ProjectPermission.MUTATE, "creation")

    def update(self, key: str, model: VariableUpdate, environment_scope: Optional[str] = None) -> Variable:
        self._unsupported(ProjectPermission.MUTATE, "update")

    def delete(self, key: str, environment_scope: Optional[str] = None) -> None:
        self._unsupported(ProjectPermission.MUTATE, "deletion")

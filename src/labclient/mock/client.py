"""Entry point into the simulation: clients acting as one user against a store."""

from typing import Optional

from .clients import ClientContext, JobClient, PipelineClient, ProjectVariableClient
from .entities import User
from .store import EntityStore, ProjectRef


class MockClient:
    """Builds resource clients bound to a store and a caller identity."""

    def __init__(self, store: EntityStore, user: Optional[User] = None):
        self.context = ClientContext(store=store, user=user)

    @property
    def store(self) -> EntityStore:
        return self.context.store

    @property
    def user(self) -> Optional[User]:
        return self.context.user

    def get_jobs(self, project_id: ProjectRef) -> JobClient:
        return JobClient(self.context, project_id)

    def get_pipelines(self, project_id: ProjectRef) -> PipelineClient:
        return PipelineClient(self.context, self.get_jobs(project_id), project_id)

    def get_project_variable_client(self, project_id: ProjectRef) -> ProjectVariableClient:
        return ProjectVariableClient(self.context, project_id)

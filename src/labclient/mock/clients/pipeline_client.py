"""Simulated pipeline client."""

from typing import Dict, List

from ...errors import UnsupportedError
from ...models import Job, Pipeline, PipelineBasic, PipelineQuery, PipelineStatus, PipelineVariable
from ...utils.logging import get_logger
from ..permissions import ProjectPermission
from ..query import search as search_pipelines
from ..store import ProjectRef
from .base import ClientBase, ClientContext
from .job_client import JobClient

logger = get_logger(__name__)


class PipelineClient(ClientBase):
    """Pipelines of one project, as seen by the context's user."""

    def __init__(self, context: ClientContext, job_client: JobClient, project_id: ProjectRef):
        super().__init__(context)
        self._job_client = job_client
        self._project_id = project_id

    def _unsupported(self, permission: ProjectPermission, message: str):
        self.get_project(self._project_id, permission)
        raise UnsupportedError(message)

    def get(self, pipeline_id: int) -> Pipeline:
        """
        Raises:
            NotFoundError: If the project or the pipeline does not exist
        """
        project = self.get_project(self._project_id, ProjectPermission.VIEW)
        with self.store.reading():
            return self.store.find_pipeline(project, pipeline_id).to_client()

    def __getitem__(self, pipeline_id: int) -> Pipeline:
        return self.get(pipeline_id)

    @property
    def all(self) -> List[PipelineBasic]:
        project = self.get_project(self._project_id, ProjectPermission.VIEW)
        with self.store.reading():
            return [p.to_basic_client() for p in self.store.list_pipelines(project)]

    @property
    def all_jobs(self) -> List[Job]:
        return self._job_client.get_jobs()

    def create(self, ref: str) -> Pipeline:
        """Create a running pipeline on ref, owned by the context's user."""
        project = self.get_project(self._project_id, ProjectPermission.MUTATE)
        with self.store.reading():
            pipeline = self.store.add_pipeline(project, ref, PipelineStatus.RUNNING, self.user)
            created = pipeline.to_client()
        logger.info(f"Created pipeline {created.id} on {project.path_with_namespace}@{ref}")
        return created

    def create_pipeline_with_trigger(self, token: str, ref: str, variables: Dict[str, str]) -> Pipeline:
        self._unsupported(ProjectPermission.MUTATE, "Creating pipelines with a trigger token is not supported")

    def delete(self, pipeline_id: int) -> None:
        """
        Raises:
            NotFoundError: If pipeline_id does not resolve within this project
        """
        project = self.get_project(self._project_id, ProjectPermission.MUTATE)
        pipeline = self.store.find_pipeline(project, pipeline_id)
        self.store.remove_pipeline(project, pipeline)
        logger.info(f"Deleted pipeline {pipeline_id} from {project.path_with_namespace}")

    def get_variables(self, pipeline_id: int) -> List[PipelineVariable]:
        self._unsupported(ProjectPermission.VIEW, "Reading pipeline variables is not supported")

    def get_jobs(self, pipeline_id: int) -> List[Job]:
        return [job for job in self._job_client.get_jobs() if job.pipeline.id == pipeline_id]

    def get_jobs_in_project(self, scope) -> List[Job]:
        self._unsupported(ProjectPermission.VIEW, "Use JobClient.get_jobs() to list project jobs")

    def search(self, query: PipelineQuery) -> List[PipelineBasic]:
        """
        Filter and order the project's pipelines.

        Defaults to updated_at, descending. Ties keep insertion order.

        Raises:
            UnsupportedError: If the query filters by scope
        """
        project = self.get_project(self._project_id, ProjectPermission.VIEW)
        with self.store.reading():
            matches = search_pipelines(self.store.list_pipelines(project), query)
            return [p.to_basic_client() for p in matches]

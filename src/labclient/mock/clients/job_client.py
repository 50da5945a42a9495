"""Simulated job client."""

from typing import List

from ...errors import NotFoundError, UnsupportedError
from ...models import Job, JobScopeMask
from ..permissions import ProjectPermission
from ..store import ProjectRef
from .base import ClientBase, ClientContext


class JobClient(ClientBase):
    def __init__(self, context: ClientContext, project_id: ProjectRef):
        super().__init__(context)
        self._project_id = project_id

    def get_jobs(self, scope: JobScopeMask = JobScopeMask.ALL) -> List[Job]:
        """
        All jobs of the project, pipeline by pipeline.

        Raises:
            UnsupportedError: For any scope other than ALL
        """
        project = self.get_project(self._project_id, ProjectPermission.VIEW)
        if scope != JobScopeMask.ALL:
            raise UnsupportedError(f"Filtering jobs by scope ({scope}) is not supported")
        with self.store.reading():
            return [job.to_client() for job in self.store.list_jobs(project)]

    def get(self, job_id: int) -> Job:
        project = self.get_project(self._project_id, ProjectPermission.VIEW)
        with self.store.reading():
            for job in self.store.list_jobs(project):
                if job.id == job_id:
                    return job.to_client()
        raise NotFoundError(f"Job {job_id} not found in project {project.id}")

    def __getitem__(self, job_id: int) -> Job:
        return self.get(job_id)

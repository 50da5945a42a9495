"""In-memory entity store: the single owner of all simulated resources.

Every mutation and every snapshot read happens under one re-entrant lock per
store, so readers only ever see states produced by some serial order of
mutations. Identifiers come from one counter per entity kind, global to the
store, and are never reused after deletion.
"""

import itertools
import re
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from ..config.loader import get_simulation_settings
from ..errors import NotFoundError
from ..models import TERMINAL_STATUSES, AccessLevel, PipelineStatus, VariableType, VisibilityLevel
from ..utils.logging import get_logger
from ..utils.sha import derive_sha1, parse_sha1
from ..utils.time import utc_now
from ..utils.unique_names import get_unique_name
from .entities import DEFAULT_ENVIRONMENT_SCOPE, Job, Pipeline, Project, User, Variable

logger = get_logger(__name__)

ProjectRef = Union[int, str]

DEFAULT_WEB_URL = "https://lab.example.com"


def _slugify(name: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9_.-]+", "-", name.strip()).strip("-").lower()
    return slug or "project"


class EntityStore:
    """Thread-safe object graph of users, projects, pipelines, jobs and variables."""

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        touch_project_on_mutation: bool = False,
        web_url: str = DEFAULT_WEB_URL,
    ):
        """
        Args:
            clock: Returns the current aware datetime. Defaults to UTC now.
            touch_project_on_mutation: Bump a project's last_activity_at when
                its pipelines or variables change.
            web_url: Base URL used to build resource web_url values.
        """
        self.clock = clock or utc_now
        self.touch_project_on_mutation = touch_project_on_mutation
        self.web_url = web_url.rstrip("/")
        self._lock = threading.RLock()
        self._user_ids = itertools.count(1)
        self._project_ids = itertools.count(1)
        self._pipeline_ids = itertools.count(1)
        self._job_ids = itertools.count(1)
        self._users: Dict[int, User] = {}
        self._projects: Dict[int, Project] = {}

    @classmethod
    def from_config(cls, config: Optional[Dict] = None, **kwargs) -> "EntityStore":
        """Build a store from the "simulation" section of a loaded config."""
        settings = get_simulation_settings(config)
        return cls(
            touch_project_on_mutation=bool(settings["touch_project_on_mutation"]),
            web_url=settings["web_url"],
            **kwargs,
        )

    @contextmanager
    def reading(self) -> Iterator["EntityStore"]:
        """
        Hold the store lock across a multi-step read.

        Filtering, sorting and projecting live entities inside this block sees
        one consistent state; no mutation can land half-way through.
        """
        with self._lock:
            yield self

    # -- users -------------------------------------------------------------

    def add_user(self, username: str, name: Optional[str] = None, *, email: str = "", is_admin: bool = False) -> User:
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise ValueError(f"Username already taken: {username}")
            user = User(
                id=next(self._user_ids),
                username=username,
                name=name if name is not None else username,
                email=email or f"{username}@example.com",
                is_admin=is_admin,
            )
            self._users[user.id] = user
            logger.debug(f"Added user {user.id} ({username})")
            return user

    def find_user(self, user_ref: Union[int, str]) -> User:
        """Find a user by id or username."""
        with self._lock:
            if isinstance(user_ref, int):
                user = self._users.get(user_ref)
            else:
                user = next((u for u in self._users.values() if u.username == user_ref), None)
            if user is None:
                raise NotFoundError(f"User '{user_ref}' not found")
            return user

    # -- projects ----------------------------------------------------------

    def add_project(
        self,
        name: Optional[str] = None,
        *,
        namespace: Optional[str] = None,
        path: Optional[str] = None,
        visibility: VisibilityLevel = VisibilityLevel.PRIVATE,
        owner: Optional[User] = None,
    ) -> Project:
        """Create a project with empty child collections; owner becomes an OWNER member."""
        name = name or get_unique_name()
        with self._lock:
            now = self.clock()
            project = Project(
                id=next(self._project_ids),
                name=name,
                path=path or _slugify(name),
                namespace=namespace or (owner.username if owner else "root"),
                visibility=visibility,
                created_at=now,
                last_activity_at=now,
            )
            if owner is not None:
                project.members[owner.id] = AccessLevel.OWNER
            self._projects[project.id] = project
            logger.debug(f"Added project {project.id} ({project.path_with_namespace})")
            return project

    def find_project(self, project_ref: ProjectRef) -> Project:
        """
        Find a project by id, numeric string, or "namespace/path".

        Raises:
            NotFoundError: If no project matches
        """
        with self._lock:
            project = None
            if isinstance(project_ref, int) or (isinstance(project_ref, str) and project_ref.isdigit()):
                project = self._projects.get(int(project_ref))
            elif isinstance(project_ref, str):
                wanted = project_ref.strip("/")
                project = next(
                    (p for p in self._projects.values() if p.path_with_namespace == wanted),
                    None,
                )
            if project is None:
                raise NotFoundError(f"Project '{project_ref}' not found")
            return project

    def add_member(self, project: Project, user: User, access_level: AccessLevel) -> None:
        with self._lock:
            project.members[user.id] = AccessLevel(access_level)
            logger.debug(f"User {user.id} is {AccessLevel(access_level).name} on project {project.id}")

    def _touch(self, project: Project, now: datetime) -> None:
        if self.touch_project_on_mutation:
            project.last_activity_at = now

    # -- pipelines ---------------------------------------------------------

    def add_pipeline(
        self,
        project: Project,
        ref: str,
        status: PipelineStatus,
        creator: User,
        *,
        sha: Optional[str] = None,
        yaml_errors: Optional[str] = None,
        source: str = "api",
        tag: bool = False,
    ) -> Pipeline:
        """Allocate the next pipeline id, stamp creator and time, append to the project."""
        with self._lock:
            pipeline_id = next(self._pipeline_ids)
            now = self.clock()
            pipeline = Pipeline(
                id=pipeline_id,
                project_id=project.id,
                ref=ref,
                sha=parse_sha1(sha) if sha else derive_sha1(project.id, ref, pipeline_id),
                status=PipelineStatus(status),
                user=creator,
                created_at=now,
                updated_at=now,
                source=source,
                tag=tag,
                yaml_errors=yaml_errors,
                web_url=f"{self.web_url}/{project.path_with_namespace}/-/pipelines/{pipeline_id}",
            )
            if pipeline.status == PipelineStatus.RUNNING:
                pipeline.started_at = now
            project.pipelines.append(pipeline)
            self._touch(project, now)
            logger.debug(f"Added pipeline {pipeline.id} on project {project.id} (ref={ref})")
            return pipeline

    def find_pipeline(self, project: Project, pipeline_id: int) -> Pipeline:
        with self._lock:
            for pipeline in project.pipelines:
                if pipeline.id == pipeline_id:
                    return pipeline
            raise NotFoundError(f"Pipeline {pipeline_id} not found in project {project.id}")

    def remove_pipeline(self, project: Project, pipeline: Optional[Pipeline]) -> None:
        """
        Remove a pipeline (and its jobs) from its project.

        Raises:
            NotFoundError: If the pipeline is not currently owned by project
        """
        with self._lock:
            if pipeline is None or not any(p is pipeline for p in project.pipelines):
                pipeline_id = pipeline.id if pipeline is not None else None
                raise NotFoundError(f"Pipeline {pipeline_id} not found in project {project.id}")
            project.pipelines = [p for p in project.pipelines if p is not pipeline]
            self._touch(project, self.clock())
            logger.debug(f"Removed pipeline {pipeline.id} from project {project.id}")

    def list_pipelines(self, project: Project) -> Tuple[Pipeline, ...]:
        """Snapshot of the project's pipelines in insertion order."""
        with self._lock:
            return tuple(project.pipelines)

    def set_pipeline_status(self, pipeline: Pipeline, status: PipelineStatus) -> Pipeline:
        """
        Transition a pipeline's status as directed by an external driver.

        Raises:
            ValueError: If the pipeline already reached a different terminal status
        """
        status = PipelineStatus(status)
        with self._lock:
            if pipeline.status in TERMINAL_STATUSES and status != pipeline.status:
                raise ValueError(
                    f"Pipeline {pipeline.id} is {pipeline.status.value}; cannot move to {status.value}"
                )
            now = self.clock()
            pipeline.status = status
            pipeline.updated_at = now
            if status == PipelineStatus.RUNNING and pipeline.started_at is None:
                pipeline.started_at = now
            if status in TERMINAL_STATUSES and pipeline.finished_at is None:
                pipeline.finished_at = now
            project = self._projects.get(pipeline.project_id)
            if project is not None:
                self._touch(project, now)
            logger.debug(f"Pipeline {pipeline.id} -> {status.value}")
            return pipeline

    # -- jobs --------------------------------------------------------------

    def add_job(
        self,
        pipeline: Pipeline,
        name: str,
        *,
        stage: str = "test",
        status: str = "created",
        user: Optional[User] = None,
        allow_failure: bool = False,
    ) -> Job:
        with self._lock:
            job = Job(
                id=next(self._job_ids),
                name=name,
                stage=stage,
                status=status,
                pipeline=pipeline,
                user=user or pipeline.user,
                created_at=self.clock(),
                allow_failure=allow_failure,
            )
            pipeline.jobs.append(job)
            logger.debug(f"Added job {job.id} ({name}) to pipeline {pipeline.id}")
            return job

    def list_jobs(self, project: Project) -> List[Job]:
        """All jobs of the project's pipelines, pipeline by pipeline."""
        with self._lock:
            return [job for pipeline in project.pipelines for job in pipeline.jobs]

    # -- variables ---------------------------------------------------------

    def add_variable(
        self,
        project: Project,
        key: str,
        value: str,
        *,
        environment_scope: Optional[str] = None,
        variable_type: VariableType = VariableType.ENV_VAR,
        protected: bool = False,
        masked: bool = False,
    ) -> Variable:
        """
        Raises:
            ValueError: If (key, environment_scope) already exists in the project
        """
        scope = environment_scope or DEFAULT_ENVIRONMENT_SCOPE
        with self._lock:
            if (key, scope) in project.variables:
                raise ValueError(f"Variable '{key}' already exists for scope '{scope}'")
            variable = Variable(
                key=key,
                value=value,
                environment_scope=scope,
                variable_type=variable_type,
                protected=protected,
                masked=masked,
            )
            project.variables[(key, scope)] = variable
            self._touch(project, self.clock())
            return variable

    def find_variable(self, project: Project, key: str, environment_scope: Optional[str] = None) -> Variable:
        scope = environment_scope or DEFAULT_ENVIRONMENT_SCOPE
        with self._lock:
            variable = project.variables.get((key, scope))
            if variable is None:
                raise NotFoundError(f"Variable '{key}' ({scope}) not found in project {project.id}")
            return variable

    def update_variable(
        self,
        project: Project,
        key: str,
        value: str,
        *,
        environment_scope: Optional[str] = None,
        protected: Optional[bool] = None,
        masked: Optional[bool] = None,
    ) -> Variable:
        with self._lock:
            variable = self.find_variable(project, key, environment_scope)
            variable.value = value
            if protected is not None:
                variable.protected = protected
            if masked is not None:
                variable.masked = masked
            self._touch(project, self.clock())
            return variable

    def remove_variable(self, project: Project, key: str, environment_scope: Optional[str] = None) -> None:
        with self._lock:
            variable = self.find_variable(project, key, environment_scope)
            del project.variables[(variable.key, variable.environment_scope)]
            self._touch(project, self.clock())

    def list_variables(self, project: Project) -> Tuple[Variable, ...]:
        with self._lock:
            return tuple(project.variables.values())

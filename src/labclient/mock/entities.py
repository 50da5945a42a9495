"""Entities held by the in-memory store.

Parents own their children: a project owns its pipelines and variables, a
pipeline owns its jobs. Users are only ever referenced.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..models import (
    AccessLevel,
    Job as JobDTO,
    JobPipeline,
    Pipeline as PipelineDTO,
    PipelineBasic,
    PipelineStatus,
    User as UserDTO,
    Variable as VariableDTO,
    VariableType,
    VisibilityLevel,
)

DEFAULT_ENVIRONMENT_SCOPE = "*"


@dataclass(eq=False)
class User:
    id: int
    username: str
    name: str
    email: str = ""
    is_admin: bool = False
    state: str = "active"

    def to_client(self) -> UserDTO:
        return UserDTO(id=self.id, username=self.username, name=self.name, state=self.state)


@dataclass(eq=False)
class Job:
    id: int
    name: str
    stage: str
    status: str
    pipeline: "Pipeline"
    user: Optional[User]
    created_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    allow_failure: bool = False

    def to_client(self) -> JobDTO:
        pipeline = self.pipeline
        return JobDTO(
            id=self.id,
            name=self.name,
            stage=self.stage,
            status=self.status,
            ref=pipeline.ref,
            created_at=self.created_at,
            started_at=self.started_at,
            finished_at=self.finished_at,
            allow_failure=self.allow_failure,
            user=self.user.to_client() if self.user else None,
            pipeline=JobPipeline(
                id=pipeline.id,
                project_id=pipeline.project_id,
                ref=pipeline.ref,
                sha=pipeline.sha,
                status=pipeline.status,
            ),
        )


@dataclass(eq=False)
class Pipeline:
    id: int
    project_id: int
    ref: str
    sha: str
    status: PipelineStatus
    user: User
    created_at: datetime
    updated_at: datetime
    source: str = "api"
    tag: bool = False
    yaml_errors: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    web_url: str = ""
    jobs: List[Job] = field(default_factory=list)

    @property
    def has_yaml_errors(self) -> bool:
        return bool(self.yaml_errors)

    def to_basic_client(self) -> PipelineBasic:
        return PipelineBasic(
            id=self.id,
            project_id=self.project_id,
            status=self.status,
            ref=self.ref,
            sha=self.sha,
            source=self.source,
            created_at=self.created_at,
            updated_at=self.updated_at,
            web_url=self.web_url,
        )

    def to_client(self) -> PipelineDTO:
        duration = None
        if self.started_at and self.finished_at:
            duration = (self.finished_at - self.started_at).total_seconds()
        return PipelineDTO(
            id=self.id,
            project_id=self.project_id,
            status=self.status,
            ref=self.ref,
            sha=self.sha,
            source=self.source,
            created_at=self.created_at,
            updated_at=self.updated_at,
            web_url=self.web_url,
            tag=self.tag,
            user=self.user.to_client(),
            started_at=self.started_at,
            finished_at=self.finished_at,
            duration=duration,
            yaml_errors=self.yaml_errors,
        )


@dataclass(eq=False)
class Variable:
    key: str
    value: str
    environment_scope: str = DEFAULT_ENVIRONMENT_SCOPE
    variable_type: VariableType = VariableType.ENV_VAR
    protected: bool = False
    masked: bool = False

    def to_client(self) -> VariableDTO:
        return VariableDTO(
            key=self.key,
            value=self.value,
            variable_type=self.variable_type,
            protected=self.protected,
            masked=self.masked,
            environment_scope=self.environment_scope,
        )


@dataclass(eq=False)
class Project:
    id: int
    name: str
    path: str
    namespace: str
    visibility: VisibilityLevel
    created_at: datetime
    last_activity_at: datetime
    members: Dict[int, AccessLevel] = field(default_factory=dict)
    pipelines: List[Pipeline] = field(default_factory=list)
    variables: Dict[Tuple[str, str], Variable] = field(default_factory=dict)

    @property
    def path_with_namespace(self) -> str:
        return f"{self.namespace}/{self.path}"

    def access_level_of(self, user: Optional[User]) -> Optional[AccessLevel]:
        if user is None:
            return None
        return self.members.get(user.id)

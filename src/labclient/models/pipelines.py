"""Pipeline and job DTOs, plus the structured pipeline query."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .enums import PipelineOrderBy, PipelineScope, PipelineSort, PipelineStatus
from .users import User


class PipelineBasic(BaseModel):
    """Listing representation of a pipeline."""
    id: int
    project_id: int
    status: PipelineStatus
    ref: str
    sha: str
    source: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    web_url: str = ""


class Pipeline(PipelineBasic):
    """Full representation of a pipeline, as returned by lookup and create."""
    tag: bool = False
    user: Optional[User] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    duration: Optional[float] = None
    yaml_errors: Optional[str] = None


class PipelineVariable(BaseModel):
    key: str
    value: str
    variable_type: str = "env_var"


class JobPipeline(BaseModel):
    """Pipeline reference embedded in a job."""
    id: int
    project_id: int
    ref: str
    sha: str
    status: PipelineStatus


class Job(BaseModel):
    id: int
    name: str
    stage: str = "test"
    status: str
    ref: str = ""
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    allow_failure: bool = False
    user: Optional[User] = None
    pipeline: JobPipeline


class PipelineQuery(BaseModel):
    """
    Structured pipeline search.

    Every field is optional; None means no constraint on that dimension.
    """
    sha: Optional[str] = None
    name: Optional[str] = Field(default=None, description="Creator display name")
    ref: Optional[str] = None
    status: Optional[PipelineStatus] = None
    scope: Optional[PipelineScope] = None
    username: Optional[str] = Field(default=None, description="Creator username")
    yaml_errors: Optional[bool] = None
    updated_after: Optional[datetime] = None
    updated_before: Optional[datetime] = None
    order_by: Optional[PipelineOrderBy] = None
    sort: Optional[PipelineSort] = None

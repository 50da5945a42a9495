"""Pydantic DTOs and enums shared by the HTTP client and the simulation."""

from .enums import (
    TERMINAL_STATUSES,
    WIRE_NAMES,
    AccessLevel,
    JobScopeMask,
    PipelineOrderBy,
    PipelineScope,
    PipelineSort,
    PipelineStatus,
    VariableType,
    VisibilityLevel,
)
from .pipelines import Job, JobPipeline, Pipeline, PipelineBasic, PipelineQuery, PipelineVariable
from .users import User
from .variables import Variable, VariableCreate, VariableUpdate

__all__ = [
    "TERMINAL_STATUSES",
    "WIRE_NAMES",
    "AccessLevel",
    "Job",
    "JobPipeline",
    "JobScopeMask",
    "Pipeline",
    "PipelineBasic",
    "PipelineOrderBy",
    "PipelineQuery",
    "PipelineScope",
    "PipelineSort",
    "PipelineStatus",
    "PipelineVariable",
    "User",
    "Variable",
    "VariableCreate",
    "VariableType",
    "VariableUpdate",
    "VisibilityLevel",
]

"""Simulated resource clients."""

from .base import ClientBase, ClientContext
from .job_client import JobClient
from .pipeline_client import PipelineClient
from .project_variable_client import ProjectVariableClient

__all__ = [
    "ClientBase",
    "ClientContext",
    "JobClient",
    "PipelineClient",
    "ProjectVariableClient",
]

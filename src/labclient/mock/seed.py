"""Populate an EntityStore from a seed dictionary (see config.loader.load_seed_config)."""

from typing import Any, Dict, Type, TypeVar

from ..config.loader import validate_seed
from ..models import AccessLevel, PipelineStatus, VariableType, VisibilityLevel
from ..utils.logging import get_logger
from .entities import Project, User
from .store import EntityStore

logger = get_logger(__name__)

E = TypeVar("E")


def _enum(enum_type: Type[E], raw: Any) -> E:
    """Accept either a member name (any case) or a member value."""
    text = str(raw)
    for member in enum_type:
        if member.name.lower() == text.lower() or str(member.value).lower() == text.lower():
            return member
    raise ValueError(f"Unknown {enum_type.__name__}: {raw}")


def populate_store(store: EntityStore, seed: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Create the seeded users, projects, members, pipelines, jobs and variables.

    Pipelines are created in file order, so their ids follow it.

    Returns:
        {"users": {username: User}, "projects": {path_with_namespace: Project}}
    """
    seed = validate_seed(seed)
    users: Dict[str, User] = {}
    projects: Dict[str, Project] = {}

    for entry in seed["users"]:
        user = store.add_user(
            entry["username"],
            entry.get("name"),
            email=entry.get("email", ""),
            is_admin=bool(entry.get("admin", False)),
        )
        users[user.username] = user

    for entry in seed["projects"]:
        owner = users.get(entry["owner"]) if entry.get("owner") else None
        project = store.add_project(
            entry["name"],
            namespace=entry.get("namespace"),
            path=entry.get("path"),
            visibility=_enum(VisibilityLevel, entry.get("visibility", "private")),
            owner=owner,
        )
        for member in entry.get("members") or []:
            store.add_member(project, users[member["username"]], _enum(AccessLevel, member["access_level"]))

        for p_entry in entry.get("pipelines") or []:
            pipeline = store.add_pipeline(
                project,
                p_entry["ref"],
                _enum(PipelineStatus, p_entry.get("status", "running")),
                users[p_entry["user"]],
                sha=p_entry.get("sha"),
                yaml_errors=p_entry.get("yaml_errors"),
                source=p_entry.get("source", "push"),
                tag=bool(p_entry.get("tag", False)),
            )
            for j_entry in p_entry.get("jobs") or []:
                store.add_job(
                    pipeline,
                    j_entry["name"],
                    stage=j_entry.get("stage", "test"),
                    status=j_entry.get("status", "created"),
                    allow_failure=bool(j_entry.get("allow_failure", False)),
                )

        for v_entry in entry.get("variables") or []:
            store.add_variable(
                project,
                v_entry["key"],
                str(v_entry["value"]),
                environment_scope=v_entry.get("environment_scope"),
                variable_type=_enum(VariableType, v_entry.get("variable_type", "env_var")),
                protected=bool(v_entry.get("protected", False)),
                masked=bool(v_entry.get("masked", False)),
            )

        projects[project.path_with_namespace] = project

    logger.info(f"Seeded store with {len(users)} users and {len(projects)} projects")
    return {"users": users, "projects": projects}

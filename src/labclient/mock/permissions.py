"""Permission gate consulted before every resource client operation."""

from enum import Enum
from typing import Optional

from ..errors import ForbiddenError
from ..models import AccessLevel, VisibilityLevel
from .entities import Project, User
from .store import EntityStore, ProjectRef

MUTATE_MIN_ACCESS = AccessLevel.DEVELOPER


class ProjectPermission(Enum):
    VIEW = "view"
    MUTATE = "mutate"


def can_view(project: Project, caller: Optional[User]) -> bool:
    if project.visibility == VisibilityLevel.PUBLIC:
        return True
    if caller is None:
        return False
    if caller.is_admin or project.visibility == VisibilityLevel.INTERNAL:
        return True
    return project.access_level_of(caller) is not None


def can_mutate(project: Project, caller: Optional[User]) -> bool:
    if caller is None:
        return False
    if caller.is_admin:
        return True
    level = project.access_level_of(caller)
    return level is not None and level >= MUTATE_MIN_ACCESS


_CHECKS = {
    ProjectPermission.VIEW: can_view,
    ProjectPermission.MUTATE: can_mutate,
}


def authorize(
    store: EntityStore,
    caller: Optional[User],
    project_ref: ProjectRef,
    permission: ProjectPermission,
) -> Project:
    """
    Resolve a project and check the caller may perform the operation.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If it exists but the caller lacks the permission
    """
    project = store.find_project(project_ref)
    if not _CHECKS[permission](project, caller):
        who = caller.username if caller else "anonymous"
        raise ForbiddenError(f"{who} lacks {permission.value} permission on project {project.id}")
    return project

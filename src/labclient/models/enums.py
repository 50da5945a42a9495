"""Enumerations and their wire names.

WIRE_NAMES maps each enum type to a member -> wire name table. A member with
no entry is sent using its own name.
"""

from enum import Enum, Flag, IntEnum
from typing import Dict, Type


class PipelineStatus(Enum):
    # Declaration order is the sort order used for order_by=status.
    CREATED = "created"
    WAITING_FOR_RESOURCE = "waiting_for_resource"
    PREPARING = "preparing"
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    MANUAL = "manual"
    SCHEDULED = "scheduled"


TERMINAL_STATUSES = frozenset(
    {
        PipelineStatus.SUCCESS,
        PipelineStatus.FAILED,
        PipelineStatus.CANCELED,
        PipelineStatus.SKIPPED,
    }
)


class PipelineScope(Enum):
    RUNNING = "running"
    PENDING = "pending"
    FINISHED = "finished"
    BRANCHES = "branches"
    TAGS = "tags"


class PipelineOrderBy(Enum):
    ID = "id"
    STATUS = "status"
    REF = "ref"
    UPDATED_AT = "updated_at"
    USER_ID = "user_id"


class PipelineSort(Enum):
    ASC = "asc"
    DESC = "desc"


class JobScopeMask(Flag):
    CREATED = 1
    PENDING = 2
    RUNNING = 4
    FAILED = 8
    SUCCESS = 16
    CANCELED = 32
    SKIPPED = 64
    MANUAL = 128
    ALL = CREATED | PENDING | RUNNING | FAILED | SUCCESS | CANCELED | SKIPPED | MANUAL


class VisibilityLevel(Enum):
    PRIVATE = "private"
    INTERNAL = "internal"
    PUBLIC = "public"


class AccessLevel(IntEnum):
    GUEST = 10
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    OWNER = 50


class VariableType(Enum):
    ENV_VAR = "env_var"
    FILE = "file"


WIRE_NAMES: Dict[Type[Enum], Dict[Enum, str]] = {
    PipelineStatus: {member: member.value for member in PipelineStatus},
    PipelineScope: {member: member.value for member in PipelineScope},
    PipelineOrderBy: {member: member.value for member in PipelineOrderBy},
    PipelineSort: {member: member.value for member in PipelineSort},
    VisibilityLevel: {member: member.value for member in VisibilityLevel},
    VariableType: {member: member.value for member in VariableType},
}

"""Project variable DTOs."""

from typing import Optional

from pydantic import BaseModel

from .enums import VariableType


class Variable(BaseModel):
    key: str
    value: str
    variable_type: VariableType = VariableType.ENV_VAR
    protected: bool = False
    masked: bool = False
    environment_scope: str = "*"


class VariableCreate(BaseModel):
    key: str
    value: str
    variable_type: VariableType = VariableType.ENV_VAR
    protected: bool = False
    masked: bool = False
    environment_scope: Optional[str] = None


class VariableUpdate(BaseModel):
    value: str
    variable_type: Optional[VariableType] = None
    protected: Optional[bool] = None
    masked: Optional[bool] = None
    environment_scope: Optional[str] = None

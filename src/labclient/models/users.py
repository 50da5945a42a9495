"""User DTOs."""

from pydantic import BaseModel


class User(BaseModel):
    id: int
    username: str
    name: str
    state: str = "active"
    web_url: str = ""

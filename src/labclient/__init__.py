"""labclient: CI resource-management API client with an in-memory simulation."""

from .errors import ForbiddenError, LabClientError, NotFoundError, UnsupportedError

__version__ = "0.3.0"

__all__ = [
    "ForbiddenError",
    "LabClientError",
    "NotFoundError",
    "UnsupportedError",
]

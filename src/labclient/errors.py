"""Error types shared by the HTTP client and the in-memory simulation.

NotFound and Forbidden are never conflated. Unsupported means the call or
filter is recognized but not implemented; it never degrades to an empty result.
"""

from typing import Optional


class LabClientError(Exception):
    """Base class for all labclient errors."""

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(LabClientError, LookupError):
    """Resource (or its owning parent) does not exist."""

    def __init__(self, message: str = "Not Found"):
        super().__init__(message, status_code=404)


class ForbiddenError(LabClientError, PermissionError):
    """Resource exists but the caller lacks the required permission."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status_code=403)


class UnsupportedError(LabClientError, NotImplementedError):
    """Operation or query shape is intentionally not implemented."""


class UniqueNameExhaustedError(LabClientError, RuntimeError):
    """No unused name could be generated within the attempt budget."""

"""Process-scoped registry for generated test resource names."""

import threading
import uuid
from typing import Callable, Optional, Set

from ..errors import UniqueNameExhaustedError

DEFAULT_PREFIX = "LabClientTests_"
DEFAULT_MAX_ATTEMPTS = 1000


class UniqueNameRegistry:
    """Hands out names that were never handed out before in this registry."""

    def __init__(self, factory: Optional[Callable[[], str]] = None):
        self._factory = factory or (lambda: uuid.uuid4().hex)
        self._issued: Set[str] = set()
        self._lock = threading.Lock()

    def claim(self, value: str) -> bool:
        """Record value; False if it was already issued."""
        with self._lock:
            if value in self._issued:
                return False
            self._issued.add(value)
            return True

    def generate(self, prefix: str = DEFAULT_PREFIX, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> str:
        """
        Generate a name that has not been issued yet.

        Raises:
            UniqueNameExhaustedError: If max_attempts candidates all collided
        """
        for _ in range(max_attempts):
            candidate = f"{prefix}{self._factory()}"
            if self.claim(candidate):
                return candidate
        raise UniqueNameExhaustedError(
            f"Could not generate a unique name with prefix {prefix!r} after {max_attempts} attempts"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._issued)


_registry = UniqueNameRegistry()


def get_unique_name(prefix: str = DEFAULT_PREFIX) -> str:
    """Generate a unique name from the process-wide registry."""
    return _registry.generate(prefix)

"""SHA-1 commit hash value parsing."""

import hashlib
import re

SHA1_LENGTH = 40

_SHA1_RE = re.compile(r"^[0-9a-fA-F]{40}$")


def parse_sha1(value: str) -> str:
    """
    Validate a commit hash and return its canonical (lowercase) form.

    Raises:
        ValueError: If value is not a 40-character hex digest
    """
    if not isinstance(value, str) or not _SHA1_RE.match(value.strip()):
        raise ValueError(f"Invalid SHA-1 commit hash: {value!r}")
    return value.strip().lower()


def derive_sha1(*parts: object) -> str:
    """Deterministic SHA-1 digest over the given parts."""
    joined = ":".join(str(p) for p in parts)
    return hashlib.sha1(joined.encode("utf-8")).hexdigest()

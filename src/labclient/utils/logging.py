"""Logging helpers."""

import logging
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the labclient hierarchy."""
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """
    Attach a stream handler to the package root logger.

    Safe to call more than once; the handler is only added the first time.
    """
    root = logging.getLogger("labclient")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_labclient", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
        handler._labclient = True  # type: ignore[attr-defined]
        root.addHandler(handler)


logging.getLogger("labclient").addHandler(logging.NullHandler())

"""Application logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_notes_handler", False) for h in root.handlers):
        return root

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=_DATEFMT))
    handler._notes_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root

from __future__ import annotations
from typing import Optional


class ScanError(Exception):
    """Base class for failures surfaced to the caller of a scan."""


class RootUnreadable(ScanError):
    def __init__(self, path: str, cause: Optional[OSError] = None):
        self.path = path
        self.cause = cause
        reason = cause.strerror if cause is not None and cause.strerror else str(cause or "unreadable")
        super().__init__(f"cannot read directory '{path}': {reason}")


class InvalidConfig(ScanError, ValueError):
    pass

"""Errors raised while resolving an audit log batch."""

from __future__ import annotations


class AuditLogError(RuntimeError):
    """Base class for audit log resolution failures."""


class AuditLogPayloadError(AuditLogError, ValueError):
    """Raised when a batch payload does not have the required shape."""


class TargetResolutionError(AuditLogError):
    """Raised when an out-of-band target lookup fails and failures propagate."""

    def __init__(self, message: str, *, entry_id: str, target_id: str) -> None:
        super().__init__(message)
        self.entry_id = entry_id
        self.target_id = target_id

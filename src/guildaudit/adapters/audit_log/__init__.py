"""Public interface for the audit log adapter."""

from __future__ import annotations

from .batch import AuditLogBatch, parse_audit_log_payload
from .errors import AuditLogError, AuditLogPayloadError, TargetResolutionError
from .schema import (
    AuditLogEntryPayload,
    AuditLogPayload,
    AuditLogPayloadInput,
    ChangePayload,
    IntegrationPayload,
    UserPayload,
    WebhookPayload,
)
from .translator import resolve_entry

__all__ = [
    "AuditLogBatch",
    "AuditLogEntryPayload",
    "AuditLogError",
    "AuditLogPayload",
    "AuditLogPayloadError",
    "AuditLogPayloadInput",
    "ChangePayload",
    "IntegrationPayload",
    "TargetResolutionError",
    "UserPayload",
    "WebhookPayload",
    "parse_audit_log_payload",
    "resolve_entry",
]

"""Shared Pydantic models."""

from nsm_common.models.audit_event import AuditEvent
from nsm_common.models.server import ServerConfig, ServerType

__all__ = ["AuditEvent", "ServerConfig", "ServerType"]

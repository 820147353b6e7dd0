"""nsm-common — shared models and constants for nginx-server-manager."""

from nsm_common.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    BACKUP_SUFFIX,
    DEFAULT_INDEX,
    DEFAULT_LISTEN,
    DEFAULT_PROXY_HOST,
    LOG_DIR,
    NGINX_BINARY_PATHS,
    NGINX_CONF_PATHS,
    NGINX_KEYWORDS,
)
from nsm_common.config import NsmConfig
from nsm_common.models.audit_event import AuditEvent
from nsm_common.models.server import ServerConfig, ServerType

__all__ = [
    "AUDIT_DB_PATH",
    "AUDIT_JSONL_PATH",
    "AuditEvent",
    "BACKUP_SUFFIX",
    "DEFAULT_INDEX",
    "DEFAULT_LISTEN",
    "DEFAULT_PROXY_HOST",
    "LOG_DIR",
    "NGINX_BINARY_PATHS",
    "NGINX_CONF_PATHS",
    "NGINX_KEYWORDS",
    "NsmConfig",
    "ServerConfig",
    "ServerType",
]

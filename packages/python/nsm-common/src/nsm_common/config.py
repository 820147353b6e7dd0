"""Central configuration for nginx-server-manager."""

from __future__ import annotations

import getpass
import os
from pathlib import Path

from pydantic import BaseModel, Field

from nsm_common.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    DETECT_TIMEOUT,
    LOG_DIR,
    NGINX_BINARY_PATHS,
    NGINX_CONF_PATHS,
)


def _default_log_dir() -> Path:
    env = os.environ.get("NSM_LOG_DIR")
    return Path(env) if env else LOG_DIR


def _default_audit_db() -> Path:
    env = os.environ.get("NSM_AUDIT_DB")
    return Path(env) if env else AUDIT_DB_PATH


def _default_actor() -> str:
    return os.environ.get("NSM_ACTOR") or getpass.getuser()


class NsmConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    log_dir: Path = Field(default_factory=_default_log_dir)
    audit_db_path: Path = Field(default_factory=_default_audit_db)
    actor: str = Field(default_factory=_default_actor)
    nginx_conf_paths: list[Path] = Field(default_factory=lambda: list(NGINX_CONF_PATHS))
    nginx_binary_paths: list[Path] = Field(default_factory=lambda: list(NGINX_BINARY_PATHS))
    detect_timeout: float = DETECT_TIMEOUT

    @property
    def audit_jsonl_path(self) -> Path:
        return self.log_dir / AUDIT_JSONL_PATH.name

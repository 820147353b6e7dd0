"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from nsm_common import NsmConfig, ServerConfig

SAMPLE_NGINX_CONF = """\
user www-data;
worker_processes auto;
pid /run/nginx.pid;

events {
    worker_connections 768;
}

http {
    sendfile on;
    include /etc/nginx/mime.types;

    server {
        listen 80;
        server_name old.example.com;
    }
}

# stream settings below
stream_placeholder on;
"""


@pytest.fixture
def tmp_config(tmp_path: Path) -> NsmConfig:
    """Return an NsmConfig pointing at temp directories."""
    return NsmConfig(
        log_dir=tmp_path / "log",
        audit_db_path=tmp_path / "state" / "audit.db",
        actor="tester",
        nginx_conf_paths=[tmp_path / "etc" / "nginx" / "nginx.conf"],
        nginx_binary_paths=[tmp_path / "sbin" / "nginx"],
        detect_timeout=1.0,
    )


@pytest.fixture
def nginx_conf(tmp_path: Path) -> Path:
    """Write the sample nginx.conf to a temp file."""
    path = tmp_path / "nginx.conf"
    path.write_text(SAMPLE_NGINX_CONF)
    return path


@pytest.fixture
def static_server() -> ServerConfig:
    return ServerConfig(
        listen="8080",
        server_name="static.example.com",
        root="/var/www/static",
        index="index.htm",
    )


@pytest.fixture
def proxy_server() -> ServerConfig:
    return ServerConfig(server_name="app.example.com", proxy_port="8084")

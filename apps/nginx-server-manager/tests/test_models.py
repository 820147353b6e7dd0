"""Tests for shared Pydantic models."""

from __future__ import annotations

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from nsm_common import AuditEvent, ServerConfig, ServerType


class TestAuditEvent:
    def test_defaults(self):
        event = AuditEvent(action="server.add", target="nginx.conf")
        assert event.result == "success"
        assert event.error is None
        assert event.params == {}
        assert isinstance(event.timestamp, datetime)

    def test_to_jsonl(self):
        event = AuditEvent(
            action="server.add",
            target="/etc/nginx/nginx.conf",
            actor="testuser",
            params={"backup": True},
        )
        data = json.loads(event.to_jsonl())
        assert data["actor"] == "testuser"
        assert data["params"]["backup"] is True


class TestServerType:
    def test_values(self):
        assert ServerType("static") is ServerType.STATIC
        assert ServerType("proxy") is ServerType.PROXY
        assert ServerType.choices() == ["static", "proxy"]

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            ServerType("redirect")


class TestServerConfig:
    def test_defaults(self):
        server = ServerConfig(server_name="example.com")
        assert server.listen == "80"
        assert server.root == ""
        assert server.index == ""
        assert server.proxy_target == ""

    def test_frozen(self):
        server = ServerConfig(server_name="example.com")
        with pytest.raises(ValidationError):
            server.listen = "8080"

    def test_numbers_coerced_to_strings(self):
        server = ServerConfig(server_name="example.com", listen=8080, proxy_port=3000)
        assert server.listen == "8080"
        assert server.proxy_port == "3000"

    def test_proxy_target_from_port(self):
        server = ServerConfig(server_name="example.com", proxy_port="8084")
        assert server.proxy_target == "http://127.0.0.1:8084"

    def test_proxy_pass_wins_over_port(self):
        server = ServerConfig(
            server_name="example.com",
            proxy_pass="http://backend:9000",
            proxy_port="8084",
        )
        assert server.proxy_target == "http://backend:9000"

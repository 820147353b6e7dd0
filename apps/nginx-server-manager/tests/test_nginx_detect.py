"""Tests for nginx.conf auto-detection."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from nsm_common import NsmConfig
from nsm.errors import NginxNotFoundError
from nsm.services import nginx


def _completed(cmd: list[str], *, stdout: str = "", stderr: str = "", returncode: int = 0):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


class TestLooksLikeNginxConfig:
    def test_two_keywords(self, tmp_path: Path):
        path = tmp_path / "nginx.conf"
        path.write_text("events {}\nhttp {}\n")
        assert nginx.looks_like_nginx_config(path)

    def test_one_keyword(self, tmp_path: Path):
        path = tmp_path / "other.conf"
        path.write_text("location = /x;\n")
        assert not nginx.looks_like_nginx_config(path)

    def test_unreadable(self, tmp_path: Path):
        assert not nginx.looks_like_nginx_config(tmp_path / "missing.conf")


class TestParsers:
    def test_nginx_t_output(self, tmp_path: Path):
        conf = tmp_path / "nginx.conf"
        conf.touch()
        output = (
            f"nginx: the configuration file {conf} syntax is ok\n"
            f"nginx: configuration file {conf} test is successful\n"
        )
        assert nginx.parse_config_path_from_test_output(output) == conf

    def test_nginx_t_output_missing_file(self, tmp_path: Path):
        output = f"nginx: the configuration file {tmp_path}/nginx.conf syntax is ok\n"
        assert nginx.parse_config_path_from_test_output(output) is None

    def test_ps_dash_c(self, tmp_path: Path):
        conf = tmp_path / "custom.conf"
        conf.touch()
        output = (
            "USER PID %CPU %MEM VSZ RSS TTY STAT START TIME COMMAND\n"
            f"root 812 0.0 0.1 55284 1468 ? Ss 10:00 0:00 nginx: master process /usr/sbin/nginx -c {conf}\n"
            "www-data 813 0.0 0.2 55860 5284 ? S 10:00 0:00 nginx: worker process\n"
        )
        assert nginx.parse_config_path_from_ps_output(output) == conf

    def test_ps_without_master(self):
        assert nginx.parse_config_path_from_ps_output("root 1 init\n") is None


class TestDetectConfig:
    def test_common_path(self, tmp_config: NsmConfig):
        conf = tmp_config.nginx_conf_paths[0]
        conf.parent.mkdir(parents=True)
        conf.write_text("events {}\nhttp {\n    server {}\n}\n")
        with patch("nsm.services.nginx.get_config", return_value=tmp_config):
            assert nginx.detect_config() == conf

    def test_from_binary(self, tmp_config: NsmConfig, tmp_path: Path):
        binary = tmp_config.nginx_binary_paths[0]
        binary.parent.mkdir(parents=True)
        binary.touch()
        conf = tmp_path / "opt" / "nginx.conf"
        conf.parent.mkdir()
        conf.touch()

        def fake_run(cmd, *, timeout=None):
            assert cmd == [str(binary), "-t"]
            return _completed(cmd, stderr=f"nginx: the configuration file {conf} syntax is ok\n")

        with patch("nsm.services.nginx.get_config", return_value=tmp_config), \
             patch("nsm.services.nginx._run", side_effect=fake_run):
            assert nginx.detect_config() == conf

    def test_binary_falls_back_to_dash_capital_t(self, tmp_path: Path):
        conf = tmp_path / "nginx.conf"
        conf.touch()
        results = [
            _completed(["nginx", "-t"], returncode=1),
            _completed(["nginx", "-T"], stderr=f"nginx: the configuration file {conf} syntax is ok\n"),
        ]
        with patch("nsm.services.nginx._run", side_effect=results) as run:
            assert nginx.config_from_binary(Path("nginx")) == conf
        assert run.call_count == 2

    def test_from_process(self, tmp_config: NsmConfig, tmp_path: Path):
        conf = tmp_path / "nginx.conf"
        conf.touch()
        ps = f"root 1 nginx: master process nginx -c {conf}\n"
        with patch("nsm.services.nginx.get_config", return_value=tmp_config), \
             patch("nsm.services.nginx.shutil.which", return_value=None), \
             patch("nsm.services.nginx._run", return_value=_completed(["ps", "aux"], stdout=ps)):
            assert nginx.detect_config() == conf

    def test_nothing_found(self, tmp_config: NsmConfig):
        with patch("nsm.services.nginx.get_config", return_value=tmp_config), \
             patch("nsm.services.nginx.shutil.which", return_value=None), \
             patch("nsm.services.nginx._run", return_value=None):
            with pytest.raises(NginxNotFoundError, match="No nginx configuration file found"):
                nginx.detect_config()


class TestRun:
    def test_missing_command(self):
        assert nginx._run(["definitely-not-a-real-binary-nsm"]) is None

"""Locate the nginx.conf in use on this host."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from nsm_common import NGINX_KEYWORDS
from nsm.config import get_config
from nsm.errors import NginxNotFoundError

log = logging.getLogger(__name__)


def _run(cmd: list[str], *, timeout: float | None = None) -> subprocess.CompletedProcess[str] | None:
    """Run a probe command; None when it cannot be started or times out."""
    try:
        return subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        log.debug("Probe %s failed: %s", " ".join(cmd), exc)
        return None


def looks_like_nginx_config(path: Path) -> bool:
    """True when at least two nginx keywords appear in the file."""
    try:
        content = path.read_text(errors="replace")
    except OSError:
        return False
    return sum(1 for keyword in NGINX_KEYWORDS if keyword in content) >= 2


def find_config_in_common_paths(paths: list[Path]) -> Path | None:
    for path in paths:
        if path.is_file() and looks_like_nginx_config(path):
            return path
    return None


def find_nginx_binary(paths: list[Path]) -> Path | None:
    for path in paths:
        if path.exists():
            return path
    found = shutil.which("nginx")
    return Path(found) if found else None


def parse_config_path_from_test_output(output: str) -> Path | None:
    """Pull the nginx.conf path out of ``nginx -t`` / ``nginx -T`` output.

    nginx reports e.g. ``the configuration file /etc/nginx/nginx.conf syntax is ok``.
    """
    for line in output.splitlines():
        if "configuration file" not in line or "nginx.conf" not in line:
            continue
        for part in line.split():
            if part.endswith("nginx.conf") and Path(part).exists():
                return Path(part)
    return None


def config_from_binary(binary: Path, *, timeout: float | None = None) -> Path | None:
    """Ask the nginx binary which config file it tests."""
    result = _run([str(binary), "-t"], timeout=timeout)
    if result is None or result.returncode != 0:
        result = _run([str(binary), "-T"], timeout=timeout)
        if result is None or result.returncode != 0:
            return None
    # nginx writes its test report to stderr
    return parse_config_path_from_test_output(result.stdout + result.stderr)


def parse_config_path_from_ps_output(output: str) -> Path | None:
    """Find ``-c <path>`` or a nginx.conf argument on the nginx master process line."""
    for line in output.splitlines():
        if "nginx: master process" not in line:
            continue
        fields = line.split()
        for i, field in enumerate(fields):
            if field == "-c" and i + 1 < len(fields):
                candidate = Path(fields[i + 1])
                if candidate.exists():
                    return candidate
            if field.endswith("nginx.conf") and Path(field).exists():
                return Path(field)
    return None


def config_from_process(*, timeout: float | None = None) -> Path | None:
    result = _run(["ps", "aux"], timeout=timeout)
    if result is None or result.returncode != 0:
        return None
    return parse_config_path_from_ps_output(result.stdout)


def detect_config() -> Path:
    """Return the nginx.conf path, trying common paths, the binary, then ps.

    Raises NginxNotFoundError when every strategy comes up empty.
    """
    cfg = get_config()

    path = find_config_in_common_paths(cfg.nginx_conf_paths)
    if path:
        log.debug("Found nginx config in common paths: %s", path)
        return path

    binary = find_nginx_binary(cfg.nginx_binary_paths)
    if binary:
        path = config_from_binary(binary, timeout=cfg.detect_timeout)
        if path:
            log.debug("nginx binary %s reports config %s", binary, path)
            return path

    path = config_from_process(timeout=cfg.detect_timeout)
    if path:
        log.debug("Running nginx master process uses %s", path)
        return path

    raise NginxNotFoundError("No nginx configuration file found")

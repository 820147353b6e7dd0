"""Load a ServerConfig from a JSON or YAML file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from nsm_common import DEFAULT_INDEX, DEFAULT_LISTEN, ServerConfig
from nsm.errors import ConfigParseError, FileIOError, UnsupportedFormatError

_FIELDS = ("listen", "server_name", "root", "index", "proxy_pass", "proxy_port")


def _decode(path: Path, text: str) -> Any:
    ext = path.suffix.lower().lstrip(".")
    if ext == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigParseError(f"Failed to parse JSON config {path}: {exc}") from exc
    if ext in ("yaml", "yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigParseError(f"Failed to parse YAML config {path}: {exc}") from exc
    raise UnsupportedFormatError(f"Unsupported config file format: {ext or path.name}")


def apply_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Fill in listen and index the way nginx users expect."""
    out = {key: ("" if data.get(key) is None else data[key]) for key in _FIELDS if key in data}
    if not out.get("listen"):
        out["listen"] = DEFAULT_LISTEN
    if not out.get("index") and out.get("root"):
        out["index"] = DEFAULT_INDEX
    return out


def build_server_config(data: dict[str, Any]) -> ServerConfig:
    """Validate raw field values into a ServerConfig, applying defaults."""
    try:
        return ServerConfig(**apply_defaults(data))
    except ValidationError as exc:
        raise ConfigParseError(f"Invalid server config: {exc}") from exc


def load_server_config(path: Path) -> ServerConfig:
    """Read ``path`` and decode it by extension (.json, .yaml, .yml)."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileIOError(f"Failed to read config file {path}: {exc}") from exc

    data = _decode(path, text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"Config file {path} must contain a mapping of fields")
    return build_server_config(data)

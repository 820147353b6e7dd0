"""Jinja2-based server block renderer."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from nsm_common import ServerConfig, ServerType
from nsm.errors import UnsupportedServerTypeError

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_env() -> Environment:
    # Blocks are spliced into an existing file, so the trailing newline of
    # each template is dropped and the splicer controls line endings.
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def parse_server_type(value: str | ServerType) -> ServerType:
    """Convert a CLI/config discriminator into a ServerType."""
    if isinstance(value, ServerType):
        return value
    try:
        return ServerType(value)
    except ValueError:
        raise UnsupportedServerTypeError(
            f"Unsupported server type: {value!r} (expected one of: {', '.join(ServerType.choices())})"
        ) from None


def render_static_block(server: ServerConfig) -> str:
    """Render a static file server block."""
    env = _get_env()
    template = env.get_template("server_static.conf.j2")
    return template.render(server=server)


def render_proxy_block(server: ServerConfig) -> str:
    """Render a reverse proxy server block pointing at server.proxy_target."""
    env = _get_env()
    template = env.get_template("server_proxy.conf.j2")
    return template.render(server=server, target=server.proxy_target)


def render_server_block(server: ServerConfig, server_type: str | ServerType) -> str:
    """Render the block for the given server type."""
    kind = parse_server_type(server_type)
    if kind is ServerType.STATIC:
        return render_static_block(server)
    return render_proxy_block(server)

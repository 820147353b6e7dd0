"""Server block configuration model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from nsm_common.constants import DEFAULT_LISTEN, DEFAULT_PROXY_HOST


class ServerType(str, Enum):
    """Kind of server block to generate."""

    STATIC = "static"
    PROXY = "proxy"

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]


class ServerConfig(BaseModel):
    """One virtual host to be added to the http section.

    Values are substituted into the generated block verbatim; nothing here
    checks that they make sense to nginx.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    listen: str = DEFAULT_LISTEN
    server_name: str = ""
    root: str = ""
    index: str = ""
    proxy_pass: str = ""
    proxy_port: str = ""

    @property
    def proxy_target(self) -> str:
        """Upstream URL: proxy_pass wins, otherwise the local port."""
        if self.proxy_pass:
            return self.proxy_pass
        if self.proxy_port:
            return f"http://{DEFAULT_PROXY_HOST}:{self.proxy_port}"
        return ""

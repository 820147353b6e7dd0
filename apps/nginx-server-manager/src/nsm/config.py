"""CLI configuration — singleton NsmConfig resolved at startup."""

from __future__ import annotations

from functools import lru_cache

from nsm_common import NsmConfig


@lru_cache(maxsize=1)
def get_config() -> NsmConfig:
    """Return the global NsmConfig (resolved once, cached)."""
    return NsmConfig()

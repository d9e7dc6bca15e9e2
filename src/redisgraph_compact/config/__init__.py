"""RedisGraph Compact configuration: connection defaults."""

from redisgraph_compact.config.settings import (
    COMPACT_FLAG,
    DEFAULT_URL,
    URL_ENV_VAR,
    connect,
    get_url,
)

__all__ = [
    "COMPACT_FLAG",
    "DEFAULT_URL",
    "URL_ENV_VAR",
    "connect",
    "get_url",
]

"""Connection settings for RedisGraph."""

from __future__ import annotations

import logging
import os

import redis

logger = logging.getLogger(__name__)

DEFAULT_URL = "redis://localhost:6379"

URL_ENV_VAR = "REDISGRAPH_URL"

COMPACT_FLAG = "--compact"

def get_url(explicit: str | None = None) -> str:
    """Return the Redis URL to connect to.

    *explicit* wins when given, then the :data:`URL_ENV_VAR` environment
    variable, then :data:`DEFAULT_URL`.
    """
    if explicit:
        return explicit
    return os.environ.get(URL_ENV_VAR) or DEFAULT_URL

def connect(url: str | None = None) -> redis.Redis:
    """Open a Redis client that returns ``str`` instead of ``bytes``."""
    resolved = get_url(url)
    logger.debug("Connecting to %s", resolved)
    return redis.Redis.from_url(resolved, decode_responses=True)

"""Error types raised while decoding RedisGraph responses.

Transport failures (``redis.exceptions.RedisError`` and friends) are never
wrapped by the command layer; they reach the caller unchanged.  The types
below cover failures that originate in this package.
"""

from __future__ import annotations

from typing import Any

class RedisGraphError(Exception):
    """Base class for every error raised by redisgraph_compact."""

class DecodeError(RedisGraphError):
    """A cell or entity did not have the shape its type tag declares."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value

class CatalogFetchError(RedisGraphError):
    """One of the ``db.labels`` / ``db.propertyKeys`` / ``db.relationshipTypes``
    round trips failed, so entity names could not be resolved.

    The transport exception is chained as ``__cause__``.
    """

    def __init__(self, procedure: str, graph_name: str) -> None:
        super().__init__(f"Failed to fetch {procedure} catalog for graph {graph_name!r}")
        self.procedure = procedure
        self.graph_name = graph_name

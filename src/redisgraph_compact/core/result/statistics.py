"""Extraction of query statistics from the trailing text lines of a response.

RedisGraph reports statistics as free text, one stat per line, e.g.
``"Nodes created: 2"`` or
``"Query internal execution time: 0.228669 milliseconds"``.  Only the value
token is kept, as text, exactly as the server formatted it.
"""

from __future__ import annotations

from collections.abc import Sequence

LABELS_ADDED = "Labels added"
LABELS_REMOVED = "Labels removed"
NODES_CREATED = "Nodes created"
NODES_DELETED = "Nodes deleted"
PROPERTIES_SET = "Properties set"
PROPERTIES_REMOVED = "Properties removed"
RELATIONSHIPS_CREATED = "Relationships created"
RELATIONSHIPS_DELETED = "Relationships deleted"
INDICES_CREATED = "Indices created"
INDICES_DELETED = "Indices deleted"
QUERY_INTERNAL_EXECUTION_TIME = "Query internal execution time"

GRAPH_REMOVED_INTERNAL_EXECUTION_TIME = "Graph removed, internal execution time"

QUERY_STATS: tuple[str, ...] = (
    LABELS_ADDED,
    LABELS_REMOVED,
    NODES_CREATED,
    NODES_DELETED,
    PROPERTIES_SET,
    PROPERTIES_REMOVED,
    RELATIONSHIPS_CREATED,
    RELATIONSHIPS_DELETED,
    INDICES_CREATED,
    INDICES_DELETED,
    QUERY_INTERNAL_EXECUTION_TIME,
)

def as_text(value: str | bytes) -> str:
    """Return *value* as ``str``, decoding UTF-8 bytes."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value

def extract_value(stat: str, line: str | bytes) -> str | None:
    """Return the value token for *stat* in *line*, or ``None`` if absent.

    The token is whatever follows the first ``": "`` up to the next space.
    """
    line = as_text(line)
    if stat not in line:
        return None
    _, sep, rest = line.partition(": ")
    if not sep:
        return None
    return rest.split(" ", 1)[0]

def parse_statistics(raw: str | bytes | Sequence[str | bytes]) -> dict[str, str]:
    """Build the statistics map for a response's statistics block.

    A single text line is the ``GRAPH.DELETE`` form and is matched against
    :data:`GRAPH_REMOVED_INTERNAL_EXECUTION_TIME` only.  A sequence of lines
    is matched against :data:`QUERY_STATS`; for each stat the first matching
    line wins.  Stats the server did not report are left out of the map.
    """
    if isinstance(raw, (str, bytes)):
        candidates: tuple[str, ...] = (GRAPH_REMOVED_INTERNAL_EXECUTION_TIME,)
        lines: Sequence[str | bytes] = [raw]
    else:
        candidates = QUERY_STATS
        lines = raw

    stats: dict[str, str] = {}
    for stat in candidates:
        for line in lines:
            value = extract_value(stat, line)
            if value is not None:
                stats[stat] = value
                break
    return stats

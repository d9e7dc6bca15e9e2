"""Resolution of label, property-key and relationship-type catalogs.

Node and edge cells reference names by integer index.  The names are
fetched with three procedure calls issued over the caller's transport:
``db.labels``, ``db.propertyKeys`` and ``db.relationshipTypes``.  The Nth
record of each call is the name for index N.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from redisgraph_compact.core.commands import procedure_command
from redisgraph_compact.core.errors import CatalogFetchError, DecodeError
from redisgraph_compact.core.result.statistics import as_text

logger = logging.getLogger(__name__)

LABELS_PROCEDURE = "db.labels"
PROPERTY_KEYS_PROCEDURE = "db.propertyKeys"
RELATIONSHIP_TYPES_PROCEDURE = "db.relationshipTypes"

@runtime_checkable
class Transport(Protocol):
    """Anything that can send a raw command, e.g. ``redis.Redis``."""

    def execute_command(self, *args: Any, **options: Any) -> Any:
        ...

@dataclass(frozen=True)
class Catalogs:
    """The three ``index -> name`` mappings for one graph.

    The mappings are copied into read-only views on construction, so a
    cached instance can be handed to any number of results.
    """

    __hash__ = None  # type: ignore[assignment]

    labels: Mapping[int, str] = field(default_factory=dict)
    property_keys: Mapping[int, str] = field(default_factory=dict)
    relationship_types: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("labels", "property_keys", "relationship_types"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def label(self, index: int) -> str | None:
        return _lookup(self.labels, index, "label")

    def property_key(self, index: int) -> str | None:
        return _lookup(self.property_keys, index, "property key")

    def relationship_type(self, index: int) -> str | None:
        return _lookup(self.relationship_types, index, "relationship type")

def _lookup(mapping: Mapping[int, str], index: int, kind: str) -> str | None:
    name = mapping.get(index)
    if name is None:
        logger.debug("No %s for index %r in catalog", kind, index)
    return name

@runtime_checkable
class CatalogCache(Protocol):
    """Optional store for :class:`Catalogs` supplied by the caller.

    Entries are keyed by graph name and a caller-chosen freshness token;
    invalidation is entirely up to the caller.
    """

    def get(self, graph_name: str, token: Hashable) -> Catalogs | None:
        ...

    def put(self, graph_name: str, token: Hashable, catalogs: Catalogs) -> None:
        ...

class DictCatalogCache:
    """A minimal in-memory :class:`CatalogCache`.

    Usage::

        cache = DictCatalogCache()
        outcome = decode_response(conn, "imdb", raw, cache=cache, token=schema_version)
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, Hashable], Catalogs] = {}

    def get(self, graph_name: str, token: Hashable) -> Catalogs | None:
        return self._entries.get((graph_name, token))

    def put(self, graph_name: str, token: Hashable, catalogs: Catalogs) -> None:
        self._entries[(graph_name, token)] = catalogs

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

def parse_procedure_response(response: Sequence[Any]) -> dict[int, str]:
    """Turn a raw ``CALL db.*()`` compact response into ``{index: name}``.

    Each record looks like ``[[value_type, name], ...]``; only the first
    cell is used.

    Raises:
        DecodeError: If the response is not ``[header, records, stats]``.
    """
    if not isinstance(response, (list, tuple)) or len(response) != 3:
        raise DecodeError("Procedure response is not [header, records, statistics]", response)
    _header, records, _stats = response
    catalog: dict[int, str] = {}
    for index, record in enumerate(records):
        try:
            _value_type, name = record[0]
        except (TypeError, ValueError, IndexError) as exc:
            raise DecodeError(f"Malformed catalog record at index {index}", record) from exc
        catalog[index] = as_text(name)
    return catalog

def fetch_catalog(transport: Transport, graph_name: str, procedure: str) -> dict[int, str]:
    """Run one catalog procedure and parse its records.

    Raises:
        CatalogFetchError: If the round trip fails or the reply is malformed.
    """
    logger.debug("Fetching %s for graph %s", procedure, graph_name)
    try:
        response = transport.execute_command(*procedure_command(graph_name, procedure))
        return parse_procedure_response(response)
    except Exception as exc:
        raise CatalogFetchError(procedure, graph_name) from exc

def resolve_catalogs(
    transport: Transport,
    graph_name: str,
    cache: CatalogCache | None = None,
    token: Hashable = None,
) -> Catalogs:
    """Fetch all three catalogs for *graph_name*.

    When *cache* is given, a hit for ``(graph_name, token)`` skips the round
    trips and a miss stores the freshly fetched catalogs.  Without a cache
    every call costs three round trips.

    Raises:
        CatalogFetchError: If any of the three procedure calls fails.
    """
    if cache is not None:
        cached = cache.get(graph_name, token)
        if cached is not None:
            logger.debug("Catalog cache hit for graph %s", graph_name)
            return cached

    catalogs = Catalogs(
        labels=fetch_catalog(transport, graph_name, LABELS_PROCEDURE),
        property_keys=fetch_catalog(transport, graph_name, PROPERTY_KEYS_PROCEDURE),
        relationship_types=fetch_catalog(transport, graph_name, RELATIONSHIP_TYPES_PROCEDURE),
    )

    if cache is not None:
        cache.put(graph_name, token, catalogs)
    return catalogs

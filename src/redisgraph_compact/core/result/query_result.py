"""Assembly of a :class:`QueryResult` from a raw compact response.

A ``GRAPH.QUERY ... --compact`` reply is either a single statistics element
(``[stats]``, or a bare text line for ``GRAPH.DELETE``) or
``[header, records, stats]``.  Decoding a reply with records resolves the
graph's catalogs first, then decodes every row; the statistics block is
always parsed.

Example::

    conn = connect()
    raw = conn.execute_command("GRAPH.QUERY", "imdb", "MATCH (a:actor) RETURN a", "--compact")
    result = decode_response(conn, "imdb", raw).unwrap()
    result.result_set      # ((Node(id=0, alias='a', labels=['actor'], ...),),)
    result.nodes_created   # None
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from redisgraph_compact.core.errors import CatalogFetchError, DecodeError, RedisGraphError
from redisgraph_compact.core.result import statistics as stats
from redisgraph_compact.core.result.catalog import (
    CatalogCache,
    Transport,
    resolve_catalogs,
)
from redisgraph_compact.core.result.decoder import CellDecoder
from redisgraph_compact.core.result.header import parse_header
from redisgraph_compact.core.result.model import ColumnType, DecodedValue

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class QueryResult:
    """Decoded outcome of one query.

    ``header`` and ``column_types`` are ``None`` for statistics-only
    replies.  ``labels``, ``property_keys`` and ``relationship_types`` are
    ``None`` unless rows were decoded.
    """

    graph_name: str
    raw_result_set: Any
    header: tuple[str, ...] | None = None
    column_types: tuple[ColumnType | int, ...] | None = None
    result_set: tuple[tuple[DecodedValue, ...], ...] = ()
    statistics: dict[str, str] = field(default_factory=dict)
    labels: Mapping[int, str] | None = None
    property_keys: Mapping[int, str] | None = None
    relationship_types: Mapping[int, str] | None = None

    def is_empty(self) -> bool:
        """Return ``True`` if the result holds no rows."""
        return not self.result_set

    def results_to_maps(self) -> list[dict[str, DecodedValue]]:
        """Return each row as ``{alias: value}``."""
        if not self.header:
            return []
        return [dict(zip(self.header, row)) for row in self.result_set]

    def get_stat(self, stat: str) -> str | None:
        return self.statistics.get(stat)

    @property
    def labels_added(self) -> str | None:
        return self.get_stat(stats.LABELS_ADDED)

    @property
    def labels_removed(self) -> str | None:
        return self.get_stat(stats.LABELS_REMOVED)

    @property
    def nodes_created(self) -> str | None:
        return self.get_stat(stats.NODES_CREATED)

    @property
    def nodes_deleted(self) -> str | None:
        return self.get_stat(stats.NODES_DELETED)

    @property
    def properties_set(self) -> str | None:
        return self.get_stat(stats.PROPERTIES_SET)

    @property
    def properties_removed(self) -> str | None:
        return self.get_stat(stats.PROPERTIES_REMOVED)

    @property
    def relationships_created(self) -> str | None:
        return self.get_stat(stats.RELATIONSHIPS_CREATED)

    @property
    def relationships_deleted(self) -> str | None:
        return self.get_stat(stats.RELATIONSHIPS_DELETED)

    @property
    def indices_created(self) -> str | None:
        return self.get_stat(stats.INDICES_CREATED)

    @property
    def indices_deleted(self) -> str | None:
        return self.get_stat(stats.INDICES_DELETED)

    @property
    def query_internal_execution_time(self) -> str | None:
        """Execution time in milliseconds, as reported by the server."""
        return self.get_stat(stats.QUERY_INTERNAL_EXECUTION_TIME)

    @property
    def graph_removed_internal_execution_time(self) -> str | None:
        return self.get_stat(stats.GRAPH_REMOVED_INTERNAL_EXECUTION_TIME)

@dataclass(frozen=True)
class DecodeOutcome:
    """Either a decoded :class:`QueryResult` or the error that prevented it.

    ``CatalogFetchError`` means the query itself succeeded but entity
    names could not be resolved; ``DecodeError`` means the reply was
    malformed.  Query failures never get here: they are raised by the
    transport before decoding starts.
    """

    result: QueryResult | None = None
    error: CatalogFetchError | DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> QueryResult:
        """Return the result, or raise the stored error."""
        if self.error is not None:
            raise self.error
        if self.result is None:
            raise RedisGraphError("DecodeOutcome holds neither a result nor an error")
        return self.result

def decode_response(
    transport: Transport,
    graph_name: str,
    raw: Any,
    *,
    cache: CatalogCache | None = None,
    token: Hashable = None,
) -> DecodeOutcome:
    """Decode *raw* into a :class:`DecodeOutcome`.

    *transport* is used only for the catalog round trips and is not kept.
    *cache* and *token* are passed to :func:`resolve_catalogs`.
    """
    try:
        result = build_query_result(transport, graph_name, raw, cache=cache, token=token)
    except (CatalogFetchError, DecodeError) as exc:
        logger.debug("Decoding reply for graph %s failed: %s", graph_name, exc)
        return DecodeOutcome(error=exc)
    return DecodeOutcome(result=result)

def build_query_result(
    transport: Transport,
    graph_name: str,
    raw: Any,
    *,
    cache: CatalogCache | None = None,
    token: Hashable = None,
) -> QueryResult:
    """Decode *raw* into a :class:`QueryResult`.

    Raises:
        CatalogFetchError: If a catalog round trip fails.
        DecodeError: If the reply or a cell is malformed.
    """
    if isinstance(raw, (str, bytes)):
        return QueryResult(graph_name, raw, statistics=stats.parse_statistics(raw))

    if not isinstance(raw, (list, tuple)) or not raw:
        raise DecodeError("Reply is neither a statistics line nor a result set", raw)

    if len(raw) == 1:
        return QueryResult(graph_name, raw, statistics=stats.parse_statistics(raw[0]))

    if len(raw) != 3:
        raise DecodeError("Reply is not [header, records, statistics]", raw)

    raw_header, records, raw_stats = raw
    statistics = stats.parse_statistics(raw_stats)

    if not raw_header:
        return QueryResult(graph_name, raw, statistics=statistics)

    columns = parse_header(raw_header)
    header = tuple(c.alias for c in columns)
    column_types = tuple(c.type for c in columns)

    if not records:
        return QueryResult(
            graph_name,
            raw,
            header=header,
            column_types=column_types,
            statistics=statistics,
        )

    catalogs = resolve_catalogs(transport, graph_name, cache=cache, token=token)
    decoder = CellDecoder(catalogs)
    result_set = tuple(_decode_row(decoder, header, row) for row in records)

    return QueryResult(
        graph_name,
        raw,
        header=header,
        column_types=column_types,
        result_set=result_set,
        statistics=statistics,
        labels=catalogs.labels,
        property_keys=catalogs.property_keys,
        relationship_types=catalogs.relationship_types,
    )

def _decode_row(
    decoder: CellDecoder, header: Sequence[str], row: Sequence[Any]
) -> tuple[DecodedValue, ...]:
    if len(row) != len(header):
        raise DecodeError(
            f"Row has {len(row)} cells but the header declares {len(header)} columns", row
        )
    return tuple(decoder.decode(cell, alias) for cell, alias in zip(row, header))

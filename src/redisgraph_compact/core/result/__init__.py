"""Decoding of RedisGraph compact result sets."""

from redisgraph_compact.core.result.catalog import (
    CatalogCache,
    Catalogs,
    DictCatalogCache,
    Transport,
    resolve_catalogs,
)
from redisgraph_compact.core.result.decoder import CellDecoder
from redisgraph_compact.core.result.header import Column, parse_header
from redisgraph_compact.core.result.model import (
    ColumnType,
    DecodedValue,
    Node,
    Relationship,
    UnknownValue,
    UnsupportedValue,
    ValueType,
)
from redisgraph_compact.core.result.query_result import (
    DecodeOutcome,
    QueryResult,
    build_query_result,
    decode_response,
)
from redisgraph_compact.core.result.statistics import parse_statistics

__all__ = [
    "CatalogCache",
    "Catalogs",
    "CellDecoder",
    "Column",
    "ColumnType",
    "DecodeOutcome",
    "DecodedValue",
    "DictCatalogCache",
    "Node",
    "QueryResult",
    "Relationship",
    "Transport",
    "UnknownValue",
    "UnsupportedValue",
    "ValueType",
    "build_query_result",
    "decode_response",
    "parse_header",
    "parse_statistics",
    "resolve_catalogs",
]

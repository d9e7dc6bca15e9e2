"""Recursive decoding of compact cells.

A cell is a ``[value_type, value]`` pair.  Scalars come back in their
native shape, arrays are decoded element by element, and node/edge cells
are turned into :class:`Node` / :class:`Relationship` entities with names
resolved through :class:`Catalogs`.

Wire shapes::

    node:  [id, [label_index, ...], [[key_index, value_type, value], ...]]
    edge:  [id, type_index, src_id, dest_id, [[key_index, value_type, value], ...]]
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from redisgraph_compact.core.errors import DecodeError
from redisgraph_compact.core.result.catalog import Catalogs
from redisgraph_compact.core.result.model import (
    DecodedValue,
    Node,
    Relationship,
    UnknownValue,
    UnsupportedValue,
    ValueType,
)

logger = logging.getLogger(__name__)

_PASSTHROUGH = frozenset({ValueType.NULL, ValueType.INTEGER, ValueType.STRING})
_UNSUPPORTED = frozenset({ValueType.PATH, ValueType.MAP, ValueType.POINT})

class CellDecoder:
    """Decodes cells against one set of catalogs.

    Usage::

        decoder = CellDecoder(catalogs)
        value = decoder.decode([8, [0, [0], [[0, 2, "Hugh Jackman"]]]], alias="a")
    """

    def __init__(self, catalogs: Catalogs) -> None:
        self._catalogs = catalogs

    def decode(self, cell: Sequence[Any], alias: str | None = None) -> DecodedValue:
        """Decode one ``[value_type, value]`` cell.

        *alias* is attached to a top-level node or relationship.

        Raises:
            DecodeError: If the cell or its payload is malformed.
        """
        try:
            tag, value = cell
        except (TypeError, ValueError) as exc:
            raise DecodeError("Cell is not a [value_type, value] pair", cell) from exc

        try:
            value_type = ValueType(tag)
        except ValueError:
            logger.debug("Unknown value type %r", tag)
            return UnknownValue(tag)

        if value_type in _PASSTHROUGH:
            return value
        if value_type is ValueType.BOOLEAN:
            return value in ("true", b"true")
        if value_type is ValueType.DOUBLE:
            return _parse_double(value)
        if value_type is ValueType.ARRAY:
            return self.decode_array(value)
        if value_type is ValueType.NODE:
            return self.decode_node(value, alias)
        if value_type is ValueType.EDGE:
            return self.decode_relationship(value, alias)
        if value_type in _UNSUPPORTED:
            return UnsupportedValue(value_type)
        return UnknownValue(tag)

    def decode_array(self, value: Sequence[Any]) -> list[DecodedValue]:
        if not isinstance(value, (list, tuple)):
            raise DecodeError("ARRAY payload is not a sequence", value)
        return [self.decode(element) for element in value]

    def decode_node(self, value: Sequence[Any], alias: str | None = None) -> Node:
        try:
            node_id, label_indexes, properties = value
        except (TypeError, ValueError) as exc:
            raise DecodeError("NODE payload is not [id, labels, properties]", value) from exc
        if not isinstance(label_indexes, (list, tuple)):
            raise DecodeError("NODE labels are not a sequence", value)

        return Node(
            id=node_id,
            alias=alias,
            labels=[self._catalogs.label(index) for index in label_indexes],
            properties=self.decode_properties(properties),
        )

    def decode_relationship(self, value: Sequence[Any], alias: str | None = None) -> Relationship:
        try:
            rel_id, type_index, src_id, dest_id, properties = value
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                "EDGE payload is not [id, type, src, dest, properties]", value
            ) from exc

        return Relationship(
            id=rel_id,
            alias=alias,
            type=self._catalogs.relationship_type(type_index),
            src_node=src_id,
            dest_node=dest_id,
            properties=self.decode_properties(properties),
        )

    def decode_properties(self, properties: Sequence[Sequence[Any]]) -> dict[str | None, DecodedValue]:
        """Decode ``[[key_index, value_type, value], ...]`` into a dict."""
        if not isinstance(properties, (list, tuple)):
            raise DecodeError("Properties are not a sequence", properties)
        decoded: dict[str | None, DecodedValue] = {}
        for entry in properties:
            if not isinstance(entry, (list, tuple)) or not entry:
                raise DecodeError("Property entry is not [key, value_type, value]", entry)
            key_index, *cell = entry
            decoded[self._catalogs.property_key(key_index)] = self.decode(cell)
        return decoded

def _parse_double(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"DOUBLE value {value!r} is not a number", value) from exc

"""Value model for decoded RedisGraph compact results.

Defines the wire-level type tags, the :class:`Node` and
:class:`Relationship` entities built from node/edge cells, and the sentinel
values returned for kinds this package does not decode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

class ValueType(IntEnum):
    """Type tags carried by every compact cell ``[tag, value]``."""

    UNKNOWN = 0
    NULL = 1
    STRING = 2
    INTEGER = 3
    BOOLEAN = 4
    DOUBLE = 5
    ARRAY = 6
    EDGE = 7
    NODE = 8
    PATH = 9
    MAP = 10
    POINT = 11

class ColumnType(IntEnum):
    """Column tags found in the result set header.

    Advisory only: cells are always decoded by their own :class:`ValueType`.
    """

    UNKNOWN = 0
    SCALAR = 1
    NODE = 2
    RELATION = 3

@dataclass(frozen=True)
class Node:
    """A graph vertex decoded from a ``NODE`` cell.

    ``alias`` is the column alias the node was returned under, or ``None``
    for nodes nested inside arrays or properties.  Nodes compare by value
    but are not hashable, since ``labels`` and ``properties`` are mutable.
    """

    __hash__ = None  # type: ignore[assignment]

    id: int
    alias: str | None = None
    labels: list[str | None] = field(default_factory=list)
    properties: dict[str | None, Any] = field(default_factory=dict)

@dataclass(frozen=True)
class Relationship:
    """A graph edge decoded from an ``EDGE`` cell.

    ``src_node`` and ``dest_node`` are the raw endpoint ids; the protocol
    does not embed the endpoint nodes.  Not hashable, like :class:`Node`.
    """

    __hash__ = None  # type: ignore[assignment]

    id: int
    alias: str | None = None
    type: str | None = None
    src_node: int = 0
    dest_node: int = 0
    properties: dict[str | None, Any] = field(default_factory=dict)

@dataclass(frozen=True)
class UnsupportedValue:
    """Placeholder for PATH, MAP and POINT cells."""

    kind: ValueType
    message: str = "will be implemented in future"

@dataclass(frozen=True)
class UnknownValue:
    """Placeholder for a cell whose tag is not a known :class:`ValueType`."""

    tag: Any
    message: str = "unknown value type"

DecodedValue = Union[
    None,
    str,
    int,
    bool,
    float,
    list,
    Node,
    Relationship,
    UnsupportedValue,
    UnknownValue,
]

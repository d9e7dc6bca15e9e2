"""Parsing of the result set header ``[[column_type, alias], ...]``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from redisgraph_compact.core.errors import DecodeError
from redisgraph_compact.core.result.model import ColumnType
from redisgraph_compact.core.result.statistics import as_text

@dataclass(frozen=True)
class Column:
    """One header entry.  ``type`` is advisory; see :class:`ColumnType`."""

    type: ColumnType | int
    alias: str

def _column_type(tag: Any) -> ColumnType | int:
    try:
        return ColumnType(tag)
    except ValueError:
        return tag

def parse_header(raw_header: Sequence[Sequence[Any]]) -> list[Column]:
    """Return the columns declared by *raw_header*, in order.

    Raises:
        DecodeError: If an entry is not a ``[type, alias]`` pair.
    """
    columns: list[Column] = []
    for entry in raw_header:
        try:
            tag, alias = entry
        except (TypeError, ValueError) as exc:
            raise DecodeError("Header entry is not a [type, alias] pair", entry) from exc
        columns.append(Column(type=_column_type(tag), alias=as_text(alias)))
    return columns

"""Construction of ``GRAPH.*`` command vectors.

Every command is a list of strings ready for ``execute_command(*command)``.
Queries always request the compact result format.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from redisgraph_compact.config import COMPACT_FLAG

GRAPH_QUERY = "GRAPH.QUERY"
GRAPH_DELETE = "GRAPH.DELETE"
GRAPH_EXPLAIN = "GRAPH.EXPLAIN"

def _escape(value: str) -> str:
    """Escape a string for safe inclusion in a Cypher literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")

def value_to_string(value: Any) -> str:
    """Render *value* as a Cypher literal.

    Examples::

        value_to_string("it's")      # "'it\\'s'"
        value_to_string(True)        # "true"
        value_to_string(None)        # "null"
        value_to_string([1, "a"])    # "[1,'a']"
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f"'{_escape(value)}'"
    if isinstance(value, Mapping):
        pairs = ",".join(f"{k}:{value_to_string(v)}" for k, v in value.items())
        return "{" + pairs + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(value_to_string(v) for v in value) + "]"
    return str(value)

def procedure_query(
    procedure: str,
    args: Sequence[Any] = (),
    yields: Sequence[str] = (),
) -> str:
    """Build ``CALL procedure(args)`` with an optional ``YIELD`` clause."""
    rendered = ",".join(value_to_string(a) for a in args)
    q = f"CALL {procedure}({rendered})"
    if yields:
        q += " YIELD " + ",".join(yields)
    return q

def query_command(graph_name: str, q: str) -> list[str]:
    return [GRAPH_QUERY, graph_name, q, COMPACT_FLAG]

def delete_command(graph_name: str) -> list[str]:
    return [GRAPH_DELETE, graph_name]

def explain_command(graph_name: str, q: str) -> list[str]:
    return [GRAPH_EXPLAIN, graph_name, q]

def procedure_command(
    graph_name: str,
    procedure: str,
    args: Sequence[Any] = (),
    yields: Sequence[str] = (),
) -> list[str]:
    return query_command(graph_name, procedure_query(procedure, args, yields))

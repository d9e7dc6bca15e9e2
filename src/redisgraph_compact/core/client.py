"""Thin command layer over a RedisGraph connection.

:class:`RedisGraph` sends pre-built ``GRAPH.*`` commands through a
transport (normally a ``redis.Redis`` client) and decodes the replies into
:class:`QueryResult` objects.  Transport errors, including query errors
reported by the server, propagate unchanged.

Usage::

    from redisgraph_compact.config import connect

    graph = RedisGraph(connect("redis://localhost:6379"))
    result = graph.query("imdb", "MATCH (a:actor) RETURN a")
    for row in result.results_to_maps():
        print(row["a"].properties)
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from typing import Any

from redisgraph_compact.core import commands
from redisgraph_compact.core.result.catalog import (
    LABELS_PROCEDURE,
    PROPERTY_KEYS_PROCEDURE,
    RELATIONSHIP_TYPES_PROCEDURE,
    CatalogCache,
    Transport,
)
from redisgraph_compact.core.result.query_result import QueryResult, decode_response

logger = logging.getLogger(__name__)

class RedisGraph:
    """Executes graph commands on *transport* and decodes their replies.

    *cache* is an optional :class:`CatalogCache`; when given, replies are
    decoded with catalogs cached under ``(graph_name, token)`` where *token*
    is passed per call.
    """

    def __init__(self, transport: Transport, cache: CatalogCache | None = None) -> None:
        self._transport = transport
        self._cache = cache

    def command(self, command: Sequence[str], *, token: Hashable = None) -> QueryResult:
        """Execute an arbitrary ``GRAPH.*`` command and decode the reply.

        The second element of *command* must be the graph name.

        Raises:
            CatalogFetchError: If the reply has rows and a catalog round trip failed.
            DecodeError: If the reply is malformed.
        """
        logger.debug("Executing %s", " ".join(command))
        raw = self._transport.execute_command(*command)
        graph_name = command[1]
        return decode_response(
            self._transport, graph_name, raw, cache=self._cache, token=token
        ).unwrap()

    def query(self, graph_name: str, q: str, *, token: Hashable = None) -> QueryResult:
        """Run *q* on *graph_name* with compact output."""
        return self.command(commands.query_command(graph_name, q), token=token)

    def delete(self, graph_name: str) -> QueryResult:
        """Delete *graph_name*; only statistics are returned."""
        return self.command(commands.delete_command(graph_name))

    def execution_plan(self, graph_name: str, q: str) -> list[str]:
        """Return the raw execution plan lines for *q*."""
        return self._transport.execute_command(*commands.explain_command(graph_name, q))

    def call_procedure_raw(
        self,
        graph_name: str,
        procedure: str,
        args: Sequence[Any] = (),
        yields: Sequence[str] = (),
    ) -> Any:
        """Run a procedure and return the undecoded reply."""
        return self._transport.execute_command(
            *commands.procedure_command(graph_name, procedure, args, yields)
        )

    def call_procedure(
        self,
        graph_name: str,
        procedure: str,
        args: Sequence[Any] = (),
        yields: Sequence[str] = (),
    ) -> QueryResult:
        """Run a procedure and decode its reply."""
        return self.command(commands.procedure_command(graph_name, procedure, args, yields))

    def labels(self, graph_name: str) -> QueryResult:
        return self.call_procedure(graph_name, LABELS_PROCEDURE)

    def property_keys(self, graph_name: str) -> QueryResult:
        return self.call_procedure(graph_name, PROPERTY_KEYS_PROCEDURE)

    def relationship_types(self, graph_name: str) -> QueryResult:
        return self.call_procedure(graph_name, RELATIONSHIP_TYPES_PROCEDURE)

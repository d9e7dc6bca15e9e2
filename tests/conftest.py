"""Shared fixtures: an in-memory stand-in for a RedisGraph connection."""

from __future__ import annotations

from typing import Any

import pytest

STATS_LINE = "Query internal execution time: 0.1 milliseconds"


def catalog_reply(names: list[str]) -> list[Any]:
    """Build the compact reply of a ``CALL db.*()`` procedure."""
    return [[[1, "name"]], [[[2, name]] for name in names], [STATS_LINE]]


class FakeTransport:
    """Records every command and answers from canned replies.

    Catalog procedures are answered from the names given at construction.
    Other replies are registered with :meth:`reply`, keyed by the query
    string (or the command name for commands without one).  Registering an
    exception makes that command raise it.
    """

    def __init__(
        self,
        labels: list[str] | None = None,
        property_keys: list[str] | None = None,
        relationship_types: list[str] | None = None,
    ) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self._replies: dict[str, Any] = {
            "CALL db.labels()": catalog_reply(labels or []),
            "CALL db.propertyKeys()": catalog_reply(property_keys or []),
            "CALL db.relationshipTypes()": catalog_reply(relationship_types or []),
        }

    def reply(self, key: str, value: Any) -> None:
        self._replies[key] = value

    def execute_command(self, *args: Any, **options: Any) -> Any:
        self.calls.append(args)
        key = args[2] if len(args) > 2 else args[0]
        value = self._replies[key]
        if isinstance(value, Exception):
            raise value
        return value

    @property
    def catalog_calls(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if len(c) > 2 and str(c[2]).startswith("CALL db.")]


@pytest.fixture()
def transport() -> FakeTransport:
    """A transport for a small movie graph."""
    return FakeTransport(
        labels=["actor", "movie"],
        property_keys=["name", "title", "age"],
        relationship_types=["act"],
    )

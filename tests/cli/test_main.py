"""Tests for the RedisGraph Compact CLI."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import redis
from typer.testing import CliRunner

from conftest import STATS_LINE, FakeTransport
from redisgraph_compact import __version__
from redisgraph_compact.cli.main import app, format_value
from redisgraph_compact.core.client import RedisGraph
from redisgraph_compact.core.result.model import (
    Node,
    Relationship,
    UnknownValue,
    UnsupportedValue,
    ValueType,
)

runner = CliRunner()

MATCH = "MATCH (a:actor) RETURN a, a.age"


@pytest.fixture()
def client(transport: FakeTransport) -> RedisGraph:
    """Patch the CLI to talk to the fake transport."""
    graph = RedisGraph(transport)
    with patch("redisgraph_compact.cli.main._connect", return_value=graph):
        yield graph


class TestVersion:
    """Tests for the --version flag."""

    def test_version_long_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"RedisGraph Compact v{__version__}" in result.output

    def test_version_short_flag(self) -> None:
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert f"RedisGraph Compact v{__version__}" in result.output


class TestHelp:
    """Tests for the --help flag."""

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for cmd in [
            "query",
            "delete",
            "explain",
            "labels",
            "property-keys",
            "relationship-types",
            "call",
        ]:
            assert cmd in result.output, f"Command '{cmd}' not found in --help output"


class TestQuery:
    def test_prints_rows_and_stats(self, client: RedisGraph, transport: FakeTransport) -> None:
        transport.reply(
            MATCH,
            [
                [[1, "a"], [1, "a.age"]],
                [[[8, [0, [0], [[0, 2, "Hugh"]]]], [3, 55]]],
                [STATS_LINE],
            ],
        )
        result = runner.invoke(app, ["query", "imdb", MATCH])
        assert result.exit_code == 0
        assert "(a:actor {name: Hugh})" in result.output
        assert "55" in result.output
        assert "1 row(s)" in result.output
        assert "Query internal execution time: 0.1" in result.output

    def test_server_error(self, client: RedisGraph, transport: FakeTransport) -> None:
        transport.reply("MATCH (", redis.exceptions.ResponseError("Invalid input"))
        result = runner.invoke(app, ["query", "imdb", "MATCH ("])
        assert result.exit_code == 1
        assert "Invalid input" in result.output

    def test_catalog_error(self, client: RedisGraph, transport: FakeTransport) -> None:
        transport.reply(MATCH, [[[1, "a"]], [[[3, 1]]], [STATS_LINE]])
        transport.reply("CALL db.labels()", redis.exceptions.ConnectionError("down"))
        result = runner.invoke(app, ["query", "imdb", MATCH])
        assert result.exit_code == 1
        assert "db.labels" in result.output

    def test_url_passed_to_connect(self) -> None:
        graph = MagicMock()
        graph.query.return_value.header = None
        graph.query.return_value.statistics = {}
        with patch("redisgraph_compact.cli.main._connect", return_value=graph) as connect:
            result = runner.invoke(app, ["query", "imdb", "RETURN 1", "--url", "redis://g:1"])
        assert result.exit_code == 0
        connect.assert_called_once_with("redis://g:1")


class TestDelete:
    def test_force(self, client: RedisGraph, transport: FakeTransport) -> None:
        transport.reply("GRAPH.DELETE", "Graph removed, internal execution time: 0.9 milliseconds")
        result = runner.invoke(app, ["delete", "imdb", "--force"])
        assert result.exit_code == 0
        assert "Deleted" in result.output
        assert transport.calls == [("GRAPH.DELETE", "imdb")]

    def test_abort(self, client: RedisGraph, transport: FakeTransport) -> None:
        result = runner.invoke(app, ["delete", "imdb"], input="n\n")
        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert transport.calls == []


class TestCatalogCommands:
    def test_labels(self, client: RedisGraph) -> None:
        result = runner.invoke(app, ["labels", "imdb"])
        assert result.exit_code == 0
        assert "actor" in result.output
        assert "movie" in result.output

    def test_property_keys(self, client: RedisGraph) -> None:
        result = runner.invoke(app, ["property-keys", "imdb"])
        assert result.exit_code == 0
        assert "title" in result.output

    def test_relationship_types(self, client: RedisGraph) -> None:
        result = runner.invoke(app, ["relationship-types", "imdb"])
        assert result.exit_code == 0
        assert "act" in result.output

    def test_call(self, client: RedisGraph, transport: FakeTransport) -> None:
        result = runner.invoke(app, ["call", "imdb", "db.labels"])
        assert result.exit_code == 0
        assert transport.calls[0][2] == "CALL db.labels()"


class TestExplain:
    def test_prints_plan(self, client: RedisGraph, transport: FakeTransport) -> None:
        transport.reply(MATCH, ["Results", "    Node By Label Scan | (a:actor)"])
        result = runner.invoke(app, ["explain", "imdb", MATCH])
        assert result.exit_code == 0
        assert "Node By Label Scan" in result.output


class TestFormatValue:
    def test_scalars(self) -> None:
        assert format_value(None) == "null"
        assert format_value(True) == "true"
        assert format_value(1.5) == "1.5"
        assert format_value([1, "a"]) == "[1, a]"

    def test_relationship(self) -> None:
        rel = Relationship(id=0, alias="r", type="act", src_node=0, dest_node=1)
        assert format_value(rel) == "(0)-[r:act {}]->(1)"

    def test_node_without_alias(self) -> None:
        assert format_value(Node(id=1, labels=["movie"])) == "(:movie {})"

    def test_sentinels(self) -> None:
        assert format_value(UnsupportedValue(ValueType.PATH)) == "<will be implemented in future>"
        assert format_value(UnknownValue(99)) == "<unknown value type>"

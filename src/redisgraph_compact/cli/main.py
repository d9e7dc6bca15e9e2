"""RedisGraph Compact CLI: run graph commands and print decoded results."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

import redis
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from redisgraph_compact import __version__
from redisgraph_compact.config import URL_ENV_VAR
from redisgraph_compact.core.client import RedisGraph
from redisgraph_compact.core.errors import RedisGraphError
from redisgraph_compact.core.result.model import (
    Node,
    Relationship,
    UnknownValue,
    UnsupportedValue,
)
from redisgraph_compact.core.result.query_result import QueryResult

console = Console()

URL_OPTION = typer.Option(
    None, "--url", "-u", envvar=URL_ENV_VAR, help="Redis URL of the RedisGraph server."
)

def _connect(url: str | None) -> RedisGraph:
    """Build a :class:`RedisGraph` client for *url*."""
    from redisgraph_compact.config import connect

    return RedisGraph(connect(url))

app = typer.Typer(
    name="redisgraph-compact",
    help="RedisGraph Compact: typed RedisGraph results on the command line.",
    no_args_is_help=True,
)

def _version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        console.print(f"RedisGraph Compact v{__version__}")
        raise typer.Exit()

@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: N803
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """RedisGraph Compact: typed RedisGraph results on the command line."""

def format_value(value: Any) -> str:
    """Render a decoded value in Cypher-like notation."""
    if isinstance(value, Node):
        labels = "".join(f":{label}" for label in value.labels)
        return f"({value.alias or ''}{labels} {_format_props(value.properties)})"
    if isinstance(value, Relationship):
        return (
            f"({value.src_node})-[{value.alias or ''}:{value.type} "
            f"{_format_props(value.properties)}]->({value.dest_node})"
        )
    if isinstance(value, (UnsupportedValue, UnknownValue)):
        return f"<{value.message}>"
    if isinstance(value, list):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

def _format_props(properties: dict[str | None, Any]) -> str:
    return "{" + ", ".join(f"{k}: {format_value(v)}" for k, v in properties.items()) + "}"

def _print_result(result: QueryResult) -> None:
    if result.header:
        table = Table(*result.header)
        for row in result.result_set:
            table.add_row(*(Text(format_value(v)) for v in row))
        console.print(table)
        console.print(f"[dim]{len(result.result_set)} row(s)[/dim]")

    for stat, value in result.statistics.items():
        console.print(f"  {stat}: {value}", markup=False)

def _run(url: str | None, action: Callable[[RedisGraph], Any]) -> Any:
    """Run *action* against a fresh client, turning failures into exit code 1."""
    client = _connect(url)
    try:
        return action(client)
    except (RedisGraphError, redis.exceptions.RedisError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

@app.command()
def query(
    graph: str = typer.Argument(..., help="Name of the graph."),
    q: str = typer.Argument(..., help="Cypher query to execute."),
    url: Optional[str] = URL_OPTION,
) -> None:
    """Run a Cypher query and print the decoded result set."""
    result = _run(url, lambda client: client.query(graph, q))
    _print_result(result)

@app.command()
def delete(
    graph: str = typer.Argument(..., help="Name of the graph to delete."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt."),
    url: Optional[str] = URL_OPTION,
) -> None:
    """Delete a graph."""
    if not force:
        confirm = typer.confirm(f"Delete graph {graph}?")
        if not confirm:
            console.print("Aborted.")
            raise typer.Exit()

    result = _run(url, lambda client: client.delete(graph))
    console.print(f"[green]Deleted[/green] {graph}")
    _print_result(result)

@app.command()
def explain(
    graph: str = typer.Argument(..., help="Name of the graph."),
    q: str = typer.Argument(..., help="Cypher query to explain."),
    url: Optional[str] = URL_OPTION,
) -> None:
    """Show the execution plan of a query."""
    plan = _run(url, lambda client: client.execution_plan(graph, q))
    for line in plan:
        console.print(line, markup=False)

@app.command()
def labels(
    graph: str = typer.Argument(..., help="Name of the graph."),
    url: Optional[str] = URL_OPTION,
) -> None:
    """List node labels."""
    _print_result(_run(url, lambda client: client.labels(graph)))

@app.command(name="property-keys")
def property_keys(
    graph: str = typer.Argument(..., help="Name of the graph."),
    url: Optional[str] = URL_OPTION,
) -> None:
    """List property keys."""
    _print_result(_run(url, lambda client: client.property_keys(graph)))

@app.command(name="relationship-types")
def relationship_types(
    graph: str = typer.Argument(..., help="Name of the graph."),
    url: Optional[str] = URL_OPTION,
) -> None:
    """List relationship types."""
    _print_result(_run(url, lambda client: client.relationship_types(graph)))

@app.command()
def call(
    graph: str = typer.Argument(..., help="Name of the graph."),
    procedure: str = typer.Argument(..., help="Procedure name, e.g. db.labels."),
    args: Optional[list[str]] = typer.Argument(None, help="String arguments to the procedure."),
    yields: Optional[list[str]] = typer.Option(
        None, "--yield", "-y", help="Output column to yield. Repeatable."
    ),
    url: Optional[str] = URL_OPTION,
) -> None:
    """Call a procedure and print the decoded result set."""
    result = _run(
        url,
        lambda client: client.call_procedure(graph, procedure, args or (), yields or ()),
    )
    _print_result(result)

"""CLI: microfoxx query run|next"""

import json

import click
from rich.console import Console

from microfoxx.models.query import CursorQueryParams
from microfoxx.models.results import CursorQueryResult

console = Console()


def _get_client():
    from microfoxx.cli.main import _get_client
    return _get_client()


def _run(coro):
    from microfoxx.cli.main import _run
    return _run(coro)


def _check(result):
    from microfoxx.cli.main import _check
    _check(result)


def _print_json(value, json_output=False):
    from microfoxx.cli.main import _print_json
    _print_json(value, json_output)


def _parse_bind(values: tuple[str, ...]) -> dict:
    bind_vars = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint="--bind")
        try:
            bind_vars[name] = json.loads(raw)
        except json.JSONDecodeError:
            bind_vars[name] = raw
    return bind_vars


def _print_batch(result: CursorQueryResult, json_output: bool, hint: bool = True) -> None:
    _check(result)
    _print_json(result.documents.json() if result.documents else [], json_output)
    if json_output:
        return
    if result.count is not None:
        console.print(f"[dim]count: {result.count}[/dim]")
    if hint and result.cursor is not None and result.has_more:
        console.print(f"[dim]more results: microfoxx query next {result.cursor}[/dim]")


@click.group()
def query():
    """Cursor queries."""


@query.command("run")
@click.argument("text")
@click.option("--bind", "bind", multiple=True, help="Bind variable name=value (value parsed as JSON)")
@click.option("--batch-size", default=0, type=click.IntRange(min=0))
@click.option("--count", is_flag=True, help="Ask the server for the total count")
@click.option("--all", "fetch_all", is_flag=True, help="Follow the cursor to the last batch")
@click.option("--json-output", "--json", is_flag=True)
def query_run(text, bind, batch_size, count, fetch_all, json_output):
    """Run a query and print its first batch (or every batch with --all)."""
    params = CursorQueryParams(query=text, bind_vars=_parse_bind(bind), batch_size=batch_size, count=count)

    async def _query():
        async with _get_client() as client:
            if not fetch_all:
                _print_batch(await client.cursors.start(params), json_output)
                return
            async for result in client.cursors.batches(params):
                _print_batch(result, json_output, hint=False)

    _run(_query())


@query.command("next")
@click.argument("cursor_id")
@click.option("--json-output", "--json", is_flag=True)
def query_next(cursor_id, json_output):
    """Fetch the next batch of an open cursor."""

    async def _next():
        async with _get_client() as client:
            _print_batch(await client.cursors.next_batch(cursor_id), json_output)

    _run(_next())

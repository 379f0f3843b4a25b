"""CLI: microfoxx indexes list|create|remove"""

import click
from rich.console import Console
from rich.table import Table

from microfoxx.models.index import IndexParams

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


@click.group()
def indexes():
    """Index management."""


@indexes.command("list")
@click.argument("collection")
def indexes_list(collection):
    """List the indexes of a collection."""

    async def _list():
        async with _get_client() as client:
            result = await client.indexes.list(collection)
        _check(result)
        table = Table(title=f"Indexes on {collection}")
        table.add_column("ID", style="bold")
        table.add_column("Type")
        table.add_column("Fields")
        table.add_column("Unique")
        table.add_column("Sparse")
        for idx in result.indexes:
            table.add_row(idx.id, idx.type, ", ".join(idx.fields), str(idx.unique), str(idx.sparse))
        console.print(table)

    _run(_list())


@indexes.command("create")
@click.argument("collection")
@click.option("--type", "index_type", required=True, help="e.g. hash, skiplist, fulltext")
@click.option("--field", "fields", multiple=True, required=True)
@click.option("--unique", is_flag=True)
@click.option("--sparse", is_flag=True)
def indexes_create(collection, index_type, fields, unique, sparse):
    """Create an index."""
    params = IndexParams(collection=collection, type=index_type, fields=list(fields), unique=unique, sparse=sparse)

    async def _create():
        async with _get_client() as client:
            result = await client.indexes.create(params)
        _check(result)
        console.print(f"[green]Index created on {collection}.[/green]")

    _run(_create())


@indexes.command("remove")
@click.argument("handle")
def indexes_remove(handle):
    """Remove an index by handle (<collection>/<id>)."""

    async def _remove():
        async with _get_client() as client:
            result = await client.indexes.remove(handle)
        _check(result)
        console.print(f"[green]{result.message or f'Index {handle} removed.'}[/green]")

    _run(_remove())

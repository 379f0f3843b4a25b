"""CLI: microfoxx collections create"""

import click
from rich.console import Console

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
def collections():
    """Collection management."""


@collections.command("create")
@click.argument("name")
def collections_create(name):
    """Create a collection."""

    async def _create():
        async with _get_client() as client:
            with console.status("Creating collection..."):
                result = await client.collections.create(name)
        _check(result)
        console.print(f"[green]{result.message or f'Collection {name} created.'}[/green]")

    _run(_create())

"""CLI: microfoxx docs get|count|create|update|remove"""

import json
from typing import Optional

import click
from rich.console import Console

from microfoxx.models.document import DocumentRetrievalParams

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


def _parse_doc(raw: str) -> dict:
    try:
        doc = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="DOC")
    if not isinstance(doc, dict):
        raise click.BadParameter("document must be a JSON object", param_hint="DOC")
    return doc


def _parse_filters(values: tuple[str, ...]) -> dict[str, str]:
    filters = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected field=value, got {item!r}", param_hint="--filter")
        filters[name] = value
    return filters


@click.group()
def docs():
    """Document CRUD."""


@docs.command("get")
@click.argument("collection")
@click.argument("key", required=False)
@click.option("--filter", "filters", multiple=True, help="Field filter field=value")
@click.option("--sort", "sort_fields", multiple=True, help="Sort field (repeatable)")
@click.option("--order", type=click.Choice(["ASC", "DESC"]), default=None)
@click.option("--offset", default=0, type=click.IntRange(min=0))
@click.option("--limit", default=0, type=click.IntRange(min=0))
@click.option("--json-output", "--json", is_flag=True)
def docs_get(collection: str, key: Optional[str], filters, sort_fields, order, offset, limit, json_output):
    """Get one document by KEY, or list documents."""

    async def _get():
        async with _get_client() as client:
            if key:
                result = await client.documents.get(collection, key)
                _check(result)
                _print_json(result.document.json(), json_output)
                return
            params = DocumentRetrievalParams(
                fields=_parse_filters(filters), sort_fields=list(sort_fields),
                sort_order=order, limit_offset=offset, limit_count=limit,
            )
            result = await client.documents.list(collection, params)
            _check(result)
            _print_json(result.documents.json(), json_output)

    _run(_get())


@docs.command("count")
@click.argument("collection")
@click.option("--filter", "filters", multiple=True, help="Field filter field=value")
def docs_count(collection, filters):
    """Count documents in a collection."""

    async def _count():
        async with _get_client() as client:
            result = await client.documents.count(collection, DocumentRetrievalParams(fields=_parse_filters(filters)))
        _check(result)
        click.echo(result.count)

    _run(_count())


@docs.command("create")
@click.argument("collection")
@click.argument("doc")
def docs_create(collection, doc):
    """Create a document from a JSON object."""
    body = _parse_doc(doc)

    async def _create():
        async with _get_client() as client:
            result = await client.documents.create(collection, body)
        _check(result)
        _print_json(result.document.json())

    _run(_create())


@docs.command("update")
@click.argument("collection")
@click.argument("key")
@click.argument("doc")
def docs_update(collection, key, doc):
    """Update a document from a JSON object."""
    body = _parse_doc(doc)

    async def _update():
        async with _get_client() as client:
            result = await client.documents.update(collection, key, body)
        _check(result)
        _print_json(result.document.json())

    _run(_update())


@docs.command("remove")
@click.argument("collection")
@click.argument("key")
def docs_remove(collection, key):
    """Remove a document."""

    async def _remove():
        async with _get_client() as client:
            result = await client.documents.remove(collection, key)
        _check(result)
        console.print(f"[green]Document {collection}/{key} removed.[/green]")

    _run(_remove())

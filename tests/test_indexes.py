"""Indexes."""

import pytest

from microfoxx import ErrorKind, IndexParams


@pytest.mark.asyncio
async def test_create_list_remove(client):
    created = await client.indexes.create(IndexParams(collection="items", type="hash", fields=["name"], unique=True))
    assert created.status_code == 201
    assert created.ok

    listed = await client.indexes.list("items")
    assert listed.ok
    assert len(listed.indexes) == 1
    index = listed.indexes[0]
    assert index.id == "items/1"
    assert index.type == "hash"
    assert index.fields == ["name"]
    assert index.unique is True
    assert index.selectivity_estimate == 1

    removed = await client.indexes.remove(index.id)
    assert removed.status_code == 200
    assert removed.message == "Index items/1 removed"
    assert (await client.indexes.list("items")).indexes == []


@pytest.mark.asyncio
async def test_create_on_missing_collection(client):
    result = await client.indexes.create(IndexParams(collection="ghost", type="hash", fields=["x"]))
    assert result.status_code == 404
    assert result.error_kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_list_missing_collection(client):
    result = await client.indexes.list("ghost")
    assert result.error_kind is ErrorKind.NOT_FOUND
    assert result.indexes == []


@pytest.mark.asyncio
async def test_remove_unknown_index(client):
    result = await client.indexes.remove("items/99")
    assert result.error_kind is ErrorKind.NOT_FOUND
    assert result.message == "Index items/99 not found"


@pytest.mark.asyncio
async def test_remove_keeps_handle_slash(client, stub):
    result = await client.indexes.remove("items/9?9")
    assert result.error_kind is ErrorKind.NOT_FOUND
    assert stub.requests[-1].url.raw_path.endswith(b"/index/items/9%3F9")

"""
Integration tests for the microfoxx SDK: run against a real service.

Requires environment variables:
  MICROFOXX_DATABASE   - database name
  MICROFOXX_USERNAME   - service user
  MICROFOXX_PASSWORD   - service password
  MICROFOXX_HOST       - (optional) defaults to localhost
  MICROFOXX_PORT       - (optional) defaults to 80

Run: MICROFOXX_INTEGRATION=1 pytest tests/integration/ -v
"""

import os
import uuid

import pytest

from microfoxx import AsyncMicroFoxx, AuthError, ConnectionParams, CursorQueryParams, ErrorKind

SKIP = not os.environ.get("MICROFOXX_INTEGRATION")

pytestmark = pytest.mark.skipif(SKIP, reason="MICROFOXX_INTEGRATION not set")


def make_params(**overrides) -> ConnectionParams:
    values = dict(
        database=os.environ.get("MICROFOXX_DATABASE", "_system"),
        host=os.environ.get("MICROFOXX_HOST", ""),
        port=os.environ.get("MICROFOXX_PORT", ""),
        username=os.environ.get("MICROFOXX_USERNAME", ""),
        password=os.environ.get("MICROFOXX_PASSWORD", ""),
    )
    values.update(overrides)
    return ConnectionParams(**values)


class TestSession:
    @pytest.mark.asyncio
    async def test_login_and_refresh(self):
        async with AsyncMicroFoxx(make_params()) as client:
            first = await client.login()
            assert first.session_id
            second = await client.refresh()
            assert second.session_id
            assert client.session is second

    @pytest.mark.asyncio
    async def test_rejects_bad_password(self):
        async with AsyncMicroFoxx(make_params(password="definitely-wrong")) as client:
            with pytest.raises(AuthError):
                await client.login()


class TestCursorLifecycle:
    @pytest.mark.asyncio
    async def test_pages_through_new_collection(self):
        async with AsyncMicroFoxx(make_params()) as client:
            await client.login()
            name = f"it_{uuid.uuid4().hex[:8]}"

            created = await client.collections.create(name)
            assert created.ok, created.message
            repeated = await client.collections.create(name)
            assert repeated.error_kind is ErrorKind.BAD_REQUEST

            for i in range(12):
                assert (await client.documents.create(name, {"n": i})).ok

            params = CursorQueryParams(
                query="FOR item in @@coll SORT item.n RETURN item",
                bind_vars={"@coll": name},
                batch_size=5,
                count=True,
            )
            batches = [r async for r in client.cursors.batches(params)]
            assert all(b.ok for b in batches)
            assert batches[0].count == 12
            seen = [doc["n"] for b in batches for doc in b.documents.json()]
            assert seen == list(range(12))

            gone = await client.cursors.next_batch(batches[0].cursor)
            assert gone.error_kind is ErrorKind.NOT_FOUND

"""
Indexes REST API.
"""

from __future__ import annotations

from pydantic import ValidationError

from microfoxx.errors import DecodeError, MicroFoxxError
from microfoxx.models.index import Index, IndexParams
from microfoxx.models.results import IndexListResult, IndexOpResult
from microfoxx.transport.envelope import decode_array, decode_object, failure
from microfoxx.transport.http import HttpClient, segment

INDEX_ENDPOINT = "/index"


class IndexesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(self, collection: str) -> IndexListResult:
        """List the indexes on a collection."""
        try:
            resp = await self._http.call("GET", f"{INDEX_ENDPOINT}/{segment(collection)}")
        except MicroFoxxError as e:
            return IndexListResult(error=e)
        if resp.status_code != 200:
            return failure(IndexListResult, resp)

        try:
            indexes = [Index.model_validate(item) for item in decode_array(resp.content)]
        except DecodeError as e:
            return IndexListResult(status_code=resp.status_code, error=e)
        except ValidationError as e:
            return IndexListResult(status_code=resp.status_code, error=DecodeError(f"Invalid index: {e}"))
        return IndexListResult(status_code=resp.status_code, indexes=indexes)

    async def remove(self, handle: str) -> IndexOpResult:
        """Remove an index by its handle, ``<collection>/<id>``."""
        try:
            resp = await self._http.call("DELETE", f"{INDEX_ENDPOINT}/{segment(handle, safe='/')}")
        except MicroFoxxError as e:
            return IndexOpResult(error=e)
        if resp.status_code != 200:
            return failure(IndexOpResult, resp)

        try:
            data = decode_object(resp.content)
        except DecodeError as e:
            return IndexOpResult(status_code=resp.status_code, error=e)
        return IndexOpResult(status_code=resp.status_code, message=data.get("message") or None)

    async def create(self, params: IndexParams) -> IndexOpResult:
        """Create an index. Only 201 Created counts as success."""
        try:
            resp = await self._http.call("POST", INDEX_ENDPOINT, body=params)
        except MicroFoxxError as e:
            return IndexOpResult(error=e)
        if resp.status_code != 201:
            return failure(IndexOpResult, resp)
        return IndexOpResult(status_code=resp.status_code)

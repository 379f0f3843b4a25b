"""
Modifying queries: INSERT, UPDATE and REMOVE run as queries on the service.

Each returns every affected document and one event per affected document.
"""

from microfoxx.errors import DecodeError, MicroFoxxError
from microfoxx.models.payload import JsonPayload
from microfoxx.models.query import ModifyingQueryParams
from microfoxx.models.results import DocumentsOpResult
from microfoxx.transport.envelope import SUCCESS_CODES, decode_object, failure
from microfoxx.transport.http import HttpClient


class QueriesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def insert(self, params: ModifyingQueryParams) -> DocumentsOpResult:
        return await self._run("/insert", params)

    async def update(self, params: ModifyingQueryParams) -> DocumentsOpResult:
        return await self._run("/update", params)

    async def remove(self, params: ModifyingQueryParams) -> DocumentsOpResult:
        return await self._run("/remove", params)

    async def _run(self, path: str, params: ModifyingQueryParams) -> DocumentsOpResult:
        try:
            resp = await self._http.call("POST", path, body=params.to_body())
        except MicroFoxxError as e:
            return DocumentsOpResult(error=e)
        if resp.status_code not in SUCCESS_CODES:
            return failure(DocumentsOpResult, resp)

        try:
            data = decode_object(resp.content)
            return DocumentsOpResult(
                status_code=resp.status_code,
                documents=JsonPayload.encode(data.get("docs") or []),
                events=JsonPayload.encode(data.get("events") or []),
            )
        except DecodeError as e:
            return DocumentsOpResult(status_code=resp.status_code, error=e)

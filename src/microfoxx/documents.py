"""
Documents REST API: CRUD on the documents of one collection.

Mutations answer with the stored document and the event recorded for the
change; both come back as JsonPayload for the caller to decode.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

import httpx

from microfoxx.errors import DecodeError, MicroFoxxError
from microfoxx.models.document import DocumentRetrievalParams
from microfoxx.models.payload import JsonPayload
from microfoxx.models.results import (
    DocumentCountResult,
    DocumentOpResult,
    DocumentResult,
    DocumentsResult,
)
from microfoxx.transport.envelope import SUCCESS_CODES, decode_array, decode_json, decode_object, failure
from microfoxx.transport.http import HttpClient, segment


def _doc_op_result(resp: httpx.Response) -> DocumentOpResult:
    if resp.status_code not in SUCCESS_CODES:
        return failure(DocumentOpResult, resp)
    try:
        data = decode_object(resp.content)
        return DocumentOpResult(
            status_code=resp.status_code,
            document=JsonPayload.encode(data.get("doc")),
            event=JsonPayload.encode(data.get("event")),
        )
    except DecodeError as e:
        return DocumentOpResult(status_code=resp.status_code, error=e)


class DocumentsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def create(self, collection: str, doc: Any) -> DocumentOpResult:
        """Create a document. ``doc`` may be a dict, a pydantic model or a dataclass."""
        try:
            resp = await self._http.call("POST", f"/{segment(collection)}", body=doc)
        except MicroFoxxError as e:
            return DocumentOpResult(error=e)
        return _doc_op_result(resp)

    async def list(self, collection: str, params: Optional[DocumentRetrievalParams] = None) -> DocumentsResult:
        """List documents, optionally filtered, sorted and limited."""
        params = params or DocumentRetrievalParams()
        try:
            resp = await self._http.call("GET", f"/{segment(collection)}", params=params.to_query_params())
        except MicroFoxxError as e:
            return DocumentsResult(error=e)
        if resp.status_code not in SUCCESS_CODES:
            return failure(DocumentsResult, resp)

        try:
            documents = JsonPayload.encode(decode_array(resp.content))
        except DecodeError as e:
            return DocumentsResult(status_code=resp.status_code, error=e)
        return DocumentsResult(status_code=resp.status_code, documents=documents)

    async def count(self, collection: str, params: Optional[DocumentRetrievalParams] = None) -> DocumentCountResult:
        """Count documents matching the field filters. Count is -1 on failure."""
        params = params or DocumentRetrievalParams()
        try:
            resp = await self._http.call(
                "GET", f"/{segment(collection)}/count", params=params.to_query_params(filters_only=True),
            )
        except MicroFoxxError as e:
            return DocumentCountResult(error=e)
        if resp.status_code not in SUCCESS_CODES:
            return failure(DocumentCountResult, resp)

        try:
            count = decode_object(resp.content).get("count")
            if isinstance(count, bool) or not isinstance(count, (int, Decimal)):
                raise DecodeError("Response has no numeric 'count'")
        except DecodeError as e:
            return DocumentCountResult(status_code=resp.status_code, error=e)
        return DocumentCountResult(status_code=resp.status_code, count=int(count))

    async def get(self, collection: str, key: str) -> DocumentResult:
        """Fetch one document by key; the body is handed back untouched."""
        try:
            resp = await self._http.call("GET", f"/{segment(collection)}/{segment(key)}")
        except MicroFoxxError as e:
            return DocumentResult(error=e)
        if resp.status_code not in SUCCESS_CODES:
            return failure(DocumentResult, resp)

        try:
            decode_json(resp.content)
        except DecodeError as e:
            return DocumentResult(status_code=resp.status_code, error=e)
        return DocumentResult(status_code=resp.status_code, document=JsonPayload(resp.content))

    async def update(self, collection: str, key: str, doc: Any) -> DocumentOpResult:
        """Update a document by key."""
        try:
            resp = await self._http.call("PUT", f"/{segment(collection)}/{segment(key)}", body=doc)
        except MicroFoxxError as e:
            return DocumentOpResult(error=e)
        return _doc_op_result(resp)

    async def remove(self, collection: str, key: str) -> DocumentOpResult:
        """Remove a document by key. The result carries the removed document."""
        try:
            resp = await self._http.call("DELETE", f"/{segment(collection)}/{segment(key)}")
        except MicroFoxxError as e:
            return DocumentOpResult(error=e)
        return _doc_op_result(resp)

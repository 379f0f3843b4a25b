"""
Cursor queries: run a query and page through its results in batches.

The server owns every cursor. A query whose result fits in one batch comes
back without a handle; otherwise the handle is advanced with next_batch()
until has_more is false, at which point the server has already closed it.
Nothing is cached here: the caller keeps the handle and the server stays
the single source of truth for whether it still exists.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator

from microfoxx.errors import DecodeError, MicroFoxxError
from microfoxx.models.payload import JsonPayload
from microfoxx.models.query import CursorQueryParams
from microfoxx.models.results import CursorQueryResult
from microfoxx.transport.envelope import SUCCESS_CODES, decode_object, failure
from microfoxx.transport.http import HttpClient, segment

logger = logging.getLogger(__name__)

CURSOR_ENDPOINT = "/cursor"


def _decode_batch(raw: bytes) -> tuple[dict[str, Any], JsonPayload, bool]:
    data = decode_object(raw)
    results = data.get("results")
    if results is None:
        results = []
    if not isinstance(results, list):
        raise DecodeError(f"'results' must be an array, got {type(results).__name__}")
    has_more = data.get("hasMore", False)
    if not isinstance(has_more, bool):
        raise DecodeError(f"'hasMore' must be a boolean, got {type(has_more).__name__}")
    return data, JsonPayload.encode(results), has_more


class CursorsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def start(self, params: CursorQueryParams) -> CursorQueryResult:
        """Submit a query and return its first (possibly only) batch."""
        try:
            resp = await self._http.call("POST", CURSOR_ENDPOINT, body=params.to_body())
        except MicroFoxxError as e:
            return CursorQueryResult(error=e)

        if resp.status_code not in SUCCESS_CODES:
            return failure(CursorQueryResult, resp)

        try:
            data, documents, has_more = _decode_batch(resp.content)
            cursor = data.get("cursor")
            if cursor == "":
                cursor = None
            if cursor is not None and (isinstance(cursor, bool) or not isinstance(cursor, (str, int))):
                raise DecodeError(f"'cursor' must be a string, got {type(cursor).__name__}")
            count = data.get("count")
            if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
                raise DecodeError(f"'count' must be an integer, got {type(count).__name__}")
        except DecodeError as e:
            return CursorQueryResult(status_code=resp.status_code, error=e)

        if cursor is None:
            # No handle means the whole result came back; hasMore is ignored.
            if has_more:
                logger.debug("Server reported hasMore without a cursor handle; treating result as complete")
            has_more = False
        else:
            cursor = str(cursor)
            logger.debug("Cursor %s opened (hasMore=%s)", cursor, has_more)

        return CursorQueryResult(
            status_code=resp.status_code,
            documents=documents,
            cursor=cursor,
            has_more=has_more,
            count=count if params.count else None,
        )

    async def next_batch(self, cursor: str) -> CursorQueryResult:
        """Fetch the next batch for ``cursor``.

        Exhausted or unknown handles fail with NotFoundError every time.
        """
        try:
            resp = await self._http.call("PUT", f"{CURSOR_ENDPOINT}/{segment(cursor)}")
        except MicroFoxxError as e:
            return CursorQueryResult(error=e)

        if resp.status_code not in SUCCESS_CODES:
            result = failure(CursorQueryResult, resp)
            result.cursor = cursor
            return result

        try:
            _, documents, has_more = _decode_batch(resp.content)
        except DecodeError as e:
            return CursorQueryResult(status_code=resp.status_code, cursor=cursor, error=e)

        if not has_more:
            logger.debug("Cursor %s exhausted", cursor)
        return CursorQueryResult(
            status_code=resp.status_code,
            documents=documents,
            cursor=cursor,
            has_more=has_more,
        )

    async def batches(self, params: CursorQueryParams) -> AsyncGenerator[CursorQueryResult, None]:
        """Yield the first batch and then every following one.

        Stops after the last batch or the first failed result, which is
        yielded too so the caller sees the fault.
        """
        result = await self.start(params)
        yield result
        while result.ok and result.cursor is not None and result.has_more:
            result = await self.next_batch(result.cursor)
            yield result

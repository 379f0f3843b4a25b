"""
Collections REST API.
"""

from microfoxx.errors import DecodeError, MicroFoxxError
from microfoxx.models.results import CreationResult
from microfoxx.transport.envelope import SUCCESS_CODES, decode_object, failure
from microfoxx.transport.http import HttpClient

COLLECTION_ENDPOINT = "/collection"


class CollectionsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def create(self, name: str) -> CreationResult:
        """Create a collection. Repeating the name fails with BadRequestError."""
        try:
            resp = await self._http.call("POST", COLLECTION_ENDPOINT, body={"name": name})
        except MicroFoxxError as e:
            return CreationResult(error=e)
        if resp.status_code not in SUCCESS_CODES:
            return failure(CreationResult, resp)

        try:
            data = decode_object(resp.content)
        except DecodeError as e:
            return CreationResult(status_code=resp.status_code, error=e)
        created = data.get("_id")
        return CreationResult(
            status_code=resp.status_code,
            message=data.get("message") or None,
            created_ids=[str(created)] if created else [],
        )

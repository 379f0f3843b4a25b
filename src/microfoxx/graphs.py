"""
Graphs REST API: graph definitions and their edge relations.
"""

from microfoxx.errors import DecodeError, MicroFoxxError
from microfoxx.models.graph import Graph, Relation
from microfoxx.models.results import CreationResult
from microfoxx.transport.envelope import SUCCESS_CODES, decode_object, failure
from microfoxx.transport.http import HttpClient, segment

GRAPH_ENDPOINT = "/graph"
RELATION_ENDPOINT = "/relation"


class GraphsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def create(self, graph: Graph) -> CreationResult:
        """Create a graph along with every relation in its definition."""
        return await self._create(GRAPH_ENDPOINT, graph)

    async def create_relation(self, graph: str, relation: Relation) -> CreationResult:
        """Add an edge relation to an existing graph."""
        return await self._create(f"{GRAPH_ENDPOINT}/{segment(graph)}{RELATION_ENDPOINT}", relation)

    async def _create(self, path: str, definition: object) -> CreationResult:
        try:
            resp = await self._http.call("POST", path, body=definition)
        except MicroFoxxError as e:
            return CreationResult(error=e)
        if resp.status_code not in SUCCESS_CODES:
            return failure(CreationResult, resp)

        try:
            data = decode_object(resp.content)
        except DecodeError as e:
            return CreationResult(status_code=resp.status_code, error=e)
        return CreationResult(status_code=resp.status_code, message=data.get("message") or None)

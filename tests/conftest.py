"""
Shared fixtures: an in-memory stand-in for a microfoxx service.

StubFoxx answers through httpx.MockTransport, so the client runs its real
request and decoding code with no network involved.
"""

import json
import re
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio

from microfoxx import AsyncMicroFoxx, ConnectionParams

DATABASE = "testdb"
PREFIX = f"/_db/{DATABASE}/microfoxx"
SESSION_ID = "12345"
USER_ID = "6789"
FILTER_QUERY = re.compile(r"FOR item in @@coll FILTER item\.(\w+) == @(\w+)")
ALL_QUERY = re.compile(r"FOR item in @@coll RETURN item")


def _json(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})


def _error(status: int, message: str, field: str = "exception") -> httpx.Response:
    return _json(status, {field: message})


class StubFoxx:
    def __init__(self, item_count: int = 50):
        self.requests: list[httpx.Request] = []
        self.cursors: dict[str, dict[str, Any]] = {}
        self.graphs: dict[str, dict[str, Any]] = {}
        self.indexes: dict[str, list[dict[str, Any]]] = {}
        self.collections: dict[str, dict[str, dict[str, Any]]] = {"items": {}}
        self._next_cursor = 0
        self._next_key = item_count + 1
        for i in range(1, item_count + 1):
            self.collections["items"][str(i)] = {
                "_key": str(i),
                "name": f"testname{i}",
                "status": "enabled" if i % 2 == 0 else "disabled",
                "rank": i,
            }

    # -- dispatch ----------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if not path.startswith(PREFIX):
            return _error(404, f"no service mounted at {path}")
        path = path[len(PREFIX):]
        method = request.method

        if path == "/login" and method == "POST":
            return self._login(request)
        if request.headers.get("X-Session-Id") != SESSION_ID:
            return _error(401, "Session expired or missing", field="errorMessage")

        body = json.loads(request.content) if request.content else None
        parts = [p for p in path.split("/") if p]

        if parts == ["cursor"] and method == "POST":
            return self._start_cursor(body)
        if len(parts) == 2 and parts[0] == "cursor" and method == "PUT":
            return self._next_batch(parts[1])
        if parts == ["collection"] and method == "POST":
            return self._create_collection(body["name"])
        if parts and parts[0] == "graph":
            return self._graph(parts[1:], body)
        if parts and parts[0] == "index":
            return self._index(method, parts[1:], body)
        if parts and parts[0] in ("insert", "update", "remove") and method == "POST":
            return self._modify(parts[0], body)
        return self._documents(method, parts, request, body)

    def _login(self, request: httpx.Request) -> httpx.Response:
        creds = json.loads(request.content)
        if creds.get("password") == "wrong":
            return _error(401, "Invalid credentials", field="errorMessage")
        return _json(200, {"sid": SESSION_ID, "uid": USER_ID})

    # -- cursors -----------------------------------------------------------

    def _query(self, body: dict[str, Any]) -> Optional[list[dict[str, Any]]]:
        bind_vars = body.get("bindVars") or {}
        coll = self.collections.get(bind_vars.get("@coll", ""))
        if coll is None:
            return None
        match = FILTER_QUERY.match(body["query"])
        if match:
            field, var = match.groups()
            if var not in bind_vars:
                return None
            return [doc for doc in coll.values() if doc.get(field) == bind_vars[var]]
        if ALL_QUERY.match(body["query"]):
            return list(coll.values())
        return None

    def _start_cursor(self, body: dict[str, Any]) -> httpx.Response:
        results = self._query(body)
        if results is None:
            return _error(400, "AQL: syntax error, unexpected query")
        batch_size = body.get("batchSize") or 0
        resp: dict[str, Any] = {"hasMore": False}
        if 0 < batch_size < len(results):
            cursor_id = str(self._next_cursor)
            self._next_cursor += 1
            self.cursors[cursor_id] = {"results": results, "pos": batch_size, "batch": batch_size}
            resp.update(results=results[:batch_size], hasMore=True, cursor=cursor_id)
        else:
            resp["results"] = results
        if body.get("count"):
            resp["count"] = len(results)
        return _json(201, resp)

    def _next_batch(self, cursor_id: str) -> httpx.Response:
        cursor = self.cursors.get(cursor_id)
        if cursor is None:
            return _error(404, "cursor not found")
        start = cursor["pos"]
        end = start + cursor["batch"]
        cursor["pos"] = end
        has_more = end < len(cursor["results"])
        if not has_more:
            del self.cursors[cursor_id]
        return _json(200, {"results": cursor["results"][start:end], "hasMore": has_more})

    # -- collections, graphs, indexes -------------------------------------

    def _create_collection(self, name: str) -> httpx.Response:
        if name in self.collections:
            return _error(400, f"Collection {name} already exists")
        self.collections[name] = {}
        return _json(201, {"_id": f"collections/{name}", "message": f"Collection {name} created"})

    def _graph(self, parts: list[str], body: dict[str, Any]) -> httpx.Response:
        if not parts:
            if body["name"] in self.graphs:
                return _error(400, f"Graph {body['name']} already exists")
            self.graphs[body["name"]] = body
            return _json(201, {"message": f"Graph {body['name']} created"})
        if len(parts) == 2 and parts[1] == "relation":
            graph = self.graphs.get(parts[0])
            if graph is None:
                return _error(404, f"Graph {parts[0]} not found")
            graph["relations"].append(body)
            return _json(201, {"message": f"Relation {body['name']} added"})
        return _error(404, "unknown graph route")

    def _index(self, method: str, parts: list[str], body: Optional[dict[str, Any]]) -> httpx.Response:
        if method == "POST" and not parts:
            if body["collection"] not in self.collections:
                return _error(404, f"Collection {body['collection']} not found")
            handle = f"{body['collection']}/{len(self.indexes.get(body['collection'], [])) + 1}"
            self.indexes.setdefault(body["collection"], []).append({
                "id": handle, "type": body["type"], "fields": body["fields"],
                "selectivityEstimate": 1, "unique": body["unique"], "sparse": body["sparse"],
            })
            return _json(201, {"id": handle})
        if method == "GET" and len(parts) == 1:
            if parts[0] not in self.collections:
                return _error(404, f"Collection {parts[0]} not found")
            return _json(200, self.indexes.get(parts[0], []))
        if method == "DELETE" and len(parts) == 2:
            handle = "/".join(parts)
            existing = self.indexes.get(parts[0], [])
            if not any(idx["id"] == handle for idx in existing):
                return _error(404, f"Index {handle} not found")
            self.indexes[parts[0]] = [idx for idx in existing if idx["id"] != handle]
            return _json(200, {"message": f"Index {handle} removed"})
        return _error(404, "unknown index route")

    # -- documents ---------------------------------------------------------

    def _event(self, kind: str, coll: str, key: str) -> dict[str, Any]:
        return {"type": kind, "collection": coll, "key": key}

    def _modify(self, kind: str, body: dict[str, Any]) -> httpx.Response:
        coll = self.collections.get(body["writeCollection"])
        if coll is None:
            return _error(404, f"Collection {body['writeCollection']} not found")
        if not body["query"].strip():
            return _error(400, "empty query")
        docs = [doc for doc in coll.values() if doc.get("status") == body["bindVars"].get("status")]
        return _json(200, {
            "docs": docs,
            "events": [self._event(kind, body["writeCollection"], d["_key"]) for d in docs],
        })

    def _documents(self, method: str, parts: list[str], request: httpx.Request, body: Any) -> httpx.Response:
        if not parts or parts[0] not in self.collections:
            return _error(404, f"Collection {parts[0] if parts else ''} not found")
        name, coll = parts[0], self.collections[parts[0]]
        params = request.url.params

        if len(parts) == 1 and method == "GET":
            docs = self._filtered(coll, params)
            if "sort" in params:
                fields, _, order = params["sort"].partition("::")
                keys = fields.split(",")
                docs.sort(key=lambda d: [d.get(k) for k in keys], reverse=order == "DESC")
            if "limit" in params:
                offset, count = (int(v) for v in params["limit"].split(","))
                docs = docs[offset:offset + count]
            return _json(200, docs)
        if len(parts) == 1 and method == "POST":
            key = str(self._next_key)
            self._next_key += 1
            doc = {"_key": key, **body}
            coll[key] = doc
            return _json(201, {"doc": doc, "event": self._event("insert", name, key)})
        if parts[1:] == ["count"] and method == "GET":
            return _json(200, {"count": len(self._filtered(coll, params))})

        key = parts[1]
        if key not in coll:
            return _error(404, f"Document {name}/{key} not found")
        if method == "GET":
            return _json(200, coll[key])
        if method == "PUT":
            coll[key] = {**coll[key], **body}
            return _json(200, {"doc": coll[key], "event": self._event("update", name, key)})
        if method == "DELETE":
            doc = coll.pop(key)
            return _json(200, {"doc": doc, "event": self._event("remove", name, key)})
        return _error(405, "method not allowed")

    @staticmethod
    def _filtered(coll: dict[str, dict[str, Any]], params: httpx.QueryParams) -> list[dict[str, Any]]:
        filters = {k: v for k, v in params.items() if k not in ("sort", "limit")}
        return [doc for doc in coll.values() if all(str(doc.get(k)) == v for k, v in filters.items())]


def make_client(stub: StubFoxx, **kwargs: Any) -> tuple[AsyncMicroFoxx, httpx.AsyncClient]:
    sender = httpx.AsyncClient(transport=httpx.MockTransport(stub.handle))
    params = ConnectionParams(database=DATABASE, username="admin", password="secret")
    return AsyncMicroFoxx(params, sender=sender, **kwargs), sender


@pytest.fixture
def stub() -> StubFoxx:
    return StubFoxx()


@pytest_asyncio.fixture
async def client(stub):
    c, sender = make_client(stub)
    await c.login()
    yield c
    await c.close()
    await sender.aclose()
